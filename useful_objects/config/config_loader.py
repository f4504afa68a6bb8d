"""
Purpose:
    - Load a TOML config file
    - Layer defaults < file < environment < CLI overrides
    - Validate the merged result into ``Config``
"""

import logging
import os
import tomllib
from pathlib import Path
from typing import Any, Mapping, Optional, Sequence

from pydantic import ValidationError

from useful_objects.config.configs import Config
from useful_objects.errors.errors import ConfigurationError
from useful_objects.utils.utility import deep_merge, set_dotted, validation_errors

logger = logging.getLogger(__name__)

ENV_PREFIX = "UO_"
ENV_NESTING = "__"


def parse_overrides(pairs: Sequence[str]) -> dict[str, Any]:
    """Turn ``key.path=value`` strings into a nested mapping."""
    overrides: dict[str, Any] = {}

    for item in pairs:
        key, sep, value = item.partition("=")
        if sep == "":
            raise ConfigurationError(
                f"--set requires KEY=VALUE format (got {item!r})",
                field=item,
                component="config.cli",
            )
        set_dotted(overrides, key, value, component="config.cli")
    return overrides


class ConfigLoader:
    """
    Config-loader; layering TOML file, environment and CLI overrides over defaults.
    """

    def __init__(self, base_dir: str | Path = ".", env_prefix: str = ENV_PREFIX) -> None:
        if not env_prefix:
            raise ValueError("Environment prefix must be a non-empty string")
        self._base_dir = Path(base_dir)
        self._env_prefix = env_prefix

    def load(self, file_name: str | Path) -> dict[str, Any]:
        path = Path(file_name)
        if not path.is_absolute():
            path = self._base_dir / path

        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        with path.open("rb") as f:
            try:
                return tomllib.load(f)
            except tomllib.TOMLDecodeError as exc:
                raise ConfigurationError(
                    f"Config file is not valid TOML: {exc}",
                    field=str(path),
                    component="config.file",
                ) from exc

    def env_layer(self, environ: Optional[Mapping[str, str]] = None) -> dict[str, Any]:
        """
        Collect ``UO_SECTION__KEY=value`` variables into ``{"section": {"key": value}}``.
        """
        environ = os.environ if environ is None else environ
        layer: dict[str, Any] = {}
        for name, value in environ.items():
            if not name.startswith(self._env_prefix):
                continue
            dotted = name[len(self._env_prefix) :].lower().replace(ENV_NESTING, ".")
            set_dotted(layer, dotted, value, component="config.env")
        return layer

    def resolve(
        self,
        file_cfg: Optional[Mapping[str, Any]] = None,
        env_cfg: Optional[Mapping[str, Any]] = None,
        cli_overrides: Optional[Mapping[str, Any]] = None,
    ) -> Config:
        """
        Apply layers sequentially (later wins) on top of the defaults and validate.
        Raises ConfigurationError listing every invalid path.
        """
        layers = [layer for layer in (file_cfg, env_cfg, cli_overrides) if layer]
        merged = deep_merge(Config().model_dump(), *layers)

        try:
            config = Config.model_validate(merged)
        except ValidationError as exc:
            errors = validation_errors(exc)
            paths = sorted({error["path"] for error in errors})
            logger.warning(
                "config_validation_error",
                extra={"event": "config_validation_error", "errors": errors},
            )
            raise ConfigurationError(
                f"Invalid configuration at: {', '.join(paths)}",
                field=paths[0] if len(paths) == 1 else None,
                component="config.schema",
                details={"errors": errors},
            ) from exc

        logger.debug(
            "config_resolved",
            extra={
                "event": "config_resolved",
                "namespace": config.recipes.namespace,
                "require_operational": config.recipes.require_operational,
            },
        )
        return config

    def load_config(
        self,
        file_name: Optional[str | Path] = None,
        overrides: Sequence[str] = (),
        environ: Optional[Mapping[str, str]] = None,
    ) -> Config:
        file_cfg = self.load(file_name) if file_name is not None else None
        return self.resolve(
            file_cfg=file_cfg,
            env_cfg=self.env_layer(environ),
            cli_overrides=parse_overrides(overrides),
        )
