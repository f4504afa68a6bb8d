"""uo CLI entrypoint.

Subcommands: run (build and actuate the Something sample).

Resolves configuration (defaults < --config TOML < UO_* environment < --set), builds
Something in the configured recipe namespace, optionally records its telemetry to a
JSONL file, actuates it, and prints a JSON summary to stdout.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from types import SimpleNamespace
from typing import Any, Mapping, Optional, Sequence, TextIO

import orjson

from useful_objects.adapters.telemetry.jsonl import JsonlSink
from useful_objects.adapters.telemetry.logging_sink import LoggingSink
from useful_objects.config.config_loader import ConfigLoader
from useful_objects.config.configs import Config
from useful_objects.core.null_object import is_null
from useful_objects.errors.errors import UsefulObjectError
from useful_objects.samples.something import Something

APP_VERSION = "0.1.0"

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """
    Return the top-level CLI argument parser.
    """
    p = argparse.ArgumentParser(prog="uo")
    p.add_argument("--version", action="version", version=f"%(prog)s {APP_VERSION}")
    sub = p.add_subparsers(dest="command", required=True)

    run = sub.add_parser("run", help="Build and actuate Something")
    run.add_argument("--some-value", required=True, help="Value recorded with something_done")
    run.add_argument("--some-other-value", required=True)
    run.add_argument("--config", type=Path, required=False, help="Path to a TOML config file")
    run.add_argument(
        "--set",
        dest="config_overrides",
        action="append",  # builds a Python list (config_overrides) containing each key=value
        default=[],
        metavar="KEY=VALUE",
        help="Override a config entry (may be repeated)",
    )
    run.add_argument(
        "--substitute",
        action="store_true",
        help="Use substitute recipes (no destructive side effects)",
    )
    run.add_argument(
        "--require-operational",
        action="store_true",
        help="Fail if any dependency has no recipe in the chosen namespace",
    )
    run.add_argument("--events", type=Path, required=False, help="JSONL file for telemetry")
    return p


def _cli_layer(args: argparse.Namespace) -> list[str]:
    """Flags are sugar for --set pairs and take precedence over them."""
    pairs = list(args.config_overrides)
    if args.substitute:
        pairs.append("recipes.namespace=substitute")
    if args.require_operational:
        pairs.append("recipes.require_operational=true")
    if args.events is not None:
        pairs.append(f"telemetry.events_path={args.events}")
    return pairs


def run_something(
    config: Config,
    some_value: str,
    some_other_value: str,
    *,
    out: Optional[TextIO] = None,
) -> Mapping[str, Any]:
    """Build, observe and actuate Something according to ``config``."""
    out = out if out is not None else sys.stdout
    source = SimpleNamespace(some_value=some_value, some_other_value=some_other_value)
    something = Something.build(
        source,
        namespace=config.recipes.namespace,
        require_operational=config.recipes.require_operational,
    )

    # sinks are held by the channel weakly; keep them referenced for the whole run
    sinks: list[Any] = [Something.register_telemetry_sink(something)]
    if config.telemetry.events_path is not None:
        sinks.append(
            something.telemetry.register(
                JsonlSink(
                    config.telemetry.events_path,
                    owner="Something",
                    secret_keys=config.telemetry.secret_keys,
                )
            )
        )
    if config.telemetry.log_events:
        sinks.append(something.telemetry.register(LoggingSink()))

    result = something.actuate()

    summary = {
        "namespace": config.recipes.namespace,
        "dependency": type(something.some_dependency).__name__,
        "dependency_is_null": is_null(something.some_dependency),
        "recorded": sinks[0].recorded("something_done"),
        "result": result,
    }
    out.write(orjson.dumps(summary, default=str).decode() + "\n")
    return summary


def main(argv: Optional[Sequence[str]] = None) -> int:
    """CLI entrypoint wrapper compatible with setuptools scripts."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = ConfigLoader().load_config(args.config, _cli_layer(args))
    except (UsefulObjectError, FileNotFoundError) as exc:
        print(f"Configuration error: {exc}", file=sys.stderr)
        return 2

    logging.basicConfig(
        level=getattr(logging, config.logging.level),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )

    if args.command == "run":
        try:
            run_something(config, args.some_value, args.some_other_value)
        except UsefulObjectError as exc:
            logger.error("run_failed", extra={"event": "run_failed", "error": str(exc)})
            print(f"Run failed: {exc}", file=sys.stderr)
            return 1
        return 0

    parser.error(f"unknown command {args.command!r}")
    return 2  # pragma: no cover


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
