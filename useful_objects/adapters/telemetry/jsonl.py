"""JSON Lines telemetry sink.

A Sink that, besides keeping records in memory, appends each accepted record to
disk as one JSON object per line. Keyword fields are nested under ``fields`` so they
never shadow ``seq`` or ``payload``; secret-looking fields are redacted.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Iterable, Mapping

import orjson

from useful_objects.telemetry.sink import Record, Sink
from useful_objects.utils.utility import make_serializable


class JsonlSink(Sink):
    _REDACTION_TOKEN = "***REDACTED***"
    _DEFAULT_SECRET_KEYS = frozenset(
        {
            "api_key",
            "api_secret",
            "secret",
            "password",
            "token",
            "auth_token",
        }
    )

    def __init__(
        self,
        sink_path: Path | str,
        owner: str | None = None,
        secret_keys: Iterable[str] = _DEFAULT_SECRET_KEYS,
    ) -> None:
        super().__init__()
        self._sink_path = sink_path if isinstance(sink_path, Path) else Path(sink_path)
        self._owner = owner
        # a bare string would otherwise be split into characters
        self._secret_keys = (
            frozenset({secret_keys}) if isinstance(secret_keys, str) else frozenset(secret_keys)
        )

    @property
    def path(self) -> Path:
        return self._sink_path

    def handle(self, record: Record) -> None:
        sanitized_fields, redacted = self._sanitize_fields(record.fields)

        line: dict[str, Any] = {
            "event": record.event,
            "seq": record.seq,
            "payload": list(record.payload),
        }
        if sanitized_fields:
            line["fields"] = sanitized_fields
        if self._owner is not None:
            line["owner"] = self._owner
        if redacted:
            line["redacted_fields"] = sorted(redacted)

        self._write_line(line)

    def _sanitize_fields(self, fields: Mapping[str, Any]) -> tuple[dict[str, Any], set[str]]:
        sanitized: dict[str, Any] = {}
        redacted: set[str] = set()
        for key, value in fields.items():
            if key in self._secret_keys:
                sanitized[key] = self._REDACTION_TOKEN
                redacted.add(key)
            else:
                sanitized[key] = value

        return sanitized, redacted

    def _write_line(self, line: Mapping[str, Any]) -> None:
        options = orjson.OPT_SORT_KEYS | orjson.OPT_NON_STR_KEYS
        try:
            payload = orjson.dumps(line, default=str, option=options)
        except orjson.JSONEncodeError:
            # e.g. ints beyond 64 bits or mixed key types; reduce and retry
            payload = orjson.dumps(make_serializable(line), default=str, option=options)
        self._sink_path.parent.mkdir(parents=True, exist_ok=True)
        with self._sink_path.open("ab") as handle:
            handle.write(payload + b"\n")
