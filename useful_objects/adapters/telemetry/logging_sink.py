"""Logging telemetry sink: mirrors every accepted record to a Python logger."""

from __future__ import annotations

import logging
from typing import Optional

from useful_objects.telemetry.sink import Record, Sink


class LoggingSink(Sink):
    def __init__(self, logger: Optional[logging.Logger] = None, level: int = logging.INFO):
        super().__init__()
        self._logger = logger or logging.getLogger("useful_objects.telemetry")
        self._level = level

    def handle(self, record: Record) -> None:
        self._logger.log(
            self._level,
            record.event,
            extra={
                "event": record.event,
                "seq": record.seq,
                "payload": record.payload,
                "fields": dict(record.fields),
            },
        )
