"""
Telemetry sinks.

A Sink subclass lists the events it observes in ``events``; for each one a
``recorded_<event>()`` predicate is generated when the class is created:

    class Sink(telemetry.Sink):
        events = ("something_done",)

    sink.recorded_something_done()
    sink.recorded_something_done(lambda record: record.data == "some value")
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Callable, ClassVar, Mapping, Optional

RecordPredicate = Callable[["Record"], bool]


@dataclass(frozen=True)
class Record:
    """One event as observed by a sink."""

    event: str
    payload: tuple[Any, ...] = ()
    fields: Mapping[str, Any] = field(default_factory=dict)
    seq: int = 0

    @property
    def data(self) -> Any:
        """The single positional payload, the whole tuple when there are several, else None."""
        if not self.payload:
            return None
        if len(self.payload) == 1:
            return self.payload[0]
        return self.payload


def _recorded_predicate(event: str) -> Callable[..., bool]:
    def predicate(self: Sink, where: Optional[RecordPredicate] = None) -> bool:
        return self.recorded(event, where)

    predicate.__name__ = f"recorded_{event}"
    predicate.__qualname__ = f"Sink.recorded_{event}"
    predicate.__doc__ = f"True if {event!r} was recorded (and matches ``where`` if given)."
    return predicate


class Sink:
    """
    In-memory observer. With no declared ``events`` it keeps every record;
    otherwise records of undeclared events are ignored.
    """

    events: ClassVar[tuple[str, ...]] = ()

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        events = tuple(cls.events)
        for event in events:
            if not event.isidentifier():
                raise ValueError(f"{cls.__name__}: event name {event!r} is not an identifier")
            attr = f"recorded_{event}"
            # an explicit method in the class body wins
            if attr not in vars(cls):
                setattr(cls, attr, _recorded_predicate(event))
        cls.events = events

    def __init__(self) -> None:
        self._records: list[Record] = []

    # --- channel side ---

    def accepts(self, event: str) -> bool:
        return not self.events or event in self.events

    def record(self, event: str, *payload: Any, **fields: Any) -> None:
        if not self.accepts(event):
            return
        entry = Record(
            event=event,
            payload=tuple(payload),
            fields=MappingProxyType(dict(fields)),
            seq=len(self._records),
        )
        self._records.append(entry)
        self.handle(entry)

    def handle(self, record: Record) -> None:
        """Hook for subclasses that forward accepted records elsewhere."""

    # --- queries ---

    def recorded(self, event: str, where: Optional[RecordPredicate] = None) -> bool:
        return any(where is None or where(r) for r in self._records if r.event == event)

    def records(self, event: Optional[str] = None) -> list[Record]:
        if event is None:
            return list(self._records)
        return [r for r in self._records if r.event == event]

    def payloads(self, event: str) -> list[tuple[Any, ...]]:
        return [r.payload for r in self._records if r.event == event]

    def one_record(self, event: str) -> Optional[Record]:
        matches = self.records(event)
        if len(matches) > 1:
            raise ValueError(f"More than one {event!r} record ({len(matches)})")
        return matches[0] if matches else None

    def __len__(self) -> int:
        return len(self._records)

    def __repr__(self) -> str:
        return f"<{type(self).__qualname__} records={len(self._records)}>"
