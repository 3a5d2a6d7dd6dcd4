from datetime import datetime
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class MqDomainEvent(Protocol):
    @property
    def occurred_at(self) -> datetime:
        """Event occurrence timestamp"""
        ...

    def to_payload(self) -> dict[str, Any]:
        """JSON-ready message body"""
        ...
