"""Provider event channel."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Awaitable, Callable


class ProviderEvent(str, Enum):
    """Events a provider can emit."""

    READY = "PROVIDER_READY"
    ERROR = "PROVIDER_ERROR"


@dataclass
class ProviderEventDetails:
    """Payload delivered to event handlers."""

    event: ProviderEvent
    provider_name: str
    message: str | None = None
    metadata: dict[str, Any] = field(default_factory=dict)
    timestamp: datetime = field(
        default_factory=lambda: datetime.now(timezone.utc)
    )


ProviderEventHandler = Callable[[ProviderEventDetails], Awaitable[None]]


class ProviderEventEmitter:
    """In-process emitter for provider lifecycle events."""

    def __init__(self, provider_name: str) -> None:
        self._provider_name = provider_name
        self._handlers: dict[ProviderEvent, list[ProviderEventHandler]] = {}

    def subscribe(self, event: ProviderEvent, handler: ProviderEventHandler) -> None:
        """Subscribe a handler to an event."""
        self._handlers.setdefault(event, []).append(handler)

    def unsubscribe(self, event: ProviderEvent) -> None:
        """Remove all handlers for an event."""
        self._handlers.pop(event, None)

    async def emit(
        self,
        event: ProviderEvent,
        message: str | None = None,
        metadata: dict[str, Any] | None = None,
    ) -> None:
        """Deliver an event to every subscribed handler, in subscription order."""
        details = ProviderEventDetails(
            event=event,
            provider_name=self._provider_name,
            message=message,
            metadata=dict(metadata or {}),
        )
        for handler in self._handlers.get(event, []):
            await handler(details)
