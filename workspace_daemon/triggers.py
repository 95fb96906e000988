"""
Trigger hub: the boundary where inbound workspace events enter the daemon.

Delivery is external (the HTTP service posts events here). The hub keeps
trigger registrations and fans each event out to subscribed handlers.
"""

from __future__ import annotations

import asyncio
import logging
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Awaitable, Callable

from .errors import UnknownTrigger

logger = logging.getLogger("workspace.triggers")

GMAIL_NEW_MESSAGE = "GMAIL_NEW_GMAIL_MESSAGE"

DEFAULT_CONFIGS: dict[str, dict[str, Any]] = {
    GMAIL_NEW_MESSAGE: {"labelIds": "INBOX", "userId": "me", "interval": 1},
}


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class TriggerRegistration:
    trigger_id: str
    trigger_slug: str
    user_id: str
    connected_account_id: str | None
    config: dict[str, Any]
    created_at: datetime = field(default_factory=_utcnow)


@dataclass(frozen=True)
class TriggerEvent:
    trigger_id: str
    trigger_slug: str
    payload: dict[str, Any]
    received_at: datetime = field(default_factory=_utcnow)


TriggerHandler = Callable[[TriggerEvent], Awaitable[Any]]


class TriggerHub:
    """
    Registry of triggers plus an in-process publish/subscribe fan-out.

    Handlers subscribed without a trigger id receive every event.
    """

    def __init__(self) -> None:
        self._registrations: dict[str, TriggerRegistration] = {}
        self._handlers: list[tuple[str | None, TriggerHandler]] = []

    def create(
        self,
        trigger_slug: str,
        user_id: str,
        connected_account_id: str | None,
        config: dict[str, Any] | None = None,
    ) -> TriggerRegistration:
        """Register a trigger, applying the slug's default config when none is given."""
        if config is None:
            config = dict(DEFAULT_CONFIGS.get(trigger_slug, {}))
        registration = TriggerRegistration(
            trigger_id=f"trg_{uuid.uuid4().hex[:12]}",
            trigger_slug=trigger_slug,
            user_id=user_id,
            connected_account_id=connected_account_id,
            config=config,
        )
        self._registrations[registration.trigger_id] = registration
        logger.info(f"Created trigger {registration.trigger_id} ({trigger_slug}) for {user_id}")
        return registration

    def get(self, trigger_id: str) -> TriggerRegistration | None:
        return self._registrations.get(trigger_id)

    def list(self) -> list[TriggerRegistration]:
        return list(self._registrations.values())

    def delete(self, trigger_id: str) -> bool:
        """Remove a trigger. Returns False if it was not registered."""
        removed = self._registrations.pop(trigger_id, None)
        if removed is not None:
            logger.info(f"Deleted trigger {trigger_id}")
        return removed is not None

    def subscribe(
        self, handler: TriggerHandler, trigger_id: str | None = None
    ) -> Callable[[], None]:
        """Subscribe an async handler. Returns a callable that unsubscribes it."""
        entry = (trigger_id, handler)
        self._handlers.append(entry)

        def unsubscribe() -> None:
            if entry in self._handlers:
                self._handlers.remove(entry)

        return unsubscribe

    async def publish(self, event: TriggerEvent) -> int:
        """
        Deliver an event to every matching handler concurrently.

        Handler failures are logged and do not reach the publisher.

        Returns:
            Number of handlers that completed successfully

        Raises:
            UnknownTrigger: if the event's trigger is not registered
        """
        if event.trigger_id not in self._registrations:
            raise UnknownTrigger(event.trigger_id)

        handlers = [h for tid, h in self._handlers if tid is None or tid == event.trigger_id]
        if not handlers:
            logger.debug(f"No handlers for trigger {event.trigger_id}")
            return 0

        outcomes = await asyncio.gather(
            *(h(event) for h in handlers), return_exceptions=True
        )
        delivered = 0
        for outcome in outcomes:
            if isinstance(outcome, BaseException):
                logger.error(
                    f"Trigger handler failed for {event.trigger_slug}: "
                    f"{type(outcome).__name__}: {outcome}"
                )
            else:
                delivered += 1
        logger.info(f"Delivered {event.trigger_slug} event to {delivered}/{len(handlers)} handler(s)")
        return delivered
