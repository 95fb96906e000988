"""
Tests for the trigger hub.
"""

from __future__ import annotations

import asyncio

import pytest

from workspace_daemon.errors import UnknownTrigger
from workspace_daemon.triggers import (
    DEFAULT_CONFIGS,
    GMAIL_NEW_MESSAGE,
    TriggerEvent,
    TriggerHub,
)


@pytest.fixture
def hub() -> TriggerHub:
    return TriggerHub()


class TestRegistrations:
    """Tests for creating, listing and deleting triggers."""

    def test_gmail_default_config(self, hub: TriggerHub) -> None:
        registration = hub.create(GMAIL_NEW_MESSAGE, "me@example.com", "ca_1")

        assert registration.trigger_id.startswith("trg_")
        assert registration.config == {"labelIds": "INBOX", "userId": "me", "interval": 1}
        assert hub.get(registration.trigger_id) is registration

    def test_default_config_is_copied(self, hub: TriggerHub) -> None:
        registration = hub.create(GMAIL_NEW_MESSAGE, "me@example.com", None)
        registration.config["interval"] = 5
        assert DEFAULT_CONFIGS[GMAIL_NEW_MESSAGE]["interval"] == 1

    def test_explicit_config_wins(self, hub: TriggerHub) -> None:
        registration = hub.create(GMAIL_NEW_MESSAGE, "me@example.com", None, {"labelIds": "SPAM"})
        assert registration.config == {"labelIds": "SPAM"}

    def test_unknown_slug_gets_empty_config(self, hub: TriggerHub) -> None:
        assert hub.create("DRIVE_FILE_ADDED", "me@example.com", None).config == {}

    def test_list_and_delete(self, hub: TriggerHub) -> None:
        first = hub.create(GMAIL_NEW_MESSAGE, "a@example.com", None)
        second = hub.create(GMAIL_NEW_MESSAGE, "b@example.com", None)
        assert first.trigger_id != second.trigger_id
        assert hub.list() == [first, second]

        assert hub.delete(first.trigger_id) is True
        assert hub.delete(first.trigger_id) is False
        assert hub.list() == [second]


class TestPublish:
    """Tests for event fan-out."""

    @pytest.mark.asyncio
    async def test_unknown_trigger(self, hub: TriggerHub) -> None:
        with pytest.raises(UnknownTrigger) as exc:
            await hub.publish(TriggerEvent("trg_missing", GMAIL_NEW_MESSAGE, {}))
        assert exc.value.trigger_id == "trg_missing"

    @pytest.mark.asyncio
    async def test_no_handlers(self, hub: TriggerHub) -> None:
        registration = hub.create(GMAIL_NEW_MESSAGE, "me@example.com", None)
        delivered = await hub.publish(TriggerEvent(registration.trigger_id, GMAIL_NEW_MESSAGE, {}))
        assert delivered == 0

    @pytest.mark.asyncio
    async def test_handlers_filtered_by_trigger(self, hub: TriggerHub) -> None:
        watched = hub.create(GMAIL_NEW_MESSAGE, "me@example.com", None)
        other = hub.create(GMAIL_NEW_MESSAGE, "me@example.com", None)
        received: dict[str, list[str]] = {"watched": [], "all": []}

        async def on_watched(event: TriggerEvent) -> None:
            received["watched"].append(event.payload["id"])

        async def on_all(event: TriggerEvent) -> None:
            received["all"].append(event.payload["id"])

        hub.subscribe(on_watched, watched.trigger_id)
        hub.subscribe(on_all)

        assert await hub.publish(TriggerEvent(watched.trigger_id, GMAIL_NEW_MESSAGE, {"id": "m1"})) == 2
        assert await hub.publish(TriggerEvent(other.trigger_id, GMAIL_NEW_MESSAGE, {"id": "m2"})) == 1

        assert received == {"watched": ["m1"], "all": ["m1", "m2"]}

    @pytest.mark.asyncio
    async def test_failing_handler_isolated(self, hub: TriggerHub) -> None:
        registration = hub.create(GMAIL_NEW_MESSAGE, "me@example.com", None)
        seen: list[str] = []

        async def broken(event: TriggerEvent) -> None:
            raise RuntimeError("handler exploded")

        async def healthy(event: TriggerEvent) -> None:
            seen.append(event.trigger_id)

        hub.subscribe(broken)
        hub.subscribe(healthy)

        delivered = await hub.publish(TriggerEvent(registration.trigger_id, GMAIL_NEW_MESSAGE, {}))

        assert delivered == 1
        assert seen == [registration.trigger_id]

    @pytest.mark.asyncio
    async def test_cancelled_handler_not_counted(self, hub: TriggerHub) -> None:
        registration = hub.create(GMAIL_NEW_MESSAGE, "me@example.com", None)
        event = TriggerEvent(registration.trigger_id, GMAIL_NEW_MESSAGE, {})

        async def cancelled(event: TriggerEvent) -> None:
            raise asyncio.CancelledError()

        unsubscribe = hub.subscribe(cancelled)
        assert await hub.publish(event) == 0

        async def healthy(event: TriggerEvent) -> None:
            pass

        hub.subscribe(healthy)
        assert await hub.publish(event) == 1

        unsubscribe()
        assert await hub.publish(event) == 1

    @pytest.mark.asyncio
    async def test_unsubscribe(self, hub: TriggerHub) -> None:
        registration = hub.create(GMAIL_NEW_MESSAGE, "me@example.com", None)
        calls: list[TriggerEvent] = []

        async def handler(event: TriggerEvent) -> None:
            calls.append(event)

        unsubscribe = hub.subscribe(handler)
        unsubscribe()
        unsubscribe()

        assert await hub.publish(TriggerEvent(registration.trigger_id, GMAIL_NEW_MESSAGE, {})) == 0
        assert calls == []

    @pytest.mark.asyncio
    async def test_deleted_trigger_rejects_events(self, hub: TriggerHub) -> None:
        registration = hub.create(GMAIL_NEW_MESSAGE, "me@example.com", None)
        hub.delete(registration.trigger_id)
        with pytest.raises(UnknownTrigger):
            await hub.publish(TriggerEvent(registration.trigger_id, GMAIL_NEW_MESSAGE, {}))
