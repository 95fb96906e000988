"""
Workspace assistant: convenience methods that delegate to the planner.

Each method phrases a natural-language request and runs one chat with the
planner restricted to the single tool the request needs.
"""

from __future__ import annotations

import json
import logging
from typing import Sequence

from .chat import ChatResponse, ChatService
from .tools import ExecutionContext
from .triggers import GMAIL_NEW_MESSAGE, TriggerEvent, TriggerHub, TriggerRegistration

logger = logging.getLogger("workspace.assistant")


class WorkspaceAssistant:
    def __init__(
        self,
        chat_service: ChatService,
        user_id: str,
        connected_account_id: str | None = None,
    ) -> None:
        self._chat = chat_service
        self.user_id = user_id
        self._context = ExecutionContext(
            user_id=user_id, connected_account_id=connected_account_id
        )

    def _with_identity(self, instruction: str) -> str:
        return f"{instruction}\n\nThe user's Google email address is {self.user_id}."

    async def _ask(self, instruction: str, tool_name: str) -> ChatResponse:
        return await self._chat.chat(
            self._with_identity(instruction),
            context=self._context,
            tool_names=[tool_name],
        )

    async def send_email(self, to: str, subject: str, body: str) -> ChatResponse:
        logger.info(f'Sending email to {to}: "{subject}"')
        try:
            response = await self._ask(
                f"Send an email to {to} with the subject '{subject}' and the body '{body}'",
                "GMAIL_SEND_EMAIL",
            )
        except Exception:
            logger.exception("Failed to send email")
            raise
        logger.info("Email request completed")
        return response

    async def search_gmail_messages(self, query: str, max_results: int = 10) -> ChatResponse:
        logger.info(f'Searching Gmail messages: "{query}"')
        try:
            response = await self._ask(
                f'Search Gmail for messages matching "{query}" '
                f"and return the first {max_results} results",
                "GMAIL_SEARCH_MESSAGES_FILTERS",
            )
        except Exception:
            logger.exception("Failed to search Gmail messages")
            raise
        logger.info(f"Gmail search completed for query: {query}")
        return response

    async def create_calendar_event(
        self,
        summary: str,
        start: str,
        end: str,
        description: str | None = None,
        attendees: Sequence[str] | None = None,
        location: str | None = None,
    ) -> ChatResponse:
        logger.info(f'Creating calendar event: "{summary}"')
        instruction = "\n".join([
            "Create a calendar event with the following details:",
            f"- Title: {summary}",
            f"- Start: {start}",
            f"- End: {end}",
            f"- Description: {description or ''}",
            f"- Location: {location or ''}",
            f"- Attendees: {', '.join(attendees) if attendees else 'None'}",
        ])
        try:
            response = await self._ask(instruction, "CALENDAR_CREATE_EVENT")
        except Exception:
            logger.exception("Failed to create calendar event")
            raise
        logger.info("Calendar event request completed")
        return response

    def setup_gmail_trigger(
        self, hub: TriggerHub, connected_account_id: str | None
    ) -> TriggerRegistration:
        """Register a new-message trigger and log each event it delivers."""
        logger.info("Setting up Gmail trigger for new messages...")
        registration = hub.create(GMAIL_NEW_MESSAGE, self.user_id, connected_account_id)

        async def log_event(event: TriggerEvent) -> None:
            logger.info(
                f"Trigger event received for {event.trigger_slug}: "
                f"{json.dumps(event.payload, default=str)}"
            )

        hub.subscribe(log_event, registration.trigger_id)
        logger.info(f"Trigger created successfully. Trigger Id: {registration.trigger_id}")
        return registration
