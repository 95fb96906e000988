"""
FastAPI server for the workspace daemon.

Endpoints:
- GET  /health                        - Liveness/readiness check for the process manager
- GET  /status                        - Initialization status
- GET  /v1/tools                      - List registered tools
- GET  /v1/tools/{slug}               - One tool's descriptor
- GET  /v1/profiles                   - List chat profiles
- POST /v1/invoke-tool                - Direct tool invocation (no LLM)
- POST /v1/invoke-batch               - Concurrent batch invocation
- POST /v1/chat                       - Planner-driven chat with tool use
- GET  /v1/triggers                   - List trigger registrations
- POST /v1/triggers                   - Register a trigger
- POST /v1/triggers/gmail             - Register a Gmail trigger logged by the assistant
- DELETE /v1/triggers/{trigger_id}    - Remove a trigger
- POST /v1/triggers/{trigger_id}/events - Deliver an inbound event
- POST /shutdown                      - Graceful self-termination (opt-in)

Startup behavior:
- The tool registry is built in the lifespan; registration errors abort startup
- /health reports "initializing" until the lifespan has finished
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import os
import resource
import signal
import time
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Any, AsyncIterator

from dotenv import load_dotenv
from fastapi import FastAPI, HTTPException
from pydantic import BaseModel, Field

from .agent import WorkspaceAgent
from .assistant import WorkspaceAssistant
from .chat import ChatMessage, ChatService
from .config import SERVICE_NAME, Settings, configure_logging
from .errors import UnknownTrigger
from .planner import AnthropicPlanner, Planner
from .profiles import ALL_PROFILES, get_profile
from .tools import (
    Dispatcher,
    ExecutionContext,
    InvocationRequest,
    ToolRegistry,
    UnknownIdentifier,
    build_registry,
)
from .triggers import TriggerEvent, TriggerHub, TriggerRegistration

logger = logging.getLogger("workspace.server")

SHUTDOWN_DELAY_SECONDS = 1.0


# --- Request/Response Models ---


class ChatMessageInput(BaseModel):
    """Input message in conversation history."""

    role: str = Field(..., description="Message role: 'user' or 'assistant'")
    content: str = Field(..., description="Message content")


def _empty_history() -> list[ChatMessageInput]:
    return []


def _empty_dict_list() -> list[dict[str, Any]]:
    return []


class ChatRequest(BaseModel):
    """Request body for /v1/chat endpoint."""

    message: str = Field(..., description="User message to process")
    profile: str = Field(default="workspace", description="Chat profile name")
    tool_names: list[str] | None = Field(
        default=None, description="Restrict the planner to these tool slugs"
    )
    history: list[ChatMessageInput] = Field(
        default_factory=_empty_history, description="Prior conversation history"
    )


class ChatResponseModel(BaseModel):
    """Response body for /v1/chat endpoint."""

    content: str = Field(..., description="Final response content")
    tool_calls: list[dict[str, Any]] = Field(
        default_factory=_empty_dict_list, description="Tool calls made"
    )
    tool_results: list[dict[str, Any]] = Field(
        default_factory=_empty_dict_list, description="Tool results received"
    )
    rounds_used: int = Field(..., description="Number of planner rounds")
    finished: bool = Field(..., description="Whether the planner gave a final answer")
    latency_ms: float = Field(..., description="Total processing time in milliseconds")


class ToolInvokeRequest(BaseModel):
    """Request body for /v1/invoke-tool endpoint."""

    tool_name: str = Field(..., description="Slug of the tool to invoke")
    arguments: dict[str, Any] = Field(default_factory=dict, description="Tool arguments")
    user_id: str | None = Field(default=None, description="Acting user; defaults to the daemon user")


class ToolInvokeResponse(BaseModel):
    """Response body for /v1/invoke-tool endpoint."""

    tool_name: str
    result: dict[str, Any]
    latency_ms: float


def _empty_invoke_list() -> list[ToolInvokeRequest]:
    return []


class BatchInvokeRequest(BaseModel):
    """Request body for /v1/invoke-batch endpoint."""

    requests: list[ToolInvokeRequest] = Field(
        default_factory=_empty_invoke_list, description="Invocations to run concurrently"
    )
    user_id: str | None = Field(default=None, description="Acting user for the whole batch")


class BatchInvokeResponse(BaseModel):
    """Response body for /v1/invoke-batch endpoint. Results follow request order."""

    results: list[dict[str, Any]]
    latency_ms: float


class HealthResponse(BaseModel):
    """Response body for /health endpoint."""

    status: str
    service: str
    tools_count: int
    user_id: str
    timestamp: str
    uptime_seconds: float
    max_rss_kb: int


class StatusResponse(BaseModel):
    """Response body for /status endpoint."""

    initialized: bool
    tools_ready: bool
    user_id: str
    project_id: str | None
    start_time: str
    planner_configured: bool


class ProfileInfo(BaseModel):
    """Info about a chat profile."""

    name: str
    system_prompt_preview: str
    tool_names: list[str]
    tool_prefixes: list[str]
    max_tool_rounds: int


class ToolInfo(BaseModel):
    """Info about a tool."""

    name: str
    display_name: str
    description: str
    parameters: dict[str, Any]


class TriggerCreateRequest(BaseModel):
    """Request body for POST /v1/triggers."""

    trigger_slug: str = Field(..., description="Trigger type, e.g. GMAIL_NEW_GMAIL_MESSAGE")
    connected_account_id: str | None = Field(default=None, description="Connection handle")
    config: dict[str, Any] | None = Field(default=None, description="Trigger configuration")


class TriggerInfo(BaseModel):
    """A trigger registration."""

    trigger_id: str
    trigger_slug: str
    user_id: str
    connected_account_id: str | None
    config: dict[str, Any]
    created_at: datetime


class GmailTriggerRequest(BaseModel):
    """Request body for POST /v1/triggers/gmail."""

    connected_account_id: str | None = Field(default=None, description="Connection handle")


class TriggerEventRequest(BaseModel):
    """Request body for POST /v1/triggers/{trigger_id}/events."""

    payload: dict[str, Any] = Field(default_factory=dict, description="Event payload")


class TriggerEventResponse(BaseModel):
    trigger_id: str
    delivered: int


# --- Application State ---


class AppState:
    """Everything the endpoints need, built by the lifespan."""

    def __init__(
        self,
        settings: Settings,
        registry: ToolRegistry | None = None,
        planner: Planner | None = None,
    ) -> None:
        self.settings = settings
        self.registry = registry
        self.planner = planner
        self.dispatcher: Dispatcher | None = None
        self.chat_service: ChatService | None = None
        self.agent: WorkspaceAgent | None = None
        self.assistant: WorkspaceAssistant | None = None
        self.triggers = TriggerHub()
        self.ready = False
        self.start_time = datetime.now(timezone.utc)
        self._started = time.monotonic()

    @property
    def uptime_seconds(self) -> float:
        return time.monotonic() - self._started

    @property
    def tools_count(self) -> int:
        return len(self.registry) if self.registry is not None else 0

    def initialize(self) -> None:
        """Build the registry (unless injected) and the services on top of it."""
        settings = self.settings
        if self.registry is None:
            self.registry = build_registry()
        self.dispatcher = Dispatcher(self.registry, strict=settings.strict_validation)

        if self.planner is None and settings.planner_configured:
            self.planner = AnthropicPlanner(
                model=settings.anthropic_model, api_key=settings.anthropic_api_key
            )
        if self.planner is not None:
            self.chat_service = ChatService(self.planner, self.registry, self.dispatcher)
            self.assistant = WorkspaceAssistant(
                self.chat_service,
                settings.user_google_email,
                settings.connected_account_id,
            )
        else:
            logger.warning("ANTHROPIC_API_KEY not set - chat endpoints disabled")

        self.agent = WorkspaceAgent(
            self.registry,
            self.dispatcher,
            user_id=settings.user_google_email,
            connected_account_id=settings.connected_account_id,
        )
        self.agent.initialize()
        self.ready = True

    def context_for(self, user_id: str | None) -> ExecutionContext:
        return ExecutionContext(
            user_id=user_id or self.settings.user_google_email,
            connected_account_id=self.settings.connected_account_id,
        )


def _trigger_info(registration: TriggerRegistration) -> TriggerInfo:
    return TriggerInfo(
        trigger_id=registration.trigger_id,
        trigger_slug=registration.trigger_slug,
        user_id=registration.user_id,
        connected_account_id=registration.connected_account_id,
        config=registration.config,
        created_at=registration.created_at,
    )


def _max_rss_kb() -> int:
    return resource.getrusage(resource.RUSAGE_SELF).ru_maxrss


# --- Application Factory ---


def create_app(
    settings: Settings | None = None,
    registry: ToolRegistry | None = None,
    planner: Planner | None = None,
) -> FastAPI:
    """
    Build the FastAPI app.

    `registry` and `planner` may be injected (tests do); otherwise the
    registry is built at startup and a planner is created when an
    Anthropic API key is configured.
    """
    settings = settings or Settings.from_env()
    state = AppState(settings, registry, planner)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        logger.info("Google Workspace service starting...")
        logger.info(f"User: {settings.user_google_email}")
        state.initialize()
        logger.info(f"Service ready with {state.tools_count} tools")
        yield
        logger.info("Shutting down workspace daemon...")

    app = FastAPI(
        title="Workspace Daemon",
        description="Google Workspace tool registry, dispatcher and planner-driven chat",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.workspace = state

    # --- Health ---

    @app.get("/health", response_model=HealthResponse)
    async def health_check() -> HealthResponse:
        """Health check for the process manager."""
        return HealthResponse(
            status="ready" if state.ready else "initializing",
            service=SERVICE_NAME,
            tools_count=state.tools_count,
            user_id=settings.user_google_email,
            timestamp=datetime.now(timezone.utc).isoformat(),
            uptime_seconds=state.uptime_seconds,
            max_rss_kb=_max_rss_kb(),
        )

    @app.get("/status", response_model=StatusResponse)
    async def status() -> StatusResponse:
        return StatusResponse(
            initialized=state.ready,
            tools_ready=state.ready and state.tools_count > 0,
            user_id=settings.user_google_email,
            project_id=settings.composio_project_id,
            start_time=state.start_time.isoformat(),
            planner_configured=state.chat_service is not None,
        )

    # --- Tools ---

    def require_registry() -> ToolRegistry:
        if state.registry is None or state.dispatcher is None:
            raise HTTPException(status_code=503, detail="Service is initializing")
        return state.registry

    @app.get("/v1/tools", response_model=list[ToolInfo])
    async def list_tools() -> list[ToolInfo]:
        """List registered tools with their JSON Schema parameters."""
        return [
            ToolInfo(
                name=t.name,
                display_name=t.display_name,
                description=t.description,
                parameters=t.parameters,
            )
            for t in require_registry().list_all()
        ]

    @app.get("/v1/tools/{slug}", response_model=ToolInfo)
    async def get_tool(slug: str) -> ToolInfo:
        t = require_registry().get(slug)
        if t is None:
            raise HTTPException(status_code=404, detail=f"Unknown tool: {slug}")
        return ToolInfo(
            name=t.name,
            display_name=t.display_name,
            description=t.description,
            parameters=t.parameters,
        )

    @app.get("/v1/profiles", response_model=list[ProfileInfo])
    async def list_profiles() -> list[ProfileInfo]:
        """List available chat profiles."""
        return [
            ProfileInfo(
                name=name,
                system_prompt_preview=(
                    profile.system_prompt[:200] + "..."
                    if len(profile.system_prompt) > 200
                    else profile.system_prompt
                ),
                tool_names=list(profile.tool_names),
                tool_prefixes=list(profile.tool_prefixes),
                max_tool_rounds=profile.max_tool_rounds,
            )
            for name, profile in ALL_PROFILES.items()
        ]

    @app.post("/v1/invoke-tool", response_model=ToolInvokeResponse)
    async def invoke_tool(request: ToolInvokeRequest) -> ToolInvokeResponse:
        """
        Direct tool invocation endpoint.

        Executes a tool without LLM involvement. Validation and execution
        failures come back in the result envelope, not as HTTP errors.
        """
        start_time = time.perf_counter()

        if request.tool_name not in require_registry():
            raise HTTPException(status_code=404, detail=f"Unknown tool: {request.tool_name}")

        result = await state.dispatcher.dispatch(
            InvocationRequest(request.tool_name, request.arguments),
            state.context_for(request.user_id),
        )

        latency_ms = (time.perf_counter() - start_time) * 1000
        return ToolInvokeResponse(
            tool_name=request.tool_name,
            result=result.to_dict(),
            latency_ms=latency_ms,
        )

    @app.post("/v1/invoke-batch", response_model=BatchInvokeResponse)
    async def invoke_batch(request: BatchInvokeRequest) -> BatchInvokeResponse:
        """Run several invocations concurrently. Unknown slugs fail in-band."""
        start_time = time.perf_counter()
        require_registry()

        results = await state.dispatcher.dispatch_all(
            [InvocationRequest(r.tool_name, r.arguments) for r in request.requests],
            state.context_for(request.user_id),
        )

        latency_ms = (time.perf_counter() - start_time) * 1000
        return BatchInvokeResponse(
            results=[r.to_dict() for r in results],
            latency_ms=latency_ms,
        )

    # --- Chat ---

    @app.post("/v1/chat", response_model=ChatResponseModel)
    async def chat(request: ChatRequest) -> ChatResponseModel:
        """
        Chat completion endpoint.

        Runs the planner with the profile's tools (or `tool_names`),
        executing tool calls until it gives a final answer.
        """
        start_time = time.perf_counter()

        if get_profile(request.profile) is None:
            raise HTTPException(status_code=400, detail=f"Unknown profile: {request.profile}")
        if state.chat_service is None:
            raise HTTPException(status_code=503, detail="No planner configured")

        history = [ChatMessage(m.role, m.content) for m in request.history]
        try:
            result = await state.chat_service.chat(
                user_message=request.message,
                profile_name=request.profile,
                conversation_history=history,
                context=state.context_for(None),
                tool_names=request.tool_names,
                max_rounds=settings.max_tool_rounds,
            )
        except UnknownIdentifier as e:
            raise HTTPException(status_code=400, detail=str(e)) from e

        latency_ms = (time.perf_counter() - start_time) * 1000
        return ChatResponseModel(
            content=result.content,
            tool_calls=[
                {"name": tc.name, "arguments": tc.arguments, "id": tc.id}
                for tc in result.tool_calls
            ],
            tool_results=[
                {"tool_name": tr.tool_name, "call_id": tr.call_id, "result": tr.result.to_dict()}
                for tr in result.tool_results
            ],
            rounds_used=result.rounds_used,
            finished=result.finished,
            latency_ms=latency_ms,
        )

    # --- Triggers ---

    @app.get("/v1/triggers", response_model=list[TriggerInfo])
    async def list_triggers() -> list[TriggerInfo]:
        return [_trigger_info(r) for r in state.triggers.list()]

    @app.post("/v1/triggers", response_model=TriggerInfo)
    async def create_trigger(request: TriggerCreateRequest) -> TriggerInfo:
        registration = state.triggers.create(
            request.trigger_slug,
            settings.user_google_email,
            request.connected_account_id or settings.connected_account_id,
            request.config,
        )
        return _trigger_info(registration)

    @app.post("/v1/triggers/gmail", response_model=TriggerInfo)
    async def create_gmail_trigger(request: GmailTriggerRequest) -> TriggerInfo:
        """Register a new-message trigger whose events the assistant logs."""
        if state.assistant is None:
            raise HTTPException(status_code=503, detail="No planner configured")
        registration = state.assistant.setup_gmail_trigger(
            state.triggers, request.connected_account_id or settings.connected_account_id
        )
        return _trigger_info(registration)

    @app.delete("/v1/triggers/{trigger_id}")
    async def delete_trigger(trigger_id: str) -> dict[str, str]:
        if not state.triggers.delete(trigger_id):
            raise HTTPException(status_code=404, detail=f"Unknown trigger: {trigger_id}")
        return {"deleted": trigger_id}

    @app.post("/v1/triggers/{trigger_id}/events", response_model=TriggerEventResponse)
    async def publish_trigger_event(
        trigger_id: str, request: TriggerEventRequest
    ) -> TriggerEventResponse:
        """Deliver an inbound event to the trigger's subscribers."""
        registration = state.triggers.get(trigger_id)
        if registration is None:
            raise HTTPException(status_code=404, detail=f"Unknown trigger: {trigger_id}")
        event = TriggerEvent(trigger_id, registration.trigger_slug, request.payload)
        try:
            delivered = await state.triggers.publish(event)
        except UnknownTrigger as e:
            # Deleted between lookup and publish
            raise HTTPException(status_code=404, detail=str(e)) from e
        return TriggerEventResponse(trigger_id=trigger_id, delivered=delivered)

    # --- Lifecycle ---

    @app.post("/shutdown")
    async def shutdown() -> dict[str, str]:
        """Terminate the process shortly after answering. Disabled by default."""
        if not settings.allow_remote_shutdown:
            raise HTTPException(status_code=403, detail="Remote shutdown is disabled")
        logger.info("Shutdown requested over HTTP")
        loop = asyncio.get_running_loop()
        loop.call_later(SHUTDOWN_DELAY_SECONDS, os.kill, os.getpid(), signal.SIGTERM)
        return {"message": "Shutting down gracefully..."}

    return app


def main() -> None:
    """Run the daemon server."""
    import uvicorn

    load_dotenv()
    settings = Settings.from_env()

    parser = argparse.ArgumentParser(description="Google Workspace tools daemon")
    parser.add_argument("--host", default=settings.host)
    parser.add_argument("--port", type=int, default=settings.port)
    parser.add_argument("--log-level", default=settings.log_level)
    args = parser.parse_args()

    configure_logging(args.log_level)
    logger.info(f"Starting workspace daemon on {args.host}:{args.port}")
    uvicorn.run(create_app(settings), host=args.host, port=args.port)


if __name__ == "__main__":
    main()
