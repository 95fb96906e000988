"""
Cross-app insight tools.

These tools sit above the per-service Google tools: they summarize or
orchestrate across Gmail, Calendar and Drive. Each module exports TOOL.
"""

from .document_intelligence import TOOL as document_intelligence
from .email_analytics import TOOL as email_analytics
from .meeting_optimizer import TOOL as meeting_optimizer
from .workspace_workflow import TOOL as workspace_workflow

INSIGHT_TOOLS = (
    email_analytics,
    meeting_optimizer,
    document_intelligence,
    workspace_workflow,
)

__all__ = [
    "INSIGHT_TOOLS",
    "email_analytics",
    "meeting_optimizer",
    "document_intelligence",
    "workspace_workflow",
]
