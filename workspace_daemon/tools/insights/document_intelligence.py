"""
Document intelligence tool.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any

from ..base import ExecutionContext, tool
from ..schema import boolean, enum, string
from ._common import rng_for

_KEYWORDS = ["quarterly", "objectives", "team", "deliverables", "timeline"]

_SUMMARY = (
    "Document outlines quarterly objectives and team deliverables with "
    "associated timelines and success metrics."
)


@tool(
    name="DOCUMENT_INTELLIGENCE",
    display_name="Document Intelligence Analyzer",
    description="Extract insights and metadata from Google Drive documents",
    fields=(
        string("file_id", "Google Drive file ID"),
        enum(
            "analysis_depth",
            ("basic", "detailed", "comprehensive"),
            "How deep to analyze",
            default="basic",
        ),
        boolean("extract_keywords", "Extract keywords", default=True),
        boolean("summarize", "Include a summary", default=False),
    ),
)
def document_intelligence(params: dict[str, Any], context: ExecutionContext) -> dict[str, Any]:
    rng = rng_for(context)
    modified = datetime.now(timezone.utc) - timedelta(days=rng.uniform(0, 7))

    return {
        "file_id": params["file_id"],
        "analysis_depth": params["analysis_depth"],
        "metadata": {
            "word_count": rng.randint(500, 5499),
            "page_count": rng.randint(1, 20),
            "language": "en",
            "reading_time": f"{rng.randint(2, 16)} minutes",
            "last_modified": modified.isoformat(),
        },
        "content_analysis": {
            "topics": ["project management", "team collaboration", "quarterly goals"],
            "sentiment": "professional",
            "complexity_score": rng.uniform(0.3, 0.8),
            "keywords": list(_KEYWORDS) if params["extract_keywords"] else [],
        },
        "summary": _SUMMARY if params["summarize"] else None,
        "actionable_items": [
            "Review quarterly objectives",
            "Assign team responsibilities",
            "Set milestone deadlines",
            "Schedule progress check-ins",
        ],
        "recommendations": [
            "Consider adding visual timeline",
            "Include risk assessment section",
            "Define success metrics more clearly",
        ],
    }


TOOL = document_intelligence
