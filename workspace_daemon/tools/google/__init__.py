"""
Google Workspace tools for LLM and direct invocation.

One module per service; each exports a TOOLS tuple. GOOGLE_TOOLS is the
concatenation in registration order.
"""

from . import calendar, chat, comments, docs, drive, forms, gmail, search, sheets, slides, tasks

GOOGLE_TOOLS = (
    *gmail.TOOLS,
    *calendar.TOOLS,
    *drive.TOOLS,
    *docs.TOOLS,
    *sheets.TOOLS,
    *slides.TOOLS,
    *forms.TOOLS,
    *chat.TOOLS,
    *search.TOOLS,
    *tasks.TOOLS,
    *comments.TOOLS,
)

__all__ = ["GOOGLE_TOOLS"]
