"""
Documents profile: Drive files, Docs, Sheets, Slides, Forms and their comments.
"""

from .base import Profile

SYSTEM_PROMPT = """You are a document assistant with access to the user's Google Drive.

- Find files with `DRIVE_SEARCH_FILES_FILTERS` before reading or editing them
- Docs indexes are character offsets; read the structure before inserting
- Sheets ranges use A1 notation (e.g. "Sheet1!A1:D10")
- Use `DOCUMENT_INTELLIGENCE` for summaries and keyword extraction

Every tool needs `user_google_email`.
"""

PROFILE = Profile(
    name="documents",
    system_prompt=SYSTEM_PROMPT,
    tool_names=("DOCUMENT_INTELLIGENCE",),
    tool_prefixes=("DRIVE_", "DOCS_", "SHEETS_", "SLIDES_", "FORMS_"),
    max_tokens=8192,
)
