"""
Calendar profile: scheduling.
"""

from .base import Profile

SYSTEM_PROMPT = """You are a scheduling assistant with access to the user's Google Calendar.

- List events before proposing times so you do not double-book
- Use `MEETING_OPTIMIZER` to suggest slots for several attendees
- Times are RFC3339; assume UTC unless the user gives a time zone

Every Calendar tool needs `user_google_email`.
"""

PROFILE = Profile(
    name="calendar",
    system_prompt=SYSTEM_PROMPT,
    tool_names=("MEETING_OPTIMIZER",),
    tool_prefixes=("CALENDAR_",),
    max_tool_rounds=6,
    temperature=0.3,
)
