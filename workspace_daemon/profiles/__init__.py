"""
Profiles package: assistant profile definitions.

Each profile is a module that defines:
- System prompt
- Tool selection (slugs and slug prefixes)
- Inference settings

Profiles are pure configuration - no side effects.
"""

from .base import Profile
from .calendar import PROFILE as calendar
from .documents import PROFILE as documents
from .mail import PROFILE as mail
from .workspace import PROFILE as workspace

# All profiles exported from this package
ALL_PROFILES: dict[str, Profile] = {
    "workspace": workspace,
    "mail": mail,
    "calendar": calendar,
    "documents": documents,
}


def get_profile(name: str) -> Profile | None:
    """Get a profile by name."""
    return ALL_PROFILES.get(name)


def list_profiles() -> list[str]:
    """List all available profile names."""
    return list(ALL_PROFILES.keys())


__all__ = [
    "Profile",
    "ALL_PROFILES",
    "get_profile",
    "list_profiles",
    "workspace",
    "mail",
    "calendar",
    "documents",
]
