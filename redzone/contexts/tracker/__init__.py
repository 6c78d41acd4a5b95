"""
Tracker Context

Responsibilities:
- Defines the recruiting entities (profile, schools, outreach, chat, achievements)
- Validates serialized entities on load and on profile import
- Holds the in-memory state and flushes every change to the persistence context
- Enforces the school -> outreach cascade and id uniqueness

Owns: Entity schemas, id generation, state transitions
Never: Renders anything or decides reply text
"""

from redzone.contexts.tracker.data_structures import (
    PROFILE_FIELDS,
    Achievement,
    ChatMessage,
    Division,
    OutreachEntry,
    Profile,
    School,
    Sender,
)
from redzone.contexts.tracker.entity_store import MISSING_SCHOOL_PLACEHOLDER, EntityStore
from redzone.contexts.tracker.exceptions import InvalidEntityError, ProfileImportError
from redzone.contexts.tracker.ids import IdGenerator

__all__ = [
    # State
    "EntityStore",
    "IdGenerator",
    "MISSING_SCHOOL_PLACEHOLDER",
    # Entities
    "PROFILE_FIELDS",
    "Achievement",
    "ChatMessage",
    "Division",
    "OutreachEntry",
    "Profile",
    "School",
    "Sender",
    # Errors
    "InvalidEntityError",
    "ProfileImportError",
]
