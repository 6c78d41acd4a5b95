"""
Entity schemas for the recruiting tracker.

Entities are frozen dataclasses. Each one serializes to the camelCase dict
layout used in storage and in profile export files (testScores, schoolId,
fitScore, from), and parses back through a validating from_dict() that raises
InvalidEntityError on any shape mismatch.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterable, List, Tuple, Type, TypeVar

from redzone.contexts.tracker.exceptions import InvalidEntityError

E = TypeVar("E")


class Division(str, Enum):
    """Competitive division of a target school."""

    NCAA_DI = "NCAA DI"
    NCAA_DII = "NCAA DII"
    NCAA_DIII = "NCAA DIII"
    NAIA = "NAIA"
    JUNIOR_COLLEGE = "Junior College"

    @classmethod
    def parse(cls, value) -> "Division":
        """Resolve a Division from an enum member or its display value."""
        try:
            return cls(value)
        except ValueError:
            choices = ", ".join(d.value for d in cls)
            raise InvalidEntityError(
                f"unknown division {value!r} (expected one of: {choices})",
                entity="School",
                field_name="division",
            )


class Sender(str, Enum):
    """Author of a chat message."""

    USER = "user"
    BOT = "bot"


# Profile scalar fields: attribute name -> serialized name
PROFILE_FIELDS = {
    "name": "name",
    "email": "email",
    "phone": "phone",
    "position": "position",
    "height": "height",
    "weight": "weight",
    "gpa": "gpa",
    "test_scores": "testScores",
}


# =============================================================================
# FIELD VALIDATION HELPERS
# =============================================================================


def _require_mapping(data: Any, entity: str) -> Dict[str, Any]:
    if not isinstance(data, dict):
        raise InvalidEntityError(f"expected an object, got {type(data).__name__}", entity=entity)
    return data


def _require_int(data: Dict[str, Any], key: str, entity: str) -> int:
    value = data.get(key)
    # bool is an int subclass, but true/false is never a valid number here
    if not isinstance(value, int) or isinstance(value, bool):
        raise InvalidEntityError(f"expected an integer, got {value!r}", entity=entity, field_name=key)
    return value


def _require_str(data: Dict[str, Any], key: str, entity: str, non_empty: bool = False) -> str:
    value = data.get(key)
    if not isinstance(value, str):
        raise InvalidEntityError(f"expected a string, got {value!r}", entity=entity, field_name=key)
    if non_empty and not value.strip():
        raise InvalidEntityError("must not be empty", entity=entity, field_name=key)
    return value


def ensure_unique_ids(items: Iterable, collection: str) -> None:
    """Raise InvalidEntityError if two items in a collection share an id."""
    seen = set()
    for item in items:
        if item.id in seen:
            raise InvalidEntityError(f"duplicate id {item.id}", entity=collection)
        seen.add(item.id)


def parse_entity_list(data: Any, entity_cls: Type[E], collection: str) -> List[E]:
    """
    Parse a serialized list of entities.

    Args:
        data: Deserialized JSON value (must be a list of objects)
        entity_cls: Entity class providing from_dict()
        collection: Collection name for error messages (e.g., "schools")

    Returns:
        List of entities in stored order

    Raises:
        InvalidEntityError: If data is not a list, any item is malformed,
            or ids repeat
    """
    if not isinstance(data, list):
        raise InvalidEntityError(f"expected a list, got {type(data).__name__}", entity=collection)
    items = [entity_cls.from_dict(item) for item in data]
    ensure_unique_ids(items, collection)
    return items


# =============================================================================
# ENTITIES
# =============================================================================


@dataclass(frozen=True)
class Achievement:
    """A single achievement line on the athlete profile."""

    id: int
    text: str

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "text": self.text}

    @classmethod
    def from_dict(cls, data: Any) -> "Achievement":
        data = _require_mapping(data, "Achievement")
        return cls(
            id=_require_int(data, "id", "Achievement"),
            text=_require_str(data, "text", "Achievement", non_empty=True),
        )


@dataclass(frozen=True)
class Profile:
    """
    The athlete profile (singleton per user).

    All scalar fields are free text. Only gpa is interpreted, by the fit score
    computation. Achievements keep insertion order.
    """

    name: str = ""
    email: str = ""
    phone: str = ""
    position: str = ""
    height: str = ""
    weight: str = ""
    gpa: str = ""
    test_scores: str = ""
    achievements: Tuple[Achievement, ...] = field(default_factory=tuple)

    def scalar_values(self) -> List[str]:
        """The eight scalar fields in display order."""
        return [getattr(self, attr) for attr in PROFILE_FIELDS]

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            serialized: getattr(self, attr) for attr, serialized in PROFILE_FIELDS.items()
        }
        data["achievements"] = [a.to_dict() for a in self.achievements]
        return data

    @classmethod
    def from_dict(cls, data: Any) -> "Profile":
        """
        Parse a serialized profile.

        Missing scalar fields default to "" and unknown keys are ignored.
        Present fields must have the right type.
        """
        data = _require_mapping(data, "Profile")

        values = {}
        for attr, serialized in PROFILE_FIELDS.items():
            if serialized in data:
                values[attr] = _require_str(data, serialized, "Profile")

        achievements = parse_entity_list(data.get("achievements", []), Achievement, "achievements")
        return cls(**values, achievements=tuple(achievements))


@dataclass(frozen=True)
class School:
    """
    A target school.

    fit_score is a snapshot taken from the profile GPA when the school was
    added; it is never recomputed.
    """

    id: int
    name: str
    division: Division
    contact: str
    fit_score: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "division": self.division.value,
            "contact": self.contact,
            "fitScore": self.fit_score,
        }

    @classmethod
    def from_dict(cls, data: Any) -> "School":
        data = _require_mapping(data, "School")
        fit_score = _require_int(data, "fitScore", "School")
        if not 0 <= fit_score <= 100:
            raise InvalidEntityError(
                f"out of range 0-100: {fit_score}", entity="School", field_name="fitScore"
            )
        return cls(
            id=_require_int(data, "id", "School"),
            name=_require_str(data, "name", "School", non_empty=True),
            division=Division.parse(data.get("division")),
            contact=_require_str(data, "contact", "School"),
            fit_score=fit_score,
        )


@dataclass(frozen=True)
class OutreachEntry:
    """A logged contact with a school's coaching staff."""

    id: int
    school_id: int
    date: str  # YYYY-MM-DD
    message: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "schoolId": self.school_id,
            "date": self.date,
            "message": self.message,
        }

    @classmethod
    def from_dict(cls, data: Any) -> "OutreachEntry":
        data = _require_mapping(data, "OutreachEntry")
        return cls(
            id=_require_int(data, "id", "OutreachEntry"),
            school_id=_require_int(data, "schoolId", "OutreachEntry"),
            date=_require_str(data, "date", "OutreachEntry"),
            message=_require_str(data, "message", "OutreachEntry", non_empty=True),
        )


@dataclass(frozen=True)
class ChatMessage:
    """One line of the assistant conversation log."""

    id: int
    sender: Sender
    text: str

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "from": self.sender.value, "text": self.text}

    @classmethod
    def from_dict(cls, data: Any) -> "ChatMessage":
        data = _require_mapping(data, "ChatMessage")
        try:
            sender = Sender(data.get("from"))
        except ValueError:
            raise InvalidEntityError(
                f"expected 'user' or 'bot', got {data.get('from')!r}",
                entity="ChatMessage",
                field_name="from",
            )
        return cls(
            id=_require_int(data, "id", "ChatMessage"),
            sender=sender,
            text=_require_str(data, "text", "ChatMessage"),
        )
