"""
In-memory recruiting state kept in sync with a key-value store.

Each entity (profile, schools, outreach log, chat log, reel plan, brand name,
bot name, playbook checklist) lives under its own storage key. The store reads
every key once on construction, falling back to the entity's default when the
value is absent, unreadable, or malformed. Every mutation writes the changed
entities back to their keys and then notifies change listeners.

Writes are fire-and-forget: a failed write is logged and the in-memory state
stays authoritative for the rest of the session.

Usage:
    from redzone.contexts.persistence import JsonFileStore
    from redzone.contexts.tracker import EntityStore

    store = EntityStore(JsonFileStore(Path("outs/redzone_store.json")))
    store.update_profile_field("gpa", "3.6")
    school = store.add_school("State University", "NCAA DI", "coach@state.edu")
    store.log_outreach(school.id, "Sent intro email with highlight link")
"""

import json
from dataclasses import replace
from typing import Any, Callable, Dict, List, Optional, Tuple

from redzone.contexts.assistant import ResponseRuleSet, respond
from redzone.contexts.persistence import KeyValueStore, PersistenceUnavailableError
from redzone.contexts.scoring import compute_fit_score, compute_profile_completion
from redzone.contexts.tracker.data_structures import (
    PROFILE_FIELDS,
    Achievement,
    ChatMessage,
    Division,
    OutreachEntry,
    Profile,
    School,
    Sender,
    parse_entity_list,
)
from redzone.contexts.tracker.exceptions import InvalidEntityError, ProfileImportError
from redzone.contexts.tracker.ids import IdGenerator
from redzone.contexts.tracker.logger import _log_debug, _log_info, _log_warning
from redzone.utils.config import load_defaults
from redzone.utils.timestamp import today as utc_today

# Entities stored as raw text rather than JSON
TEXT_ENTITIES = ("reel_plan", "brand_name", "bot_name")

MISSING_SCHOOL_PLACEHOLDER = "-"

ChangeListener = Callable[[frozenset], None]


class EntityStore:
    """
    Recruiting tracker state with write-through persistence.

    Reads return immutable snapshots (frozen dataclasses and tuples), so a value
    obtained before a mutation never changes underneath the caller.

    Args:
        persistence: Key-value backend to load from and flush to
        id_generator: Id source (defaults to a wall-clock IdGenerator)
        today: Callable returning the current date as YYYY-MM-DD
        rule_set: Assistant rules (defaults to the packaged rule table)
        defaults: Parsed defaults file (defaults to load_defaults())
    """

    def __init__(
        self,
        persistence: KeyValueStore,
        id_generator: Optional[IdGenerator] = None,
        today: Callable[[], str] = utc_today,
        rule_set: Optional[ResponseRuleSet] = None,
        defaults: Optional[Dict[str, Any]] = None,
    ):
        if defaults is None:
            defaults = load_defaults()

        self.persistence = persistence
        self.storage_keys: Dict[str, str] = dict(defaults["storage_keys"])
        self.playbook_steps: Tuple[str, ...] = tuple(defaults["playbook_steps"])
        self._default_settings: Dict[str, str] = dict(defaults["settings"])
        self._ids = id_generator if id_generator is not None else IdGenerator()
        self._today = today
        self._rule_set = rule_set
        self._listeners: List[ChangeListener] = []

        self._load()

    # =========================================================================
    # LOADING
    # =========================================================================

    def _read(self, entity: str) -> Optional[str]:
        key = self.storage_keys[entity]
        try:
            return self.persistence.get(key)
        except PersistenceUnavailableError as e:
            _log_warning(f"Could not read {key}, using default: {e.message}")
            return None

    def _load_structured(self, entity: str, parse: Callable[[Any], Any], default: Any) -> Any:
        raw = self._read(entity)
        if raw is None:
            return default
        try:
            return parse(json.loads(raw))
        except (json.JSONDecodeError, InvalidEntityError) as e:
            _log_debug(f"Discarding malformed {self.storage_keys[entity]}: {e}")
            return default

    def _load_text(self, entity: str) -> str:
        # Empty stored text also falls back to the default
        return self._read(entity) or self._default_settings[entity]

    def _parse_playbook(self, data: Any) -> Tuple[bool, ...]:
        if (
            not isinstance(data, list)
            or len(data) != len(self.playbook_steps)
            or not all(isinstance(done, bool) for done in data)
        ):
            raise InvalidEntityError(
                f"expected {len(self.playbook_steps)} booleans", entity="playbook"
            )
        return tuple(data)

    def _load(self) -> None:
        self._profile: Profile = self._load_structured("profile", Profile.from_dict, Profile())
        self._schools: Tuple[School, ...] = self._load_structured(
            "schools", lambda d: tuple(parse_entity_list(d, School, "schools")), ()
        )
        self._outreach: Tuple[OutreachEntry, ...] = self._load_structured(
            "outreach", lambda d: tuple(parse_entity_list(d, OutreachEntry, "outreach")), ()
        )
        self._chat: Tuple[ChatMessage, ...] = self._load_structured(
            "chat", lambda d: tuple(parse_entity_list(d, ChatMessage, "chat")), ()
        )
        self._playbook: Tuple[bool, ...] = self._load_structured(
            "playbook", self._parse_playbook, (False,) * len(self.playbook_steps)
        )
        self._reel_plan: str = self._load_text("reel_plan")
        self._brand_name: str = self._load_text("brand_name")
        self._bot_name: str = self._load_text("bot_name")

        # Ids issued this session must not collide with stored ones
        self._ids.observe(a.id for a in self._profile.achievements)
        self._ids.observe(s.id for s in self._schools)
        self._ids.observe(o.id for o in self._outreach)
        self._ids.observe(m.id for m in self._chat)

        _log_debug(
            f"Loaded {len(self._schools)} schools, {len(self._outreach)} outreach entries, "
            f"{len(self._chat)} chat messages"
        )

    # =========================================================================
    # PERSISTENCE AND CHANGE NOTIFICATION
    # =========================================================================

    def _serialize(self, entity: str) -> str:
        if entity == "profile":
            return json.dumps(self._profile.to_dict())
        if entity == "playbook":
            return json.dumps(list(self._playbook))
        if entity in TEXT_ENTITIES:
            return getattr(self, f"_{entity}")
        items = getattr(self, f"_{entity}")
        return json.dumps([item.to_dict() for item in items])

    def _flush(self, entity: str) -> None:
        key = self.storage_keys[entity]
        try:
            self.persistence.set(key, self._serialize(entity))
        except PersistenceUnavailableError as e:
            _log_warning(f"Could not save {key}; keeping in-memory state: {e.message}")

    def _commit(self, **changes: Any) -> None:
        """
        Apply one state transition.

        All changed entities are replaced before anything is flushed or any
        listener runs, so observers never see a partial transition.
        """
        for entity, value in changes.items():
            setattr(self, f"_{entity}", value)
        for entity in changes:
            self._flush(entity)

        changed = frozenset(changes)
        for listener in list(self._listeners):
            listener(changed)

    def subscribe(self, listener: ChangeListener) -> Callable[[], None]:
        """
        Register a callback invoked after every mutation.

        The callback receives the frozenset of changed entity names
        (e.g., {"schools", "outreach"}).

        Returns:
            Function that unregisters the listener
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    # =========================================================================
    # READ ACCESS
    # =========================================================================

    @property
    def profile(self) -> Profile:
        return self._profile

    @property
    def schools(self) -> Tuple[School, ...]:
        return self._schools

    @property
    def outreach(self) -> Tuple[OutreachEntry, ...]:
        return self._outreach

    @property
    def chat_messages(self) -> Tuple[ChatMessage, ...]:
        return self._chat

    @property
    def reel_plan(self) -> str:
        return self._reel_plan

    @property
    def brand_name(self) -> str:
        return self._brand_name

    @property
    def bot_name(self) -> str:
        return self._bot_name

    @property
    def playbook(self) -> List[Tuple[str, bool]]:
        """Checklist as (step, done) pairs in display order."""
        return list(zip(self.playbook_steps, self._playbook))

    @property
    def profile_completion(self) -> int:
        return compute_profile_completion(self._profile)

    def school_by_id(self, school_id: int) -> Optional[School]:
        for school in self._schools:
            if school.id == school_id:
                return school
        return None

    def school_name_for(self, entry: OutreachEntry) -> str:
        """Name of the school an outreach entry refers to, or a placeholder."""
        school = self.school_by_id(entry.school_id)
        return school.name if school else MISSING_SCHOOL_PLACEHOLDER

    # =========================================================================
    # PROFILE
    # =========================================================================

    def update_profile_field(self, field_name: str, value: str) -> None:
        """
        Replace one scalar profile field, keeping all others.

        Args:
            field_name: Attribute name (e.g., "test_scores") or serialized
                name (e.g., "testScores")
            value: New free-text value (not validated)

        Raises:
            InvalidEntityError: If field_name is not a profile scalar field
        """
        if field_name in PROFILE_FIELDS:
            attr = field_name
        else:
            by_serialized = {serialized: attr for attr, serialized in PROFILE_FIELDS.items()}
            if field_name not in by_serialized:
                raise InvalidEntityError("unknown profile field", entity="Profile", field_name=field_name)
            attr = by_serialized[field_name]

        self._commit(profile=replace(self._profile, **{attr: str(value)}))

    def add_achievement(self, text: str) -> Optional[Achievement]:
        """Append an achievement. Blank text is ignored (returns None)."""
        if not text.strip():
            return None
        achievement = Achievement(id=self._ids.next_id(), text=text)
        self._commit(
            profile=replace(self._profile, achievements=self._profile.achievements + (achievement,))
        )
        return achievement

    def remove_achievement(self, achievement_id: int) -> bool:
        """Remove an achievement by id. Returns False if no such achievement."""
        remaining = tuple(a for a in self._profile.achievements if a.id != achievement_id)
        if len(remaining) == len(self._profile.achievements):
            return False
        self._commit(profile=replace(self._profile, achievements=remaining))
        return True

    def export_profile(self) -> str:
        """Serialize the profile as pretty-printed JSON (importable by import_profile)."""
        return json.dumps(self._profile.to_dict(), indent=2)

    def import_profile(self, raw: str) -> Profile:
        """
        Replace the whole profile with a serialized one.

        The payload must be a JSON object. Present scalar fields must be strings,
        achievements (if present) a list of {id, text}; missing scalar fields
        become "" and unknown keys are ignored.

        Args:
            raw: JSON text (e.g., the contents of an exported profile file)

        Returns:
            The imported Profile

        Raises:
            ProfileImportError: If raw is not valid JSON or not a profile. The
                current profile is left unchanged.
        """
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            raise ProfileImportError("Invalid profile JSON", payload_snippet=raw, original_error=e)

        try:
            profile = Profile.from_dict(data)
        except InvalidEntityError as e:
            raise ProfileImportError(
                "Profile JSON does not describe a profile", payload_snippet=raw, original_error=e
            )

        self._ids.observe(a.id for a in profile.achievements)
        self._commit(profile=profile)
        _log_info(f"Imported profile ({len(profile.achievements)} achievements)")
        return profile

    # =========================================================================
    # SCHOOLS AND OUTREACH
    # =========================================================================

    def add_school(self, name: str, division, contact: str = "") -> Optional[School]:
        """
        Add a target school, snapshotting the current GPA-based fit score.

        Args:
            name: School name (blank names are ignored, returning None)
            division: Division member or display value (e.g., "NCAA DII")
            contact: Coach contact, usually an email address

        Raises:
            InvalidEntityError: If division is not a known division
        """
        if not name.strip():
            return None
        school = School(
            id=self._ids.next_id(),
            name=name,
            division=Division.parse(division),
            contact=contact,
            fit_score=compute_fit_score(self._profile.gpa),
        )
        self._commit(schools=self._schools + (school,))
        return school

    def remove_school(self, school_id: int) -> bool:
        """
        Remove a school together with every outreach entry logged against it.

        Both lists change in a single transition. Returns False if no school has
        that id.
        """
        if self.school_by_id(school_id) is None:
            return False

        schools = tuple(s for s in self._schools if s.id != school_id)
        outreach = tuple(o for o in self._outreach if o.school_id != school_id)
        removed = len(self._outreach) - len(outreach)

        self._commit(schools=schools, outreach=outreach)
        _log_debug(f"Removed school {school_id} and {removed} outreach entries")
        return True

    def log_outreach(self, school_id: int, message: str) -> Optional[OutreachEntry]:
        """
        Record outreach to an existing school, dated today.

        Returns None without changing anything when the school does not exist or
        the message is blank.
        """
        school = self.school_by_id(school_id)
        if school is None or not message.strip():
            return None
        entry = OutreachEntry(
            id=self._ids.next_id(),
            school_id=school.id,
            date=self._today(),
            message=message,
        )
        self._commit(outreach=self._outreach + (entry,))
        return entry

    # =========================================================================
    # ASSISTANT
    # =========================================================================

    def send_to_bot(self, text: str) -> Optional[Tuple[ChatMessage, ChatMessage]]:
        """
        Ask the assistant a question and record the exchange.

        Appends the user's message (original casing) followed by the reply, the
        reply carrying the larger id. Blank input is ignored (returns None).

        Returns:
            (user_message, bot_message)
        """
        if not text.strip():
            return None
        user_message = ChatMessage(id=self._ids.next_id(), sender=Sender.USER, text=text)
        reply = respond(self._bot_name, text, rule_set=self._rule_set)
        bot_message = ChatMessage(id=self._ids.next_id(), sender=Sender.BOT, text=reply)
        self._commit(chat=self._chat + (user_message, bot_message))
        return user_message, bot_message

    # =========================================================================
    # SETTINGS, MEDIA, AND PLAYBOOK
    # =========================================================================

    def set_brand_name(self, brand_name: str) -> None:
        self._commit(brand_name=brand_name)

    def set_bot_name(self, bot_name: str) -> None:
        self._commit(bot_name=bot_name)

    def set_reel_plan(self, reel_plan: str) -> None:
        self._commit(reel_plan=reel_plan)

    def toggle_playbook_step(self, index: int) -> bool:
        """Flip one checklist step. Out-of-range indexes are ignored (returns False)."""
        if not 0 <= index < len(self._playbook):
            return False
        playbook = tuple(not done if i == index else done for i, done in enumerate(self._playbook))
        self._commit(playbook=playbook)
        return True

