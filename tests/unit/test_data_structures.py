"""
Unit tests for entity schemas and their validating deserialization.
"""

import pytest

from redzone.contexts.tracker import (
    Achievement,
    ChatMessage,
    Division,
    InvalidEntityError,
    OutreachEntry,
    Profile,
    School,
    Sender,
)


class TestProfile:
    """Tests for Profile serialization."""

    @pytest.mark.unit
    def test_serializes_with_camelcase_test_scores(self):
        profile = Profile(name="Jordan", test_scores="ACT 29", achievements=(Achievement(7, "MVP"),))
        data = profile.to_dict()

        assert data["testScores"] == "ACT 29"
        assert "test_scores" not in data
        assert data["achievements"] == [{"id": 7, "text": "MVP"}]

    @pytest.mark.unit
    def test_from_dict_restores_equal_profile(self, full_profile_fields):
        profile = Profile(**full_profile_fields, achievements=(Achievement(1, "All-State"),))
        assert Profile.from_dict(profile.to_dict()) == profile

    @pytest.mark.unit
    def test_missing_fields_default_to_empty(self):
        profile = Profile.from_dict({"name": "Jordan"})

        assert profile.name == "Jordan"
        assert profile.gpa == ""
        assert profile.achievements == ()

    @pytest.mark.unit
    def test_unknown_keys_are_ignored(self):
        profile = Profile.from_dict({"name": "Jordan", "favoriteColor": "red"})
        assert profile == Profile(name="Jordan")

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "data",
        [
            [],
            "profile",
            None,
            {"gpa": 3.6},
            {"achievements": "All-State"},
            {"achievements": [{"id": "1", "text": "All-State"}]},
            {"achievements": [{"id": 1, "text": "   "}]},
            {"achievements": [{"id": 1, "text": "a"}, {"id": 1, "text": "b"}]},
        ],
    )
    def test_rejects_wrong_shapes(self, data):
        with pytest.raises(InvalidEntityError):
            Profile.from_dict(data)

    @pytest.mark.unit
    def test_error_names_entity_and_field(self):
        with pytest.raises(InvalidEntityError) as exc_info:
            Profile.from_dict({"email": ["a@b.c"]})

        assert exc_info.value.entity == "Profile"
        assert exc_info.value.field_name == "email"
        assert str(exc_info.value).startswith("Profile.email:")


class TestSchool:
    """Tests for School serialization."""

    @pytest.mark.unit
    def test_round_trip(self):
        school = School(id=5, name="State U", division=Division.NAIA, contact="c@s.edu", fit_score=88)
        data = school.to_dict()

        assert data == {
            "id": 5,
            "name": "State U",
            "division": "NAIA",
            "contact": "c@s.edu",
            "fitScore": 88,
        }
        assert School.from_dict(data) == school

    @pytest.mark.unit
    def test_rejects_unknown_division(self):
        data = {"id": 5, "name": "State U", "division": "D1", "contact": "", "fitScore": 50}
        with pytest.raises(InvalidEntityError, match="unknown division"):
            School.from_dict(data)

    @pytest.mark.unit
    @pytest.mark.parametrize("fit_score", [-1, 101, 50.5, True, "50"])
    def test_rejects_bad_fit_score(self, fit_score):
        data = {"id": 5, "name": "State U", "division": "NAIA", "contact": "", "fitScore": fit_score}
        with pytest.raises(InvalidEntityError):
            School.from_dict(data)

    @pytest.mark.unit
    def test_rejects_blank_name(self):
        data = {"id": 5, "name": " ", "division": "NAIA", "contact": "", "fitScore": 50}
        with pytest.raises(InvalidEntityError):
            School.from_dict(data)


class TestDivision:
    """Tests for Division.parse."""

    @pytest.mark.unit
    def test_parses_display_values_and_members(self):
        assert Division.parse("NCAA DII") is Division.NCAA_DII
        assert Division.parse("Junior College") is Division.JUNIOR_COLLEGE
        assert Division.parse(Division.NAIA) is Division.NAIA

    @pytest.mark.unit
    def test_unknown_value_lists_choices(self):
        with pytest.raises(InvalidEntityError) as exc_info:
            Division.parse("ncaa di")
        assert "NCAA DI, NCAA DII, NCAA DIII, NAIA, Junior College" in str(exc_info.value)


class TestOutreachAndChat:
    """Tests for OutreachEntry and ChatMessage serialization."""

    @pytest.mark.unit
    def test_outreach_uses_school_id_key(self):
        entry = OutreachEntry(id=9, school_id=5, date="2025-03-14", message="Intro email")
        assert entry.to_dict()["schoolId"] == 5
        assert OutreachEntry.from_dict(entry.to_dict()) == entry

    @pytest.mark.unit
    def test_outreach_rejects_blank_message(self):
        with pytest.raises(InvalidEntityError):
            OutreachEntry.from_dict({"id": 9, "schoolId": 5, "date": "2025-03-14", "message": ""})

    @pytest.mark.unit
    def test_chat_message_uses_from_key(self):
        message = ChatMessage(id=3, sender=Sender.BOT, text="Hello!")
        assert message.to_dict() == {"id": 3, "from": "bot", "text": "Hello!"}
        assert ChatMessage.from_dict(message.to_dict()) == message

    @pytest.mark.unit
    def test_chat_message_rejects_unknown_sender(self):
        with pytest.raises(InvalidEntityError, match="from"):
            ChatMessage.from_dict({"id": 3, "from": "coach", "text": "Hi"})
