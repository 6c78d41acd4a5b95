"""
Unit tests for the rule-based response engine.
"""

import pytest

from redzone.contexts.assistant import ResponseRule, ResponseRuleSet, load_rule_set, respond

FALLBACK_START = "I'm sorry, I don't have an answer for that just yet."


@pytest.mark.unit
def test_packaged_rules_are_ordered():
    """Rules load in evaluation order."""
    rule_set = load_rule_set()
    names = [rule.name for rule in rule_set.rules]
    assert names == ["greeting", "profile", "school_list", "outreach", "highlight_reel"]


@pytest.mark.unit
def test_greeting_names_the_bot_regardless_of_case():
    assert respond("Bot", "Hello there") == (
        "Hello! I'm Bot. How can I assist with your recruiting journey today?"
    )
    assert respond("Bot", "HELLO THERE") == respond("Bot", "Hello there")


@pytest.mark.unit
def test_profile_rule():
    reply = respond("Bot", "How complete is my profile?")
    assert reply.startswith("Make sure your profile includes your position")


@pytest.mark.unit
def test_school_list_rule_matches_uppercase_input():
    reply = respond("Bot", "tell me about my SCHOOL list")
    assert reply.startswith("When building your target school list")
    assert not reply.startswith(FALLBACK_START)


@pytest.mark.unit
def test_outreach_rule():
    reply = respond("Bot", "Any outreach tips?")
    assert reply.startswith("Consistent outreach is key")


@pytest.mark.unit
def test_reel_rule():
    reply = respond("Bot", "What goes in my reel?")
    assert reply == (
        "Your highlight reel should showcase 20\u201325 of your best plays in the first 90 "
        "seconds. Use hudl or YouTube for hosting."
    )


@pytest.mark.unit
def test_unmatched_input_returns_fallback():
    assert respond("Bot", "xyz").startswith(FALLBACK_START)
    assert "highlight reel" in respond("Bot", "xyz")


@pytest.mark.unit
def test_first_match_wins():
    """Input matching several rules gets the earliest rule's reply."""
    reply = respond("Bot", "update my profile and school list")
    assert reply.startswith("Make sure your profile includes")


@pytest.mark.unit
def test_keywords_match_inside_words():
    """'hi' is a substring of 'highlight', so the greeting rule fires first."""
    assert respond("Bot", "highlight").startswith("Hello! I'm Bot.")
    assert respond("Bot", "is this right").startswith("Hello! I'm Bot.")


@pytest.mark.unit
def test_bot_name_with_braces_is_inserted_verbatim():
    assert "I'm {Coach}." in respond("{Coach}", "hello")


@pytest.mark.unit
def test_custom_rule_set():
    rule_set = ResponseRuleSet(
        rules=(
            ResponseRule(name="camps", keywords=("camp",), reply="Camps run in June."),
            ResponseRule(name="greeting", keywords=("hey",), reply="Hey, {bot_name} here."),
        ),
        fallback="No idea.",
    )

    assert respond("Scout", "when are CAMPS?", rule_set=rule_set) == "Camps run in June."
    assert respond("Scout", "hey", rule_set=rule_set) == "Hey, Scout here."
    assert respond("Scout", "hello", rule_set=rule_set) == "No idea."


@pytest.mark.unit
def test_load_rule_set_from_file(tmp_path):
    rules_file = tmp_path / "rules.yaml"
    rules_file.write_text(
        "rules:\n"
        "  - name: eligibility\n"
        "    keywords: [NCAA, Eligib]\n"
        "    reply: Register with the eligibility center.\n"
        "fallback: Ask me about eligibility.\n",
        encoding="utf-8",
    )

    rule_set = load_rule_set(rules_file)

    # Keywords are lower-cased on load
    assert rule_set.rules[0].keywords == ("ncaa", "eligib")
    assert rule_set.respond("Bot", "Am I eligible?") == "Register with the eligibility center."
    assert rule_set.respond("Bot", "xyz") == "Ask me about eligibility."


@pytest.mark.unit
def test_rule_without_keywords_is_rejected(tmp_path):
    rules_file = tmp_path / "rules.yaml"
    rules_file.write_text(
        "rules:\n  - name: empty\n    keywords: []\n    reply: never\nfallback: ok\n",
        encoding="utf-8",
    )

    with pytest.raises(ValueError, match="no keywords"):
        load_rule_set(rules_file)


@pytest.mark.unit
def test_missing_fallback_is_rejected(tmp_path):
    rules_file = tmp_path / "rules.yaml"
    rules_file.write_text(
        "rules:\n  - name: greeting\n    keywords: [hello]\n    reply: hi\n",
        encoding="utf-8",
    )

    with pytest.raises(ValueError, match="No fallback"):
        load_rule_set(rules_file)
