"""
Rule-based response engine for the recruiting assistant.

Replies come from an ordered table of keyword rules loaded from
response_rules.yaml. The input is lower-cased for matching and each rule fires
when any of its keywords is a substring of it. The first matching rule wins;
when none match, the fallback reply is returned.

Matching is plain substring containment, so short keywords also fire inside
longer words ("hi" matches "this" and "highlight").

Usage:
    from redzone.contexts.assistant import respond

    respond("Recruiting Bot", "Hello there")
    # "Hello! I'm Recruiting Bot. How can I assist with your recruiting journey today?"
"""

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Optional, Tuple

from dotenv import load_dotenv
from omegaconf import OmegaConf

load_dotenv()
RESPONSE_RULES_PATH = Path(
    os.getenv("RESPONSE_RULES_PATH", Path(__file__).resolve().parent / "response_rules.yaml")
)

BOT_NAME_PLACEHOLDER = "{bot_name}"


@dataclass(frozen=True)
class ResponseRule:
    """A keyword-containment predicate paired with its reply template."""

    name: str
    keywords: Tuple[str, ...]
    reply: str

    def matches(self, lowered_text: str) -> bool:
        return any(keyword in lowered_text for keyword in self.keywords)

    def render(self, bot_name: str) -> str:
        return self.reply.replace(BOT_NAME_PLACEHOLDER, bot_name)


@dataclass(frozen=True)
class ResponseRuleSet:
    """Ordered rules plus the reply used when no rule matches."""

    rules: Tuple[ResponseRule, ...]
    fallback: str

    def match(self, text: str) -> Optional[ResponseRule]:
        """Return the first rule matching text, or None."""
        lowered = text.lower()
        for rule in self.rules:
            if rule.matches(lowered):
                return rule
        return None

    def respond(self, bot_name: str, text: str) -> str:
        rule = self.match(text)
        if rule is None:
            return self.fallback
        return rule.render(bot_name)


@lru_cache(maxsize=None)
def load_rule_set(config_path: Path = None) -> ResponseRuleSet:
    """
    Load the rule table from YAML.

    Args:
        config_path: Optional path to rules file (defaults to RESPONSE_RULES_PATH env variable)

    Returns:
        ResponseRuleSet with rules in file order

    Raises:
        ValueError: If a rule has no keywords or the fallback is missing
    """
    if config_path is None:
        config_path = RESPONSE_RULES_PATH

    config = OmegaConf.to_container(OmegaConf.load(config_path), resolve=True)

    rules = []
    for entry in config.get("rules", []):
        keywords = tuple(str(k).lower() for k in entry.get("keywords", []))
        if not keywords:
            raise ValueError(f"Response rule '{entry.get('name')}' has no keywords")
        rules.append(ResponseRule(name=entry["name"], keywords=keywords, reply=entry["reply"]))

    fallback = config.get("fallback")
    if not fallback:
        raise ValueError(f"No fallback reply defined in {config_path}")

    return ResponseRuleSet(rules=tuple(rules), fallback=fallback)


def respond(bot_name: str, text: str, rule_set: ResponseRuleSet = None) -> str:
    """
    Produce the assistant's reply to one user message.

    Pure function: the caller is responsible for recording the exchange.

    Args:
        bot_name: Name the assistant introduces itself with
        text: User's message (original casing)
        rule_set: Rules to evaluate (defaults to the packaged rule table)

    Returns:
        Reply text
    """
    if rule_set is None:
        rule_set = load_rule_set()
    return rule_set.respond(bot_name, text)
