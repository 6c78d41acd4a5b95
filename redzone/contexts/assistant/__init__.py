"""
Assistant Context

Responsibilities:
- Maps free-text questions to scripted recruiting guidance
- Evaluates an ordered keyword rule table, first match wins

Owns: Response rules and reply text
Never: Stores the conversation (the tracker context owns the chat log)
"""

from redzone.contexts.assistant.response_rules import (
    ResponseRule,
    ResponseRuleSet,
    load_rule_set,
    respond,
)

__all__ = ["ResponseRule", "ResponseRuleSet", "load_rule_set", "respond"]
