"""
REDZONE - Recruiting tracker for high-school athletes

Keeps an athlete's recruiting state (profile, target schools, outreach log,
highlight-reel notes, assistant chat) in a local key-value store.

Architecture:
- Persistence Context: Key-value storage backends (memory, JSON file, SQLite)
- Tracker Context: Entity schemas, id generation, and the entity store
- Scoring Context: Derived values (fit score, profile completion)
- Assistant Context: Rule-based response engine
"""

__version__ = "0.1.0"
