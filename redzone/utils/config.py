"""
Configuration loading for REDZONE.

Fixed tables (setting defaults, storage keys, playbook steps, resources) live in
redzone/defaults.yaml. Runtime locations come from the environment (.env is
loaded on import):

    REDZONE_DEFAULTS_PATH   Alternate defaults file
    REDZONE_STORE_BACKEND   "json" (default), "sqlite", or "memory"
    REDZONE_STORE_PATH      Store file (default: outs/redzone_store.json)
    LOGS_PATH               Log directory for CLI sessions (unset: no file log)
"""

import copy
import os
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Optional

from dotenv import load_dotenv
from omegaconf import OmegaConf

load_dotenv()
DEFAULTS_PATH = Path(
    os.getenv("REDZONE_DEFAULTS_PATH", Path(__file__).resolve().parent.parent / "defaults.yaml")
)
STORE_BACKEND = os.getenv("REDZONE_STORE_BACKEND", "json")
STORE_PATH = Path(os.getenv("REDZONE_STORE_PATH", "outs/redzone_store.json"))
LOGS_PATH: Optional[str] = os.getenv("LOGS_PATH")


@lru_cache(maxsize=None)
def _load(config_path: Path) -> Dict[str, Any]:
    return OmegaConf.to_container(OmegaConf.load(config_path), resolve=True)


def load_defaults(config_path: Path = None) -> Dict[str, Any]:
    """
    Load the defaults file as a plain dict.

    Args:
        config_path: Optional path to defaults file (defaults to DEFAULTS_PATH)

    Returns:
        Dict with keys: settings, storage_keys, playbook_steps, resources, reel_guidance
    """
    if config_path is None:
        config_path = DEFAULTS_PATH
    return copy.deepcopy(_load(Path(config_path)))
