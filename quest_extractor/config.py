"""
Configuration for the quest extractor.

Loaded from (in order of precedence):
1. Command-line flags (applied by the CLI on top of load_config())
2. Environment variables (QUEST_EXTRACTOR_*)
3. Default values

Environment variables:
    QUEST_EXTRACTOR_BASE_URL - Raw URL of the Quest Helper quests directory
    QUEST_EXTRACTOR_APPROVED_PATH - JSON file of quest name -> approved flag
    QUEST_EXTRACTOR_OUTPUT_DIR - Directory for the per-quest JSON files
    QUEST_EXTRACTOR_INDEX_PATH - Also write a quest index JSON here (off when empty)
    QUEST_EXTRACTOR_SOURCE_DIR - Read Java files from this directory instead of HTTP
    QUEST_EXTRACTOR_TIMEOUT - Per-request timeout in seconds
    QUEST_EXTRACTOR_RETRIES - Attempts per quest file
    QUEST_EXTRACTOR_WORKERS - Quests processed concurrently
"""

import os
from dataclasses import dataclass

from . import __version__

QUEST_HELPER_RAW_BASE = (
    "https://raw.githubusercontent.com/Zoinkwiz/quest-helper/master"
    "/src/main/java/com/questhelper/helpers/quests"
)
DEFAULT_APPROVED_PATH = os.path.join("scripts", "approved-quests.json")
DEFAULT_OUTPUT_DIR = os.path.join("public", "data", "quests")
USER_AGENT = f"quest-extractor/{__version__} (quest step extraction)"

ENV_PREFIX = "QUEST_EXTRACTOR_"


@dataclass
class ExtractorConfig:
    base_url: str = QUEST_HELPER_RAW_BASE
    approved_path: str = DEFAULT_APPROVED_PATH
    output_dir: str = DEFAULT_OUTPUT_DIR
    index_path: str = ""
    source_dir: str = ""
    user_agent: str = USER_AGENT
    timeout: float = 30.0
    retries: int = 3
    workers: int = 1


def _get_env_int(key: str, default: int) -> int:
    """Get integer from environment variable."""
    value = os.environ.get(key, "")
    try:
        return int(value)
    except ValueError:
        return default


def _get_env_float(key: str, default: float) -> float:
    value = os.environ.get(key, "")
    try:
        return float(value)
    except ValueError:
        return default


def load_config() -> ExtractorConfig:
    """Defaults overridden by any QUEST_EXTRACTOR_* environment variables."""
    config = ExtractorConfig()
    config.base_url = os.environ.get(ENV_PREFIX + "BASE_URL", config.base_url)
    config.approved_path = os.environ.get(ENV_PREFIX + "APPROVED_PATH", config.approved_path)
    config.output_dir = os.environ.get(ENV_PREFIX + "OUTPUT_DIR", config.output_dir)
    config.index_path = os.environ.get(ENV_PREFIX + "INDEX_PATH", config.index_path)
    config.source_dir = os.environ.get(ENV_PREFIX + "SOURCE_DIR", config.source_dir)
    config.timeout = _get_env_float(ENV_PREFIX + "TIMEOUT", config.timeout)
    config.retries = max(1, _get_env_int(ENV_PREFIX + "RETRIES", config.retries))
    config.workers = max(1, _get_env_int(ENV_PREFIX + "WORKERS", config.workers))
    return config
