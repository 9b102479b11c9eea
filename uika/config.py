import json
import logging
import os
import platform
from pathlib import Path
from typing import Any, Dict

DEFAULT_COUNTDOWNS_FILE = "countdowns.csv"
DEFAULT_POLL_INTERVAL_MS = 50
MIN_POLL_INTERVAL_MS = 10
MAX_POLL_INTERVAL_MS = 1000
DEFAULT_LOG_LEVEL = "WARNING"
LOG_LEVEL_ENV = "UIKA_LOG_LEVEL"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

logger = logging.getLogger(__name__)


def get_config_path() -> Path:
    system = platform.system().lower()
    if system == "darwin":
        base = Path.home() / "Library" / "Application Support"
    elif system == "windows":
        appdata = os.environ.get("APPDATA")
        if appdata:
            base = Path(appdata)
        else:
            base = Path.home() / "AppData" / "Roaming"
    else:
        base = Path(os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config"))
    return base / "uika" / "config.json"


def load_config() -> Dict[str, Any]:
    path = get_config_path()
    try:
        with path.open("r", encoding="utf-8") as f:
            data = json.load(f)
            if isinstance(data, dict):
                return data
    except FileNotFoundError:
        return {}
    except json.JSONDecodeError:
        logger.warning("ignoring unreadable config file %s", path)
        return {}
    return {}


def get_countdowns_path(config: Dict[str, Any]) -> Path:
    raw = config.get("countdowns_file")
    if isinstance(raw, str) and raw.strip():
        return Path(raw).expanduser()
    return Path(DEFAULT_COUNTDOWNS_FILE)


def get_poll_interval_ms(config: Dict[str, Any]) -> int:
    raw = config.get("poll_interval_ms")
    if not isinstance(raw, int) or isinstance(raw, bool):
        return DEFAULT_POLL_INTERVAL_MS
    return max(MIN_POLL_INTERVAL_MS, min(MAX_POLL_INTERVAL_MS, raw))


def get_log_level(config: Dict[str, Any]) -> str:
    raw = os.environ.get(LOG_LEVEL_ENV) or config.get("log_level")
    if isinstance(raw, str) and raw.upper() in LOG_LEVELS:
        return raw.upper()
    return DEFAULT_LOG_LEVEL


def get_log_path(config: Dict[str, Any]) -> Path:
    raw = config.get("log_file")
    if isinstance(raw, str) and raw.strip():
        return Path(raw).expanduser()
    return get_config_path().parent / "uika.log"
