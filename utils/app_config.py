"""Pre-connection bootstrap configuration. Zero imports from the rest of the app.

Holds what must be known before the backend client exists: the Supabase
endpoint and key, the deployment id used for the anonymous identity, and the
log level and optional log file. Config lives in ~/.service_center/config.json; the SUPABASE_URL,
SUPABASE_KEY and SERVICE_CENTER_APP_ID environment variables take precedence.
"""
import json
import os
from dataclasses import dataclass
from pathlib import Path

CONFIG_DIR = Path.home() / ".service_center"
CONFIG_FILE = CONFIG_DIR / "config.json"

_ENV_KEYS = {
    "supabase_url": "SUPABASE_URL",
    "supabase_key": "SUPABASE_KEY",
    "app_id": "SERVICE_CENTER_APP_ID",
}


@dataclass(frozen=True)
class BackendSettings:
    url: str = ""
    key: str = ""
    app_id: str = ""
    log_level: str = "INFO"
    log_file: str = ""

    @property
    def is_complete(self) -> bool:
        return bool(self.url and self.key)


def load_config(config_file: Path = CONFIG_FILE) -> dict:
    """Returns {} on missing or corrupt file. Never raises."""
    try:
        with open(config_file, "r", encoding="utf-8") as f:
            data = json.load(f)
    except Exception:
        return {}
    return data if isinstance(data, dict) else {}



def load_settings(config_file: Path = CONFIG_FILE, environ=None) -> BackendSettings:
    """Merge the config file with environment overrides."""
    environ = os.environ if environ is None else environ
    config = load_config(config_file)
    values = {}
    for key, env_name in _ENV_KEYS.items():
        values[key] = str(environ.get(env_name) or config.get(key) or "").strip()
    return BackendSettings(
        url=values["supabase_url"],
        key=values["supabase_key"],
        app_id=values["app_id"],
        log_level=str(config.get("log_level") or "INFO"),
        log_file=str(config.get("log_file") or ""),
    )
