# tests/test_app_config.py
from __future__ import annotations

import json

from utils.app_config import load_config, load_settings


def test_missing_file_gives_empty_settings(tmp_path):
    settings = load_settings(tmp_path / "nope.json", environ={})
    assert settings.url == ""
    assert not settings.is_complete
    assert settings.log_level == "INFO"


def test_corrupt_file_is_ignored(tmp_path):
    path = tmp_path / "config.json"
    path.write_text("{not json", encoding="utf-8")
    assert load_config(path) == {}


def test_file_values_are_loaded(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"supabase_url": "https://x.supabase.co", "supabase_key": "k",
                                "app_id": "shop", "log_level": "DEBUG",
                                "log_file": "app.log"}), encoding="utf-8")

    settings = load_settings(path, environ={})

    assert settings.is_complete
    assert settings.app_id == "shop"
    assert settings.log_level == "DEBUG"
    assert settings.log_file == "app.log"


def test_environment_overrides_file(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"supabase_url": "https://file", "supabase_key": "fk"}),
                    encoding="utf-8")

    settings = load_settings(path, environ={
        "SUPABASE_URL": "https://env", "SERVICE_CENTER_APP_ID": " bay-2 ",
    })

    assert settings.url == "https://env"
    assert settings.key == "fk"
    assert settings.app_id == "bay-2"
