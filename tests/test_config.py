"""Tests for configuration loading and saving."""
from __future__ import annotations

import json
from unittest.mock import patch

import pytest

from flashquiz.config import DEFAULTS, Settings, load_settings, save_settings, validate_setting


class TestSettings:
    def test_defaults(self):
        s = Settings()
        assert s.host == "127.0.0.1"
        assert s.port == 8765
        assert s.log_level == "INFO"
        assert s.max_sessions == DEFAULTS["max_sessions"]

    def test_to_dict(self):
        d = Settings().to_dict()
        assert isinstance(d["term_files"], list)
        assert len(d) == 5  # all fields present

    def test_to_dict_roundtrip(self):
        s2 = Settings(**Settings(port=9000, log_level="DEBUG").to_dict())
        assert s2.port == 9000
        assert s2.log_level == "DEBUG"

    def test_term_files_not_shared(self):
        a, b = Settings(), Settings()
        a.term_files.append("x.md")
        assert b.term_files == []

    def test_resolved_term_files(self, tmp_path):
        s = Settings(term_files=["data/spanish.md", str(tmp_path / "abs.md")])
        resolved = s.resolved_term_files()
        assert resolved[0] == s.project_root / "data" / "spanish.md"
        assert resolved[1] == tmp_path / "abs.md"


class TestLoadSaveSettings:
    def test_load_from_file(self, tmp_path):
        config_path = tmp_path / "config.json"
        config_path.write_text(json.dumps({"port": 9001, "log_level": "WARNING"}))

        with patch("flashquiz.config.CONFIG_PATH", config_path):
            s = load_settings()
        assert s.port == 9001
        assert s.log_level == "WARNING"
        assert s.host == "127.0.0.1"

    def test_load_missing_file(self, tmp_path):
        with patch("flashquiz.config.CONFIG_PATH", tmp_path / "nonexistent.json"):
            s = load_settings()
        assert s.port == 8765

    def test_save_creates_file(self, tmp_path):
        config_path = tmp_path / "config.json"
        with patch("flashquiz.config.CONFIG_PATH", config_path):
            save_settings(Settings(max_sessions=5))

        data = json.loads(config_path.read_text())
        assert data["max_sessions"] == 5

    def test_unknown_keys_ignored(self, tmp_path):
        config_path = tmp_path / "config.json"
        config_path.write_text(json.dumps({"port": 8000, "unknown_key": "value"}))

        with patch("flashquiz.config.CONFIG_PATH", config_path):
            s = load_settings()
        assert s.port == 8000
        assert not hasattr(s, "unknown_key")


class TestValidateSetting:
    @pytest.mark.parametrize("name,value", [
        ("port", 8080),
        ("max_sessions", 1),
        ("host", "0.0.0.0"),
        ("log_level", "debug"),
        ("term_files", []),
        ("term_files", ["data/a.md", "/abs/b.md"]),
    ])
    def test_accepts(self, name, value):
        validate_setting(name, value)

    @pytest.mark.parametrize("name,value", [
        ("port", "8080"),
        ("port", 0),
        ("max_sessions", -5),
        ("max_sessions", 2.5),
        ("max_sessions", False),
        ("host", ""),
        ("log_level", "verbose"),
        ("log_level", 10),
        ("term_files", "a.md"),
        ("term_files", [None]),
    ])
    def test_rejects(self, name, value):
        with pytest.raises(ValueError):
            validate_setting(name, value)
