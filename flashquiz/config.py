from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path

CONFIG_PATH = Path(__file__).resolve().parent.parent / "config.json"

DEFAULTS = {
    "host": "127.0.0.1",
    "port": 8765,
    "log_level": "INFO",
    "term_files": [],
    "max_sessions": 100,
}


@dataclass
class Settings:
    host: str = DEFAULTS["host"]
    port: int = DEFAULTS["port"]
    log_level: str = DEFAULTS["log_level"]
    term_files: list[str] = field(default_factory=lambda: list(DEFAULTS["term_files"]))
    max_sessions: int = DEFAULTS["max_sessions"]

    @property
    def project_root(self) -> Path:
        return Path(__file__).resolve().parent.parent

    @property
    def data_dir(self) -> Path:
        return self.project_root / "data"

    def resolved_term_files(self) -> list[Path]:
        if self.term_files:
            root = self.project_root
            return [root / f for f in self.term_files]
        return sorted(self.data_dir.glob("*.md"))

    def to_dict(self) -> dict:
        return {
            "host": self.host,
            "port": self.port,
            "log_level": self.log_level,
            "term_files": self.term_files,
            "max_sessions": self.max_sessions,
        }


LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def validate_setting(name: str, value) -> None:
    """Raise ValueError if *value* is not acceptable for setting *name*."""
    if name in ("port", "max_sessions"):
        # bool is an int subclass; reject it explicitly
        if isinstance(value, bool) or not isinstance(value, int) or value < 1:
            raise ValueError(f"{name} must be a positive integer")
    elif name == "host":
        if not isinstance(value, str) or not value.strip():
            raise ValueError("host must be a non-empty string")
    elif name == "log_level":
        if not isinstance(value, str) or value.upper() not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(LOG_LEVELS)}")
    elif name == "term_files":
        if not isinstance(value, list) or not all(isinstance(f, str) for f in value):
            raise ValueError("term_files must be a list of strings")


def load_settings() -> Settings:
    if CONFIG_PATH.exists():
        raw = json.loads(CONFIG_PATH.read_text())
        known = {f.name for f in Settings.__dataclass_fields__.values()}
        filtered = {k: v for k, v in raw.items() if k in known}
        return Settings(**filtered)
    return Settings()


def save_settings(settings: Settings) -> None:
    CONFIG_PATH.write_text(json.dumps(settings.to_dict(), indent=4) + "\n")
