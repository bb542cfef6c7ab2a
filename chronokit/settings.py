"""Settings with JSON persistence.

Settings are stored at:
    ~/.config/chronokit/settings.json

Usage::

    settings = load_settings()
    settings.tick_interval_ms = 50
    save_settings(settings)
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, asdict, fields
from pathlib import Path

logger = logging.getLogger(__name__)

CONFIG_DIR = Path.home() / ".config" / "chronokit"
SETTINGS_PATH = CONFIG_DIR / "settings.json"


@dataclass
class Settings:
    """All user-configurable preferences."""

    # ── countdown ─────────────────────────────────────────────────────
    tick_interval_ms: int = 100
    progress_buffer: int = 1               # updates held before dropping

    # ── logging ───────────────────────────────────────────────────────
    log_level: str = "INFO"

    # ── demo ──────────────────────────────────────────────────────────
    demo_countdown_seconds: float = 3.0


def load_settings() -> Settings:
    """Load settings from disk, falling back to defaults."""
    if not SETTINGS_PATH.exists():
        return Settings()
    try:
        data = json.loads(SETTINGS_PATH.read_text(encoding="utf-8"))
        # Only use keys that exist in the dataclass
        valid_keys = {f.name for f in fields(Settings)}
        filtered = {k: v for k, v in data.items() if k in valid_keys}
        return Settings(**filtered)
    except (OSError, ValueError, TypeError, AttributeError) as exc:
        logger.warning("ignoring unreadable settings at %s: %s", SETTINGS_PATH, exc)
    return Settings()


def save_settings(settings: Settings) -> None:
    """Write settings to disk as JSON."""
    CONFIG_DIR.mkdir(parents=True, exist_ok=True)
    SETTINGS_PATH.write_text(
        json.dumps(asdict(settings), indent=2) + "\n",
        encoding="utf-8",
    )
