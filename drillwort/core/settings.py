from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass, replace
from pathlib import Path
from typing import Optional

from drillwort.core.grammar import LANGUAGES

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AppSettings:
    base_language: str = "en"
    target_language: str = "de"
    full_conjugation_mode: bool = False
    audio_enabled: bool = True


class SettingsStore:
    """User settings persisted as JSON (default: ~/.drillwort/settings.json)."""

    def __init__(self, file_path: Optional[Path] = None) -> None:
        self._file_path = file_path or Path.home() / ".drillwort" / "settings.json"
        self._file_path.parent.mkdir(parents=True, exist_ok=True)
        self._settings = self._load()

    @property
    def value(self) -> AppSettings:
        return self._settings

    def set_base_language(self, language: str) -> None:
        self._update(base_language=_checked_language(language))

    def set_target_language(self, language: str) -> None:
        self._update(target_language=_checked_language(language))

    def toggle_full_conjugation_mode(self) -> None:
        self._update(full_conjugation_mode=not self._settings.full_conjugation_mode)

    def toggle_audio(self) -> None:
        self._update(audio_enabled=not self._settings.audio_enabled)

    def reset(self) -> None:
        self._settings = AppSettings()
        self._save()

    def _update(self, **changes) -> None:
        self._settings = replace(self._settings, **changes)
        self._save()

    def _load(self) -> AppSettings:
        defaults = AppSettings()
        if not self._file_path.exists():
            return defaults
        try:
            payload = json.loads(self._file_path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, OSError) as e:
            logger.warning("Could not load settings from %s: %s", self._file_path, e)
            return defaults
        if not isinstance(payload, dict):
            return defaults

        base = payload.get("base_language", defaults.base_language)
        target = payload.get("target_language", defaults.target_language)
        return AppSettings(
            base_language=base if base in LANGUAGES else defaults.base_language,
            target_language=target if target in LANGUAGES else defaults.target_language,
            full_conjugation_mode=bool(payload.get("full_conjugation_mode", defaults.full_conjugation_mode)),
            audio_enabled=bool(payload.get("audio_enabled", defaults.audio_enabled)),
        )

    def _save(self) -> None:
        self._file_path.parent.mkdir(parents=True, exist_ok=True)
        try:
            self._file_path.write_text(json.dumps(asdict(self._settings), indent=2), encoding="utf-8")
        except OSError as e:
            logger.warning("Could not save settings to %s: %s", self._file_path, e)


def _checked_language(language: str) -> str:
    if language not in LANGUAGES:
        raise ValueError(f"Unsupported language: {language!r}")
    return language
