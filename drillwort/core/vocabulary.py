from __future__ import annotations

import logging
import unicodedata
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Union

import yaml

from drillwort.core.drill_engine import DisplayMetadata
from drillwort.core.grammar import GENDERS, LANGUAGES, gender_color_class, get_article, has_gender
from drillwort.core.phases import CONJUGATION_PHASES, DrillPhase, WordType

logger = logging.getLogger(__name__)


def _nfc(value: object) -> str:
    return unicodedata.normalize("NFC", str(value).strip()) if value is not None else ""


@dataclass(frozen=True)
class Noun:
    language: str
    singular: str
    plural: str
    gender: Optional[str] = None
    definite: str = ""
    translations: Dict[str, str] = field(default_factory=dict)
    examples: Dict[str, str] = field(default_factory=dict)

    word_type = WordType.NOUN

    @property
    def word_id(self) -> str:
        return f"{self.language}:noun:{self.singular}"

    @property
    def headword(self) -> str:
        return self.singular

    def translation(self, base_language: str) -> str:
        return self.translations.get(base_language, "")

    def example(self, key: str) -> str:
        """Example sentence; *key* is ``"target"`` or a base language code."""
        return self.examples.get(key, "")


@dataclass(frozen=True)
class Verb:
    language: str
    infinitive: str
    forms: Dict[str, str] = field(default_factory=dict)
    translations: Dict[str, str] = field(default_factory=dict)
    examples: Dict[str, str] = field(default_factory=dict)

    word_type = WordType.VERB

    @property
    def word_id(self) -> str:
        return f"{self.language}:verb:{self.infinitive}"

    @property
    def headword(self) -> str:
        return self.infinitive

    def translation(self, base_language: str) -> str:
        return self.translations.get(base_language, "")

    def example(self, key: str) -> str:
        return self.examples.get(key, "")


Word = Union[Noun, Verb]


class VocabularyWordSource:
    """Expected strings and display metadata for nouns and verbs."""

    def expected_input(self, word: Word, phase: DrillPhase, language: str) -> str:
        if isinstance(word, Noun):
            if phase is DrillPhase.ARTICLE:
                return get_article(language, word.gender) if has_gender(language) else ""
            if phase is DrillPhase.SINGULAR:
                return word.singular
            if phase is DrillPhase.PLURAL:
                return word.plural
            if phase is DrillPhase.DEFINITE:
                return word.definite
            return ""
        if phase is DrillPhase.INFINITIVE:
            return word.infinitive
        if phase in CONJUGATION_PHASES:
            return word.forms.get(phase.value, "")
        return ""

    def display_metadata(self, word: Word, phase: DrillPhase) -> DisplayMetadata:
        if isinstance(word, Noun) and phase is DrillPhase.ARTICLE:
            return DisplayMetadata(color_class=gender_color_class(word.gender))
        return DisplayMetadata()


class VocabularyRepository:
    """Loads vocabulary from ``data/vocabulary/<language>.yaml`` files."""

    def __init__(self, base_dir: Optional[Path] = None) -> None:
        self._base_dir = base_dir or Path(__file__).resolve().parent.parent / "data" / "vocabulary"
        self._words = self._load_words()

    def languages(self) -> List[str]:
        return [lang for lang in LANGUAGES if lang in self._words]

    def words(self, language: str) -> List[Word]:
        return list(self._words.get(language, {}).values())

    def get(self, word_id: str) -> Word:
        language = word_id.split(":", 1)[0]
        return self._words[language][word_id]

    def _load_words(self) -> Dict[str, Dict[str, Word]]:
        if not self._base_dir.exists():
            raise FileNotFoundError(f"Vocabulary directory not found: {self._base_dir}")

        words: Dict[str, Dict[str, Word]] = {}
        for path in sorted(self._base_dir.glob("*.yaml")):
            language = path.stem
            if language not in LANGUAGES:
                logger.warning("Skipping vocabulary file for unknown language: %s", path.name)
                continue
            raw = yaml.safe_load(path.read_text(encoding="utf-8"))
            if not raw or not isinstance(raw, dict):
                raise ValueError(f"{path.name}: expected YAML with 'nouns' and/or 'verbs'")
            entries: Dict[str, Word] = {}
            for item in raw.get("nouns") or []:
                self._add(entries, self._parse_noun(path, language, item), path)
            for item in raw.get("verbs") or []:
                self._add(entries, self._parse_verb(path, language, item), path)
            if not entries:
                raise ValueError(f"{path.name}: no nouns or verbs")
            words[language] = entries
            logger.info("Loaded %d words for %s", len(entries), language)

        if not words:
            raise ValueError(f"No vocabulary files (*.yaml) found in {self._base_dir}")
        return words

    @staticmethod
    def _add(entries: Dict[str, Word], word: Word, path: Path) -> None:
        if word.word_id in entries:
            raise ValueError(f"{path.name}: duplicate entry {word.headword!r}")
        entries[word.word_id] = word

    @staticmethod
    def _parse_noun(path: Path, language: str, item: dict) -> Noun:
        if not isinstance(item, dict) or not item.get("singular"):
            raise ValueError(f"{path.name}: noun entry without 'singular': {item!r}")
        gender = item.get("gender")
        if has_gender(language) and gender not in GENDERS:
            raise ValueError(f"{path.name}: noun {item['singular']!r} has invalid gender {gender!r}")
        return Noun(
            language=language,
            singular=_nfc(item["singular"]),
            plural=_nfc(item.get("plural")),
            gender=gender,
            definite=_nfc(item.get("definite")),
            translations=_text_map(item.get("translations")),
            examples=_text_map(item.get("examples")),
        )

    @staticmethod
    def _parse_verb(path: Path, language: str, item: dict) -> Verb:
        if not isinstance(item, dict) or not item.get("infinitive"):
            raise ValueError(f"{path.name}: verb entry without 'infinitive': {item!r}")
        return Verb(
            language=language,
            infinitive=_nfc(item["infinitive"]),
            forms=_text_map(item.get("forms")),
            translations=_text_map(item.get("translations")),
            examples=_text_map(item.get("examples")),
        )


def _text_map(raw: object) -> Dict[str, str]:
    if not isinstance(raw, dict):
        return {}
    return {str(key): _nfc(value) for key, value in raw.items() if value is not None}
