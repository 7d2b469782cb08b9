"""Per-language grammar tables: articles, gender colors and verb form labels."""

from __future__ import annotations

from typing import Dict, Optional

LANGUAGES = ("de", "fr", "es", "no", "en")

GENDERS = ("masculine", "feminine", "neuter")

_DEFINITE_ARTICLES: Dict[str, Dict[str, str]] = {
    "de": {"masculine": "der", "feminine": "die", "neuter": "das"},
    "fr": {"masculine": "le", "feminine": "la"},
    "es": {"masculine": "el", "feminine": "la"},
    "no": {"masculine": "en", "feminine": "ei", "neuter": "et"},
}

_LANGUAGE_NAMES = {
    "de": ("German", "Deutsch"),
    "fr": ("French", "Français"),
    "es": ("Spanish", "Español"),
    "no": ("Norwegian", "Norsk"),
    "en": ("English", "English"),
}

_SPEECH_LOCALES = {
    "de": "de_DE",
    "fr": "fr_FR",
    "es": "es_ES",
    "no": "nb_NO",
    "en": "en_US",
}

# Pronoun shown (not typed) in front of the drilled verb forms.
_VERB_PRONOUNS = {
    "de": "du",
    "fr": "tu",
    "es": "tú",
}

_VERB_FORM_LABELS: Dict[str, Dict[str, str]] = {
    "de": {
        "infinitive": "Infinitiv",
        "conjugation": "Präsens (du)",
        "conjugation2": "Präteritum (du)",
        "conjugation3": "Perfekt (du)",
    },
    "fr": {
        "infinitive": "Infinitif",
        "conjugation": "Présent (tu)",
        "conjugation2": "Imparfait (tu)",
        "conjugation3": "Futur simple (tu)",
    },
    "es": {
        "infinitive": "Infinitivo",
        "conjugation": "Presente (tú)",
        "conjugation2": "Pretérito indefinido (tú)",
        "conjugation3": "Futuro simple (tú)",
    },
    "no": {
        "infinitive": "Infinitiv",
        "conjugation": "Presens",
        "conjugation2": "Preteritum",
        "conjugation3": "Perfektum",
    },
    "en": {
        "infinitive": "Infinitive",
        "conjugation": "Simple past",
        "conjugation2": "Past participle",
        "conjugation3": "Present participle",
    },
}


def _check_language(language: str) -> None:
    if language not in LANGUAGES:
        raise ValueError(f"Unsupported language: {language!r}")


def get_article(language: str, gender: Optional[str]) -> str:
    """Definite article for *gender*; English always uses "the"."""
    _check_language(language)
    if language == "en":
        return "the"
    return _DEFINITE_ARTICLES[language].get(gender or "", "")


def has_gender(language: str) -> bool:
    """Return True if nouns in *language* are drilled with their article."""
    _check_language(language)
    return language in _DEFINITE_ARTICLES


def gender_color_class(gender: Optional[str]) -> Optional[str]:
    """Color tag for a grammatical gender, or None for unknown genders."""
    if gender in GENDERS:
        return gender
    return None


def language_name(language: str) -> str:
    _check_language(language)
    return _LANGUAGE_NAMES[language][0]


def native_language_name(language: str) -> str:
    _check_language(language)
    return _LANGUAGE_NAMES[language][1]


def language_label(language: str) -> str:
    """Display name with the native name, e.g. "German (Deutsch)"."""
    name = language_name(language)
    native = native_language_name(language)
    return name if name == native else f"{name} ({native})"


def speech_locale(language: str) -> str:
    _check_language(language)
    return _SPEECH_LOCALES[language]


def verb_pronoun(language: str) -> str:
    """Pronoun displayed before conjugated forms; empty when the language has none."""
    _check_language(language)
    return _VERB_PRONOUNS.get(language, "")


def verb_form_label(language: str, form: str) -> str:
    _check_language(language)
    return _VERB_FORM_LABELS[language].get(form, form)
