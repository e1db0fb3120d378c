"""UI strings for the entity screens, looked up by dot-notation key.

Strings live in ``translations/{lang}.json``; Spanish (``es``) is the
shipped language. Every call site carries its English text as the
default, so a missing file or key falls back to English.

Key groups in ``es.json``:
  sidebar.*   navigation buttons (clients, agents, drivers)
  fields.*    form labels and table headers (name, email, plate, ...)
  panel.*     search bar and CRUD buttons (search, save, export_json, ...)
  status.*    status bar notices, formatted with ``{id}``/``{count}``/``{path}``
  messages.*  message box titles and texts (errors, confirmations)

Usage:
    TranslationManager.init("es")        # once, in main.py
    label = t("fields.plate", "Licence plate")
    text = t("status.deleted", "Record {id} deleted").format(id=7)
"""

from __future__ import annotations

import json
from pathlib import Path

from lampreas.constants import DEFAULT_LANGUAGE

_TRANSLATIONS_DIR = Path(__file__).parent.parent.parent / "translations"


class TranslationManager:
    """Singleton translation manager with JSON backend."""

    _instance: TranslationManager | None = None

    def __init__(self, lang: str = DEFAULT_LANGUAGE):
        self.lang = lang
        self._strings: dict[str, str] = {}
        self._load(lang)

    def _load(self, lang: str) -> None:
        """Load flat key-value dict from translations/{lang}.json."""
        path = _TRANSLATIONS_DIR / f"{lang}.json"
        if path.exists():
            data = json.loads(path.read_text(encoding="utf-8"))
            self._strings = _flatten(data)
        else:
            self._strings = {}

    def get(self, key: str, default: str = "") -> str:
        """Get translated string by dot-key. Falls back to default (English)."""
        return self._strings.get(key, default)

    @classmethod
    def instance(cls) -> TranslationManager:
        """Get or create the singleton instance."""
        if cls._instance is None:
            cls._instance = cls(DEFAULT_LANGUAGE)
        return cls._instance

    @classmethod
    def init(cls, lang: str = DEFAULT_LANGUAGE) -> TranslationManager:
        """Initialize the singleton with given language."""
        cls._instance = cls(lang)
        return cls._instance

    @classmethod
    def reset(cls) -> None:
        """Reset singleton (for testing)."""
        cls._instance = None


def _flatten(d: dict, prefix: str = "") -> dict[str, str]:
    """Flatten nested dict to dot-notation keys.

    {"sidebar": {"clients": "Clientes"}} -> {"sidebar.clients": "Clientes"}
    """
    result: dict[str, str] = {}
    for k, v in d.items():
        key = f"{prefix}.{k}" if prefix else k
        if isinstance(v, dict):
            result.update(_flatten(v, key))
        else:
            result[key] = str(v)
    return result


def t(key: str, default: str = "") -> str:
    """Global translate function.

    Args:
        key: Dot-notation key (e.g. "sidebar.clients").
        default: Fallback string if key not found (English).

    Returns:
        Translated string or default.
    """
    return TranslationManager.instance().get(key, default)
