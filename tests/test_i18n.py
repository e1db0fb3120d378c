"""Tests for internationalization (i18n) system."""

import json
import re
from pathlib import Path

import pytest

from lampreas.core.i18n import TranslationManager, _flatten, t

TRANSLATIONS_DIR = Path(__file__).parent.parent / "translations"
SOURCE_DIR = Path(__file__).parent.parent / "lampreas"
KEY_PATTERN = re.compile(r"\"((?:sidebar|fields|panel|status|messages)\.[a-z_]+)\"")


@pytest.fixture(autouse=True)
def reset_manager():
    """Reset TranslationManager singleton between tests."""
    TranslationManager.reset()
    yield
    TranslationManager.reset()


class TestFlatten:
    def test_flat_dict(self):
        assert _flatten({"a": "1", "b": "2"}) == {"a": "1", "b": "2"}

    def test_nested_dict(self):
        d = {"sidebar": {"clients": "Clientes", "agents": "Comerciales"}}
        assert _flatten(d) == {
            "sidebar.clients": "Clientes",
            "sidebar.agents": "Comerciales",
        }

    def test_non_string_values(self):
        assert _flatten({"num": 42}) == {"num": "42"}


class TestTranslationManager:
    def test_default_is_spanish(self):
        assert TranslationManager.instance().lang == "es"
        assert t("sidebar.drivers", "Drivers") == "Repartidores"

    def test_fallback_to_default(self):
        TranslationManager.init("es")
        assert t("nonexistent.key", "fallback_value") == "fallback_value"

    def test_nonexistent_language(self):
        TranslationManager.init("xx")
        assert t("sidebar.clients", "Clients") == "Clients"

    def test_singleton(self):
        TranslationManager.init("es")
        assert TranslationManager.instance() is TranslationManager.instance()


class TestTranslationFile:
    def test_valid_json(self):
        data = json.loads((TRANSLATIONS_DIR / "es.json").read_text(encoding="utf-8"))
        assert isinstance(data, dict)

    def test_format_placeholders(self):
        TranslationManager.init("es")
        text = t("messages.confirm_delete_text", "Delete record with ID {id}?")
        assert text.format(id=5).endswith("5?")

    def test_every_used_key_is_translated(self):
        TranslationManager.init("es")
        used = set()
        for source in SOURCE_DIR.rglob("*.py"):
            used.update(KEY_PATTERN.findall(source.read_text(encoding="utf-8")))

        assert "sidebar.clients" in used
        assert sorted(k for k in used if t(k, None) is None) == []
