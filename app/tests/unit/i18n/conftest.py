"""Feature-level fixtures for i18n system tests."""

import pytest
import yaml

from request_i18n.i18n import Translator
from tests.factories.i18n import make_locale_tree, make_request_context


@pytest.fixture
def temp_translations_dir(tmp_path):
    """Create a temporary locales directory.

    Returns a directory structure like:
    - active.en-US.yaml
    - fr/messages.yml
    - de.json
    """
    en_us = {
        "hello": "Hello",
        "incident": {
            "created": "Incident {{incident_id}} created",
            "resolved": "Incident {{incident_id}} resolved",
        },
        "items": {"one": "{{.PluralCount}} item", "other": "{{.PluralCount}} items"},
    }
    with open(tmp_path / "active.en-US.yaml", "w", encoding="utf-8") as f:
        yaml.dump(en_us, f)

    (tmp_path / "fr").mkdir()
    fr = {
        "hello": "Bonjour",
        "incident": {"created": "Incident {{incident_id}} créé"},
    }
    with open(tmp_path / "fr" / "messages.yml", "w", encoding="utf-8") as f:
        yaml.dump(fr, f, allow_unicode=True)

    (tmp_path / "de.json").write_text('{"hello": "Hallo"}', encoding="utf-8")

    return tmp_path


@pytest.fixture
def locale_tree():
    """In-memory catalog files for en-US and fr."""
    return make_locale_tree()


@pytest.fixture
def translator(locale_tree):
    """Translator over locale_tree, default language en-US."""
    return Translator(locale_tree, "en-US")


@pytest.fixture
def dev_translator(locale_tree):
    """Translator over locale_tree in development mode."""
    return Translator(locale_tree, "en-US", environment="development")


@pytest.fixture
def accept_language_headers():
    """Collection of Accept-Language headers for testing."""
    return {
        "simple_en": "en",
        "specific_en_us": "en-US",
        "with_quality": "fr-FR,en;q=0.8, de",
        "quality_out_of_order": "de;q=0.5,fr;q=0.9",
        "wildcard": "en-US,en;q=0.9,*;q=0.8",
        "invalid_quality": "en;q=invalid,fr",
    }


@pytest.fixture
def request_context():
    """Factory fixture for SimpleRequestContext."""
    return make_request_context
