"""Test data factories for deterministic test data generation."""

from tests.factories.i18n import (
    make_catalog,
    make_locale_tree,
    make_message,
    make_request_context,
)

__all__ = [
    "make_catalog",
    "make_locale_tree",
    "make_message",
    "make_request_context",
]
