"""Tests for request_i18n.i18n.resolvers module."""

from unittest.mock import MagicMock

import pytest

from request_i18n.i18n import (
    ExtractorConfigError,
    LanguageNegotiator,
    SimpleRequestContext,
    cookie_language_extractor,
    header_language_extractor,
    parse_accept_language,
    session_language_extractor,
    url_prefix_language_extractor,
)
from request_i18n.i18n.resolvers import (
    DEFAULT_EXTRACTOR_OPTIONS,
    DEFAULT_EXTRACTORS,
    parse_accept_language_weighted,
)

OPTIONS = dict(DEFAULT_EXTRACTOR_OPTIONS)


class TestParseAcceptLanguage:
    """Tests for Accept-Language parsing."""

    def test_simple(self, accept_language_headers):
        """A single tag is returned as is."""
        assert parse_accept_language(accept_language_headers["simple_en"]) == ["en"]

    def test_keeps_header_order(self, accept_language_headers):
        """Tags come back in header order with qualities dropped."""
        assert parse_accept_language(accept_language_headers["with_quality"]) == ["fr-FR", "en", "de"]

    def test_quality_does_not_reorder(self, accept_language_headers):
        """Lower quality tags listed first stay first."""
        assert parse_accept_language(accept_language_headers["quality_out_of_order"]) == ["de", "fr"]

    def test_wildcard_is_kept(self, accept_language_headers):
        """The wildcard is passed through; the localizer ignores it."""
        assert parse_accept_language(accept_language_headers["wildcard"]) == ["en-US", "en", "*"]

    def test_empty_entries_are_skipped(self):
        """Empty list items are ignored."""
        assert parse_accept_language(" , fr ,, en") == ["fr", "en"]

    def test_empty_header(self):
        """An empty header yields nothing."""
        assert parse_accept_language("") == []

    def test_weighted(self, accept_language_headers):
        """Weighted parsing keeps the quality values."""
        assert parse_accept_language_weighted(accept_language_headers["with_quality"]) == [
            ("fr-FR", 1.0),
            ("en", 0.8),
            ("de", 1.0),
        ]

    def test_invalid_quality(self, accept_language_headers):
        """An unparsable quality counts as 1.0."""
        assert parse_accept_language_weighted(accept_language_headers["invalid_quality"]) == [
            ("en", 1.0),
            ("fr", 1.0),
        ]


class TestExtractors:
    """Tests for the language extractors."""

    def test_cookie(self, request_context):
        """The cookie extractor reads the configured cookie."""
        ctx = request_context(cookies={"lang": "fr"})
        assert cookie_language_extractor(OPTIONS, ctx) == ["fr"]

    def test_cookie_custom_name(self, request_context):
        """CookieName selects the cookie."""
        ctx = request_context(cookies={"lang": "fr", "locale": "de"})
        assert cookie_language_extractor({"CookieName": "locale"}, ctx) == ["de"]

    def test_cookie_missing(self, request_context):
        """No cookie means no language."""
        assert cookie_language_extractor(OPTIONS, request_context()) == []

    def test_cookie_option_missing(self, request_context):
        """A missing CookieName option raises ExtractorConfigError."""
        with pytest.raises(ExtractorConfigError) as exc_info:
            cookie_language_extractor({}, request_context())
        assert exc_info.value.option == "CookieName"
        assert str(exc_info.value) == '"CookieName" is not defined in LanguageExtractorOptions'

    @pytest.mark.parametrize("value", [None, "", 42])
    def test_cookie_option_invalid(self, request_context, value):
        """Empty or non-string option values are treated as missing."""
        with pytest.raises(ExtractorConfigError):
            cookie_language_extractor({"CookieName": value}, request_context())

    def test_session(self, request_context):
        """The session extractor reads the configured session key."""
        ctx = request_context(session={"lang": "es"})
        assert session_language_extractor(OPTIONS, ctx) == ["es"]

    def test_session_non_string_value(self):
        """A non-string session value is ignored with a warning."""
        log = MagicMock()
        ctx = SimpleRequestContext(session={"lang": ["fr"]}, logger=log)
        assert session_language_extractor(OPTIONS, ctx) == []
        log.warning.assert_called_once_with("invalid_session_language", value_type="list")

    def test_session_option_missing(self, request_context):
        """A missing SessionName option raises ExtractorConfigError."""
        with pytest.raises(ExtractorConfigError):
            session_language_extractor({"CookieName": "lang"}, request_context())

    def test_header(self, request_context):
        """The header extractor parses Accept-Language."""
        ctx = request_context(headers={"accept-language": "fr-FR,en;q=0.8"})
        assert header_language_extractor(OPTIONS, ctx) == ["fr-FR", "en"]

    def test_header_missing(self, request_context):
        """No header means no language."""
        assert header_language_extractor({}, request_context()) == []

    def test_url_prefix(self, request_context):
        """The URL prefix extractor reads the path parameter."""
        ctx = request_context(params={"lang": "fr"}, path="/fr/hello")
        assert url_prefix_language_extractor(OPTIONS, ctx) == ["fr"]

    def test_url_prefix_whole_path(self, request_context):
        """The prefix may be the whole path."""
        ctx = request_context(params={"lang": "fr"}, path="/fr")
        assert url_prefix_language_extractor(OPTIONS, ctx) == ["fr"]

    def test_url_prefix_not_at_start(self, request_context):
        """A parameter elsewhere in the path is not a prefix."""
        ctx = request_context(params={"lang": "fr"}, path="/users/fr")
        assert url_prefix_language_extractor(OPTIONS, ctx) == []

    def test_url_prefix_partial_segment(self, request_context):
        """The prefix must be a whole path segment."""
        ctx = request_context(params={"lang": "fr"}, path="/french/hello")
        assert url_prefix_language_extractor(OPTIONS, ctx) == []

    def test_url_prefix_missing_param(self, request_context):
        """No parameter means no language."""
        assert url_prefix_language_extractor(OPTIONS, request_context(path="/fr/hello")) == []

    def test_url_prefix_option_missing(self, request_context):
        """A missing URLPrefixName option raises ExtractorConfigError."""
        with pytest.raises(ExtractorConfigError):
            url_prefix_language_extractor({}, request_context(params={"lang": "fr"}, path="/fr"))


class TestLanguageNegotiator:
    """Tests for LanguageNegotiator."""

    def test_default_chain(self):
        """The default chain is cookie, session, header."""
        negotiator = LanguageNegotiator("en-US")
        assert negotiator.extractors == list(DEFAULT_EXTRACTORS)
        assert negotiator.options == DEFAULT_EXTRACTOR_OPTIONS

    def test_default_only(self, request_context):
        """Without any source the default language is the only preference."""
        assert LanguageNegotiator("en-US").extract(request_context()) == ["en-US"]

    def test_precedence(self, request_context):
        """Cookie, then session, then header, then default."""
        ctx = request_context(
            cookies={"lang": "fr"},
            session={"lang": "es"},
            headers={"Accept-Language": "de,it;q=0.5"},
        )
        assert LanguageNegotiator("en-US").extract(ctx) == ["fr", "es", "de", "it", "en-US"]

    def test_duplicates_are_kept(self, request_context):
        """Languages found by several extractors are not deduplicated."""
        ctx = request_context(cookies={"lang": "fr"}, headers={"Accept-Language": "fr"})
        assert LanguageNegotiator("en-US").extract(ctx) == ["fr", "fr", "en-US"]

    def test_custom_chain(self, request_context):
        """Extractors run in the configured order."""
        negotiator = LanguageNegotiator(
            "en-US",
            extractors=[header_language_extractor, cookie_language_extractor],
        )
        ctx = request_context(cookies={"lang": "fr"}, headers={"Accept-Language": "de"})
        assert negotiator.extract(ctx) == ["de", "fr", "en-US"]

    def test_empty_chain(self, request_context):
        """An empty chain still yields the default language."""
        negotiator = LanguageNegotiator("en-US", extractors=[])
        assert negotiator.extract(request_context(cookies={"lang": "fr"})) == ["en-US"]

    def test_chain_is_mutable(self, request_context):
        """Extractors can be appended after construction."""
        negotiator = LanguageNegotiator("en-US")
        negotiator.extractors.append(url_prefix_language_extractor)
        ctx = request_context(params={"lang": "fr"}, path="/fr/hello")
        assert negotiator.extract(ctx) == ["fr", "en-US"]

    def test_per_call_options(self, request_context):
        """Options given to extract() replace the configured ones."""
        ctx = request_context(cookies={"lang": "fr", "locale": "de"})
        assert LanguageNegotiator("en-US").extract(ctx, {"CookieName": "locale", "SessionName": "locale"}) == [
            "de",
            "en-US",
        ]

    def test_missing_option_skips_extractor(self):
        """An extractor missing its option contributes nothing; the rest run."""
        log = MagicMock()
        ctx = SimpleRequestContext(
            cookies={"lang": "fr"},
            headers={"Accept-Language": "de"},
            logger=log,
        )
        negotiator = LanguageNegotiator("en-US", options={"SessionName": "lang"})
        assert negotiator.extract(ctx) == ["de", "en-US"]
        log.error.assert_called_once_with(
            "extractor_option_missing",
            extractor="cookie_language_extractor",
            option="CookieName",
            error='"CookieName" is not defined in LanguageExtractorOptions',
        )

    def test_missing_option_reported_once(self):
        """The same configuration error is only logged as an error once."""
        log = MagicMock()
        ctx = SimpleRequestContext(logger=log)
        negotiator = LanguageNegotiator("en-US", options={})
        negotiator.extract(ctx)
        negotiator.extract(ctx)
        # cookie and session each report once
        assert log.error.call_count == 2

    def test_custom_extractor(self, request_context):
        """Any callable with the extractor signature can join the chain."""

        def query_extractor(options, ctx):
            return [ctx.param("locale")] if ctx.param("locale") else []

        negotiator = LanguageNegotiator("en-US", extractors=[query_extractor])
        assert negotiator.extract(request_context(params={"locale": "pt-BR"})) == ["pt-BR", "en-US"]
