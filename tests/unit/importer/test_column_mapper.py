"""Tests for header normalization and three-phase alias matching."""

from __future__ import annotations

import pytest

from safepass.importer.column_mapper import (
    ALIAS_TABLE,
    DECLARED_ALIASES,
    FIELD_ORDER,
    SHADOWED_ALIASES,
    map_column,
    normalize_header,
)

ALL_ALIASES = [(field, alias) for field in FIELD_ORDER for alias in ALIAS_TABLE[field]]


def _variants(alias: str) -> list[str]:
    words = alias.split(" ")
    return [
        alias.upper(),
        alias.title(),
        "_".join(words),
        "-".join(words),
        "  ".join(words),
        f"  {alias}  ",
        "__".join(w.capitalize() for w in words),
    ]


class TestNormalizeHeader:
    @pytest.mark.parametrize("raw", ["Site_Name", "site-name", "SITE NAME", "site__name", "  site  name  "])
    def test_separator_and_case_variants_collapse(self, raw):
        assert normalize_header(raw) == "site name"

    def test_strips_symbols(self):
        assert normalize_header("E-mail (Primary)!") == "e mail primary"

    def test_mixed_separator_run_becomes_one_space(self):
        assert normalize_header("user _-_ id") == "user id"


class TestAliasTable:
    def test_fields_are_declared_in_fixed_order(self):
        assert FIELD_ORDER == ("title", "email", "username", "secret", "url", "notes")

    def test_normalized_aliases_are_disjoint(self):
        seen: dict[str, str] = {}
        for field, alias in ALL_ALIASES:
            assert alias not in seen, f"{alias!r} in both {seen.get(alias)} and {field}"
            seen[alias] = field

    def test_collision_stays_with_first_declared_field(self):
        assert "website" in DECLARED_ALIASES["url"]
        assert "website" in ALIAS_TABLE["title"]
        assert "website" not in ALIAS_TABLE["url"]
        assert SHADOWED_ALIASES == (("website", "url", "title"),)
        assert map_column("Website") == "title"

    def test_spelling_variants_of_one_field_are_merged(self):
        assert ALIAS_TABLE["secret"].count("encrypted password") == 1


class TestPhaseOneExact:
    @pytest.mark.parametrize("field,alias", ALL_ALIASES)
    def test_every_alias_maps_to_its_field(self, field, alias):
        assert map_column(alias) == field

    @pytest.mark.parametrize("field,alias", ALL_ALIASES)
    def test_case_and_separator_variants(self, field, alias):
        for variant in _variants(alias):
            assert map_column(variant) == field, variant

    @pytest.mark.parametrize(
        "header,expected",
        [
            ("Site Name", "title"),
            ("Login Name", "username"),
            ("E-mail Address", "email"),
            ("Web Address", "url"),
            ("encrypted_password", "secret"),
            ("pwd", "secret"),
            ("memo", "notes"),
            ("user", "username"),
        ],
    )
    def test_common_export_headers(self, header, expected):
        assert map_column(header) == expected


class TestPhaseTwoHeaderContainsAlias:
    def test_single_word_alias_as_token(self):
        assert map_column("user_login") == "username"

    def test_multi_word_alias_as_substring(self):
        assert map_column("Primary Web Address") == "url"

    def test_extra_info_goes_to_notes(self):
        assert map_column("Extra Info") == "notes"

    def test_user_email_goes_to_email(self):
        assert map_column("User Email") == "email"

    def test_single_word_alias_does_not_match_inside_a_word(self):
        # "pass" must not claim "passport" in phase 2; phase 3 is length-bounded
        assert map_column("passport number") is None

    def test_earlier_field_wins_within_phase(self):
        # "account" (title) and "login" (username) both match as tokens
        assert map_column("account login") == "title"


class TestPhaseThreeAliasContainsHeader:
    def test_truncated_header(self):
        assert map_column("passw") == "secret"

    def test_short_header_is_not_expanded(self):
        assert map_column("id") is None

    def test_length_bound_blocks_distant_alias(self):
        # "add" is inside "address" (4 extra) -> url, but not "additional info"
        assert map_column("add") == "url"
        assert map_column("addition") is None

    def test_usern_matches_username(self):
        assert map_column("usern") == "username"


class TestUnmapped:
    @pytest.mark.parametrize("header", ["", "   ", "---", "favorite color", "totp", "id"])
    def test_returns_none(self, header):
        assert map_column(header) is None


class TestPurity:
    def test_same_normalization_same_answer(self):
        assert map_column("LOGIN__name") == map_column("login-name") == map_column(" Login Name ")
