"""
Unit tests for identifier normalization.

These tests verify:
1. Every accepted alias resolves to the same Identity
2. Alias precedence and trimming
3. Fail-fast behavior on partial identities
"""

import pytest

from src.domain.entities import Identity
from src.domain.exceptions import MissingIdentifierException, ValidationException
from src.service.credits.identity import (
    normalize,
    resolve_identifier,
    resolve_project_id,
    resolve_user_id,
    USER_ID_ALIASES,
)


# =============================================================================
# Alias Resolution Tests
# =============================================================================

class TestAliases:

    @pytest.mark.parametrize("user_key", ["user_id", "userId", "uid"])
    @pytest.mark.parametrize("project_key", ["project_id", "projectId"])
    def test_all_alias_sets_yield_same_identity(self, user_key, project_key):
        identity = normalize({user_key: "u1", project_key: "p1"})

        assert identity == Identity(user_id="u1", project_id="p1")

    def test_first_alias_wins(self):
        identity = normalize({"user_id": "snake", "userId": "camel", "uid": "short", "projectId": "p"})

        assert identity.user_id == "snake"

    def test_blank_alias_falls_through_to_next(self):
        identity = normalize({"user_id": "   ", "userId": "camel", "project_id": "", "projectId": "p"})

        assert identity == Identity(user_id="camel", project_id="p")

    def test_values_are_trimmed(self):
        identity = normalize({"uid": "  u1 ", "project_id": "\tp1\n"})

        assert identity == Identity(user_id="u1", project_id="p1")

    def test_numeric_identifiers_accepted(self):
        identity = normalize({"userId": 42, "projectId": 7})

        assert identity == Identity(user_id="42", project_id="7")

    def test_non_scalar_values_ignored(self):
        assert resolve_identifier([{"user_id": {"nested": 1}, "uid": True}], USER_ID_ALIASES) is None


# =============================================================================
# Multiple Source Tests
# =============================================================================

class TestSources:

    def test_sources_consulted_in_order(self):
        body = {"userId": "from_body"}
        query = {"user_id": "from_query", "project_id": "p"}

        identity = normalize(body, query)

        assert identity.user_id == "from_body"
        assert identity.project_id == "p"

    def test_none_sources_skipped(self):
        identity = normalize(None, {"uid": "u", "projectId": "p"})

        assert identity == Identity(user_id="u", project_id="p")


# =============================================================================
# Failure Tests
# =============================================================================

class TestMissingIdentifiers:

    def test_missing_project_named(self):
        with pytest.raises(MissingIdentifierException) as exc_info:
            normalize({"user_id": "u1"})

        assert exc_info.value.message == "Missing required identifier: project_id"
        assert exc_info.value.fields == ("project_id",)

    def test_missing_both_named(self):
        with pytest.raises(MissingIdentifierException) as exc_info:
            normalize({})

        assert exc_info.value.message == "Missing required identifiers: user_id, project_id"

    def test_missing_identifier_is_a_validation_error(self):
        with pytest.raises(ValidationException):
            normalize({"projectId": "p"})

    def test_project_only_resolution(self):
        assert resolve_project_id({"projectId": " p "}) == "p"
        assert resolve_user_id({"projectId": "p"}) is None

    def test_project_only_resolution_requires_project(self):
        with pytest.raises(MissingIdentifierException):
            resolve_project_id({"userId": "u"})
