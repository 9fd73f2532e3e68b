"""
Person API — Identifier and Lookup Key Tests
=============================================

What we test:
    ✅ Generated identifiers have the 24-hex shape and are unique
    ✅ Identifiers from one process sort in creation order
    ✅ The validity check is purely syntactic
    ✅ lookup_key picks ByIdentifier or ByName
"""

import pytest

from person_api.identifiers import (
    ByIdentifier,
    ByName,
    is_valid_identifier,
    lookup_key,
    new_identifier,
)


class TestNewIdentifier:

    def test_shape(self):
        identifier = new_identifier()
        assert len(identifier) == 24
        assert identifier == identifier.lower()
        assert is_valid_identifier(identifier)

    def test_unique_and_ordered(self, monkeypatch):
        # Start the counter low so it cannot wrap during the test
        monkeypatch.setattr("person_api.identifiers._counter", 0)
        identifiers = [new_identifier() for _ in range(500)]
        assert len(set(identifiers)) == len(identifiers)
        assert identifiers == sorted(identifiers)


class TestIsValidIdentifier:

    @pytest.mark.parametrize("value", [
        "507f1f77bcf86cd799439011",
        "507F1F77BCF86CD799439011",
        "000000000000000000000000",
    ])
    def test_valid(self, value):
        assert is_valid_identifier(value)

    @pytest.mark.parametrize("value", [
        "",
        "John Doe",
        "507f1f77bcf86cd79943901",      # 23 chars
        "507f1f77bcf86cd7994390111",    # 25 chars
        "507f1f77bcf86cd79943901g",     # non-hex
        "John Doe Upd",                 # 12 chars is a name, not an id
        "507f1f77bcf86cd799439011\n",
    ])
    def test_invalid(self, value):
        assert not is_valid_identifier(value)


class TestLookupKey:

    def test_identifier_shape_selects_identifier(self):
        assert lookup_key("507f1f77bcf86cd799439011") == ByIdentifier("507f1f77bcf86cd799439011")

    def test_identifier_is_lowercased(self):
        assert lookup_key("507F1F77BCF86CD799439011") == ByIdentifier("507f1f77bcf86cd799439011")

    def test_anything_else_selects_name(self):
        assert lookup_key("John Doe") == ByName("John Doe")

    def test_name_is_kept_verbatim(self):
        assert lookup_key("  Ada ") == ByName("  Ada ")
