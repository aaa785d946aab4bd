"""Unit tests for DDL identifier validation and quoting."""

import pytest

from infrastructure.database.exceptions import UnsafeIdentifierError
from infrastructure.database.identifiers import (
    quote_identifier,
    quote_literal,
    validate_identifier,
)


class TestValidateIdentifier:
    @pytest.mark.parametrize(
        "name",
        ["brand_0123abcd", "brand_user_ff00", "_private", "a" * 63],
    )
    def test_accepts_safe_names(self, name):
        assert validate_identifier(name) == name

    @pytest.mark.parametrize(
        "name",
        [
            "",
            "Brand",
            "1brand",
            "brand-x",
            'brand"; DROP SCHEMA public; --',
            "brand x",
            "a" * 64,
            "public",
            "information_schema",
            "pg_catalog",
        ],
    )
    def test_rejects_unsafe_names(self, name):
        with pytest.raises(UnsafeIdentifierError):
            validate_identifier(name)


class TestQuoting:
    def test_quote_identifier(self):
        assert quote_identifier("brand_abc") == '"brand_abc"'

    def test_quote_identifier_validates(self):
        with pytest.raises(UnsafeIdentifierError):
            quote_identifier('x"y')

    def test_quote_literal_doubles_quotes(self):
        assert quote_literal("it's") == "'it''s'"

    def test_quote_literal_rejects_nul(self):
        with pytest.raises(ValueError):
            quote_literal("a\x00b")
