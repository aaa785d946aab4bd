"""Validation and quoting for identifiers that must be interpolated into DDL.

PostgreSQL does not accept bind parameters for schema or role names, so
these names are checked against a strict pattern first and then quoted.
"""

from __future__ import annotations

import re

from infrastructure.database.exceptions import UnsafeIdentifierError

# Lower-case, starts with a letter or underscore, at most 63 bytes (NAMEDATALEN - 1)
_IDENTIFIER_PATTERN = re.compile(r"^[a-z_][a-z0-9_]{0,62}$")

_RESERVED_SCHEMAS = frozenset({"public", "information_schema"})


def validate_identifier(identifier: str) -> str:
    """Return ``identifier`` unchanged if it is safe to interpolate.

    Raises:
        UnsafeIdentifierError: If the name does not match the allowed pattern
            or refers to a system namespace
    """
    if not isinstance(identifier, str) or not _IDENTIFIER_PATTERN.match(identifier):
        raise UnsafeIdentifierError(str(identifier))
    if identifier in _RESERVED_SCHEMAS or identifier.startswith("pg_"):
        raise UnsafeIdentifierError(identifier)
    return identifier


def quote_identifier(identifier: str) -> str:
    """Validate and double-quote an identifier."""
    return f'"{validate_identifier(identifier)}"'


def quote_literal(value: str) -> str:
    """Quote a string literal for DDL that cannot take bind parameters.

    Assumes ``standard_conforming_strings`` is on, the PostgreSQL default.
    """
    if "\x00" in value:
        raise ValueError("Literal must not contain NUL characters")
    return "'" + value.replace("'", "''") + "'"
