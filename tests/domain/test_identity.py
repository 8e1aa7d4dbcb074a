"""Identity value objects: normalisation, facets, precedence parsing."""

from __future__ import annotations

import pytest
from hypothesis import given
from hypothesis import strategies as st

from lib_machine_settings.domain.errors import InvalidPrecedence
from lib_machine_settings.domain.identity import (
    DEFAULT_PRECEDENCE,
    Facet,
    FacetKind,
    MachineIdentity,
    parse_precedence,
    safe,
)

UNSAFE = "#%&{}$!'\"@<>*?/ \r\n\t+`|=:"


def test_safe_collapses_unsafe_runs() -> None:
    assert safe("Bob's PC!") == "bob-s-pc"
    assert safe("gnu/linux") == "gnu-linux"
    assert safe("a  ::  b") == "a-b"
    assert safe("--keep--inner--") == "keep--inner"


def test_safe_handles_empty_values() -> None:
    assert safe("") == ""
    assert safe(None) == ""
    assert safe("!!!") == ""


@given(st.text())
def test_safe_is_idempotent(value: str) -> None:
    assert safe(safe(value)) == safe(value)


@given(st.text())
def test_safe_output_has_no_unsafe_characters(value: str) -> None:
    token = safe(value)
    assert not any(char in UNSAFE for char in token)
    assert not token.startswith("-")
    assert not token.endswith("-")


def test_facet_from_raw_keeps_raw_value() -> None:
    facet = Facet.from_raw(FacetKind.USER, "Bob Smith")
    assert facet.raw_value == "Bob Smith"
    assert facet.normalized_value == "bob-smith"


def test_facet_from_raw_accepts_none() -> None:
    facet = Facet.from_raw(FacetKind.NAME, None)
    assert facet.raw_value == ""
    assert facet.normalized_value == ""


def test_identity_lookup_by_kind_and_name() -> None:
    identity = MachineIdentity.from_values(name="Bob-PC", type="gnu/linux", user="bob")
    assert identity[FacetKind.NAME].normalized_value == "bob-pc"
    assert identity["type"].normalized_value == "gnu-linux"
    assert identity.as_dict()["user"] == {"raw": "bob", "normalized": "bob"}


def test_parse_precedence_defaults_and_strings() -> None:
    assert parse_precedence(None) == DEFAULT_PRECEDENCE
    assert DEFAULT_PRECEDENCE == (FacetKind.TYPE, FacetKind.NAME, FacetKind.USER)
    assert parse_precedence("User, type") == (FacetKind.USER, FacetKind.TYPE)
    assert parse_precedence([]) == ()


@pytest.mark.parametrize("order", [["name", "name"], ["type", "host"], "user,,user"])
def test_parse_precedence_rejects_bad_orders(order) -> None:
    with pytest.raises(InvalidPrecedence):
        parse_precedence(order)


def test_invalid_precedence_is_value_error() -> None:
    with pytest.raises(ValueError):
        FacetKind.parse("machine")


def test_parse_precedence_rejects_non_iterable_input() -> None:
    with pytest.raises(InvalidPrecedence, match="comma separated string"):
        parse_precedence(1)  # type: ignore[arg-type]
