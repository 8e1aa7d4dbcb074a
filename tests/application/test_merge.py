from __future__ import annotations

from types import SimpleNamespace

from hypothesis import given
from hypothesis import strategies as st

from lib_machine_settings.application.merge import merge_files

SCALAR = st.one_of(st.booleans(), st.integers(), st.text(min_size=1, max_size=5))
VALUE = st.recursive(
    SCALAR,
    lambda children: st.dictionaries(st.text(min_size=1, max_size=5), children, max_size=3),
    max_leaves=10,
)
MAPPING = st.dictionaries(st.text(alphabet="abcxyz", min_size=1, max_size=5), VALUE, max_size=4)


def _file(tier: str, data: dict, path: str | None = None) -> SimpleNamespace:
    return SimpleNamespace(tier=tier, path=path or f"/m/{tier}.toml", data=data)


def test_later_file_overrides_earlier() -> None:
    merged, meta = merge_files(
        [
            _file("type", {"fonts": {"size": 10, "family": "mono"}}),
            _file("name", {"fonts": {"size": 12}}),
            _file("user", {"theme": "dark"}),
        ]
    )
    assert merged == {"fonts": {"size": 12, "family": "mono"}, "theme": "dark"}
    assert meta["fonts.size"] == {"tier": "name", "path": "/m/name.toml", "key": "fonts.size"}
    assert meta["fonts.family"]["tier"] == "type"
    assert meta["theme"]["tier"] == "user"


def test_scalar_replaces_branch_and_clears_provenance() -> None:
    merged, meta = merge_files(
        [
            _file("type", {"fonts": {"size": 10}}),
            _file("user", {"fonts": "default"}),
        ]
    )
    assert merged == {"fonts": "default"}
    assert "fonts.size" not in meta
    assert meta["fonts"]["tier"] == "user"


def test_branch_replaces_scalar() -> None:
    merged, meta = merge_files(
        [
            _file("type", {"fonts": "default"}),
            _file("name", {"fonts": {"size": 12}}),
        ]
    )
    assert merged == {"fonts": {"size": 12}}
    assert "fonts" not in meta


def test_inputs_are_not_mutated() -> None:
    first = {"hooks": {"after": ["a"]}}
    merged, _ = merge_files([_file("type", first)])
    merged["hooks"]["after"].append("b")
    assert first == {"hooks": {"after": ["a"]}}


def test_no_files_yield_empty_result() -> None:
    assert merge_files([]) == ({}, {})


@given(MAPPING, MAPPING)
def test_last_file_wins_for_scalars(lhs, rhs) -> None:
    merged, meta = merge_files([_file("type", lhs), _file("user", rhs)])
    for key, value in rhs.items():
        if not isinstance(value, dict):
            assert merged[key] == value
            assert meta[key]["tier"] == "user"
