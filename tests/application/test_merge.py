from __future__ import annotations

from hypothesis import given
from hypothesis import strategies as st

from lib_dotenv_flow.adapters.store.environ import EnvironStore
from lib_dotenv_flow.application.merge import overwrite_merge, safe_merge, unmerge

KEY = st.text(alphabet="ABCDEFGHIJKLMNOPQRSTUVWXYZ_", min_size=1, max_size=6)
VALUE = st.text(alphabet="abcdefghijklmnopqrstuvwxyz0123456789", max_size=6)
MAPPING = st.dictionaries(KEY, VALUE, max_size=6)


def test_overwrite_merge_later_layer_wins() -> None:
    assert overwrite_merge([{"A": "1", "B": "1"}, {"A": "2", "C": "3"}]) == {"A": "2", "B": "1", "C": "3"}


def test_overwrite_merge_of_nothing_is_empty() -> None:
    assert overwrite_merge([]) == {}


def test_safe_merge_keeps_existing_values() -> None:
    environ = {"A": "shell"}
    skipped = safe_merge({"A": "file", "B": "file"}, EnvironStore(environ))
    assert skipped == ["A"]
    assert environ == {"A": "shell", "B": "file"}


def test_safe_merge_treats_empty_value_as_defined() -> None:
    environ = {"A": ""}
    assert safe_merge({"A": "file"}, EnvironStore(environ)) == ["A"]
    assert environ == {"A": ""}


def test_unmerge_only_removes_exact_matches() -> None:
    environ = {"A": "1", "B": "changed", "C": "3"}
    removed = unmerge({"A": "1", "B": "2", "D": "4"}, EnvironStore(environ))
    assert removed == ["A"]
    assert environ == {"B": "changed", "C": "3"}


@given(MAPPING, MAPPING)
def test_last_layer_wins(lhs, rhs) -> None:
    merged = overwrite_merge([lhs, rhs])
    for key, value in rhs.items():
        assert merged[key] == value
    for key, value in lhs.items():
        if key not in rhs:
            assert merged[key] == value


@given(MAPPING, MAPPING, MAPPING)
def test_overwrite_merge_associative(lhs, mid, rhs) -> None:
    assert overwrite_merge([overwrite_merge([lhs, mid]), rhs]) == overwrite_merge([lhs, overwrite_merge([mid, rhs])])


@given(MAPPING, MAPPING)
def test_predefined_values_never_change(predefined, parsed) -> None:
    environ = dict(predefined)
    safe_merge(parsed, EnvironStore(environ))
    for key, value in predefined.items():
        assert environ[key] == value
    for key, value in parsed.items():
        if key not in predefined:
            assert environ[key] == value


@given(MAPPING, MAPPING)
def test_unmerge_after_safe_merge_restores_store(predefined, parsed) -> None:
    environ = dict(predefined)
    store = EnvironStore(environ)
    safe_merge(parsed, store)
    unmerge(parsed, store)
    for key in parsed:
        if key in predefined and predefined[key] != parsed[key]:
            assert environ[key] == predefined[key]
        elif key not in predefined:
            assert key not in environ
