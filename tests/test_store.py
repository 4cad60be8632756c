"""Unit tests for the in-memory ConfigStore: set/get, fallback, substitution, comments."""

from __future__ import annotations

import pytest

from inistore.core.errors import KeyNotFoundError, SectionNotFoundError
from inistore.core.options import StoreOptions
from inistore.core.store import DEFAULT_SECTION, MAX_SUBSTITUTION_DEPTH, ConfigStore


@pytest.fixture(params=[True, False], ids=["locked", "unlocked"])  # type: ignore[misc]
def store(request: pytest.FixtureRequest) -> ConfigStore:
    """Run every test against both the locking and the lock-free store."""
    return ConfigStore(StoreOptions(concurrency_safe=request.param))


def test_set_then_get_returns_value(store: ConfigStore) -> None:
    """Values without placeholders round-trip exactly, whitespace included."""
    assert store.set_value("app", "name", "  demo value ") is True
    assert store.get_value("app", "name") == "  demo value "


def test_second_set_overwrites_and_keeps_order(store: ConfigStore) -> None:
    """Re-setting a key reports an overwrite and does not move the key."""
    store.set_value("app", "a", "1")
    store.set_value("app", "b", "2")
    assert store.set_value("app", "a", "3") is False
    assert store.get_value("app", "a") == "3"
    assert store.key_list("app") == ["a", "b"]


def test_empty_key_is_ignored(store: ConfigStore) -> None:
    """An empty key is rejected without creating the section."""
    assert store.set_value("app", "", "x") is False
    assert store.section_list() == []


def test_blank_section_means_default(store: ConfigStore) -> None:
    """A blank section name reads and writes the DEFAULT section."""
    store.set_value("", "k", "v")
    assert store.section_list() == [DEFAULT_SECTION]
    assert store.get_value(DEFAULT_SECTION, "k") == "v"
    assert store.get_value("", "k") == "v"


def test_missing_section_and_key_errors(store: ConfigStore) -> None:
    """Unknown sections and keys raise the matching lookup error."""
    store.set_value("app", "name", "x")
    with pytest.raises(SectionNotFoundError) as sec_err:
        store.get_value("nope", "name")
    assert str(sec_err.value) == "section 'nope' not found"
    with pytest.raises(KeyNotFoundError) as key_err:
        store.get_value("app", "missing")
    assert key_err.value.name == "missing"
    assert isinstance(key_err.value, LookupError)


def test_sub_section_falls_back_to_parent(store: ConfigStore) -> None:
    """`a.b.c` retries `a.b` and then `a` for keys it does not define."""
    store.set_value("db", "host", "parent")
    store.set_value("db.replica", "port", "3307")
    store.set_value("db.replica.eu", "region", "eu-west")
    assert store.get_value("db.replica.eu", "host") == "parent"
    assert store.get_value("db.replica.eu", "port") == "3307"
    assert store.get_value("db.replica.eu", "region") == "eu-west"
    with pytest.raises(KeyNotFoundError):
        store.get_value("db.replica.eu", "nothing")


def test_sub_section_with_missing_parent(store: ConfigStore) -> None:
    """Fallback into a parent that was never defined reports that parent."""
    store.set_value("svc.web", "port", "80")
    with pytest.raises(SectionNotFoundError) as exc:
        store.get_value("svc.web", "host")
    assert exc.value.name == "svc"


def test_variable_from_default_section(store: ConfigStore) -> None:
    """`%(host)s` is resolved from DEFAULT."""
    store.set_value(DEFAULT_SECTION, "host", "127.0.0.1")
    store.set_value("db", "addr", "%(host)s:3306")
    assert store.get_value("db", "addr") == "127.0.0.1:3306"


def test_variable_from_same_section_and_all_occurrences(store: ConfigStore) -> None:
    """Names missing from DEFAULT come from the value's own section; every copy is replaced."""
    store.set_value(DEFAULT_SECTION, "unused", "x")
    store.set_value("paths", "root", "/srv")
    store.set_value("paths", "pair", "%(root)s|%(root)s")
    assert store.get_value("paths", "pair") == "/srv|/srv"


def test_default_wins_over_same_section(store: ConfigStore) -> None:
    """When both define the name, DEFAULT takes precedence."""
    store.set_value(DEFAULT_SECTION, "name", "global")
    store.set_value("app", "name", "local")
    store.set_value("app", "greeting", "hi %(name)s")
    assert store.get_value("app", "greeting") == "hi global"


def test_nested_variables(store: ConfigStore) -> None:
    """Referenced values are themselves expanded."""
    store.set_value(DEFAULT_SECTION, "host", "example.org")
    store.set_value(DEFAULT_SECTION, "base", "https://%(host)s")
    store.set_value("api", "url", "%(base)s/v1")
    assert store.get_value("api", "url") == "https://example.org/v1"


def test_unresolved_variable_becomes_empty(store: ConfigStore) -> None:
    """A placeholder naming nothing is replaced by an empty string."""
    store.set_value("app", "path", "/opt/%(missing)s/bin")
    assert store.get_value("app", "path") == "/opt//bin"


def test_circular_variables_terminate(store: ConfigStore) -> None:
    """`a -> b -> a` stops at the substitution cap and keeps a literal placeholder."""
    store.set_value(DEFAULT_SECTION, "a", "%(b)s")
    store.set_value(DEFAULT_SECTION, "b", "%(a)s")
    value = store.get_value(DEFAULT_SECTION, "a")
    assert value in {"%(a)s", "%(b)s"}


def test_self_reference_in_section_terminates(store: ConfigStore) -> None:
    """A key referencing itself outside DEFAULT is bounded as well."""
    store.set_value("loop", "x", "<%(x)s>")
    value = store.get_value("loop", "x")
    assert value.count("<") == MAX_SUBSTITUTION_DEPTH + 1
    assert "%(x)s" in value


def test_section_comments_lifecycle(store: ConfigStore) -> None:
    """Insert, overwrite, then delete-on-empty; deleting twice still reports removal."""
    assert store.set_section_comments("app", "# first") is True
    assert store.set_section_comments("app", "second") is False
    assert store.get_section_comments("app") == "; second"
    assert store.set_section_comments("app", "") is True
    assert store.get_section_comments("app") == ""
    assert store.set_section_comments("app", "") is True


def test_key_comments_lifecycle(store: ConfigStore) -> None:
    """Key comments follow the same insert/overwrite/remove contract."""
    assert store.set_key_comments("app", "k", "") is True
    assert store.set_key_comments("app", "k", "; note") is True
    assert store.set_key_comments("app", "k", "other") is False
    assert store.get_key_comments("app", "k") == "; other"
    assert store.set_key_comments("app", "k", "") is True
    assert store.get_key_comments("app", "k") == ""


def test_get_section_resolves_in_order(store: ConfigStore) -> None:
    """`get_section` returns resolved values in key order."""
    store.set_value(DEFAULT_SECTION, "host", "h")
    store.set_value("s", "z", "%(host)s")
    store.set_value("s", "a", "plain")
    assert list(store.get_section("s").items()) == [("z", "h"), ("a", "plain")]


def test_delete_key_and_section(store: ConfigStore) -> None:
    """Deletion reports whether anything was removed."""
    store.set_value("s", "k", "v")
    store.set_key_comments("s", "k", "# c")
    assert store.delete_key("s", "k") is True
    assert store.delete_key("s", "k") is False
    assert store.get_key_comments("s", "k") == ""
    assert store.delete_section("s") is True
    assert store.delete_section("s") is False
    assert not store.has_section("s")


def test_lookup_result(store: ConfigStore) -> None:
    """`lookup` wraps success and lookup failures without raising."""
    store.set_value("s", "k", "v")
    assert store.lookup("s", "k").unwrap() == "v"
    failed = store.lookup("s", "zz")
    assert failed.is_err()
    assert isinstance(failed.unwrap_err(), KeyNotFoundError)


def test_placeholder_names_ending_in_s(store: ConfigStore) -> None:
    """Names are taken from inside the parentheses, trailing letters intact."""
    store.set_value(DEFAULT_SECTION, "hosts", "a,b")
    store.set_value("app", "list", "[%(hosts)s]")
    assert store.get_value("app", "list") == "[a,b]"


def test_long_acyclic_chain_shares_the_substitution_cap(store: ConfigStore) -> None:
    """Short chains resolve fully; chains longer than the cap keep a placeholder."""
    for i in range(10):
        store.set_value(DEFAULT_SECTION, f"s{i}", f"%(s{i + 1})s")
    store.set_value(DEFAULT_SECTION, "s10", "end")
    assert store.get_value(DEFAULT_SECTION, "s0") == "end"

    depth = MAX_SUBSTITUTION_DEPTH + 1
    for i in range(depth):
        store.set_value(DEFAULT_SECTION, f"l{i}", f"%(l{i + 1})s")
    store.set_value(DEFAULT_SECTION, f"l{depth}", "end")
    assert store.get_value(DEFAULT_SECTION, "l0") == f"%(l{depth})s"
