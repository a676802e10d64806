"""Tests for installation filter construction and compilation."""
import pytest

from push_installations.filters import (
    InvalidFilterError,
    by_app,
    by_subscriptions,
    by_user,
    compile_where,
    split_subscriptions,
)


def test_split_subscriptions_on_commas_and_whitespace() -> None:
    assert split_subscriptions("a, b  c") == ["a", "b", "c"]


def test_split_subscriptions_discards_empty_tokens() -> None:
    assert split_subscriptions(",, news ,\tpush\n,") == ["news", "push"]
    assert split_subscriptions("") == []


def test_split_subscriptions_keeps_sequences_as_is() -> None:
    assert split_subscriptions(["x", "y"]) == ["x", "y"]
    assert split_subscriptions(("x y", "z")) == ["x y", "z"]


def test_by_app_with_version() -> None:
    assert by_app("android", "com.example.app", "2.1.0") == {
        "where": {"appId": "com.example.app", "deviceType": "android", "appVersion": "2.1.0"}
    }


def test_by_app_without_version_leaves_version_unconstrained() -> None:
    filter_ = by_app("ios", "com.example.app")
    assert filter_ == {"where": {"appId": "com.example.app", "deviceType": "ios"}}
    assert "appVersion" not in filter_["where"]


def test_by_user() -> None:
    assert by_user("ios", "user-42") == {"where": {"userId": "user-42", "deviceType": "ios"}}


def test_by_subscriptions_from_string() -> None:
    assert by_subscriptions("ios", "push,news") == {
        "where": {"deviceType": "ios", "subscriptions": {"in": ["push", "news"]}}
    }


def test_compile_where_builds_one_clause_per_field() -> None:
    clauses = compile_where(by_subscriptions("ios", ["push", "news"]))
    assert len(clauses) == 2


def test_compile_where_accepts_empty_filter() -> None:
    assert compile_where({}) == []


def test_compile_where_rejects_unknown_field() -> None:
    with pytest.raises(InvalidFilterError):
        compile_where({"where": {"colour": "blue"}})


def test_compile_where_rejects_unknown_operator() -> None:
    with pytest.raises(InvalidFilterError):
        compile_where({"where": {"deviceType": {"like": "io%"}}})


def test_by_app_with_empty_version_leaves_version_unconstrained() -> None:
    assert by_app("ios", "com.example.app", "") == {
        "where": {"appId": "com.example.app", "deviceType": "ios"}
    }
