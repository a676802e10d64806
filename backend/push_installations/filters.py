"""Filters for locating installations.

A filter is plain data of the form ``{"where": {field: predicate}}`` where
``field`` is the camelCase name of an installation field and ``predicate`` is
either a value (equality) or ``{"in": [values]}`` (set membership). For the
list-valued ``subscriptions`` field both predicates match when any of the
record's subscriptions satisfies them.
"""
import re
from collections.abc import Mapping
from typing import Any, List, Optional, Sequence, Union

from .models import Installation, InstallationSubscription

_SEPARATORS = re.compile(r"[\s,]+")

FIELD_COLUMNS = {
    "id": Installation.id,
    "appId": Installation.app_id,
    "appVersion": Installation.app_version,
    "badge": Installation.badge,
    "deviceToken": Installation.device_token,
    "deviceType": Installation.device_type,
    "status": Installation.status,
    "timeZone": Installation.time_zone,
    "userId": Installation.user_id,
}


class InvalidFilterError(ValueError):
    """Raised when a filter names an unknown field or operator."""


def split_subscriptions(subscriptions: Union[str, Sequence[str]]) -> List[str]:
    """Split a comma/whitespace separated string into subscription tokens.

    Sequences are returned as a list without further splitting.
    """
    if isinstance(subscriptions, str):
        return [token for token in _SEPARATORS.split(subscriptions) if token]
    return list(subscriptions)


def by_app(device_type: str, app_id: str, app_version: Optional[str] = None) -> dict:
    """Filter for installations of an application.

    Without ``app_version`` (None or an empty string) the version is left
    unconstrained, so installations with any version (or none) match.
    """
    where = {"appId": app_id, "deviceType": device_type}
    if app_version:
        where["appVersion"] = app_version
    return {"where": where}


def by_user(device_type: str, user_id: str) -> dict:
    return {"where": {"userId": user_id, "deviceType": device_type}}


def by_subscriptions(device_type: str, subscriptions: Union[str, Sequence[str]]) -> dict:
    return {
        "where": {
            "deviceType": device_type,
            "subscriptions": {"in": split_subscriptions(subscriptions)},
        }
    }


def _predicate(column, value: Any):
    if isinstance(value, Mapping):
        if set(value) != {"in"}:
            raise InvalidFilterError(f"Unsupported operator(s): {sorted(value)}")
        return column.in_(list(value["in"]))
    if value is None:
        return column.is_(None)
    return column == value


def compile_where(filter_: Mapping) -> list:
    """Translate a filter into SQLAlchemy WHERE clauses."""
    where = filter_.get("where") or {}
    clauses = []
    for field, value in where.items():
        if field == "subscriptions":
            clauses.append(
                Installation.subscription_rows.any(
                    _predicate(InstallationSubscription.topic, value)
                )
            )
        elif field in FIELD_COLUMNS:
            clauses.append(_predicate(FIELD_COLUMNS[field], value))
        else:
            raise InvalidFilterError(f"Unknown installation field: {field}")
    return clauses
