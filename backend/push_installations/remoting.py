"""Declarations that expose installation finders over HTTP.

Each finder is described by a ``RemoteMethod``: what it does, the query
parameters it accepts, what it returns and which route serves it. The router
reads these declarations to register its GET endpoints.
"""
from dataclasses import dataclass
from typing import Optional, Tuple


@dataclass(frozen=True)
class RemoteParam:
    """A single argument accepted by a remote method."""
    arg: str
    description: str
    type: str = "string"
    source: str = "query"
    required: bool = True


@dataclass(frozen=True)
class RemoteReturn:
    """What a remote method returns. ``root`` means the value is the whole body."""
    arg: str = "data"
    type: str = "object"
    root: bool = True


@dataclass(frozen=True)
class HttpRoute:
    verb: str
    path: str


@dataclass(frozen=True)
class RemoteMethod:
    name: str
    description: str
    accepts: Tuple[RemoteParam, ...]
    returns: RemoteReturn
    http: HttpRoute
    shared: bool = True

    def param(self, arg: str) -> RemoteParam:
        """Look up an accepted parameter by argument name."""
        for remote_param in self.accepts:
            if remote_param.arg == arg:
                return remote_param
        raise KeyError(f"{self.name} does not accept {arg!r}")


def query_param(arg: str, description: str, required: bool = True) -> RemoteParam:
    """A string argument read from the query string."""
    return RemoteParam(arg=arg, description=description, required=required)


def remote_method(
    name: str,
    description: str,
    accepts: Tuple[RemoteParam, ...],
    path: str,
    verb: str = "get",
    returns: Optional[RemoteReturn] = None,
) -> RemoteMethod:
    """Assemble the declaration for one externally invocable method."""
    return RemoteMethod(
        name=name,
        description=description,
        accepts=tuple(accepts),
        returns=returns or RemoteReturn(),
        http=HttpRoute(verb=verb, path=path),
    )


DEVICE_TYPE = query_param("deviceType", "Device type")

FIND_BY_APP = remote_method(
    "find_by_app",
    "Find installations by application id",
    accepts=(
        DEVICE_TYPE,
        query_param("appId", "Application id"),
        query_param("appVersion", "Application version", required=False),
    ),
    path="/byApp",
)

FIND_BY_USER = remote_method(
    "find_by_user",
    "Find installations by user id",
    accepts=(
        DEVICE_TYPE,
        query_param("userId", "User id"),
    ),
    path="/byUser",
)

FIND_BY_SUBSCRIPTIONS = remote_method(
    "find_by_subscriptions",
    "Find installations by subscriptions",
    accepts=(
        DEVICE_TYPE,
        query_param("subscriptions", "Subscriptions"),
    ),
    path="/bySubscriptions",
)

REMOTE_METHODS = (FIND_BY_APP, FIND_BY_USER, FIND_BY_SUBSCRIPTIONS)
