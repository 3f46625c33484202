"""
Upstream adapter table.

The parent service has changed its contract over time: identifiers have been
accepted as camelCase, snake_case or both, and some deployments expose the
balance under ``/balance-read``. Every such variation lives in this table
instead of in the handlers, so supporting a new variant is a one-line edit
or an ``UPSTREAM_PATH_OVERRIDES`` setting.
"""

from dataclasses import dataclass, field, replace
from typing import Any, Dict, Mapping, Optional, Tuple

from src.domain.interfaces import UpstreamOperation, UpstreamRequest


@dataclass(frozen=True)
class UpstreamRoute:
    """How one operation is addressed on the parent service."""

    method: str
    path: str
    identifier_casings: Tuple[str, ...] = ("camel",)
    extra_query: Dict[str, str] = field(default_factory=dict)


UPSTREAM_ROUTES: Dict[UpstreamOperation, UpstreamRoute] = {
    UpstreamOperation.BALANCE: UpstreamRoute("GET", "/api/credits/balance"),
    UpstreamOperation.CHECKOUT: UpstreamRoute(
        "POST", "/api/credits/checkout", identifier_casings=("snake", "camel")
    ),
    UpstreamOperation.CHECK_AND_DEBIT: UpstreamRoute(
        "POST", "/api/credits/check-and-debit", identifier_casings=("camel", "snake")
    ),
    UpstreamOperation.TRANSACTIONS: UpstreamRoute(
        "GET", "/api/credits/transactions", extra_query={"all": "true"}
    ),
}

_CASING_KEYS = {
    "camel": ("userId", "projectId"),
    "snake": ("user_id", "project_id"),
}


def render_identifiers(
    user_id: Optional[str],
    project_id: Optional[str],
    casings: Tuple[str, ...],
) -> Dict[str, str]:
    """
    Render identifiers under each requested naming convention.

    Absent identifiers are omitted rather than sent empty.
    """
    params: Dict[str, str] = {}
    for casing in casings:
        try:
            user_key, project_key = _CASING_KEYS[casing]
        except KeyError:
            raise ValueError(f"Unknown identifier casing: {casing}")
        if user_id is not None:
            params[user_key] = user_id
        if project_id is not None:
            params[project_key] = project_id
    return params


class UpstreamAdapter:
    """
    Builds UpstreamRequests from the route table.

    Args:
        path_overrides: Operation name to path, replacing the table default
    """

    def __init__(
        self,
        path_overrides: Optional[Mapping[str, str]] = None,
        routes: Optional[Mapping[UpstreamOperation, UpstreamRoute]] = None,
    ):
        self._routes = dict(routes or UPSTREAM_ROUTES)
        for name, path in (path_overrides or {}).items():
            operation = UpstreamOperation(name)
            if not path.startswith("/"):
                path = "/" + path
            self._routes[operation] = replace(self._routes[operation], path=path)

    def route(self, operation: UpstreamOperation) -> UpstreamRoute:
        return self._routes[operation]

    def build(
        self,
        operation: UpstreamOperation,
        *,
        user_id: Optional[str] = None,
        project_id: Optional[str] = None,
        payload: Optional[Dict[str, Any]] = None,
        inbound_headers: Optional[Mapping[str, str]] = None,
        diagnostics: Optional[Dict[str, str]] = None,
    ) -> UpstreamRequest:
        """
        Build the request for ``operation``.

        Identifiers travel in the query string for GET routes and in the
        JSON body otherwise.
        """
        route = self._routes[operation]
        identifiers = render_identifiers(user_id, project_id, route.identifier_casings)

        if route.method == "GET":
            query = {**identifiers, **route.extra_query}
            body = None
        else:
            query = dict(route.extra_query)
            body = {**identifiers, **(payload or {})}

        return UpstreamRequest(
            operation=operation.value,
            method=route.method,
            path=route.path,
            query=query,
            json_body=body,
            inbound_headers=dict(inbound_headers or {}),
            diagnostics=dict(diagnostics or {}),
        )
