"""
Identifier Normalization for the Credits Gateway.

Client applications send the (user, project) pair under several naming
conventions depending on which generation of the parent contract they were
built against:
- snake_case: ``user_id`` / ``project_id``
- camelCase: ``userId`` / ``projectId``
- the short ``uid`` for users

This module resolves those aliases into a single canonical Identity. It
checks syntactic presence only; authorization is the parent service's job.
"""

from typing import Any, Mapping, Optional, Sequence, Tuple

from src.domain.entities import Identity
from src.domain.exceptions import MissingIdentifierException

USER_ID_ALIASES: Tuple[str, ...] = ("user_id", "userId", "uid")
PROJECT_ID_ALIASES: Tuple[str, ...] = ("project_id", "projectId")


def _clean(value: Any) -> Optional[str]:
    """Trimmed string form of an identifier value, or None if unusable."""
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, str)):
        text = str(value).strip()
        return text or None
    return None


def resolve_identifier(
    sources: Sequence[Optional[Mapping[str, Any]]],
    aliases: Sequence[str],
) -> Optional[str]:
    """
    Find the first usable value for an identifier.

    Algorithm:
        Sources are consulted in the order given. Within a source, aliases
        are tried in order. The first non-empty trimmed value wins and
        every later alias or source is ignored.

    Args:
        sources: Mappings such as query parameters or a JSON body; None
            entries and non-mappings are skipped
        aliases: Accepted keys, highest precedence first

    Returns:
        The canonical identifier, or None if no alias carries a value
    """
    for source in sources:
        if not isinstance(source, Mapping):
            continue
        for alias in aliases:
            value = _clean(source.get(alias))
            if value is not None:
                return value
    return None


def resolve_project_id(*sources: Optional[Mapping[str, Any]]) -> str:
    """
    Resolve only the project identifier.

    Used by read-only display contexts where the user is optional.

    Raises:
        MissingIdentifierException: If no project alias carries a value
    """
    project_id = resolve_identifier(sources, PROJECT_ID_ALIASES)
    if project_id is None:
        raise MissingIdentifierException(["project_id"])
    return project_id


def resolve_user_id(*sources: Optional[Mapping[str, Any]]) -> Optional[str]:
    """Resolve the user identifier if one is present."""
    return resolve_identifier(sources, USER_ID_ALIASES)


def normalize(*sources: Optional[Mapping[str, Any]]) -> Identity:
    """
    Extract the canonical Identity from heterogeneous inputs.

    Example:
        >>> normalize({"uid": " u1 "}, {"projectId": "p1"})
        Identity(user_id='u1', project_id='p1')

    Raises:
        MissingIdentifierException: Naming every field that is missing
    """
    user_id = resolve_identifier(sources, USER_ID_ALIASES)
    project_id = resolve_identifier(sources, PROJECT_ID_ALIASES)

    missing = []
    if user_id is None:
        missing.append("user_id")
    if project_id is None:
        missing.append("project_id")
    if missing:
        raise MissingIdentifierException(missing)

    return Identity(user_id=user_id, project_id=project_id)
