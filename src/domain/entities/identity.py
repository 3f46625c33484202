"""Identity value object scoping every credit operation."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Identity:
    """
    The (user, project) pair a credit operation applies to.

    Both parts are trimmed and non-empty. Partial identities are never
    constructed; the normalizer fails instead.
    """

    user_id: str
    project_id: str
