"""
Composite identifiers.

A composite identifier lets external tooling reference a resource with a
single string: ``team_id/parent/key`` or, without a team, ``parent/key``.
Components are opaque; nothing here validates domains or record ids.
"""

from dataclasses import dataclass
from typing import Optional

from errors import InvalidIdentifierError

DELIMITER = "/"


@dataclass(frozen=True)
class CompositeID:
    """The components of a composite identifier."""

    team_id: Optional[str]
    parent: str
    key: str

    def __str__(self) -> str:
        return encode_id(self.team_id, self.parent, self.key)


def encode_id(team_id: Optional[str], parent: str, key: str) -> str:
    """Join the present components in order, omitting an absent team."""
    parts = [parent, key]
    if team_id:
        parts.insert(0, team_id)
    return DELIMITER.join(parts)


def accepted_formats(parent: str = "parent_id", key: str = "key") -> tuple:
    """Human-readable shapes accepted by decode_id, for error messages."""
    return (
        DELIMITER.join(["team_id", parent, key]),
        DELIMITER.join([parent, key]),
    )


def decode_id(value: str, parent: str = "parent_id", key: str = "key") -> CompositeID:
    """
    Split a composite identifier into its components.

    Args:
        value: The identifier, e.g. "team_a/prj_1/example.com".
        parent: Name of the parent component, used in the error message.
        key: Name of the key component, used in the error message.

    Returns:
        CompositeID with team_id None when no team component is present.

    Raises:
        InvalidIdentifierError: If the value has neither 2 nor 3 components.
    """
    parts = value.split(DELIMITER)
    if len(parts) == 2:
        return CompositeID(team_id=None, parent=parts[0], key=parts[1])
    if len(parts) == 3:
        # An empty team component means the default team
        return CompositeID(team_id=parts[0] or None, parent=parts[1], key=parts[2])
    raise InvalidIdentifierError(value, accepted_formats(parent, key))
