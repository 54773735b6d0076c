"""Data models for the collaborator roster.

The models are implemented using :mod:`pydantic` so that they provide
runtime validation and convenient serialisation to and from the camelCase
dictionaries exchanged with the submission API. Python code uses the
snake_case field names; the wire names are declared as aliases.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class Permission(str, Enum):
    """Access level a collaborator holds on a submission."""

    CAN_VIEW = "Can View"
    CAN_EDIT = "Can Edit"
    NO_ACCESS = "No Access"


DEFAULT_PERMISSION = Permission.CAN_EDIT


def format_name(first_name: str | None, last_name: str | None) -> str:
    """Join the non-empty parts of a person's name with a single space."""
    parts = [p.strip() for p in (first_name, last_name) if p and p.strip()]
    return " ".join(parts)


class _WireModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class Organization(_WireModel):
    """Denormalized reference to the organization a person belongs to."""

    org_id: str | None = Field(default=None, alias="orgID")
    org_name: str | None = Field(default=None, alias="orgName")


class CollaboratorEntry(_WireModel):
    """A single row of the collaborator roster.

    Attributes
    ----------
    collaborator_id:
        Identifier of the person. An empty string marks a placeholder row
        that has not been assigned yet.
    collaborator_name:
        Display name copied from the directory, if known.
    organization:
        Organization copied from the directory, if known.
    permission:
        Access level. ``None`` means no permission has been chosen and the
        row will not be committed.

    """

    collaborator_id: str = Field(default="", alias="collaboratorID")
    collaborator_name: str | None = Field(default=None, alias="collaboratorName")
    organization: Organization | None = Field(default=None, alias="Organization")
    permission: Permission | None = DEFAULT_PERMISSION

    @classmethod
    def placeholder(cls) -> CollaboratorEntry:
        """Return a fresh unassigned row with the default permission."""
        return cls(collaborator_id="", permission=DEFAULT_PERMISSION)

    @property
    def is_placeholder(self) -> bool:
        return not self.collaborator_id


class CandidateEntry(_WireModel):
    """A person the directory reports as eligible to be added."""

    id: str
    display_name: str | None = Field(default=None, alias="displayName")
    organization: Organization | None = None

    @classmethod
    def from_user(cls, user: dict[str, Any]) -> CandidateEntry:
        """Build a candidate from a directory user record."""
        org = user.get("organization")
        return cls(
            id=str(user.get("_id") or ""),
            display_name=format_name(user.get("firstName"), user.get("lastName")),
            organization=Organization.model_validate(org) if org else None,
        )

    def to_entry(self, permission: Permission | None = None) -> CollaboratorEntry:
        """Convert to a roster row carrying this candidate's identity."""
        return CollaboratorEntry(
            collaborator_id=self.id,
            collaborator_name=self.display_name,
            organization=self.organization,
            permission=permission,
        )


class CollaboratorInput(_WireModel):
    """Partial update applied to a roster row, also the commit payload item."""

    collaborator_id: str | None = Field(default=None, alias="collaboratorID")
    permission: Permission | None = None

    @property
    def is_empty(self) -> bool:
        return not self.collaborator_id and not self.permission

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, mode="json")


class Record(_WireModel):
    """The submission a roster belongs to, with its committed collaborators."""

    record_id: str = Field(alias="_id")
    collaborators: list[CollaboratorEntry] = Field(default_factory=list)


class CommitResult(_WireModel):
    """Server-confirmed roster returned after a successful commit."""

    collaborators: list[CollaboratorEntry] = Field(default_factory=list)
