"""GraphQL adapter for the submission API.

The adapter implements both :class:`~roster_bot.adapters.base.DirectoryAdapter`
and :class:`~roster_bot.adapters.base.CommitAdapter` on top of a single
:class:`httpx.AsyncClient`, and can also fetch a submission's committed
collaborators so they can be put into the record cache.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

import httpx
from pydantic import ValidationError

from ..core.models import (
    CandidateEntry,
    CollaboratorInput,
    CommitResult,
    Record,
)
from .base import (
    AdapterError,
    CommitAdapter,
    CommitError,
    DirectoryAdapter,
    DirectoryError,
    RecordError,
)

LIST_POTENTIAL_COLLABORATORS = """
query listPotentialCollaborators($submissionID: String!) {
  listPotentialCollaborators(submissionID: $submissionID) {
    _id
    firstName
    lastName
    organization {
      orgID
      orgName
    }
  }
}
"""

EDIT_SUBMISSION_COLLABORATORS = """
mutation editSubmissionCollaborators(
  $submissionID: ID!
  $collaborators: [CollaboratorInput]
) {
  editSubmissionCollaborators(
    submissionID: $submissionID
    collaborators: $collaborators
  ) {
    _id
    collaborators {
      collaboratorID
      collaboratorName
      permission
    }
  }
}
"""

GET_SUBMISSION = """
query getSubmission($id: ID!) {
  getSubmission(_id: $id) {
    _id
    collaborators {
      collaboratorID
      collaboratorName
      permission
    }
  }
}
"""


class GraphQLAdapter(DirectoryAdapter, CommitAdapter):
    """Talks to the submission API's GraphQL endpoint."""

    def __init__(
        self,
        url: str,
        token: str = "",
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """Store the endpoint ``url``, bearer ``token`` and optional ``client``."""
        self.url = url
        self.token = token
        self.client = client or httpx.AsyncClient()

    # ------------------------------------------------------------------
    async def _execute(
        self,
        query: str,
        variables: dict[str, Any],
        error: type[AdapterError],
    ) -> dict[str, Any]:
        headers = {"Authorization": f"Bearer {self.token}"} if self.token else {}
        payload = {"query": query, "variables": variables}
        try:
            response = await self.client.post(self.url, json=payload, headers=headers)
            response.raise_for_status()
            body = response.json()
        except (httpx.HTTPError, ValueError) as exc:
            raise error(str(exc)) from exc
        if not isinstance(body, dict):
            raise error("Unexpected response from collaborator API")
        errors = body.get("errors")
        if errors:
            if not isinstance(errors, list):
                errors = [errors]
            messages = "; ".join(
                str(e.get("message", e)) if isinstance(e, dict) else str(e)
                for e in errors
                if e
            )
            raise error(messages or "Unknown GraphQL error")
        return body.get("data") or {}

    # ------------------------------------------------------------------
    async def fetch_candidates(self, record_id: str) -> list[CandidateEntry] | None:
        """Return the people who may be added to submission ``record_id``."""
        data = await self._execute(
            LIST_POTENTIAL_COLLABORATORS,
            {"submissionID": record_id},
            DirectoryError,
        )
        users = data.get("listPotentialCollaborators")
        if users is None:
            return None
        try:
            return [CandidateEntry.from_user(user) for user in users if user]
        except ValidationError as exc:
            raise DirectoryError(str(exc)) from exc

    async def commit(
        self, record_id: str, entries: Sequence[CollaboratorInput]
    ) -> CommitResult | None:
        """Replace the collaborators of submission ``record_id``.

        Returns ``None`` when the API answers without a payload.
        """
        data = await self._execute(
            EDIT_SUBMISSION_COLLABORATORS,
            {
                "submissionID": record_id,
                "collaborators": [e.to_payload() for e in entries],
            },
            CommitError,
        )
        result = data.get("editSubmissionCollaborators")
        if not result:
            return None
        try:
            return CommitResult.model_validate(
                {"collaborators": result.get("collaborators") or []}
            )
        except ValidationError as exc:
            raise CommitError(str(exc)) from exc

    async def fetch_record(self, record_id: str) -> Record | None:
        """Load submission ``record_id`` with its committed collaborators."""
        data = await self._execute(GET_SUBMISSION, {"id": record_id}, RecordError)
        submission = data.get("getSubmission")
        if not submission:
            return None
        try:
            return Record.model_validate(
                {
                    "_id": submission.get("_id") or record_id,
                    "collaborators": submission.get("collaborators") or [],
                }
            )
        except ValidationError as exc:
            raise RecordError(str(exc)) from exc

    async def close(self) -> None:
        """Close the underlying :class:`httpx.AsyncClient`."""
        await self.client.aclose()
