"""Base error for collaborator failures."""

from __future__ import annotations


class CollaboratorError(Exception):
    """A collaborator could not complete a call.

    Collaborator errors are always transient from the agent's point of view:
    the agent stays in its current phase and retries on a later step.
    """

    pass
