"""Exception hierarchy shared by the publication, assist and storage layers."""

from __future__ import annotations


class ResumeBuilderError(Exception):
    """Base class for errors surfaced to the user."""


class ExternalServiceError(ResumeBuilderError):
    """A collaborator (registrar, assist model, storage) failed.

    ``str(err)`` is the upstream message, kept verbatim so the UI can show it.
    """

    def __init__(self, service: str, message: str):
        super().__init__(message)
        self.service = service
        self.message = message


class PreconditionError(ResumeBuilderError):
    """An operation was attempted from a state that does not allow it."""


class PublishInProgressError(PreconditionError):
    """A publish is already running for this resume."""
