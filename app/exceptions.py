"""Exceptions raised inside the message pipeline.

None of these reach the messaging channel: the orchestrator converts each of
them into a user-safe reply.
"""

from __future__ import annotations


class PipelineError(Exception):
    """Base class for pipeline errors."""


class InvalidArgumentError(PipelineError, ValueError):
    """A parameter could not be converted to the type a handler needs."""


class MessageValidationError(PipelineError):
    """The inbound message lacks a channel identity or a message type."""


class SessionStoreUnavailableError(PipelineError):
    """The session store could not load or create the conversation session."""


class CatalogUnavailableError(PipelineError):
    """The catalog API failed or returned an unusable payload."""
