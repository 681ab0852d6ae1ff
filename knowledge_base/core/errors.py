"""
Error kinds raised by the knowledge base.

Lookup misses inside the stores are returned as None rather than raised;
NotFound exists for callers that want to turn a miss into an exception.
"""


class KnowledgeBaseError(Exception):
    """Base class for all knowledge base errors."""


class ValidationFailure(KnowledgeBaseError, ValueError):
    """Input rejected by an entity factory or updater before any store mutation."""


class NotFound(KnowledgeBaseError, LookupError):
    """An entity id did not resolve to a stored entity."""


class AuthenticationError(KnowledgeBaseError):
    """Credentials or tokens were missing, wrong or expired."""
