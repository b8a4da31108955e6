"""Domain and infrastructure exceptions for blogspec."""

from __future__ import annotations


class BlogSpecError(Exception):
    """Root exception for the entire blogspec package."""


class ConfigurationError(BlogSpecError):
    """Raised when application configuration cannot be parsed."""


class DomainError(BlogSpecError):
    """Base class for all domain-related errors."""


class NotFoundError(DomainError):
    """Raised when an entity or resource is not found."""


class EntityNotFoundError(NotFoundError):
    """Raised when a specific entity cannot be found by ID."""

    def __init__(self, entity_type: str, entity_id: object) -> None:
        self.entity_type = entity_type
        self.entity_id = entity_id
        super().__init__(f"{entity_type} with id={entity_id!r} not found")


class InfrastructureError(BlogSpecError):
    """Base class for all infrastructure-related errors."""


class PersistenceError(InfrastructureError):
    """Base class for all persistence-related errors."""


class StorageUnavailableError(PersistenceError):
    """Raised when the store cannot be reached (connection or transport failure).

    Surfaced to the caller unchanged; nothing at this layer retries.
    """


class RepositoryError(PersistenceError):
    """Raised when a repository operation fails for a non-transport reason."""


class SessionManagementError(PersistenceError):
    """Raised when session creation or management fails."""


class UnitOfWorkError(PersistenceError):
    """Raised when Unit of Work operations fail."""


class HandlerError(BlogSpecError):
    """Base class for all handler related errors (registration, lookup)."""


class HandlerRegistrationError(HandlerError):
    """Raised when a second handler is registered for the same message type."""


class HandlerNotFoundError(HandlerError):
    """Raised when no handler is registered for a dispatched message type."""

    def __init__(self, message_type: type) -> None:
        self.message_type = message_type
        super().__init__(f"No handler registered for {message_type.__name__}")
