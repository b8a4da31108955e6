from .exceptions import (
    BlogSpecError,
    ConfigurationError,
    DomainError,
    EntityNotFoundError,
    HandlerError,
    HandlerNotFoundError,
    HandlerRegistrationError,
    InfrastructureError,
    NotFoundError,
    PersistenceError,
    RepositoryError,
    SessionManagementError,
    StorageUnavailableError,
    UnitOfWorkError,
)

__all__ = [
    "BlogSpecError",
    "ConfigurationError",
    "DomainError",
    "EntityNotFoundError",
    "HandlerError",
    "HandlerNotFoundError",
    "HandlerRegistrationError",
    "InfrastructureError",
    "NotFoundError",
    "PersistenceError",
    "RepositoryError",
    "SessionManagementError",
    "StorageUnavailableError",
    "UnitOfWorkError",
]
