from .repository import InMemoryRepository
from .unit_of_work import InMemoryUnitOfWork

__all__ = ["InMemoryRepository", "InMemoryUnitOfWork"]
