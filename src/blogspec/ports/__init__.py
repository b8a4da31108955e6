from .middleware import IMiddleware
from .repository import IGenericRepository, IWriteRepository
from .unit_of_work import UnitOfWork

__all__ = [
    "IGenericRepository",
    "IMiddleware",
    "IWriteRepository",
    "UnitOfWork",
]
