from .compiler import build_load_options, build_sqla_filter
from .database import Database, seed_demo_data
from .mapper import ModelMapper
from .models import Base, BlogModel, PostModel
from .operators import DEFAULT_SQLA_REGISTRY, build_default_sqla_registry
from .repository import SQLAlchemyRepository
from .strategy import SQLAlchemyOperator, SQLAlchemyOperatorRegistry
from .uow import SQLAlchemyUnitOfWork

__all__ = [
    "DEFAULT_SQLA_REGISTRY",
    "Base",
    "BlogModel",
    "Database",
    "ModelMapper",
    "PostModel",
    "SQLAlchemyOperator",
    "SQLAlchemyOperatorRegistry",
    "SQLAlchemyRepository",
    "SQLAlchemyUnitOfWork",
    "build_default_sqla_registry",
    "build_load_options",
    "build_sqla_filter",
    "seed_demo_data",
]
