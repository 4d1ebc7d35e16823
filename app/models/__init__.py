"""SQLAlchemy models package for the Óptica console.

Importing all models here ensures that SQLAlchemy's mapper registry is
populated before ``Base.metadata.create_all()`` runs.  The import order
follows the foreign-key dependency graph so that parent tables are always
registered before their children.

Usage from other modules:
    from app.models import Contract, Client
"""

# Leaf tables (no FK dependencies on other domain models)
from app.models.client import Client  # noqa: F401
from app.models.frame import Frame  # noqa: F401
from app.models.crystal import Crystal  # noqa: F401
from app.models.user import User  # noqa: F401

# Order chain
from app.models.contract import Contract  # noqa: F401
from app.models.task import Task  # noqa: F401

__all__ = [
    "Client",
    "Frame",
    "Crystal",
    "User",
    "Contract",
    "Task",
]
