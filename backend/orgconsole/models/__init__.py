"""SQLAlchemy ORM models for the organization console."""

from orgconsole.models.base import Base
from orgconsole.models.period import Period
from orgconsole.models.management import Management

__all__ = [
    "Base",
    "Period",
    "Management",
]
