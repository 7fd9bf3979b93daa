"""ORM models. Importing this package registers every table with Base.metadata."""

from trazure.models.user import User
from trazure.models.footprint import Footprint

__all__ = ["User", "Footprint"]
