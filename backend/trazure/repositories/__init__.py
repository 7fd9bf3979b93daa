"""
Trazure Backend — Repositories
================================

One small class per entity, constructed around the request's AsyncSession.
Services build them; routes never touch them directly.
"""

from trazure.repositories.footprint_repository import FootprintRepository
from trazure.repositories.user_repository import UserRepository

__all__ = ["FootprintRepository", "UserRepository"]
