"""Database layer for Carteira."""

from carteira.db.repository import PriceCacheRepository
from carteira.db.schema import create_schema

__all__ = ["PriceCacheRepository", "create_schema"]
