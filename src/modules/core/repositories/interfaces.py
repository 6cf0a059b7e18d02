"""Generic repository interface (Dependency Inversion Principle).

Provides ``IRepository[T]``, the single capability contract that every
entity-specific repository extends.  Customer, product and order
repositories share ``get_by_id`` / ``insert`` / ``update`` / ``delete`` /
``list`` instead of re-declaring them per entity.  Service-layer code
depends on these abstractions, never on Django ORM directly.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Dict, Generic, List, Optional, TypeVar

T = TypeVar("T")


class IRepository(ABC, Generic[T]):
    """Base generic repository contract.

    Type parameter ``T`` represents the entity managed by the
    repository (e.g. ``Customer``, ``Product``, ``Order``).
    """

    @abstractmethod
    def get_by_id(self, id: int) -> Optional[T]:
        """Retrieve an entity by its primary key, or ``None``."""

    @abstractmethod
    def insert(self, data: Dict[str, Any]) -> T:
        """Create an entity from a mapping of field values."""

    @abstractmethod
    def update(self, id: int, data: Dict[str, Any]) -> Optional[T]:
        """Update fields of an entity; ``None`` if it does not exist."""

    @abstractmethod
    def delete(self, id: int) -> bool:
        """Remove an entity by ID; ``False`` if it did not exist."""

    @abstractmethod
    def list(self, filters: Optional[Dict[str, Any]] = None) -> List[T]:
        """List entities with optional filters."""
