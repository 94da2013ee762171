"""Generic repository interface (Dependency Inversion Principle).

Provides ``IRepository[T, D]``, the base abstract class that domain
repository interfaces extend.  Service-layer code depends on this
abstraction, never on Django ORM directly.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Generic, Optional, TypeVar

from modules.core.pagination import Page, PageRequest
from modules.core.result import Result

T = TypeVar("T")
D = TypeVar("D")


class IRepository(ABC, Generic[T, D]):
    """Base generic repository contract.

    ``T`` is the stored entity, ``D`` the validated field data used to
    create or overwrite it.  Keys are store-assigned integers.
    """

    @abstractmethod
    def get_by_key(self, key: int) -> Optional[T]:
        """Retrieve an entity by its key, or ``None``."""

    @abstractmethod
    def list(self, page_request: PageRequest) -> Page[T]:
        """Return one page of entities plus the total count."""

    @abstractmethod
    def create(self, data: D) -> T:
        """Persist a new entity and assign its key."""

    @abstractmethod
    def update(self, key: int, data: D) -> Result[T]:
        """Overwrite every mutable field; ``Err(NOT_FOUND)`` on a miss."""

    @abstractmethod
    def delete(self, key: int) -> Result[None]:
        """Remove an entity; ``Err(NOT_FOUND)`` on a miss."""
