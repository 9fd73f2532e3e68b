"""
Person API — Abstract Person Store Interface
=============================================

What:  Abstract base class defining the document-style contract the person
       service relies on.
How:   Concrete stores inherit from PersonStore and implement every method.
       Documents are plain dicts shaped `{"_id": str, "name": ..., "age": ...}`.
Who:   Called by PersonService; implemented by SqlPersonStore.

Contract:
    - Every operation touches at most one document.
    - Absence is reported by returning None, never by raising.
    - `*_one` operations target the first document (in identifier order)
      whose `field` equals `value`.
    - Updates apply only the keys present in `changes` and return the
      document as it is after the update.
    - Deletes return the removed document.
    - Anything else (cast errors, lost connections, constraint violations)
      is raised to the caller.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Mapping, Optional

Document = Dict[str, Any]


class PersonStore(ABC):
    """Document-oriented access to the persons collection."""

    @abstractmethod
    async def insert(self, fields: Mapping[str, Any]) -> Document:
        """Insert a new document with a fresh identifier and return it."""
        ...

    @abstractmethod
    async def find_by_id(self, identifier: str) -> Optional[Document]:
        ...

    @abstractmethod
    async def find_one(self, field: str, value: Any) -> Optional[Document]:
        ...

    @abstractmethod
    async def update_by_id(
        self, identifier: str, changes: Mapping[str, Any]
    ) -> Optional[Document]:
        ...

    @abstractmethod
    async def update_one(
        self, field: str, value: Any, changes: Mapping[str, Any]
    ) -> Optional[Document]:
        ...

    @abstractmethod
    async def delete_by_id(self, identifier: str) -> Optional[Document]:
        ...

    @abstractmethod
    async def delete_one(self, field: str, value: Any) -> Optional[Document]:
        ...
