"""
Person API — Person Service (Resource Handler)
===============================================

What:  Translates create/read/update/delete intents into person store calls.
How:   Resolves `id_or_name` once into a lookup key (ByIdentifier | ByName),
       dispatches to the matching store operation, and turns absence into
       NotFoundError and every other store failure into StoreError.
Who:   Called by the person route handlers; holds the store it was given.

Request Flow (read/update/delete):
    ┌────────────┐    ┌─────────────┐    ┌──────────────────┐
    │ id_or_name │───▶│ lookup_key  │───▶│ store.*_by_id    │──▶ document
    └────────────┘    └─────────────┘    │ store.*_one(name)│──▶ None → 404
                                         └──────────────────┘

Every operation performs exactly one store call. Update and delete are the
store's conditional mutations, never a read followed by a write.
"""

import logging
from typing import Any, Awaitable, Callable, Mapping, Optional

from person_api.exceptions import NotFoundError, StoreError
from person_api.identifiers import ByIdentifier, LookupKey, lookup_key
from person_api.services.store_base import Document, PersonStore

logger = logging.getLogger(__name__)

DELETED_MESSAGE = "Person deleted successfully"


class PersonService:
    """
    Resource handler for the Person resource.

    Responsibilities:
        - create_person(): insert a new document
        - get_person(): find by identifier or name
        - update_person(): conditional partial update by identifier or name
        - delete_person(): conditional delete by identifier or name

    Error Handling Strategy:
        Missing documents raise NotFoundError (→ 404). Any exception from the
        store is wrapped in StoreError carrying the original message (→ 500).
    """

    def __init__(self, store: PersonStore):
        self.store = store

    async def _call_store(
        self, operation: str, call: Callable[..., Awaitable[Any]], *args: Any
    ) -> Any:
        try:
            return await call(*args)
        except Exception as e:
            logger.error("Person store %s failed: %s", operation, str(e), exc_info=True)
            raise StoreError(
                message=str(e),
                context={"operation": operation, "error_type": type(e).__name__},
            ) from e

    async def _dispatch(
        self,
        operation: str,
        key: LookupKey,
        by_id: Callable[..., Awaitable[Optional[Document]]],
        by_name: Callable[..., Awaitable[Optional[Document]]],
        *extra: Any,
    ) -> Document:
        if isinstance(key, ByIdentifier):
            document = await self._call_store(operation, by_id, key.identifier, *extra)
            lookup = key.identifier
        else:
            document = await self._call_store(operation, by_name, "name", key.name, *extra)
            lookup = key.name

        if document is None:
            logger.info("Person not found for %s: %r", operation, lookup)
            raise NotFoundError(lookup=lookup, context={"operation": operation})
        return document

    async def create_person(self, name: Any = None, age: Any = None) -> Document:
        """
        Insert a new person. Absent values are stored as null.

        Raises:
            StoreError: the store rejected the document (e.g. a cast failure)
        """
        document = await self._call_store("create", self.store.insert, {"name": name, "age": age})
        logger.info("Person created: %s", document["_id"])
        return document

    async def get_person(self, id_or_name: str) -> Document:
        """Return the person matching `id_or_name` or raise NotFoundError."""
        key = lookup_key(id_or_name)
        return await self._dispatch("read", key, self.store.find_by_id, self.store.find_one)

    async def update_person(self, id_or_name: str, changes: Mapping[str, Any]) -> Document:
        """
        Apply `changes` to the person matching `id_or_name`.

        Only the keys present in `changes` are written; omitted fields keep
        their stored values. Returns the document after the update.
        """
        key = lookup_key(id_or_name)
        document = await self._dispatch(
            "update", key, self.store.update_by_id, self.store.update_one, dict(changes)
        )
        logger.info("Person updated: %s (%s)", document["_id"], ", ".join(sorted(changes)) or "no fields")
        return document

    async def delete_person(self, id_or_name: str) -> str:
        """Delete the person matching `id_or_name`; return the confirmation message."""
        key = lookup_key(id_or_name)
        document = await self._dispatch("delete", key, self.store.delete_by_id, self.store.delete_one)
        logger.info("Person deleted: %s", document["_id"])
        return DELETED_MESSAGE
