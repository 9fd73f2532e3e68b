"""
Person API — SQLAlchemy Person Store
=====================================

What:  PersonStore implementation on top of the async SQLAlchemy engine.
How:   Each operation opens one session from the injected Database and runs
       a single statement:

           find_by_id / find_one       SELECT … LIMIT 1
           update_by_id / update_one   UPDATE … RETURNING
           delete_by_id / delete_one   DELETE … RETURNING

       By-field mutations pick their target with a first-match subquery
       inside the same statement, so match/no-match is reported atomically.

Value Casting:
    Incoming values are cast to the field types before they reach the
    database, the way a schema-typed document store does:

        name → string   (numbers/booleans stringified; lists/objects rejected)
        age  → number   (numeric strings parsed; "" → null; booleans → 1/0)

    A value that cannot be cast raises CastError.
"""

import logging
import math
from typing import Any, Callable, Dict, Mapping, Optional

from sqlalchemy import delete, select, update

from person_api.database import Database
from person_api.exceptions import CastError
from person_api.identifiers import new_identifier
from person_api.models.person import Person
from person_api.services.store_base import Document, PersonStore

logger = logging.getLogger(__name__)

persons = Person.__table__


# ══════════════════════════════════════════════════════════════════════════
# Field Casting
# ══════════════════════════════════════════════════════════════════════════

def cast_string(value: Any, path: str) -> Optional[str]:
    if value is None or isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float) and math.isfinite(value):
        return str(int(value)) if value.is_integer() else repr(value)
    raise CastError("string", value, path)


def cast_number(value: Any, path: str) -> Optional[float]:
    if value is None:
        return None
    if isinstance(value, bool):
        return 1 if value else 0
    if isinstance(value, (int, float)):
        if isinstance(value, float) and not math.isfinite(value):
            raise CastError("Number", value, path)
        return value
    if isinstance(value, str):
        stripped = value.strip()
        if not stripped:
            return None
        # float() accepts "1_000" and "inf"; neither is a number here
        if "_" in stripped:
            raise CastError("Number", value, path)
        try:
            number = float(stripped)
        except ValueError:
            raise CastError("Number", value, path) from None
        if not math.isfinite(number):
            raise CastError("Number", value, path)
        return number
    raise CastError("Number", value, path)


FIELD_CASTS: Dict[str, Callable[[Any, str], Any]] = {
    "name": cast_string,
    "age": cast_number,
}


def cast_fields(fields: Mapping[str, Any]) -> Dict[str, Any]:
    """Cast every supplied field; unknown fields are a programming error."""
    values = {}
    for field, value in fields.items():
        if field not in FIELD_CASTS:
            raise ValueError(f"Unknown person field '{field}'")
        values[field] = FIELD_CASTS[field](value, field)
    return values


def to_document(row: Any) -> Document:
    """Shape an ORM object or result row as a person document."""
    age = row.age
    if isinstance(age, float) and age.is_integer():
        age = int(age)
    return {"_id": row.id, "name": row.name, "age": age}


# ══════════════════════════════════════════════════════════════════════════
# Store
# ══════════════════════════════════════════════════════════════════════════

class SqlPersonStore(PersonStore):
    """Persons collection backed by the `persons` table."""

    def __init__(self, database: Database):
        self._db = database

    @staticmethod
    def _column(field: str):
        if field not in FIELD_CASTS:
            raise ValueError(f"Unknown person field '{field}'")
        return persons.c[field]

    @staticmethod
    def _first_match(field: str, value: Any):
        """Scalar subquery selecting the id of the first document with field == value."""
        candidate = persons.alias("candidate")
        return (
            select(candidate.c.id)
            .where(candidate.c[field] == value)
            .order_by(candidate.c.id)
            .limit(1)
            .scalar_subquery()
        )

    async def insert(self, fields: Mapping[str, Any]) -> Document:
        values = {"name": None, "age": None}
        values.update(cast_fields(fields))

        async with self._db.session() as session:
            person = Person(id=new_identifier(), **values)
            session.add(person)
            await session.flush()
            logger.debug("Inserted person %s", person.id)
            return to_document(person)

    async def find_by_id(self, identifier: str) -> Optional[Document]:
        async with self._db.session() as session:
            result = await session.execute(
                select(persons).where(persons.c.id == identifier)
            )
            row = result.first()
        return to_document(row) if row is not None else None

    async def find_one(self, field: str, value: Any) -> Optional[Document]:
        column = self._column(field)
        async with self._db.session() as session:
            result = await session.execute(
                select(persons).where(column == value).order_by(persons.c.id).limit(1)
            )
            row = result.first()
        return to_document(row) if row is not None else None

    async def update_by_id(
        self, identifier: str, changes: Mapping[str, Any]
    ) -> Optional[Document]:
        values = cast_fields(changes)
        if not values:
            return await self.find_by_id(identifier)
        return await self._update_where(persons.c.id == identifier, values)

    async def update_one(
        self, field: str, value: Any, changes: Mapping[str, Any]
    ) -> Optional[Document]:
        self._column(field)
        values = cast_fields(changes)
        if not values:
            return await self.find_one(field, value)
        return await self._update_where(
            persons.c.id == self._first_match(field, value), values
        )

    async def delete_by_id(self, identifier: str) -> Optional[Document]:
        return await self._delete_where(persons.c.id == identifier)

    async def delete_one(self, field: str, value: Any) -> Optional[Document]:
        self._column(field)
        return await self._delete_where(persons.c.id == self._first_match(field, value))

    async def _update_where(self, criterion, values: Dict[str, Any]) -> Optional[Document]:
        stmt = (
            update(persons)
            .where(criterion)
            .values(**values)
            .returning(persons.c.id, persons.c.name, persons.c.age)
        )
        async with self._db.session() as session:
            result = await session.execute(stmt)
            row = result.first()
        return to_document(row) if row is not None else None

    async def _delete_where(self, criterion) -> Optional[Document]:
        stmt = (
            delete(persons)
            .where(criterion)
            .returning(persons.c.id, persons.c.name, persons.c.age)
        )
        async with self._db.session() as session:
            result = await session.execute(stmt)
            row = result.first()
        return to_document(row) if row is not None else None
