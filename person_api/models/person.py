"""
Person API — Person SQLAlchemy Model
=====================================

What:  ORM model backing the `persons` collection.
How:   One row per person document. The store returns rows as
       `{"_id", "name", "age"}` dictionaries, never the ORM object.

Table Design:
    - id: 24-char hex identifier generated in Python (see identifiers.py);
      its timestamp prefix gives identifier order = creation order
    - name: free text, nullable, not unique; indexed for name lookups
    - age: floating-point number, nullable
"""

from sqlalchemy import Float, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from person_api.database import Base
from person_api.identifiers import IDENTIFIER_LENGTH, new_identifier


class Person(Base):
    """A person document: identifier, name and age."""

    __tablename__ = "persons"

    id: Mapped[str] = mapped_column(
        String(IDENTIFIER_LENGTH),
        primary_key=True,
        default=new_identifier,
        comment="Store-generated identifier, immutable, never reused",
    )

    name: Mapped[str | None] = mapped_column(
        Text,
        nullable=True,
        default=None,
        comment="Person name; lookups by name take the first match by id",
    )

    age: Mapped[float | None] = mapped_column(
        Float,
        nullable=True,
        default=None,
        comment="Person age",
    )

    __table_args__ = (
        Index("idx_persons_name", name),
    )

    def __repr__(self) -> str:
        return f"<Person(id={self.id}, name='{self.name}', age={self.age})>"
