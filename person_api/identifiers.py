"""
Person API — Record Identifiers and Lookup Keys
================================================

What:  Generates person identifiers and turns a caller-supplied `id_or_name`
       path segment into an explicit lookup key.
How:   Identifiers are 24 lowercase hex characters:

           ┌──────────────┬──────────────────┬─────────────┐
           │ 4B timestamp │ 5B process random│ 3B counter  │
           └──────────────┴──────────────────┴─────────────┘

       The timestamp leads, so identifiers created by one process sort in
       creation order. Lookup resolution is purely syntactic: a string with
       the identifier shape becomes `ByIdentifier`, anything else `ByName`.
"""

import os
import random
import re
import threading
import time
from dataclasses import dataclass
from typing import Union

IDENTIFIER_LENGTH = 24

_IDENTIFIER_RE = re.compile(r"[0-9a-fA-F]{24}")

_PROCESS_UNIQUE = os.urandom(5)
_counter = random.randint(0, 0xFFFFFF)
_counter_lock = threading.Lock()


def new_identifier() -> str:
    """Return a fresh, never-reused record identifier."""
    global _counter
    with _counter_lock:
        _counter = (_counter + 1) & 0xFFFFFF
        count = _counter
    timestamp = int(time.time()) & 0xFFFFFFFF
    raw = timestamp.to_bytes(4, "big") + _PROCESS_UNIQUE + count.to_bytes(3, "big")
    return raw.hex()


def is_valid_identifier(value: str) -> bool:
    """True when `value` has the shape of an identifier. Does not check existence."""
    return _IDENTIFIER_RE.fullmatch(value) is not None


@dataclass(frozen=True)
class ByIdentifier:
    """Target the record whose identifier equals `identifier`."""

    identifier: str


@dataclass(frozen=True)
class ByName:
    """Target the first record whose `name` equals `name` exactly."""

    name: str


LookupKey = Union[ByIdentifier, ByName]


def lookup_key(id_or_name: str) -> LookupKey:
    """
    Select the lookup variant for a path segment.

    A string shaped like an identifier always resolves by identifier, even
    when no such record exists; it never falls back to a name search.
    """
    if is_valid_identifier(id_or_name):
        return ByIdentifier(id_or_name.lower())
    return ByName(id_or_name)
