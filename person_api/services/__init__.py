# Services package init
"""
Person API — Services Layer
============================

Service Inventory:
    - PersonStore (abstract): document-style contract for the persons collection
    - SqlPersonStore: PersonStore on the async SQLAlchemy engine, with value casting
    - PersonService: id-or-name resolution, not-found and store-error translation
"""
