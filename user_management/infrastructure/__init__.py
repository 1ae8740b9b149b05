"""Infrastructure Layer — database access and cross-cutting concerns.

Invariants:
    - Infrastructure implements the protocols declared in core/
    - Every SQLAlchemy failure is mapped to StoreError before it leaves this layer
"""
