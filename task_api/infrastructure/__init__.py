"""Infrastructure Layer — database access and cross-cutting concerns.

Invariants:
    - Infrastructure implements the protocols declared in core/
    - All store failures surface as DatabaseError
"""
