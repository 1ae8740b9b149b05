"""Services Layer — orchestration of the pure core around IO boundaries.

Invariants:
    - Services receive their gateways through constructors (dependency injection)
    - No HTTP types (Request, Response, status codes) in this layer
"""
