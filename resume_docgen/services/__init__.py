"""Services Layer — template resolution, document assembly, response composition.

Invariants:
    - Services are request-scoped: no module-level mutable state
    - Failures raise DocGenError subclasses; HTTP mapping lives in api/
"""
