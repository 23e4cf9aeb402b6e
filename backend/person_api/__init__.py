"""Person API Package — registration, lookup and ownership-checked mutation of persons.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)

Design Decisions:
    - Empty __init__.py: explicit imports only, no star exports
"""
