"""Services Layer — the record manager orchestrating core policy around IO.

Invariants:
    - Services depend on Protocols, never on concrete infrastructure
"""
