"""Infrastructure Layer — collaborator implementations and cross-cutting concerns.

Invariants:
    - Implements the Protocols in core/repository_protocols.py
    - Driver/library errors mapped or re-raised here, never swallowed
"""
