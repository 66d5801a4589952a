"""
Boundary layer for external system integrations.

Handles interactions with infrastructure: the relational record store and
the credential primitives (password hashing, bearer tokens).
"""
