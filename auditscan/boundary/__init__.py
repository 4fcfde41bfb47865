"""
Boundary layer for external system integrations.

Handles all interactions with infrastructure (the relational database).
"""
