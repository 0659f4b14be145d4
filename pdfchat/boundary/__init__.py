"""
Boundary layer for external system integrations.

Handles all interactions with external systems (database, blob storage,
vector store, model APIs).
"""
