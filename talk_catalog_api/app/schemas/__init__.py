"""
Pydantic schema definitions for API payloads.

Accounts and talks each define their own request and response models.
Schemas are separated from the database layer to decouple the API
representation from persistence.
"""
