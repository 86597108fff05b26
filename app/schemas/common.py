"""Shared lightweight schemas."""

from pydantic import BaseModel


class Message(BaseModel):
    """Plain message envelope for endpoints without a resource body (e.g. deletes)."""

    message: str
