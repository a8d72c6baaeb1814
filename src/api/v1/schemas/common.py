"""Common Pydantic schemas shared across the API."""

from pydantic import BaseModel


class MessageResponse(BaseModel):
    """Confirmation body for deletes."""

    message: str
