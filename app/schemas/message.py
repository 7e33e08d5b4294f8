"""Generic message body used for every error response."""

from pydantic import BaseModel


class MessageResponse(BaseModel):
    message: str
