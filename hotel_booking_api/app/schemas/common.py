"""Response envelopes shared by the mutating endpoints."""

from pydantic import BaseModel


class ActionResult(BaseModel):
    success: bool = True
    message: str
