from pydantic import BaseModel


class InfoResponse(BaseModel):
    """Informational success message"""
    info: str


class ErrorResponse(BaseModel):
    err: str
