"""Error response schemas.

Every error response uses the same envelope: {"error": {"code": "...", "message": "..."}}.
Both the exception handlers in main.py and the range renderer build it.
"""

from pydantic import BaseModel


class ErrorDetail(BaseModel):
    """Machine-readable code plus a human-readable message."""

    code: str
    message: str


class ErrorResponse(BaseModel):
    """Top-level error envelope."""

    error: ErrorDetail

    @classmethod
    def of(cls, code: str, message: str) -> dict[str, object]:
        """Build the envelope as a JSON-ready dict."""
        return cls(error=ErrorDetail(code=code, message=message)).model_dump()
