"""API key test result model."""

from pydantic import BaseModel


class KeyTestResult(BaseModel):
    """Outcome of checking an API key against its provider."""

    valid: bool
    error: str | None = None
