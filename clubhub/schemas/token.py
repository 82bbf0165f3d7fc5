"""
Token schemas for JWT authentication.
"""

from typing import Optional

from pydantic import BaseModel


class TokenPayload(BaseModel):
    """Decoded bearer token claims."""

    id: str
    username: str
    role: str
    exp: Optional[int] = None
