# =============================================================================
# app/auth/models.py - Authentication Models
# =============================================================================

from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict


class AuthUser(BaseModel):
    """
    Authenticated user extracted from a Supabase JWT.

    Only what the token itself carries; profile data lives in the
    profiles table.
    """
    model_config = ConfigDict(frozen=True)

    id: UUID
    email: Optional[str] = None
