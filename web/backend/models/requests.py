#!/usr/bin/env python3
"""
Request models for API endpoints.
"""

from pydantic import BaseModel, Field, field_validator


class MatchRequest(BaseModel):
    """Project description sent to the conversational matcher."""
    query: str = Field(..., min_length=1, max_length=4000, description="Free-text project description")

    @field_validator("query", mode="before")
    @classmethod
    def strip_query(cls, value):
        if isinstance(value, str):
            return value.strip()
        return value


class SignInRequest(BaseModel):
    """Email and password sign-in."""
    email: str = Field(..., min_length=3, max_length=320)
    password: str = Field(..., min_length=1, max_length=1024)
