"""
Scheme Search Agent — Pydantic Models for Scheme Search
"""

from datetime import date, datetime, timezone
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.utils.security import sanitize_input


def utc_today() -> date:
    """Calendar date in UTC, used to stamp scraped records."""
    return datetime.now(timezone.utc).date()


class UserCriteria(BaseModel):
    """Citizen attributes that narrow the search."""
    profession: Optional[str] = None
    state: Optional[str] = None
    income: Optional[float] = Field(default=None, description="Annual income ceiling")

    @field_validator("profession", "state", mode="before")
    @classmethod
    def _clean_text(cls, value):
        if isinstance(value, str):
            return sanitize_input(value)
        return value


class SchemeSearchRequest(BaseModel):
    """Body of POST /get-schemes. Every field is optional, at least one must be set."""
    category: Optional[str] = None
    user: Optional[UserCriteria] = None

    @field_validator("category", mode="before")
    @classmethod
    def _clean_category(cls, value):
        if isinstance(value, str):
            return sanitize_input(value)
        return value


class SchemeRecord(BaseModel):
    """One result card scraped from the search page."""
    model_config = ConfigDict(populate_by_name=True)

    name: str = "No title"
    benefit: str = "No description"
    url: str = ""
    last_updated: date = Field(default_factory=utc_today, alias="lastUpdated")


class SchemeSearchResponse(BaseModel):
    count: int
    query: str
    results: list[SchemeRecord]


class NotFoundResponse(BaseModel):
    message: str
    suggestion: str


class ErrorResponse(BaseModel):
    error: str
    details: Optional[str] = None
    suggestion: Optional[str] = None
