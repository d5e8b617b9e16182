from __future__ import annotations

from datetime import date, datetime
from typing import List, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Shared type for incoming due values which can be a date, datetime, or ISO8601 string
DueInput = Union[date, datetime, str]


def _parse_due(value: DueInput) -> datetime:
    """
    Internal helper to normalize due input into a datetime (naive or aware).
    - If value is a string, parse via datetime.fromisoformat; a bare date becomes 00:00.
    - If value is a date (not datetime), convert to datetime at 00:00.
    - If value is a datetime, return as-is.
    """
    if isinstance(value, datetime):
        return value

    if isinstance(value, date):
        return datetime(value.year, value.month, value.day, 0, 0, 0)

    if isinstance(value, str):
        s = value.strip()
        # fromisoformat only learned the trailing 'Z' in 3.11
        if s.endswith(("Z", "z")):
            s = s[:-1] + "+00:00"
        try:
            return datetime.fromisoformat(s)
        except ValueError:
            try:
                d = date.fromisoformat(s)
                return datetime(d.year, d.month, d.day, 0, 0, 0)
            except ValueError as e:
                raise ValueError(
                    "Invalid due format. Use ISO8601 date or datetime string (e.g., '2024-03-15' or '2024-03-15T13:45:00+02:00')."
                ) from e

    raise ValueError("Invalid type for due; expected date, datetime, or ISO8601 string.")


# PUBLIC_INTERFACE
class Attachment(BaseModel):
    """
    An attachment reference carried by a page. Stored verbatim.
    """

    model_config = ConfigDict(extra="forbid")

    name: str = Field(..., description="Display name of the attachment")
    url: str = Field(..., description="Location of the attachment content")


# PUBLIC_INTERFACE
class PageCreate(BaseModel):
    """
    Schema for creating a new page. Unknown fields are rejected.
    """

    model_config = ConfigDict(
        extra="forbid",
        json_schema_extra={
            "example": {
                "text": "Write the quarterly report",
                "tags": ["work", "reports"],
                "due": "2024-03-15T17:00:00+00:00",
                "attachments": [{"name": "draft.pdf", "url": "https://example.com/draft.pdf"}],
            }
        },
    )

    text: str = Field(..., description="Free-form page text")
    tags: List[str] = Field(default_factory=list, description="Ordered list of tags; duplicates allowed")
    due: datetime = Field(
        ...,
        description="Due date/time. Accepts ISO8601 date or datetime; dates are set to 00:00",
    )
    attachments: List[Attachment] = Field(default_factory=list, description="Attachment references")

    @field_validator("due", mode="before")
    @classmethod
    def parse_due(cls, v: DueInput) -> datetime:
        """
        Normalize due from str/date/datetime to datetime.
        """
        return _parse_due(v)


# PUBLIC_INTERFACE
class PageUpdate(BaseModel):
    """
    Schema for replacing an existing page. The whole record is overwritten,
    so every field is taken from the request.
    """

    model_config = ConfigDict(
        extra="forbid",
        json_schema_extra={
            "example": {
                "id": 0,
                "text": "Write and send the quarterly report",
                "tags": ["work"],
                "due": "2024-03-16T09:30:00+00:00",
                "attachments": [],
            }
        },
    )

    id: int = Field(..., ge=0, description="Identifier of the page to replace")
    text: str = Field(..., description="Free-form page text")
    tags: List[str] = Field(default_factory=list, description="Ordered list of tags; duplicates allowed")
    due: datetime = Field(
        ...,
        description="Due date/time. Accepts ISO8601 date or datetime; dates are set to 00:00",
    )
    attachments: List[Attachment] = Field(default_factory=list, description="Attachment references")

    @field_validator("due", mode="before")
    @classmethod
    def parse_due(cls, v: DueInput) -> datetime:
        return _parse_due(v)


# PUBLIC_INTERFACE
class PageCreated(BaseModel):
    """
    Response for a page creation: the id assigned by the store.
    """

    id: int = Field(..., description="Identifier assigned to the new page")


# PUBLIC_INTERFACE
class PageOut(BaseModel):
    """
    Schema returned by the API for a page.
    """

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "id": 0,
                "text": "Write the quarterly report",
                "tags": ["work", "reports"],
                "due": "2024-03-15T17:00:00Z",
                "attachments": [],
            }
        }
    )

    id: int = Field(..., description="Unique identifier of the page")
    text: str = Field(..., description="Free-form page text")
    tags: List[str] = Field(..., description="Ordered list of tags")
    due: datetime = Field(..., description="Due date/time as an ISO8601 datetime")
    attachments: List[Attachment] = Field(default_factory=list, description="Attachment references")
