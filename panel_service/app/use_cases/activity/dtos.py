"""
Activity Log DTOs

Validation schema for new activity records and the listing payloads.
"""

import json
from typing import Any, Dict, List, Optional
from uuid import UUID

from pydantic import BaseModel, Field, field_validator


class RecordActivityCommand(BaseModel):
    """
    Validated attributes of a new activity record.

    Unknown keys (including any caller-supplied timestamp) are dropped; the
    store assigns the timestamp itself.
    """

    event: str = Field(..., min_length=1, max_length=255)
    ip: str = Field(..., min_length=1, max_length=45)
    description: Optional[str] = None
    batch: Optional[UUID] = None
    api_key_id: Optional[UUID] = None
    properties: Optional[Dict[str, Any]] = None

    @field_validator("properties")
    @classmethod
    def properties_must_be_json(cls, value: Optional[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
        if value is None:
            return value
        try:
            return json.loads(json.dumps(value))
        except (TypeError, ValueError) as e:
            raise ValueError(f"properties must be a JSON document: {e}")


class SubjectInfo(BaseModel):
    type: str
    id: str


class ActivityEntry(BaseModel):
    """Single activity record in a display listing"""

    id: str
    batch: Optional[str]
    event: str
    ip: str
    description: Optional[str]
    properties: Dict[str, Any]
    timestamp: str
    subjects: List[SubjectInfo]
    summary: str


class ActivityListResponse(BaseModel):
    """Display listing page"""

    data: List[ActivityEntry]
    next_cursor: Optional[str]
