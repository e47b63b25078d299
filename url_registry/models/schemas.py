from pydantic import BaseModel, Field, field_serializer
from datetime import datetime, timezone
from typing import Dict, Optional

class UrlPayload(BaseModel):
    """
    Body of create and update requests.

    name and mainUrl are optional at the schema level so that a missing
    field reaches the service's own required-field check instead of being
    rejected as a malformed body.
    """
    name: Optional[str] = Field(default=None, description="Display label")
    main_url: Optional[str] = Field(default=None, alias="mainUrl", description="The primary URL")
    sub_urls: Optional[Dict[str, str]] = Field(default=None, alias="subUrls", description="Labeled secondary URLs")

    class Config:
        populate_by_name = True

class UrlRecordOut(BaseModel):
    id: str = Field(..., description="The record ID")
    name: str = Field(..., description="Display label")
    main_url: str = Field(..., alias="mainUrl", description="The primary URL")
    sub_urls: Dict[str, str] = Field(default_factory=dict, alias="subUrls", description="Labeled secondary URLs")
    is_deleted: bool = Field(default=False, alias="isDeleted", description="The deleted status")
    deleted_at: Optional[datetime] = Field(default=None, alias="deletedAt", description="The deletion date")
    created_at: datetime = Field(..., alias="createdAt", description="The creation date")
    updated_at: datetime = Field(..., alias="updatedAt", description="The update date")

    class Config:
        from_attributes = True
        populate_by_name = True

    @field_serializer("deleted_at", "created_at", "updated_at")
    def serialize_utc(self, value: Optional[datetime]) -> Optional[str]:
        # Columns hold naive UTC; send the offset so clients don't assume local time
        if value is None:
            return None
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return value.isoformat()
