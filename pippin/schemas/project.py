"""
schemas/project.py
------------------
Pydantic request/response models for Project.
"""

from pydantic import BaseModel, Field, field_validator

from pippin.schemas.common import UTCDateTime


class ProjectCreate(BaseModel):
    key: str = Field(
        ...,
        min_length=1,
        max_length=16,
        examples=["APP"],
        description="Short project key, unique within the tenant (uppercase by convention)",
    )
    name: str = Field(..., min_length=1, max_length=255, examples=["Mobile app"])

    @field_validator("key", "name", mode="before")
    @classmethod
    def strip(cls, v):
        return v.strip() if isinstance(v, str) else v


class ProjectRead(BaseModel):
    id: int
    account_id: str = Field(validation_alias="tenant_id")
    key: str
    name: str
    created_at: UTCDateTime

    model_config = {"from_attributes": True, "populate_by_name": True}


class CreatedResponse(BaseModel):
    id: int


class StatusResponse(BaseModel):
    status: str
