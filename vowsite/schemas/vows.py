from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class AdminRequest(BaseModel):
    model_config = ConfigDict(extra="ignore")

    password: str = ""


class VowContentIn(BaseModel):
    """One person's vows in both languages. Every field is required."""

    model_config = ConfigDict(extra="ignore")

    name_en: str = Field(..., max_length=255)
    name_pt: str = Field(..., max_length=255)
    text_en: str
    text_pt: str

    @field_validator("name_en", "name_pt", "text_en", "text_pt", mode="before")
    @classmethod
    def require_text(cls, v: Any) -> str:
        if v is None:
            raise ValueError("All fields are required for both languages")
        v = str(v).strip()
        if not v:
            raise ValueError("All fields are required for both languages")
        return v


class PublishRequest(AdminRequest):
    groom: VowContentIn
    bride: VowContentIn


class VowOut(BaseModel):
    id: int
    person_type: str
    name_en: str | None
    name_pt: str | None
    text_en: str | None
    text_pt: str | None
    is_active: bool
    created_at: datetime | None = None


class VowsOut(BaseModel):
    groom: VowOut | None = None
    bride: VowOut | None = None


class UnlockStatusOut(BaseModel):
    is_unlocked: bool
    unlocked_at: datetime | None = None
    locked_at: datetime | None = None
    last_updated: datetime | None = None


class GateChangeOut(BaseModel):
    success: bool = True
    is_unlocked: bool


class PublishOut(BaseModel):
    success: bool = True
    message: str = "Vows saved successfully"
