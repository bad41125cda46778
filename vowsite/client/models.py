"""
DTOs for the display client: API payloads and the render context.
"""
from __future__ import annotations

from pydantic import BaseModel, ConfigDict

LANGUAGES = ("en", "pt")
DEFAULT_LANGUAGE = "en"


class PersonVows(BaseModel):
    model_config = ConfigDict(extra="ignore")

    name_en: str | None = None
    name_pt: str | None = None
    text_en: str | None = None
    text_pt: str | None = None

    def name(self, language: str) -> str:
        return _localized(self.name_en, self.name_pt, language)

    def text(self, language: str) -> str:
        return _localized(self.text_en, self.text_pt, language)


class VowsPayload(BaseModel):
    """Body of GET /api/vows."""

    model_config = ConfigDict(extra="ignore")

    groom: PersonVows | None = None
    bride: PersonVows | None = None


class RenderContext(BaseModel):
    """State owned by the view: last fetched vows, gate state and language."""

    payload: VowsPayload | None = None
    is_unlocked: bool = False
    language: str = DEFAULT_LANGUAGE


def normalize_language(raw: str | None) -> str | None:
    """Supported language code for raw input, or None."""
    if not raw:
        return None
    code = raw.strip().lower()[:2]
    return code if code in LANGUAGES else None


def _localized(en: str | None, pt: str | None, language: str) -> str:
    # Missing translation falls back to the other language
    if language == "pt":
        return pt or en or ""
    return en or pt or ""
