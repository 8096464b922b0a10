from pydantic import BaseModel, Field, field_validator
from typing import Optional


class TechnicalAttributes(BaseModel):
    """기술적 특성 요약"""
    composition: str = ""
    lighting: str = ""
    color: str = ""
    focus: str = ""


class GenreProperties(BaseModel):
    """장르 세부 속성"""
    primary_genre: str = Field("", alias="primaryGenre")
    secondary_genre: str = Field("", alias="secondaryGenre")
    keywords: list[str] = []
    technical_attributes: Optional[TechnicalAttributes] = Field(None, alias="technicalAttributes")

    class Config:
        populate_by_name = True

    @field_validator("keywords", mode="before")
    def none_to_empty(cls, v):
        return v or []


class GenreDetectionResult(BaseModel):
    """장르/진위 판별 결과 (저장하지 않음)"""
    detected_genre: str = Field("Unknown", alias="detectedGenre")
    confidence: float = 0.0
    is_real_photo: bool = Field(..., alias="isRealPhoto")
    is_famous_artwork: bool = Field(False, alias="isFamousArtwork")
    reason_for_classification: str = Field("", alias="reasonForClassification")
    properties: Optional[GenreProperties] = None
    can_be_analyzed: bool = Field(False, alias="canBeAnalyzed")

    class Config:
        populate_by_name = True
        frozen = True

    @property
    def keywords(self) -> list[str]:
        return self.properties.keywords if self.properties else []
