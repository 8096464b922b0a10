from pydantic import BaseModel, Field
from datetime import datetime
from typing import Optional, Union


class CategoryScores(BaseModel):
    """카테고리별 점수 (0-100)"""
    composition: int
    lighting: int
    color: int
    focus: int
    creativity: int


class CategoryAnalysis(BaseModel):
    """카테고리 분석"""
    text: str = ""
    suggestions: Union[str, list[str]] = ""


class OverallAnalysis(BaseModel):
    """전체 평가"""
    text: str = ""
    strengths: list[str] = []
    improvements: list[str] = []
    modifications: Union[str, list[str]] = ""


class AnalysisContent(BaseModel):
    """상세 분석 블록"""
    overall: OverallAnalysis = OverallAnalysis()
    composition: CategoryAnalysis = CategoryAnalysis()
    lighting: CategoryAnalysis = CategoryAnalysis()
    color: CategoryAnalysis = CategoryAnalysis()
    focus: CategoryAnalysis = CategoryAnalysis()
    creativity: CategoryAnalysis = CategoryAnalysis()
    genre_specific: Optional[CategoryAnalysis] = Field(None, alias="genreSpecific")

    class Config:
        populate_by_name = True


class AnalysisResult(BaseModel):
    """모델 평가 결과"""
    detected_genre: str = Field("Unknown", alias="detectedGenre")
    summary: str
    overall_score: int = Field(..., alias="overallScore")
    tags: list[str] = []
    category_scores: CategoryScores = Field(..., alias="categoryScores")
    analysis: AnalysisContent = AnalysisContent()
    is_not_evaluable: bool = Field(False, alias="isNotEvaluable")

    class Config:
        populate_by_name = True


class AnalysisRequest(BaseModel):
    """분석 요청"""
    photo_id: str = Field(..., alias="photoId")
    persona: str = "supportive-friend"
    language: Optional[str] = None
    detail_level: str = Field("standard", alias="detailLevel")
    focus_point: str = Field("center", alias="focusPoint")

    class Config:
        populate_by_name = True


class AnalysisResponse(BaseModel):
    """저장된 분석 응답"""
    id: str
    photo_id: str = Field(..., alias="photoId")
    user_id: Optional[str] = Field(None, alias="userId")
    detected_genre: Optional[str] = Field(None, alias="detectedGenre")
    summary: str
    overall_score: int = Field(..., alias="overallScore")
    tags: list[str] = []
    category_scores: dict = Field(..., alias="categoryScores")
    analysis: dict
    persona: str
    language: str
    detail_level: str = Field(..., alias="detailLevel")
    focus_point: str = Field(..., alias="focusPoint")
    camera_model: Optional[str] = Field(None, alias="cameraModel")
    camera_manufacturer: Optional[str] = Field(None, alias="cameraManufacturer")
    is_not_evaluable: bool = Field(False, alias="isNotEvaluable")
    is_hidden: bool = Field(False, alias="isHidden")
    created_at: datetime = Field(..., alias="createdAt")

    class Config:
        from_attributes = True
        populate_by_name = True


class AnalysisVisibilityUpdate(BaseModel):
    """분석 공개 여부 변경"""
    is_hidden: bool = Field(..., alias="isHidden")

    class Config:
        populate_by_name = True


class OpinionCreate(BaseModel):
    """분석 의견 요청"""
    is_liked: Optional[bool] = Field(None, alias="isLiked")
    comment: Optional[str] = Field(None, max_length=1000)

    class Config:
        populate_by_name = True


class OpinionResponse(BaseModel):
    """분석 의견 응답"""
    id: str
    analysis_id: Optional[str] = Field(None, alias="analysisId")
    user_id: Optional[str] = Field(None, alias="userId")
    is_liked: Optional[bool] = Field(None, alias="isLiked")
    comment: Optional[str] = None
    updated_at: datetime = Field(..., alias="updatedAt")

    class Config:
        from_attributes = True
        populate_by_name = True


class AnalysisDetailResponse(BaseModel):
    """분석 상세 (내 의견 포함)"""
    analysis: AnalysisResponse
    opinion: Optional[OpinionResponse] = None
