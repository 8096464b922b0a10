from pydantic import BaseModel, Field


class ScoreBucket(BaseModel):
    """점수 구간 (하한) 별 분석 수"""
    score: int
    count: int


class CategoryScoreDistribution(BaseModel):
    composition: list[ScoreBucket] = []
    lighting: list[ScoreBucket] = []
    color: list[ScoreBucket] = []
    focus: list[ScoreBucket] = []
    creativity: list[ScoreBucket] = []


class ScoreDistributionResponse(BaseModel):
    """점수 분포"""
    overall_scores: list[ScoreBucket] = Field(..., alias="overallScores")
    category_scores: CategoryScoreDistribution = Field(..., alias="categoryScores")

    class Config:
        populate_by_name = True


class GenreCount(BaseModel):
    name: str
    count: int


class GenreAverageScore(BaseModel):
    genre: str
    average_score: float = Field(..., alias="averageScore")

    class Config:
        populate_by_name = True


class GenreDistributionResponse(BaseModel):
    """장르 분포"""
    genres: list[GenreCount]
    average_scores_by_genre: list[GenreAverageScore] = Field(..., alias="averageScoresByGenre")

    class Config:
        populate_by_name = True


class PhotosWith(BaseModel):
    multiple_analyses: int = Field(..., alias="multipleAnalyses")
    single_analysis: int = Field(..., alias="singleAnalysis")

    class Config:
        populate_by_name = True


class AnalyticsStatsResponse(BaseModel):
    """전체 분석 통계"""
    total_photos: int = Field(..., alias="totalPhotos")
    total_analyses: int = Field(..., alias="totalAnalyses")
    duplicate_analyses_count: int = Field(..., alias="duplicateAnalysesCount")
    photos_with: PhotosWith = Field(..., alias="photosWith")

    class Config:
        populate_by_name = True


class CleanupResponse(BaseModel):
    """중복 분석 정리 결과"""
    message: str
    deleted_count: int = Field(..., alias="deletedCount")
    kept_count: int = Field(..., alias="keptCount")

    class Config:
        populate_by_name = True
