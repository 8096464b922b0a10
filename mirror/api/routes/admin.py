# mirror/api/routes/admin.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from mirror.database import get_db
from mirror.models.user import User
from mirror.schemas.admin import (
    AnalyticsStatsResponse, CleanupResponse, GenreDistributionResponse, ScoreDistributionResponse
)
from mirror.api.deps import get_admin_user
from mirror.core.logger import logger
from mirror.services import admin_service

router = APIRouter(prefix="/api/v1/admin", tags=["관리자"])

@router.get("/analytics", response_model=AnalyticsStatsResponse)
def get_analytics(
    admin: User = Depends(get_admin_user),
    db: Session = Depends(get_db)
):
    """전체 사진/분석 통계"""
    return admin_service.get_analytics_stats(db)

@router.get("/score-distribution", response_model=ScoreDistributionResponse)
def get_score_distribution(
    admin: User = Depends(get_admin_user),
    db: Session = Depends(get_db)
):
    """점수 분포 (10점 단위)"""
    return admin_service.get_score_distribution(db)

@router.get("/genre-distribution", response_model=GenreDistributionResponse)
def get_genre_distribution(
    admin: User = Depends(get_admin_user),
    db: Session = Depends(get_db)
):
    """장르 분포와 장르별 평균 점수"""
    return admin_service.get_genre_distribution(db)

@router.post("/cleanup-analyses", response_model=CleanupResponse)
def cleanup_analyses(
    admin: User = Depends(get_admin_user),
    db: Session = Depends(get_db)
):
    """사진마다 최신 분석만 남기고 중복 분석 삭제"""
    logger.info(f"중복 분석 정리 요청: {admin.email}")
    result = admin_service.cleanup_duplicate_analyses(db)
    
    return CleanupResponse(
        message=f"중복 분석 {result['deleted_count']}개를 삭제했습니다. ({result['kept_count']}개 유지)",
        **result,
    )
