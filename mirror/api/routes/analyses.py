# mirror/api/routes/analyses.py
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from typing import Optional

from mirror.database import get_db
from mirror.config import settings
from mirror.models.user import User
from mirror.models.analysis import Analysis
from mirror.models.opinion import Opinion
from mirror.schemas.analysis import (
    AnalysisRequest, AnalysisResponse, AnalysisDetailResponse, AnalysisVisibilityUpdate,
    OpinionCreate, OpinionResponse
)
from mirror.api.deps import get_current_user, get_optional_user
from mirror.api.routes.photos import get_visible_photo
from mirror.core.exceptions import (
    ClassificationFailure, CritiqueModelFailure, NotAnalyzable, ResponseFormatError
)
from mirror.core.logger import logger
from mirror.services.critique_service import critique
from mirror.services.image_service import load_image_bytes

router = APIRouter(prefix="/api/v1/analyses", tags=["분석"])

def get_visible_analysis(analysis_id: str, viewer: Optional[User], db: Session) -> Analysis:
    """분석 조회 (숨긴 분석은 본인만)"""
    analysis = db.query(Analysis).filter(Analysis.id == analysis_id).first()
    
    if not analysis or (analysis.is_hidden and (viewer is None or viewer.id != analysis.owner_id)):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="분석 결과를 찾을 수 없습니다"
        )
    
    return analysis

def get_owned_analysis(analysis_id: str, user: User, db: Session, action: str) -> Analysis:
    """본인 분석 조회 (아니면 403)"""
    analysis = db.query(Analysis).filter(Analysis.id == analysis_id).first()
    
    if not analysis:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="분석 결과를 찾을 수 없습니다"
        )
    
    if analysis.owner_id != user.id:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=f"{action} 권한이 없습니다"
        )
    
    return analysis

@router.post("", response_model=AnalysisResponse, status_code=status.HTTP_201_CREATED)
async def create_analysis(
    data: AnalysisRequest,
    current_user: Optional[User] = Depends(get_optional_user),
    db: Session = Depends(get_db)
):
    """저장된 사진 분석 실행 후 결과 저장"""
    photo = get_visible_photo(data.photo_id, current_user, db)
    language = data.language or settings.default_language
    
    try:
        image_bytes = await load_image_bytes(photo)
    except FileNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="사진 파일을 찾을 수 없습니다"
        )
    
    try:
        result = await critique(image_bytes, data.persona, language)
    except NotAnalyzable as e:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail={
                "message": "분석할 수 없는 이미지입니다. 직접 촬영한 다른 사진을 업로드해 주세요.",
                "detection": e.detection.model_dump(by_alias=True),
            }
        )
    except (ClassificationFailure, CritiqueModelFailure, ResponseFormatError) as e:
        logger.error(f"사진 분석 실패 ({type(e).__name__}): {e}")
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail="사진 분석 중 오류가 발생했습니다. 잠시 후 다시 시도해 주세요."
        )
    
    # 카메라 정보 (EXIF)
    exif = photo.exif_data or {}
    
    analysis = Analysis(
        photo_id=photo.id,
        user_id=current_user.id if current_user else None,
        persona=data.persona,
        language=language,
        detail_level=data.detail_level,
        focus_point=data.focus_point,
        detected_genre=result.get("detectedGenre"),
        summary=result["summary"],
        overall_score=result["overallScore"],
        tags=result.get("tags") or [],
        category_scores=result["categoryScores"],
        analysis=result.get("analysis") or {},
        is_not_evaluable=bool(result.get("isNotEvaluable", False)),
        camera_model=exif.get("model"),
        camera_manufacturer=exif.get("make"),
    )
    db.add(analysis)
    db.commit()
    db.refresh(analysis)
    
    logger.info(f"분석 저장: {analysis.id} (사진 {photo.id}, 점수 {analysis.overall_score})")
    return analysis

@router.get("/{analysis_id}", response_model=AnalysisDetailResponse)
def get_analysis(
    analysis_id: str,
    current_user: Optional[User] = Depends(get_optional_user),
    db: Session = Depends(get_db)
):
    """분석 상세 (내 의견 포함)"""
    analysis = get_visible_analysis(analysis_id, current_user, db)
    
    opinion = None
    if current_user:
        opinion = db.query(Opinion).filter(
            Opinion.analysis_id == analysis.id,
            Opinion.user_id == current_user.id
        ).first()
    
    return AnalysisDetailResponse(
        analysis=AnalysisResponse.model_validate(analysis),
        opinion=OpinionResponse.model_validate(opinion) if opinion else None,
    )

@router.patch("/{analysis_id}/visibility", response_model=AnalysisResponse)
def update_analysis_visibility(
    analysis_id: str,
    data: AnalysisVisibilityUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """분석 공개 여부 변경 (본인만)"""
    analysis = get_owned_analysis(analysis_id, current_user, db, "수정")
    analysis.is_hidden = data.is_hidden
    db.commit()
    db.refresh(analysis)
    
    logger.info(f"분석 공개 여부 변경: {analysis.id} (숨김 {analysis.is_hidden})")
    return analysis

@router.delete("/{analysis_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_analysis(
    analysis_id: str,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """분석 삭제 (본인만)"""
    analysis = get_owned_analysis(analysis_id, current_user, db, "삭제")
    
    db.delete(analysis)
    db.commit()
    
    return None

@router.post("/{analysis_id}/opinions", response_model=OpinionResponse)
def submit_opinion(
    analysis_id: str,
    data: OpinionCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """분석 의견 등록 (이미 있으면 수정)"""
    analysis = get_visible_analysis(analysis_id, current_user, db)
    
    opinion = db.query(Opinion).filter(
        Opinion.analysis_id == analysis.id,
        Opinion.user_id == current_user.id
    ).first()
    
    if opinion:
        opinion.is_liked = data.is_liked
        opinion.comment = data.comment
    else:
        opinion = Opinion(
            analysis_id=analysis.id,
            user_id=current_user.id,
            is_liked=data.is_liked,
            comment=data.comment,
        )
        db.add(opinion)
    
    db.commit()
    db.refresh(opinion)
    
    return opinion
