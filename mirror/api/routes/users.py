# mirror/api/routes/users.py
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy import func
from sqlalchemy.orm import Session

from mirror.database import get_db
from mirror.models.user import User
from mirror.models.analysis import Analysis
from mirror.schemas.user import UserResponse, UserUpdate, PublicProfileResponse
from mirror.api.deps import get_current_user

router = APIRouter(prefix="/api/v1/users", tags=["유저"])

@router.get("/me", response_model=UserResponse)
def get_my_profile(current_user: User = Depends(get_current_user)):
    """내 프로필"""
    return current_user

@router.patch("/me", response_model=UserResponse)
def update_my_profile(
    data: UserUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """내 프로필 수정 (보낸 필드만)"""
    for field, value in data.model_dump(exclude_unset=True).items():
        setattr(current_user, field, value)
    
    db.commit()
    db.refresh(current_user)
    return current_user

@router.get("/{user_id}", response_model=PublicProfileResponse)
def get_public_profile(user_id: str, db: Session = Depends(get_db)):
    """공개 프로필 (공개 분석 수, 평균 점수)"""
    user = db.query(User).filter(User.id == user_id).first()
    if not user:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="유저를 찾을 수 없습니다"
        )
    
    count, average = db.query(func.count(Analysis.id), func.avg(Analysis.overall_score))\
        .filter(Analysis.user_id == user.id, Analysis.is_hidden.is_(False))\
        .one()
    
    profile = PublicProfileResponse.model_validate(user)
    return profile.model_copy(update={
        "analysis_count": count,
        "average_score": round(float(average), 1) if average is not None else None,
    })
