# mirror/api/routes/photos.py
from fastapi import APIRouter, Depends, UploadFile, File, HTTPException, status, Query
from sqlalchemy.orm import Session
from typing import List, Optional
import os
import uuid

from mirror.database import get_db
from mirror.config import settings
from mirror.models.user import User
from mirror.models.photo import Photo
from mirror.models.analysis import Analysis
from mirror.schemas.photo import (
    PhotoResponse, PhotoUploadResponse, PhotoListResponse, PhotoUpdate, CameraPhotoResponse
)
from mirror.schemas.analysis import AnalysisResponse
from mirror.api.deps import get_current_user, get_optional_user
from mirror.core.file_security import validate_uploaded_file, sanitize_filename
from mirror.core.logger import logger
from mirror.services.image_service import extract_exif, make_analysis_copy

router = APIRouter(prefix="/api/v1/photos", tags=["사진"])

def photo_dir(kind: str) -> str:
    """업로드 하위 디렉토리 (photos / analysis)"""
    path = os.path.join(settings.upload_dir, kind)
    os.makedirs(path, exist_ok=True)
    return path

def get_visible_photo(photo_id: str, viewer: Optional[User], db: Session) -> Photo:
    """사진 조회 (숨긴 사진은 본인만)"""
    photo = db.query(Photo).filter(Photo.id == photo_id).first()
    
    if not photo or (photo.is_hidden and (viewer is None or viewer.id != photo.user_id)):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="사진을 찾을 수 없습니다"
        )
    
    return photo

def get_owned_photo(photo_id: str, current_user: User, db: Session) -> Photo:
    """본인 사진 조회 (수정/삭제용)"""
    photo = db.query(Photo).filter(Photo.id == photo_id).first()
    
    if not photo:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="사진을 찾을 수 없습니다"
        )
    
    # 권한 체크
    if photo.user_id != current_user.id:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="권한이 없습니다"
        )
    
    return photo

@router.post("/upload", response_model=PhotoUploadResponse, status_code=status.HTTP_201_CREATED)
async def upload_photo(
    file: UploadFile = File(...),
    current_user: Optional[User] = Depends(get_optional_user),
    db: Session = Depends(get_db)
):
    """사진 업로드 (비로그인 허용)"""
    content = await file.read()
    
    # ===== 보안 검증 =====
    validate_uploaded_file(file.filename, content)
    safe_filename = sanitize_filename(file.filename)
    # =====================
    
    # 분석용 축소본 생성
    try:
        analysis_content = make_analysis_copy(content)
    except OSError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="이미지를 읽을 수 없습니다"
        )
    
    # 고유 파일명 생성 (UUID + 원본 확장자)
    file_id = str(uuid.uuid4())
    _, ext = os.path.splitext(safe_filename)
    filename = f"{file_id}{ext}"
    
    # 파일 저장
    file_path = os.path.join(photo_dir("photos"), filename)
    with open(file_path, "wb") as buffer:
        buffer.write(content)
    
    analysis_path = os.path.join(photo_dir("analysis"), f"{file_id}.jpg")
    with open(analysis_path, "wb") as buffer:
        buffer.write(analysis_content)
    
    # DB 저장
    photo = Photo(
        id=file_id,
        user_id=current_user.id if current_user else None,
        original_filename=safe_filename,
        file_path=file_path,
        analysis_path=analysis_path,
        url=f"/uploads/photos/{filename}",
        storage_urls=[],
        exif_data=extract_exif(content) or None,
    )
    db.add(photo)
    db.commit()
    db.refresh(photo)
    
    logger.info(f"사진 업로드: {photo.id} ({len(content)} bytes)")
    return PhotoUploadResponse(photo=PhotoResponse.model_validate(photo))

@router.get("", response_model=PhotoListResponse)
def list_photos(
    user_id: Optional[str] = Query(None, description="조회할 유저 (기본: 본인)"),
    page: int = Query(1, ge=1, description="페이지 번호"),
    limit: int = Query(20, ge=1, le=100, description="페이지당 개수"),
    include_hidden: bool = Query(False, description="숨긴 사진 포함 (본인만)"),
    current_user: Optional[User] = Depends(get_optional_user),
    db: Session = Depends(get_db)
):
    """사진 목록 조회 (페이지네이션)"""
    target_id = user_id or (current_user.id if current_user else None)
    if target_id is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="로그인이 필요합니다",
            headers={"WWW-Authenticate": "Bearer"},
        )
    
    query = db.query(Photo).filter(Photo.user_id == target_id)
    
    # 숨긴 사진은 본인만
    is_owner = current_user is not None and current_user.id == target_id
    if not (include_hidden and is_owner):
        query = query.filter(Photo.is_hidden.is_(False))
    
    # 전체 개수
    total = query.count()
    
    # 페이지네이션
    skip = (page - 1) * limit
    photos = query\
        .order_by(Photo.created_at.desc())\
        .offset(skip)\
        .limit(limit)\
        .all()
    
    return PhotoListResponse(
        photos=[PhotoResponse.model_validate(p) for p in photos],
        total=total,
        page=page,
        limit=limit,
    )

@router.get("/by-camera/{camera_model}", response_model=List[CameraPhotoResponse])
def get_photos_by_camera(
    camera_model: str,
    limit: int = Query(20, ge=1, le=100),
    db: Session = Depends(get_db)
):
    """특정 카메라로 찍은 공개 사진 (사진별 최신 분석 기준)"""
    analyses = db.query(Analysis)\
        .join(Photo, Analysis.photo_id == Photo.id)\
        .filter(
            Analysis.camera_model == camera_model,
            Analysis.is_hidden.is_(False),
            Photo.is_hidden.is_(False),
        )\
        .order_by(Analysis.created_at.desc())\
        .all()
    
    results = []
    seen = set()
    for analysis in analyses:
        if analysis.photo_id in seen:
            continue
        seen.add(analysis.photo_id)
        results.append(CameraPhotoResponse(
            photo=PhotoResponse.model_validate(analysis.photo),
            overall_score=analysis.overall_score,
            detected_genre=analysis.detected_genre,
            camera_model=analysis.camera_model,
            camera_manufacturer=analysis.camera_manufacturer,
        ))
        if len(results) >= limit:
            break
    
    return results

@router.get("/{photo_id}", response_model=PhotoResponse)
def get_photo(
    photo_id: str,
    current_user: Optional[User] = Depends(get_optional_user),
    db: Session = Depends(get_db)
):
    """사진 상세"""
    return get_visible_photo(photo_id, current_user, db)

@router.patch("/{photo_id}", response_model=PhotoResponse)
def update_photo(
    photo_id: str,
    data: PhotoUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """사진 공개 여부 변경 (본인만)"""
    photo = get_owned_photo(photo_id, current_user, db)
    photo.is_hidden = data.is_hidden
    db.commit()
    db.refresh(photo)
    return photo

@router.delete("/{photo_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_photo(
    photo_id: str,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """사진 삭제 (분석 결과도 함께 삭제)"""
    photo = get_owned_photo(photo_id, current_user, db)
    
    # 파일 삭제
    for path in (photo.file_path, photo.analysis_path):
        if path and os.path.exists(path):
            os.remove(path)
    
    # DB에서 삭제
    db.delete(photo)
    db.commit()
    
    logger.info(f"사진 삭제: {photo_id}")
    return None

@router.get("/{photo_id}/analyses", response_model=List[AnalysisResponse])
def get_photo_analyses(
    photo_id: str,
    current_user: Optional[User] = Depends(get_optional_user),
    db: Session = Depends(get_db)
):
    """사진의 분석 목록 (최신순)"""
    photo = get_visible_photo(photo_id, current_user, db)
    
    analyses = db.query(Analysis)\
        .filter(Analysis.photo_id == photo.id)\
        .order_by(Analysis.created_at.desc())\
        .all()
    
    # 숨긴 분석은 분석 주인만
    if current_user is None:
        return [a for a in analyses if not a.is_hidden]
    return [a for a in analyses if not a.is_hidden or a.owner_id == current_user.id]

@router.get("/{photo_id}/latest-analysis", response_model=AnalysisResponse)
def get_latest_analysis(
    photo_id: str,
    current_user: Optional[User] = Depends(get_optional_user),
    db: Session = Depends(get_db)
):
    """사진의 최신 분석"""
    analyses = get_photo_analyses(photo_id, current_user, db)
    if not analyses:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="분석 결과가 없습니다"
        )
    return analyses[0]
