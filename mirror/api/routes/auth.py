# mirror/api/routes/auth.py
from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import RedirectResponse
from sqlalchemy.orm import Session
from starlette.requests import Request as StarletteRequest
from authlib.integrations.starlette_client import OAuthError

from mirror.database import get_db
from mirror.models.user import User
from mirror.schemas.user import UserResponse
from mirror.api.deps import get_current_user
from mirror.core.security import create_access_token
from mirror.core.logger import logger
from mirror.services.oauth_service import oauth, upsert_google_user
from mirror.config import settings

router = APIRouter(prefix="/api/v1/auth", tags=["인증"])

@router.get("/google")
async def google_login(request: StarletteRequest):
    """Google 로그인 시작"""
    redirect_uri = settings.google_redirect_uri
    return await oauth.google.authorize_redirect(request, redirect_uri)

@router.get("/google/callback")
async def google_callback(
    request: StarletteRequest,
    db: Session = Depends(get_db)
):
    """Google OAuth 콜백"""
    try:
        # Google에서 토큰 받기
        token = await oauth.google.authorize_access_token(request)
    except OAuthError as e:
        logger.error(f"Google OAuth 에러: {e}")
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Google 인증에 실패했습니다")
    
    user_info = token.get('userinfo')
    if not user_info:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="사용자 정보를 가져올 수 없습니다")
    
    try:
        user = upsert_google_user(db, dict(user_info))
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    
    # JWT 토큰 생성
    access_token = create_access_token(data={"sub": user.email, "user_id": user.id})
    
    # 프론트엔드로 리다이렉트 (토큰 포함)
    return RedirectResponse(
        url=f"{settings.frontend_url}/auth/callback?token={access_token}"
    )

@router.get("/me", response_model=UserResponse)
def get_me(current_user: User = Depends(get_current_user)):
    """현재 로그인 유저"""
    return current_user
