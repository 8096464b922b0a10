# mirror/api/deps.py
from typing import Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session

from mirror.config import settings
from mirror.database import get_db
from mirror.models.user import User
from mirror.core.security import decode_access_token

# JWT Bearer 토큰 스킴
security = HTTPBearer()
optional_security = HTTPBearer(auto_error=False)

def _user_from_token(token: str, db: Session) -> Optional[User]:
    """토큰의 user_id로 유저 조회 (실패 시 None)"""
    payload = decode_access_token(token)
    if payload is None:
        return None
    
    user_id = payload.get("user_id")
    if user_id is None:
        return None
    
    return db.query(User).filter(User.id == user_id).first()

def get_current_user(
    token: HTTPAuthorizationCredentials = Depends(security),
    db: Session = Depends(get_db)
) -> User:
    """JWT 토큰으로 현재 유저 가져오기"""
    user = _user_from_token(token.credentials, db)
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="인증 정보가 올바르지 않습니다",
            headers={"WWW-Authenticate": "Bearer"},
        )
    
    return user

def get_optional_user(
    token: Optional[HTTPAuthorizationCredentials] = Depends(optional_security),
    db: Session = Depends(get_db)
) -> Optional[User]:
    """로그인 선택 엔드포인트용 (토큰 없거나 잘못되면 None)"""
    if token is None:
        return None
    
    return _user_from_token(token.credentials, db)

def get_admin_user(current_user: User = Depends(get_current_user)) -> User:
    """관리자만 통과 (settings.admin_emails)"""
    if current_user.email not in settings.admin_emails:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="관리자 권한이 필요합니다",
        )
    
    return current_user
