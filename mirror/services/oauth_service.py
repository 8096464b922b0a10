# mirror/services/oauth_service.py
from datetime import datetime, timezone

from authlib.integrations.starlette_client import OAuth
from sqlalchemy.orm import Session

from mirror.config import settings
from mirror.core.logger import logger
from mirror.models.user import User

# OAuth 클라이언트 초기화
oauth = OAuth()

# Google OAuth
oauth.register(
    name='google',
    client_id=settings.google_client_id,
    client_secret=settings.google_client_secret,
    server_metadata_url='https://accounts.google.com/.well-known/openid-configuration',
    client_kwargs={'scope': 'openid email profile'}
)

def upsert_google_user(db: Session, user_info: dict) -> User:
    """Google 사용자 정보로 유저 생성 또는 갱신"""
    google_id = user_info.get('sub')
    email = user_info.get('email')
    if not google_id or not email:
        raise ValueError("Google 사용자 정보에 sub/email이 없습니다")
    
    user = db.query(User).filter(User.google_id == google_id).first()
    if user is None:
        # 같은 이메일로 가입된 유저가 있으면 연결
        user = db.query(User).filter(User.email == email).first()
    
    if user:
        # 기존 유저 - 로그인 정보 업데이트
        user.google_id = google_id
        user.profile_picture = user_info.get('picture') or user.profile_picture
        user.last_login = datetime.now(timezone.utc)
        logger.info(f"기존 유저 로그인: {email}")
    else:
        # 새 유저 생성
        user = User(
            google_id=google_id,
            email=email,
            display_name=user_info.get('name') or email.split('@')[0],
            profile_picture=user_info.get('picture'),
        )
        db.add(user)
        logger.info(f"신규 유저 생성: {email}")
    
    db.commit()
    db.refresh(user)
    return user
