# mirror/models/user.py
from sqlalchemy import Column, String, DateTime, Text
from sqlalchemy.sql import func
from mirror.database import Base
import uuid

class User(Base):
    """유저 모델 (Google 로그인)"""
    __tablename__ = "users"
    
    # 기본 필드
    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    google_id = Column(String, unique=True, index=True, nullable=False)
    email = Column(String, unique=True, index=True, nullable=False)
    display_name = Column(String, nullable=False)
    profile_picture = Column(String)
    
    # 프로필
    bio = Column(Text)
    website_url1 = Column(String)
    website_label1 = Column(String)
    website_url2 = Column(String)
    website_label2 = Column(String)
    
    # 타임스탬프
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    last_login = Column(DateTime(timezone=True), server_default=func.now())
    
    def __repr__(self):
        return f"<User {self.email}>"
