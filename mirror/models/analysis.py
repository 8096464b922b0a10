# mirror/models/analysis.py
from sqlalchemy import Column, String, Integer, DateTime, Boolean, ForeignKey, JSON, Text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from mirror.database import Base
import uuid

class Analysis(Base):
    """사진 분석 결과 모델"""
    __tablename__ = "analyses"
    
    # 기본 필드
    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    photo_id = Column(String, ForeignKey("photos.id", ondelete="CASCADE"), nullable=False, index=True)
    user_id = Column(String, ForeignKey("users.id", ondelete="SET NULL"), nullable=True, index=True)
    
    # 분석 옵션
    persona = Column(String, nullable=False)
    language = Column(String, nullable=False, default="ko")
    detail_level = Column(String, default="standard")
    focus_point = Column(String, default="center")
    
    # 분석 결과
    detected_genre = Column(String)
    summary = Column(Text, nullable=False)
    overall_score = Column(Integer, nullable=False)
    tags = Column(JSON, default=list)
    category_scores = Column(JSON, nullable=False)  # {"composition": 80, ...}
    analysis = Column(JSON, nullable=False)  # {"overall": {...}, "composition": {...}, ...}
    is_not_evaluable = Column(Boolean, default=False, nullable=False)
    
    # 카메라 정보 (EXIF에서 복사)
    camera_model = Column(String, index=True)
    camera_manufacturer = Column(String)
    
    is_hidden = Column(Boolean, default=False, nullable=False)
    
    # 타임스탬프
    created_at = Column(DateTime(timezone=True), server_default=func.now(), index=True)
    
    # 관계
    photo = relationship("Photo", back_populates="analyses")
    user = relationship("User", backref="analyses")
    
    @property
    def owner_id(self):
        """분석 주인 (비로그인 분석은 사진 주인)"""
        return self.user_id or self.photo.user_id
    
    def __repr__(self):
        return f"<Analysis {self.id} for Photo {self.photo_id}>"
