# mirror/models/photo.py
from sqlalchemy import Column, String, DateTime, Boolean, ForeignKey, JSON
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from mirror.database import Base
import uuid

class Photo(Base):
    """사진 모델"""
    __tablename__ = "photos"
    
    # 기본 필드
    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id = Column(String, ForeignKey("users.id", ondelete="CASCADE"), nullable=True, index=True)  # 비로그인 업로드 허용
    
    # 파일 정보
    original_filename = Column(String, nullable=False)  # 원본 파일명
    file_path = Column(String, nullable=False)  # 표시용 이미지 경로
    analysis_path = Column(String)  # 분석용 축소 이미지 경로
    
    # URL
    url = Column(String, nullable=False)  # 이미지 URL
    storage_urls = Column(JSON, default=list)  # 동일 이미지의 추가 URL
    
    # 메타데이터
    exif_data = Column(JSON)
    is_hidden = Column(Boolean, default=False, nullable=False)
    
    # 타임스탬프
    created_at = Column(DateTime(timezone=True), server_default=func.now(), index=True)
    
    # 관계
    user = relationship("User", backref="photos")
    analyses = relationship(
        "Analysis",
        back_populates="photo",
        cascade="all, delete-orphan",
        order_by="Analysis.created_at.desc()",
    )
    
    def __repr__(self):
        return f"<Photo {self.original_filename}>"
