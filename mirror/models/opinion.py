# mirror/models/opinion.py
from sqlalchemy import Column, String, DateTime, Boolean, ForeignKey, Text, UniqueConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from mirror.database import Base
import uuid

class Opinion(Base):
    """분석 결과에 대한 유저 의견 모델"""
    __tablename__ = "opinions"
    __table_args__ = (
        UniqueConstraint("analysis_id", "user_id", name="uq_opinion_analysis_user"),
    )
    
    # 기본 필드
    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    analysis_id = Column(String, ForeignKey("analyses.id", ondelete="SET NULL"), nullable=True, index=True)
    user_id = Column(String, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    
    # 의견
    is_liked = Column(Boolean, nullable=True)  # 좋아요/싫어요/선택 안 함
    comment = Column(Text)
    
    # 타임스탬프
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
    
    # 관계
    analysis = relationship("Analysis", backref="opinions")
    user = relationship("User", backref="opinions")
    
    def __repr__(self):
        return f"<Opinion {self.id} on Analysis {self.analysis_id}>"
