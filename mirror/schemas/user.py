# mirror/schemas/user.py
from pydantic import BaseModel, Field
from datetime import datetime
from typing import Optional

class UserResponse(BaseModel):
    """유저 응답"""
    id: str
    email: str
    display_name: str = Field(..., alias="displayName")
    profile_picture: Optional[str] = Field(None, alias="profilePicture")
    bio: Optional[str] = None
    website_url1: Optional[str] = Field(None, alias="websiteUrl1")
    website_label1: Optional[str] = Field(None, alias="websiteLabel1")
    website_url2: Optional[str] = Field(None, alias="websiteUrl2")
    website_label2: Optional[str] = Field(None, alias="websiteLabel2")
    created_at: datetime = Field(..., alias="createdAt")
    last_login: Optional[datetime] = Field(None, alias="lastLogin")
    
    class Config:
        from_attributes = True
        populate_by_name = True

class UserUpdate(BaseModel):
    """프로필 수정 요청"""
    display_name: Optional[str] = Field(None, min_length=1, max_length=50, alias="displayName")
    bio: Optional[str] = Field(None, max_length=500)
    website_url1: Optional[str] = Field(None, max_length=300, alias="websiteUrl1")
    website_label1: Optional[str] = Field(None, max_length=50, alias="websiteLabel1")
    website_url2: Optional[str] = Field(None, max_length=300, alias="websiteUrl2")
    website_label2: Optional[str] = Field(None, max_length=50, alias="websiteLabel2")
    
    class Config:
        populate_by_name = True

class PublicProfileResponse(BaseModel):
    """공개 프로필 (이메일 제외, 분석 통계 포함)"""
    id: str
    display_name: str = Field(..., alias="displayName")
    profile_picture: Optional[str] = Field(None, alias="profilePicture")
    bio: Optional[str] = None
    website_url1: Optional[str] = Field(None, alias="websiteUrl1")
    website_label1: Optional[str] = Field(None, alias="websiteLabel1")
    website_url2: Optional[str] = Field(None, alias="websiteUrl2")
    website_label2: Optional[str] = Field(None, alias="websiteLabel2")
    analysis_count: int = Field(0, alias="analysisCount")
    average_score: Optional[float] = Field(None, alias="averageScore")
    
    class Config:
        from_attributes = True
        populate_by_name = True
