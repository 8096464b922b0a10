# mirror/schemas/photo.py
from pydantic import BaseModel, Field
from datetime import datetime
from typing import Optional

class PhotoResponse(BaseModel):
    """사진 응답"""
    id: str
    user_id: Optional[str] = Field(None, alias="userId")
    original_filename: str = Field(..., alias="originalFilename")
    url: str
    storage_urls: list[str] = Field([], alias="storageUrls")
    exif_data: Optional[dict] = Field(None, alias="exifData")
    is_hidden: bool = Field(False, alias="isHidden")
    created_at: datetime = Field(..., alias="createdAt")
    
    class Config:
        from_attributes = True
        populate_by_name = True

class PhotoUploadResponse(BaseModel):
    """사진 업로드 응답"""
    photo: PhotoResponse

class PhotoListResponse(BaseModel):
    """사진 목록 응답 (페이지네이션)"""
    photos: list[PhotoResponse]
    total: int
    page: int
    limit: int

class PhotoUpdate(BaseModel):
    """사진 공개 여부 변경"""
    is_hidden: bool = Field(..., alias="isHidden")
    
    class Config:
        populate_by_name = True

class CameraPhotoResponse(BaseModel):
    """카메라별 사진 (최신 분석 포함)"""
    photo: PhotoResponse
    overall_score: int = Field(..., alias="overallScore")
    detected_genre: Optional[str] = Field(None, alias="detectedGenre")
    camera_model: str = Field(..., alias="cameraModel")
    camera_manufacturer: Optional[str] = Field(None, alias="cameraManufacturer")
    
    class Config:
        populate_by_name = True
