# mirror/core/file_security.py
import os
from fastapi import HTTPException, status

from mirror.config import settings
from mirror.services.mime_service import detect_mime_type, is_supported_image

# 설정
ALLOWED_EXTENSIONS = {".jpg", ".jpeg", ".png", ".gif", ".webp", ".bmp"}

def validate_file_extension(filename: str) -> None:
    """파일 확장자 검증"""
    ext = os.path.splitext(filename or "")[1].lower()
    if ext not in ALLOWED_EXTENSIONS:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"허용되지 않은 파일 형식입니다. 허용: {', '.join(sorted(ALLOWED_EXTENSIONS))}"
        )

def validate_file_size(content: bytes) -> None:
    """파일 크기 검증"""
    if not content:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="빈 파일입니다"
        )
    
    if len(content) > settings.max_upload_size:
        raise HTTPException(
            status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
            detail=f"파일 크기가 너무 큽니다. 최대: {settings.max_upload_size // 1024 // 1024}MB"
        )

def validate_signature(content: bytes) -> str:
    """파일 시그니처 검증 후 MIME 타입 반환 (content_type 헤더는 신뢰하지 않음)"""
    if not is_supported_image(content):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="이미지 파일이 아닙니다"
        )
    return detect_mime_type(content)

def sanitize_filename(filename: str) -> str:
    """파일명 안전하게 변환"""
    # 위험한 문자 제거
    filename = os.path.basename(filename)  # 경로 제거
    filename = filename.replace(" ", "_")  # 공백 → 언더스코어
    
    # 확장자 추출
    name, ext = os.path.splitext(filename)
    
    # 알파벳, 숫자, 언더스코어, 하이픈만 허용
    safe_name = "".join(c for c in name if c.isalnum() or c in "_-")
    
    # 너무 길면 자르기
    if len(safe_name) > 50:
        safe_name = safe_name[:50]
    
    return f"{safe_name or 'photo'}{ext.lower()}"

def validate_uploaded_file(filename: str, content: bytes) -> str:
    """전체 파일 검증, MIME 타입 반환"""
    validate_file_extension(filename)
    validate_file_size(content)
    return validate_signature(content)
