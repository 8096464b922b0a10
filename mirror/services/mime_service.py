DEFAULT_MIME_TYPE = "image/jpeg"

# 파일 시그니처 (매직 바이트)
JPEG_SIGNATURE = b"\xff\xd8\xff"
PNG_SIGNATURE = b"\x89PNG\r\n\x1a\n"
GIF_SIGNATURES = (b"GIF87a", b"GIF89a")
BMP_SIGNATURE = b"BM"


def detect_mime_type(data: bytes) -> str:
    """바이너리 데이터에서 MIME 타입 감지 (알 수 없으면 JPEG)"""
    if not data:
        return DEFAULT_MIME_TYPE

    if data.startswith(JPEG_SIGNATURE):
        return "image/jpeg"
    if data.startswith(PNG_SIGNATURE):
        return "image/png"
    if data[:6] in GIF_SIGNATURES:
        return "image/gif"
    # WebP: RIFF....WEBP
    if data[:4] == b"RIFF" and data[8:12] == b"WEBP":
        return "image/webp"
    if data.startswith(BMP_SIGNATURE):
        return "image/bmp"

    return DEFAULT_MIME_TYPE


def is_supported_image(data: bytes) -> bool:
    """지원하는 이미지 시그니처인지 확인 (업로드 검증용)"""
    if not data:
        return False
    return (
        data.startswith(JPEG_SIGNATURE)
        or data.startswith(PNG_SIGNATURE)
        or data[:6] in GIF_SIGNATURES
        or (data[:4] == b"RIFF" and data[8:12] == b"WEBP")
        or data.startswith(BMP_SIGNATURE)
    )
