import base64
import io
import os

import httpx
from PIL import Image, ExifTags, UnidentifiedImageError
from tenacity import retry, stop_after_attempt, wait_exponential, retry_if_exception_type

from mirror.core.logger import logger
from mirror.services.mime_service import detect_mime_type

ANALYSIS_MAX_SIDE = 1600  # 분석용 이미지 최대 변 길이
ANALYSIS_JPEG_QUALITY = 85


def decode_data_url(data_url: str) -> tuple[str, bytes]:
    """data:<mime>;base64,<data> → (mime, bytes)"""
    if not data_url.startswith("data:") or "," not in data_url:
        raise ValueError("Invalid data URL")

    header, payload = data_url.split(",", 1)
    mime_type = header[5:].split(";")[0] or "image/jpeg"
    if ";base64" not in header:
        raise ValueError("Only base64 data URLs are supported")

    return mime_type, base64.b64decode(payload)


def resolve_image(image: bytes | str) -> tuple[bytes, str]:
    """이미지 바이트 또는 data URL → (bytes, mime)"""
    if isinstance(image, str):
        mime_type, data = decode_data_url(image)
        return data, mime_type
    return image, detect_mime_type(image)


@retry(
    stop=stop_after_attempt(3),  # 3번 재시도
    wait=wait_exponential(multiplier=1, min=1, max=5),
    retry=retry_if_exception_type(httpx.TransportError),
    reraise=True
)
async def fetch_image(url: str) -> bytes:
    """원격 스토리지에서 이미지 다운로드"""
    async with httpx.AsyncClient(timeout=30.0) as client:
        response = await client.get(url)
        response.raise_for_status()
        return response.content


async def load_image_bytes(photo) -> bytes:
    """사진의 저장 경로/URL을 순서대로 시도해서 이미지 바이트 반환"""
    for path in (photo.analysis_path, photo.file_path):
        if path and os.path.exists(path):
            with open(path, "rb") as f:
                return f.read()

    last_error = None
    for url in photo.storage_urls or []:
        try:
            if url.startswith("data:"):
                return decode_data_url(url)[1]
            return await fetch_image(url)
        except (httpx.HTTPError, ValueError) as e:
            logger.warning(f"이미지 로드 실패 ({url[:50]}): {e}")
            last_error = e

    raise FileNotFoundError(f"사진 {photo.id}의 이미지 파일을 찾을 수 없습니다") from last_error


def _to_float(value):
    """EXIF 유리수 → float"""
    try:
        return round(float(value), 4)
    except (TypeError, ValueError, ZeroDivisionError):
        return None


def extract_exif(data: bytes) -> dict:
    """EXIF 메타데이터 추출 (읽을 수 없으면 빈 dict)"""
    try:
        with Image.open(io.BytesIO(data)) as img:
            width, height = img.size
            exif = img.getexif()
            detail = exif.get_ifd(ExifTags.IFD.Exif) if exif else {}
    except (UnidentifiedImageError, OSError) as e:
        logger.warning(f"EXIF 추출 실패: {e}")
        return {}

    tags = {ExifTags.TAGS.get(k, k): v for k, v in {**exif, **detail}.items()}

    exposure = _to_float(tags.get("ExposureTime"))
    result = {
        "make": str(tags["Make"]).strip("\x00 ") if tags.get("Make") else None,
        "model": str(tags["Model"]).strip("\x00 ") if tags.get("Model") else None,
        "lens": str(tags["LensModel"]).strip("\x00 ") if tags.get("LensModel") else None,
        "exposure_time": f"1/{round(1 / exposure)}" if exposure and exposure < 1 else exposure,
        "f_number": _to_float(tags.get("FNumber")),
        "iso": tags.get("ISOSpeedRatings") or tags.get("PhotographicSensitivity"),
        "focal_length": _to_float(tags.get("FocalLength")),
        "taken_at": str(tags["DateTimeOriginal"]) if tags.get("DateTimeOriginal") else None,
        "dimensions": {"width": width, "height": height},
    }
    return {k: v for k, v in result.items() if v is not None}


def make_analysis_copy(data: bytes, max_side: int = ANALYSIS_MAX_SIDE) -> bytes:
    """분석용 축소 JPEG 생성"""
    with Image.open(io.BytesIO(data)) as img:
        img = img.convert("RGB")
        img.thumbnail((max_side, max_side))

        buffer = io.BytesIO()
        img.save(buffer, format="JPEG", quality=ANALYSIS_JPEG_QUALITY)
        return buffer.getvalue()
