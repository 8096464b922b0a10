"""사진 장르 및 진위 판별

Gemini에 분류용 프롬프트와 이미지를 보내서
- 실제 사진인지 (디지털 아트, 일러스트, 스크린샷, AI 생성 이미지 제외)
- 유명 예술 작품인지
- 주/보조 장르, 키워드, 기술적 특성
을 받아오고, 분석 가능 여부(canBeAnalyzed)를 계산한다.
"""
import json

from pydantic import ValidationError

from mirror.core.exceptions import ClassificationFailure
from mirror.core.logger import logger
from mirror.schemas.genre import GenreDetectionResult
from mirror.services import ai_service
from mirror.services.image_service import resolve_image
from mirror.services.normalizer_service import strip_code_fences

# 유명 작품 판별용 단어
ARTWORK_KEYWORDS = ("painting", "artwork", "masterpiece", "museum", "gallery", "exhibit")
ARTWORK_REASON_TERMS = ("painting", "artwork", "museum piece", "exhibition", "artist")


def build_classification_prompt(language: str) -> str:
    """장르 판별 프롬프트 (응답 언어만 바뀜)"""
    return f"""
You are an expert photo classification AI for mirror., an AI-based photo analysis service. You need to analyze images uploaded by users to determine photo genre, nature, and characteristics.

### Classification tasks:
1. Determine if the given image is a photo (taken with a real camera) or not (digital art, illustration, graphics, text image, screenshot, AI-generated image, etc.).
2. If it's a photo, determine if it's a famous work that can be easily found on the internet.
3. Identify the main genre and secondary genre of the image.
4. Extract up to 5 key keywords that describe the image.
5. Briefly describe the main technical characteristics (composition, lighting, color, focus) of the image.

### Response format:
Respond ONLY with a strict JSON object as follows:
{{
  "detectedGenre": "detected main genre",
  "confidence": confidence level (0.1~1.0),
  "isRealPhoto": true/false,
  "isFamousArtwork": true/false,
  "reasonForClassification": "brief explanation of classification result",
  "properties": {{
    "primaryGenre": "primary genre",
    "secondaryGenre": "secondary genre",
    "keywords": ["keyword1", "keyword2", "keyword3", "keyword4", "keyword5"],
    "technicalAttributes": {{
      "composition": "brief description of composition characteristics",
      "lighting": "brief description of lighting characteristics",
      "color": "brief description of color characteristics",
      "focus": "brief description of focus characteristics"
    }}
  }}
}}

Important notes:
1. Classify digital art, illustrations, AI-generated images, screenshots, and text-centric images as "isRealPhoto": false.
2. For "isFamousArtwork", only mark as TRUE if it's an actual artwork (paintings, professional photography in galleries/museums/exhibitions, famous historical photographs by known photographers). For common travel photos of landmarks (Eiffel Tower, Empire State Building, etc.) or tourist photos, even if they're of famous places, mark as FALSE unless they're published/exhibited artworks.
3. Express confidence in genre classification as a decimal between 0.1 and 1.0.
4. Use {language} for your response language.
"""


def is_excluded_artwork(detection: GenreDetectionResult) -> bool:
    """유명 예술 작품이라 분석에서 제외해야 하는지 (단순 랜드마크/여행 사진은 허용)"""
    if not detection.is_famous_artwork:
        return False

    keyword_hit = any(
        term in keyword.lower()
        for keyword in detection.keywords
        for term in ARTWORK_KEYWORDS
    )
    reason = detection.reason_for_classification.lower()
    reason_hit = any(term in reason for term in ARTWORK_REASON_TERMS)

    return keyword_hit or reason_hit


def can_be_analyzed(detection: GenreDetectionResult) -> bool:
    """실제 사진이고 제외 대상 작품이 아니어야 분석 가능"""
    return detection.is_real_photo and not is_excluded_artwork(detection)


def parse_detection(text: str) -> GenreDetectionResult:
    """모델 응답 → GenreDetectionResult (canBeAnalyzed 계산 포함)"""
    try:
        data = json.loads(strip_code_fences(text))
        detection = GenreDetectionResult.model_validate(data)
    except (json.JSONDecodeError, ValidationError) as e:
        raise ClassificationFailure(f"Failed to parse genre detection response: {e}") from e

    return detection.model_copy(update={"can_be_analyzed": can_be_analyzed(detection)})


async def detect_photo_genre(image: bytes | str, language: str = "ko", generate=None) -> GenreDetectionResult:
    """사진 장르 및 속성 감지

    image: 이미지 바이트 또는 data URL
    generate: 모델 호출 함수 (기본값 ai_service.generate)
    """
    generate = generate or ai_service.generate
    logger.info(f"사진 장르 및 속성 감지 시작 (언어: {language})")

    try:
        image_bytes, mime_type = resolve_image(image)
    except ValueError as e:
        raise ClassificationFailure(f"Invalid image input: {e}") from e

    prompt = build_classification_prompt(language)
    try:
        response_text = await generate([prompt], image_bytes, mime_type)
    except Exception as e:
        logger.error(f"장르 감지 모델 호출 실패: {e}")
        raise ClassificationFailure(f"Genre detection request failed: {e}") from e

    detection = parse_detection(response_text)

    if is_excluded_artwork(detection):
        logger.info("분석 제외 이유: 유명 예술 작품으로 판단됨")

    logger.info(
        f"장르 감지 완료: {detection.detected_genre} "
        f"(isRealPhoto={detection.is_real_photo}, isFamousArtwork={detection.is_famous_artwork}, "
        f"canBeAnalyzed={detection.can_be_analyzed})"
    )
    return detection
