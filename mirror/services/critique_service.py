"""사진 평가 파이프라인

장르 감지 → 분석 가능 여부 확인 → 프롬프트 생성 → Gemini 평가 → 응답 정규화
모델 호출은 정확히 두 번(감지, 평가)이며 재시도하지 않는다.
"""
from mirror.core.exceptions import CritiqueModelFailure, NotAnalyzable
from mirror.core.logger import logger
from mirror.services import ai_service
from mirror.services.genre_service import detect_photo_genre
from mirror.services.image_service import resolve_image
from mirror.services.normalizer_service import normalize_critique
from mirror.services.prompt_service import build_critique_prompt


async def critique(image: bytes | str, persona: str, language: str = "ko", generate=None) -> dict:
    """사진 평가 실행

    image: 이미지 바이트 또는 data URL
    persona: 페르소나 키 (알 수 없으면 기본 템플릿)
    generate: 모델 호출 함수 (기본값 ai_service.generate)

    Raises:
        ClassificationFailure: 장르 감지 실패
        NotAnalyzable: 실제 사진이 아니거나 유명 작품
        CritiqueModelFailure: 평가 모델 호출 실패
        ResponseFormatError: 평가 응답 형식 오류
    """
    generate = generate or ai_service.generate
    logger.info(f"사진 분석 시작 - 페르소나: {persona}, 언어: {language}")

    # 1. 장르 감지
    detection = await detect_photo_genre(image, language, generate=generate)

    # 2. 분석 가능 여부
    if not detection.can_be_analyzed:
        logger.info(
            f"분석 불가 이미지: isRealPhoto={detection.is_real_photo}, "
            f"isFamousArtwork={detection.is_famous_artwork}"
        )
        raise NotAnalyzable(detection)

    # 3. 평가 요청
    prompt = build_critique_prompt(detection, persona, language)
    image_bytes, mime_type = resolve_image(image)

    try:
        response_text = await generate(prompt.parts(), image_bytes, mime_type)
    except Exception as e:
        logger.error(f"평가 모델 호출 실패: {e}")
        raise CritiqueModelFailure(f"Critique request failed: {e}") from e

    logger.debug(f"평가 응답 수신: {len(response_text)}자")

    # 4. 정규화
    result = normalize_critique(response_text, detection)
    logger.info(
        f"사진 분석 완료 - 장르: {result.get('detectedGenre')}, 점수: {result.get('overallScore')}"
    )
    return result
