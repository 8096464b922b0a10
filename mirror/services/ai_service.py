from google import genai
from google.genai import types

from mirror.config import settings
from mirror.core.logger import logger
from mirror.services.mime_service import detect_mime_type

# Gemini 클라이언트 (최초 호출 시 생성)
_client = None

# 사진 평가는 안전 필터로 막히지 않도록 설정
SAFETY_SETTINGS = [
    types.SafetySetting(category=category, threshold=types.HarmBlockThreshold.BLOCK_NONE)
    for category in (
        types.HarmCategory.HARM_CATEGORY_HARASSMENT,
        types.HarmCategory.HARM_CATEGORY_HATE_SPEECH,
        types.HarmCategory.HARM_CATEGORY_SEXUALLY_EXPLICIT,
        types.HarmCategory.HARM_CATEGORY_DANGEROUS_CONTENT,
    )
]


def get_client() -> genai.Client:
    """Gemini 클라이언트 반환"""
    global _client
    if _client is None:
        if not settings.gemini_api_key:
            raise RuntimeError("GEMINI_API_KEY is not set in environment variables")
        _client = genai.Client(api_key=settings.gemini_api_key)
    return _client


async def generate(prompt_parts: list[str], image_bytes: bytes, mime_type: str | None = None) -> str:
    """프롬프트 + 이미지로 Gemini 호출, 응답 텍스트 반환

    이미지는 첫 번째 프롬프트 바로 뒤에 들어간다: [prompt_parts[0], image, *prompt_parts[1:]]
    오류는 해석하지 않고 그대로 전파한다.
    """
    image_part = types.Part.from_bytes(
        data=image_bytes,
        mime_type=mime_type or detect_mime_type(image_bytes),
    )
    contents = [prompt_parts[0], image_part, *prompt_parts[1:]]

    response = await get_client().aio.models.generate_content(
        model=settings.gemini_model,
        contents=contents,
        config=types.GenerateContentConfig(
            temperature=settings.gemini_temperature,
            max_output_tokens=settings.gemini_max_output_tokens,
            safety_settings=SAFETY_SETTINGS,
        ),
    )

    text = response.text
    if not text:
        raise RuntimeError("Empty response from Gemini")

    logger.debug(f"Gemini 응답 수신: {len(text)}자")
    return text


async def check_connection() -> bool:
    """Gemini 연결 테스트"""
    try:
        await get_client().aio.models.generate_content(
            model=settings.gemini_model,
            contents="Hello",
            config=types.GenerateContentConfig(max_output_tokens=10),
        )
        return True
    except Exception as e:
        logger.error(f"Gemini 연결 실패: {e}")
        return False
