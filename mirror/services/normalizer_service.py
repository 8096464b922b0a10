"""Gemini 평가 응답 정규화

1. 코드 블록(```json / ```) 제거
2. JSON 파싱 + 필수 필드 검증 (summary, overallScore, categoryScores)
3. 유명 예술 작품이면 분석 본문을 고정 문구로 교체 (점수/태그/요약은 유지)
"""
import copy
import json
import re

from pydantic import ValidationError

from mirror.core.exceptions import ResponseFormatError
from mirror.core.logger import logger
from mirror.schemas.analysis import AnalysisResult
from mirror.services.persona_service import CATEGORIES

FENCE_PATTERN = re.compile(r"```(?:json)?\s*(.*?)\s*```", re.IGNORECASE | re.DOTALL)

# 유명 작품용 고정 문구
ARTWORK_OVERALL_TEXT = (
    "This image appears to be a recognized artwork rather than an everyday photograph, "
    "so it is not evaluable in the usual sense. It is best appreciated in its historical "
    "and artistic context. Pay attention to the artist's vision and the way the work expresses it."
)
ARTWORK_STRENGTHS = [
    "It is a historically significant work.",
    "It shows a distinctive artistic vision.",
    "It has innovative technical characteristics for its time.",
    "It is an important reference for art theory and criticism.",
    "It influenced the development of photographic art.",
]
ARTWORK_IMPROVEMENTS = [
    "Try to see the work in person to observe it in more detail.",
    "Look for more material about the artist.",
    "Compare it with other works from a similar period or style.",
    "Research the background and cultural context in which it was made.",
    "Read critical discussions of the work for further reference.",
]
ARTWORK_MODIFICATIONS = "Modification suggestions are not appropriate for a recognized artwork."
ARTWORK_SECTION_TEXT = (
    "This is a recognized work of art with historical significance. It is more appropriate "
    "to appreciate it in its historical context than to evaluate it technically."
)
ARTWORK_SECTION_SUGGESTION = "Research the historical context of the work and the artist's intent."


def strip_code_fences(text: str) -> str:
    """응답에서 마크다운 코드 블록 제거"""
    text = text.strip()

    match = FENCE_PATTERN.search(text)
    if match:
        return match.group(1).strip()

    # 닫는 펜스가 없는 경우
    if text.startswith("```"):
        text = re.sub(r"^```(?:json)?", "", text, flags=re.IGNORECASE).strip()
        return text.removesuffix("```").strip()

    # 앞뒤에 설명 문장이 붙은 경우 중괄호 구간만 사용
    if not text.startswith("{"):
        start, end = text.find("{"), text.rfind("}")
        if start != -1 and end > start:
            return text[start:end + 1]

    return text


def clamp_score(value) -> int:
    """점수를 반올림해 0-100 정수로"""
    return max(0, min(100, int(round(value))))


def validate_critique(data) -> dict:
    """필수 필드 검증 후 점수를 정수로 맞춘 사본 반환"""
    if not isinstance(data, dict):
        raise ResponseFormatError()

    summary = data.get("summary")
    if not isinstance(summary, str) or not summary.strip():
        raise ResponseFormatError()

    score = data.get("overallScore")
    if isinstance(score, bool) or not isinstance(score, (int, float)):
        raise ResponseFormatError()

    category_scores = data.get("categoryScores")
    if not isinstance(category_scores, dict) or any(c not in category_scores for c in CATEGORIES):
        raise ResponseFormatError()
    if any(isinstance(category_scores[c], bool) or not isinstance(category_scores[c], (int, float))
           for c in CATEGORIES):
        raise ResponseFormatError()

    result = dict(data)
    # 소수점 점수가 올 수 있음
    result["overallScore"] = clamp_score(score)
    result["categoryScores"] = {
        **category_scores,
        **{c: clamp_score(category_scores[c]) for c in CATEGORIES},
    }

    try:
        AnalysisResult.model_validate(result)
    except ValidationError as e:
        logger.warning(f"평가 응답 형식 오류: {e.error_count()}개 필드")
        raise ResponseFormatError() from e

    return result


def parse_critique(text: str) -> dict:
    """모델 응답 텍스트 → 검증된 평가 dict"""
    cleaned = strip_code_fences(text)
    logger.debug(f"응답 분석 준비: {cleaned[:100]}")

    try:
        data = json.loads(cleaned)
    except json.JSONDecodeError as e:
        raise ResponseFormatError() from e

    return validate_critique(data)


def apply_artwork_override(result: dict, is_excluded_artwork: bool) -> dict:
    """유명 작품이면 분석 본문을 고정 문구로 교체한 새 dict 반환 (멱등)"""
    new_result = copy.deepcopy(result)
    if not is_excluded_artwork:
        return new_result

    analysis = new_result.get("analysis")
    if not isinstance(analysis, dict):
        analysis = {}
    new_result["analysis"] = analysis

    overall = analysis.get("overall") if isinstance(analysis.get("overall"), dict) else {}
    overall.update(
        text=ARTWORK_OVERALL_TEXT,
        strengths=list(ARTWORK_STRENGTHS),
        improvements=list(ARTWORK_IMPROVEMENTS),
        modifications=ARTWORK_MODIFICATIONS,
    )
    analysis["overall"] = overall

    for category in CATEGORIES:
        section = analysis.get(category) if isinstance(analysis.get(category), dict) else {}
        section.update(text=ARTWORK_SECTION_TEXT, suggestions=ARTWORK_SECTION_SUGGESTION)
        analysis[category] = section

    new_result["isNotEvaluable"] = True
    return new_result


def normalize_critique(text: str, detection=None) -> dict:
    """파싱 + 검증 + 유명 작품 처리"""
    result = parse_critique(text)

    is_excluded = result.get("isNotEvaluable") is True or (
        detection is not None
        and detection.is_famous_artwork
        and not detection.can_be_analyzed
    )
    if is_excluded:
        logger.info("유명 작품으로 판단됨: 분석 본문을 고정 문구로 교체")
        return apply_artwork_override(result, True)

    return result
