"""사진 평가 파이프라인 예외

라우터는 이 예외들을 HTTP 응답으로 변환한다.
- ClassificationFailure, CritiqueModelFailure, ResponseFormatError: 기술적 실패 (502)
- NotAnalyzable: 분석 대상이 아닌 이미지 (422, 다른 사진 업로드 안내)
"""


class CritiqueError(Exception):
    """파이프라인 예외 공통 부모"""


class ClassificationFailure(CritiqueError):
    """장르 감지 단계 실패 (모델 호출 오류 또는 JSON 파싱 실패)"""


class NotAnalyzable(CritiqueError):
    """실제 사진이 아니거나 유명 예술 작품으로 판단된 경우"""

    def __init__(self, detection, message: str = "This image cannot be analyzed"):
        super().__init__(message)
        self.detection = detection


class CritiqueModelFailure(CritiqueError):
    """평가 모델 호출 실패"""


class ResponseFormatError(CritiqueError):
    """모델 응답이 JSON이 아니거나 필수 필드가 없음"""

    def __init__(self, message: str = "Invalid response format from Gemini"):
        super().__init__(message)
