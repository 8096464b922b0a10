from pydantic_settings import BaseSettings
from pydantic import field_validator

class Settings(BaseSettings):
    """환경변수 설정"""

    # API 기본 설정
    app_name: str = "mirror. API"
    debug: bool = True

    # Database
    database_url: str = "sqlite:///./mirror.db"

    # JWT
    secret_key: str
    algorithm: str = "HS256"
    access_token_expire_minutes: int = 60 * 24 * 7

    # Gemini API
    gemini_api_key: str = ""
    gemini_model: str = "gemini-1.5-flash"
    gemini_temperature: float = 0.4
    gemini_max_output_tokens: int = 4096

    # Google OAuth
    google_client_id: str = ""
    google_client_secret: str = ""
    google_redirect_uri: str = "http://localhost:8000/api/v1/auth/google/callback"

    # 프론트엔드
    frontend_url: str = "http://localhost:3000"
    cors_origins: list[str] = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ]

    # 업로드
    upload_dir: str = "uploads"
    max_upload_size: int = 20 * 1024 * 1024  # 20MB

    # 분석 기본 언어
    default_language: str = "ko"

    # 관리자 (Google 로그인 이메일)
    admin_emails: list[str] = []

    @field_validator('secret_key')
    def validate_secret_key(cls, v):
        if len(v) < 32:
            raise ValueError('SECRET_KEY는 최소 32자 이상이어야 합니다')
        return v

    class Config:
        env_file = ".env"
        case_sensitive = False

# 싱글톤 인스턴스
settings = Settings()
