# main.py
import os

from fastapi import FastAPI, Request
from fastapi.staticfiles import StaticFiles
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.middleware.sessions import SessionMiddleware
from mirror.config import settings
from mirror.database import Base, engine
from mirror.models import user, photo, analysis, opinion  # noqa: F401 (테이블 등록)
from mirror.api.routes import admin, auth, photos, analyses, personas, users
from mirror.core.logging_middleware import log_requests
from mirror.core.logger import logger
from mirror.services import ai_service

app = FastAPI(
    title=settings.app_name,
    debug=settings.debug
)

# ===== 로깅 미들웨어 추가 (가장 먼저) =====
@app.middleware("http")
async def logging_middleware(request: Request, call_next):
    return await log_requests(request, call_next)
# ==========================================

# 요청 크기 제한 미들웨어 (업로드 최대 크기 + multipart 여유분)
MAX_REQUEST_SIZE = settings.max_upload_size + 1024 * 1024

@app.middleware("http")
async def limit_upload_size(request: Request, call_next):
    """요청 크기 제한"""
    if request.method in ["POST", "PUT", "PATCH"]:
        content_length = request.headers.get("content-length")
        if content_length and content_length.isdigit() and int(content_length) > MAX_REQUEST_SIZE:
            return JSONResponse(
                status_code=413,
                content={"detail": f"요청 크기가 너무 큽니다. 최대: {settings.max_upload_size // 1024 // 1024}MB"}
            )
    return await call_next(request)

# CORS 설정
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# OAuth state 저장용 세션
app.add_middleware(SessionMiddleware, secret_key=settings.secret_key)

# 라우터 등록
app.include_router(auth.router)
app.include_router(photos.router)
app.include_router(analyses.router)
app.include_router(personas.router)
app.include_router(users.router)
app.include_router(admin.router)

# 정적 파일 서빙
os.makedirs(os.path.join(settings.upload_dir, "photos"), exist_ok=True)
app.mount("/uploads", StaticFiles(directory=settings.upload_dir), name="uploads")

# ===== 시작 로그 추가 =====
@app.on_event("startup")
async def startup_event():
    Base.metadata.create_all(bind=engine)
    logger.info("mirror. API 서버 시작")

@app.on_event("shutdown")
async def shutdown_event():
    logger.info("mirror. API 서버 종료")
# ==========================

@app.get("/health")
def health_check():
    """헬스체크"""
    return {
        "status": "healthy",
        "service": settings.app_name
    }

@app.get("/health/ai")
async def ai_health_check():
    """Gemini 연결 확인"""
    connected = await ai_service.check_connection()
    return JSONResponse(
        status_code=200 if connected else 503,
        content={
            "status": "healthy" if connected else "unavailable",
            "model": settings.gemini_model
        }
    )
