from loguru import logger
import sys
import os

LOG_DIR = os.getenv("MIRROR_LOG_DIR", "logs")
os.makedirs(LOG_DIR, exist_ok=True)

CONSOLE_FORMAT = (
    "<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan> - <level>{message}</level>"
)
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | {name}:{function}:{line} - {message}"

# 평가 파이프라인 모듈 (분류 → 프롬프트 → 모델 호출 → 정규화)
PIPELINE_MODULES = (
    "mirror.services.genre_service",
    "mirror.services.critique_service",
    "mirror.services.normalizer_service",
    "mirror.services.ai_service",
)


def _is_pipeline(record):
    return record["name"] in PIPELINE_MODULES


def _file_sink(filename, level, **kwargs):
    logger.add(
        os.path.join(LOG_DIR, filename),
        rotation="10 MB",
        retention="30 days",
        compression="zip",
        format=FILE_FORMAT,
        level=level,
        **kwargs,
    )


logger.remove()

logger.add(sys.stdout, colorize=True, format=CONSOLE_FORMAT, level="INFO")

# 전체 로그
_file_sink("mirror.log", "DEBUG")

# 평가 파이프라인만 (Gemini 응답 디버깅용)
_file_sink("critique.log", "DEBUG", filter=_is_pipeline)

# 에러 전용
_file_sink("error.log", "ERROR", backtrace=True, diagnose=False)
