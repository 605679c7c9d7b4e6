from core.config import settings
from core.logger import get_logger
from service.summary_service import SummaryService, create_gemini_model

logger = get_logger("dependencies")

# 전역 서비스 — lifespan에서 초기화/정리
_summary_service: SummaryService | None = None

# === FastAPI Depends()용 함수 ===

async def get_summary_service() -> SummaryService:
    if _summary_service is None:
        raise RuntimeError("요약 서비스가 초기화되지 않았습니다. 서버 시작을 확인하세요.")
    return _summary_service


# === 수명주기 관리 (main.py의 lifespan에서 호출) ===

async def init_services():
    global _summary_service

    llm = create_gemini_model(
        api_key=settings.google_api_key,
        model_name=settings.model_name,
        temperature=settings.temperature,
    )
    _summary_service = SummaryService(llm)

    logger.info(
        "Gemini 클라이언트 준비 완료",
        extra={"extra_data": {"model": settings.model_name}},
    )


async def close_services():
    global _summary_service

    _summary_service = None
    logger.info("요약 서비스 종료")
