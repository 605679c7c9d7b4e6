from fastapi import FastAPI
from contextlib import asynccontextmanager
from core.config import settings
from core.dependencies import init_services, close_services
from core.exceptions import install_exception_handlers
from core.logger import configure_logging
from core.metrics import RequestMetricsMiddleware, metrics_store
from router import summarize

configure_logging(settings.log_level)


@asynccontextmanager
async def lifespan(app: FastAPI):
    try:
        await init_services()
        yield
    finally:
        await close_services()

app = FastAPI(
    title="Smart Summary",
    description="Gemini 기반 3종 요약 (Tweet / LinkedIn / E-mail) 생성 API",
    version="0.1.0",
    lifespan=lifespan
)

# 미들웨어 등록 (모든 요청을 자동 계측)
app.add_middleware(RequestMetricsMiddleware)

# 에러 → {"error": "..."} 응답 변환
install_exception_handlers(app)

app.include_router(summarize.router, prefix="/api", tags=["Summary"])

@app.get("/health")
async def health():
    return {"status": "ok"}

@app.get("/api/metrics", tags=["Monitoring"])
async def get_metrics():
    """실시간 메트릭 조회 — 총 요청 수, 응답 시간, 상태코드/에러 종류별 분포 등"""
    return metrics_store.summary()
