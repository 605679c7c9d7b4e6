import time
from collections import defaultdict
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse, Response
from core.logger import get_logger, generate_request_id, request_id_var
from schemas.summary import GENERIC_ERROR_MESSAGE

logger = get_logger("metrics")

# 느린 요청 보관 개수
SLOWEST_KEEP = 5


class MetricsStore:
    """메트릭 저장소 — 인메모리 집계 (프로세스 재시작 시 초기화)"""

    def __init__(self):
        self.reset()

    def reset(self):
        self.total_requests = 0
        self.by_status = defaultdict(int)     # {200: 42, 400: 3, 500: 1}
        self.by_path = defaultdict(int)        # {"POST /api/summarize": 30}
        self.by_error = defaultdict(int)       # {"malformed_response": 2, "provider_error": 1}
        self.total_duration_ms = 0.0
        self.slowest = []                      # [{duration_ms, method, path, status}, ...]

    def record(self, method: str, path: str, status: int, duration_ms: float):
        self.total_requests += 1
        self.by_status[status] += 1
        self.by_path[f"{method} {path}"] += 1
        self.total_duration_ms += duration_ms

        # 가장 느린 요청 Top 5 유지 — 요약 호출은 대부분 Gemini 대기 시간
        self.slowest.append({
            "duration_ms": round(duration_ms, 1),
            "method": method,
            "path": path,
            "status": status,
        })
        self.slowest.sort(key=lambda x: x["duration_ms"], reverse=True)
        self.slowest = self.slowest[:SLOWEST_KEEP]

    def record_error(self, kind: str):
        self.by_error[kind] += 1

    def summary(self) -> dict:
        avg = round(self.total_duration_ms / self.total_requests, 1) if self.total_requests else 0
        return {
            "total_requests": self.total_requests,
            "avg_response_time_ms": avg,
            "by_status": dict(self.by_status),
            "by_path": dict(self.by_path),
            "by_error": dict(self.by_error),
            "slowest_top5": self.slowest,
        }


# 싱글톤 인스턴스
metrics_store = MetricsStore()


class RequestMetricsMiddleware(BaseHTTPMiddleware):
    """
    모든 HTTP 요청을 자동 계측하는 미들웨어

    1. 요청마다 request_id 부여 (서비스 로그와 연결)
    2. 응답 시간 측정 + 메트릭 집계
    3. 요청당 JSON 로그 한 줄
    """

    async def dispatch(self, request: Request, call_next) -> Response:
        req_id = generate_request_id()
        request_id_var.set(req_id)

        start = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception as e:
            # Exception 핸들러는 이 미들웨어 바깥(ServerErrorMiddleware)에서 돌기 때문에 여기서 500 응답 생성
            metrics_store.record_error("internal_error")
            logger.error(
                "처리되지 않은 예외",
                exc_info=e,
                extra={"extra_data": {"kind": "internal_error", "path": request.url.path}},
            )
            response = JSONResponse(status_code=500, content={"error": GENERIC_ERROR_MESSAGE})
        duration_ms = (time.perf_counter() - start) * 1000

        metrics_store.record(
            method=request.method,
            path=request.url.path,
            status=response.status_code,
            duration_ms=duration_ms,
        )

        logger.info(
            f"{request.method} {request.url.path} {response.status_code} {duration_ms:.0f}ms",
            extra={"extra_data": {
                "method": request.method,
                "path": request.url.path,
                "status": response.status_code,
                "duration_ms": round(duration_ms, 1),
            }}
        )

        # 응답 헤더에 request_id 포함 (서버 로그 추적용)
        response.headers["X-Request-ID"] = req_id

        return response
