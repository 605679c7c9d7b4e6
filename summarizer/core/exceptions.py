"""
요약 파이프라인 예외 계층

모든 예외는 HTTP 상태코드와 '외부에 보여줘도 되는' 메시지를 함께 가집니다.
상세 원인은 서버 로그에만 남기고, 응답 본문에는 message만 담습니다.

  ValidationError        → 400 (사용자가 고칠 수 있는 입력 오류)
  MalformedResponseError → 500 (AI 응답이 JSON이 아니거나 형태가 다름)
  ProviderError          → 500 (네트워크/인증/쿼터 등 외부 AI 호출 실패)
  QuotaExceededError     → 클라이언트 전용 (네트워크 호출 전에 차단)
"""
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from core.logger import get_logger
from core.metrics import metrics_store
from schemas.summary import GENERIC_ERROR_MESSAGE

logger = get_logger("errors")


class SummarizerError(Exception):
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    message: str = GENERIC_ERROR_MESSAGE
    kind: str = "internal_error"

    def __init__(self, message: str | None = None):
        if message is not None:
            self.message = message
        super().__init__(self.message)


class ValidationError(SummarizerError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = "Text is required and must be a string"
    kind = "validation_error"


class MalformedResponseError(SummarizerError):
    message = "Failed to process the AI response. The format may be incorrect."
    kind = "malformed_response"


class ProviderError(SummarizerError):
    kind = "provider_error"


class QuotaExceededError(SummarizerError):
    status_code = status.HTTP_429_TOO_MANY_REQUESTS
    kind = "quota_exceeded"

    def __init__(self, limit: int, window_label: str):
        self.limit = limit
        super().__init__(
            f"You have reached the limit of {limit} summaries {window_label}. "
            "Please try again later."
        )


def install_exception_handlers(app: FastAPI) -> None:
    """main.py와 테스트 앱이 같은 에러 응답 형식을 쓰도록 핸들러를 한 곳에서 등록"""

    @app.exception_handler(SummarizerError)
    async def summarizer_error_handler(request: Request, exc: SummarizerError) -> JSONResponse:
        metrics_store.record_error(exc.kind)
        logger.warning(
            f"{exc.kind}: {exc.message}",
            extra={"extra_data": {"kind": exc.kind, "status": exc.status_code, "path": request.url.path}},
        )
        return JSONResponse(status_code=exc.status_code, content={"error": exc.message})

    @app.exception_handler(Exception)
    async def unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
        metrics_store.record_error("internal_error")
        logger.error(
            "처리되지 않은 예외",
            exc_info=exc,
            extra={"extra_data": {"kind": "internal_error", "path": request.url.path}},
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": GENERIC_ERROR_MESSAGE},
        )
