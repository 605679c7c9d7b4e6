"""
요약 요청 세션 — 사용자 1회 시도를 조율

전체 흐름:
1. 이전 에러 초기화
2. 쿼터 확인 → 초과 시 네트워크 호출 없이 종료
3. 빈 텍스트 확인 → 네트워크 호출 없이 종료
4. loading=True 후 API 호출
5. 성공 시 결과 저장 + 사용량 기록 (실패 시 기록하지 않음)
6. 어떤 경로로 끝나든 loading=False
"""
from typing import Callable

from pydantic import BaseModel

from client.api import SummaryApiClient, SummaryApiError, UNREACHABLE_MESSAGE
from client.quota import QuotaTracker, describe_window
from core.exceptions import QuotaExceededError
from core.logger import get_logger
from schemas.summary import SummaryResult

logger = get_logger("session")

EMPTY_TEXT_MESSAGE = "Please enter some text to summarize."


class SessionState(BaseModel):
    """화면에 그릴 상태 — 뷰는 이 값만 보고 렌더링"""
    loading: bool = False
    error: str | None = None
    results: SummaryResult | None = None
    attempts: int = 0
    can_submit: bool = True


class SummarySession:

    def __init__(
        self,
        api: SummaryApiClient,
        quota: QuotaTracker,
        on_change: Callable[[SessionState], None] | None = None,
    ):
        self.api = api
        self.quota = quota
        self.state = SessionState()
        # 로딩 시작 시 화면 갱신용 콜백
        self.on_change = on_change

    def refresh_usage(self) -> SessionState:
        """시작 시 한 번 — 남은 쿼터를 화면 상태에 반영 (만료된 기록은 여기서 정리됨)"""
        usage = self.quota.check_usage()
        self.state.attempts = usage.attempts
        self.state.can_submit = usage.allowed
        return self.state

    async def submit(self, text: str) -> SessionState:
        state = self.state
        state.error = None

        usage = self.quota.check_usage()
        if not usage.allowed:
            exc = QuotaExceededError(self.quota.max_attempts, describe_window(self.quota.window_ms))
            state.error = exc.message
            state.attempts = usage.attempts
            state.can_submit = False
            return state

        if not text.strip():
            state.error = EMPTY_TEXT_MESSAGE
            return state

        state.loading = True
        state.results = None
        try:
            if self.on_change:
                self.on_change(state)
            state.results = await self.api.summarize(text)
            record = self.quota.record_usage()
            state.attempts = record.count
            state.can_submit = record.count < self.quota.max_attempts
        except SummaryApiError as e:
            logger.warning(
                "요약 요청 실패",
                extra={"extra_data": {"status": e.status_code, "error": e.message}},
            )
            state.error = e.message or UNREACHABLE_MESSAGE
        finally:
            state.loading = False

        return state
