"""
클라이언트 쿼터 트래커 — 롤링 윈도우 N회 제한

저장소 키 구조:
  summaryUsage → {"count": 3, "firstAttempt": 1718000000000}

윈도우는 '첫 성공 요청' 시각부터 W ms 동안이며, 시계 정각 기준이 아닙니다.
만료된 기록은 check_usage()에서 읽는 순간 삭제됩니다.
"""
import json
import time
from typing import Callable

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from client.storage import LocalStorage
from core.logger import get_logger

logger = get_logger("quota")

USAGE_KEY = "summaryUsage"
DEFAULT_MAX_ATTEMPTS = 5
DEFAULT_WINDOW_MS = 60 * 60 * 1000  # 1시간


def now_ms() -> int:
    return int(time.time() * 1000)


class UsageRecord(BaseModel):
    count: int = Field(ge=0)
    first_attempt: int = Field(alias="firstAttempt")

    model_config = ConfigDict(populate_by_name=True)


class UsageStatus(BaseModel):
    allowed: bool
    attempts: int


def describe_window(window_ms: int) -> str:
    """쿼터 안내 문구용 — 3600000 → 'per hour'"""
    if window_ms == DEFAULT_WINDOW_MS:
        return "per hour"
    if window_ms % DEFAULT_WINDOW_MS == 0:
        return f"per {window_ms // DEFAULT_WINDOW_MS} hours"
    if window_ms % 60_000 == 0:
        minutes = window_ms // 60_000
        return "per minute" if minutes == 1 else f"per {minutes} minutes"
    seconds = max(1, window_ms // 1000)
    return "per second" if seconds == 1 else f"per {seconds} seconds"


class QuotaTracker:

    def __init__(
        self,
        storage: LocalStorage,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
        window_ms: int = DEFAULT_WINDOW_MS,
        clock: Callable[[], int] = now_ms,
    ):
        self.storage = storage
        self.max_attempts = max_attempts
        self.window_ms = window_ms
        self.clock = clock

    def _read(self) -> UsageRecord | None:
        raw = self.storage.get_item(USAGE_KEY)
        if raw is None:
            return None
        try:
            return UsageRecord.model_validate(json.loads(raw))
        except (json.JSONDecodeError, ValidationError):
            logger.warning("사용량 기록이 손상되어 무시", extra={"extra_data": {"raw": raw[:100]}})
            return None

    def _write(self, record: UsageRecord) -> None:
        self.storage.set_item(USAGE_KEY, record.model_dump_json(by_alias=True))

    def check_usage(self) -> UsageStatus:
        """
        새 요청 가능 여부 확인 (카운트는 올리지 않음)

        - 기록 없음            → 허용, attempts=0
        - 윈도우 지남          → 기록 삭제 후 허용, attempts=0
        - count >= max_attempts → 거부
        """
        record = self._read()
        if record is None:
            return UsageStatus(allowed=True, attempts=0)

        if self.clock() - record.first_attempt > self.window_ms:
            self.storage.remove_item(USAGE_KEY)
            return UsageStatus(allowed=True, attempts=0)

        if record.count >= self.max_attempts:
            return UsageStatus(allowed=False, attempts=record.count)

        return UsageStatus(allowed=True, attempts=record.count)

    def record_usage(self) -> UsageRecord:
        """
        성공한 요청 1건 기록

        만료 여부는 다시 보지 않습니다 — 호출 직전에 check_usage()를 거쳐야 함.
        """
        record = self._read()
        if record is None:
            record = UsageRecord(count=1, first_attempt=self.clock())
        else:
            record = UsageRecord(count=record.count + 1, first_attempt=record.first_attempt)

        self._write(record)
        return record
