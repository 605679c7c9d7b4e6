import logging
import json
import uuid
from datetime import datetime, timezone
from contextvars import ContextVar

# 요청별 고유 ID를 저장하는 Context Variable
# (같은 요청 내에서는 서비스 계층 로그에도 동일한 request_id가 찍힘)
request_id_var: ContextVar[str] = ContextVar("request_id", default="-")

# get_logger가 적용할 기본 레벨 + 지금까지 만든 로거 이름
_default_level = logging.INFO
_managed: set[str] = set()


class JsonFormatter(logging.Formatter):
    """
    로그를 JSON 한 줄로 출력하는 포매터

    예: {"timestamp": "...", "level": "ERROR", "message": "Gemini 호출 실패",
         "logger": "summary_service", "request_id": "ab12cd34",
         "exc_type": "ResourceExhausted", "exc_message": "quota"}
    """

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "message": record.getMessage(),
            "logger": record.name,
            "request_id": request_id_var.get("-"),
        }

        # 추가 필드가 있으면 병합 (예: kind, status, duration_ms 등)
        if hasattr(record, "extra_data"):
            log_data.update(record.extra_data)

        # 예외 정보 — 원인은 서버 로그에만 남기고 클라이언트에는 노출하지 않음
        if record.exc_info and record.exc_info[0] is not None:
            exc_type, exc_value, _ = record.exc_info
            log_data["exc_type"] = exc_type.__name__
            log_data["exc_message"] = str(exc_value)
            log_data["traceback"] = self.formatException(record.exc_info)

        return json.dumps(log_data, ensure_ascii=False)


def configure_logging(level: str) -> None:
    """앱 시작 시 한 번 호출 — 이미 만들어진 로거까지 레벨 반영"""
    global _default_level
    resolved = logging.getLevelName(level.upper())
    _default_level = resolved if isinstance(resolved, int) else logging.INFO
    for name in _managed:
        logging.getLogger(name).setLevel(_default_level)


def get_logger(name: str) -> logging.Logger:
    """구조화된 JSON 로거 생성"""
    logger = logging.getLogger(name)

    # 중복 핸들러 방지
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(JsonFormatter())
        logger.addHandler(handler)
        logger.setLevel(_default_level)
        _managed.add(name)

    return logger


def generate_request_id() -> str:
    """요청별 고유 추적 ID 생성"""
    return str(uuid.uuid4())[:8]  # 짧게 8자만 사용
