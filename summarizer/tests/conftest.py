"""
pytest 공통 설정
"""
import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

# Settings()가 import 시점에 키를 요구하므로 테스트용 더미 키를 먼저 넣어둠
os.environ.setdefault("GOOGLE_API_KEY", "test-api-key")

import pytest
from starlette.testclient import TestClient
from langchain_core.language_models.fake_chat_models import FakeListChatModel

from fastapi import FastAPI
from core.dependencies import get_summary_service
from core.exceptions import install_exception_handlers
from core.metrics import metrics_store
from router import summarize
from service.summary_service import SummaryService

VALID_REPLY = '{"tweet":"t","linkedin":"l","email":"e"}'


class FailingChatModel(FakeListChatModel):
    """호출하면 항상 예외 — 네트워크/인증/쿼터 실패 흉내"""

    async def ainvoke(self, *args, **kwargs):
        raise ConnectionError("upstream exploded: secret-detail")


class ServiceHolder:
    """테스트마다 LLM 응답을 바꿔 끼우기 위한 홀더"""

    def __init__(self):
        self.service = SummaryService(FakeListChatModel(responses=[VALID_REPLY]))

    def reply_with(self, *responses: str):
        self.service = SummaryService(FakeListChatModel(responses=list(responses)))

    def fail(self):
        self.service = SummaryService(FailingChatModel(responses=[""]))


holder = ServiceHolder()


async def override_get_summary_service():
    return holder.service

# ===== 테스트 전용 앱 (미들웨어 없이) =====
test_app = FastAPI()
install_exception_handlers(test_app)
test_app.include_router(summarize.router, prefix="/api", tags=["Summary"])

# 핵심: Gemini 대신 Fake 모델을 쓰는 서비스로 교체
test_app.dependency_overrides[get_summary_service] = override_get_summary_service

@test_app.get("/health")
async def health():
    return {"status": "ok"}

@test_app.get("/api/metrics")
async def metrics():
    return metrics_store.summary()


@pytest.fixture
def llm():
    """LLM 응답 제어 — 기본은 정상 JSON"""
    holder.reply_with(VALID_REPLY)
    yield holder
    holder.reply_with(VALID_REPLY)


@pytest.fixture
def app():
    return test_app


@pytest.fixture
def client(llm):
    """동기식 테스트 클라이언트"""
    metrics_store.reset()
    with TestClient(test_app) as c:
        yield c


@pytest.fixture
def failing_llm():
    return FailingChatModel(responses=[""])


class FakeClock:
    """epoch ms를 직접 움직일 수 있는 시계"""

    def __init__(self, start: int = 1_700_000_000_000):
        self.now = start

    def __call__(self) -> int:
        return self.now

    def advance(self, ms: int):
        self.now += ms


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def storage(tmp_path):
    from client.storage import LocalStorage
    return LocalStorage(tmp_path / "storage.json")
