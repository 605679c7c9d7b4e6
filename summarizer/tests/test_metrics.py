"""
메트릭 & 헬스체크 테스트
"""
import pytest
from starlette.testclient import TestClient

from core.dependencies import get_summary_service
from core.metrics import MetricsStore, metrics_store


def test_헬스체크(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_메트릭_조회(client):
    response = client.get("/api/metrics")
    assert response.status_code == 200
    data = response.json()
    assert "total_requests" in data
    assert "avg_response_time_ms" in data
    assert "by_status" in data
    assert "by_error" in data
    assert "slowest_top5" in data


def test_에러_종류별_집계(client, llm):
    client.post("/api/summarize", json={})
    llm.reply_with("not json")
    client.post("/api/summarize", json={"text": "hello"})

    data = client.get("/api/metrics").json()
    assert data["by_error"] == {"validation_error": 1, "malformed_response": 1}


def test_느린_요청_상위_5개만_유지():
    store = MetricsStore()
    for i in range(8):
        store.record("POST", "/api/summarize", 200, float(i))

    summary = store.summary()
    assert summary["total_requests"] == 8
    assert [s["duration_ms"] for s in summary["slowest_top5"]] == [7.0, 6.0, 5.0, 4.0, 3.0]
    assert summary["by_path"] == {"POST /api/summarize": 8}


# ===== 실제 앱 (미들웨어 포함) =====

class ExplodingService:
    """서비스 계층 밖으로 예상치 못한 예외를 던짐"""

    async def summarize(self, text):
        raise KeyError("unexpected")


@pytest.fixture
def app_client(llm):
    from main import app as main_app

    async def override():
        return llm.service

    metrics_store.reset()
    main_app.dependency_overrides[get_summary_service] = override
    # with 블록 없이 생성 — lifespan(Gemini 초기화)은 돌리지 않음
    yield TestClient(main_app)
    main_app.dependency_overrides.clear()


def test_성공_응답에_요청ID(app_client):
    response = app_client.post("/api/summarize", json={"text": "hello"})
    assert response.status_code == 200
    assert response.headers.get("X-Request-ID")


def test_검증_실패_응답에_요청ID(app_client):
    response = app_client.post("/api/summarize", json={})
    assert response.status_code == 400
    assert response.headers.get("X-Request-ID")


def test_예상치_못한_예외도_500과_요청ID(app_client, llm):
    llm.service = ExplodingService()

    response = app_client.post("/api/summarize", json={"text": "hello"})

    assert response.status_code == 500
    assert response.json() == {"error": "An internal error occurred while generating the summary."}
    assert response.headers.get("X-Request-ID")

    data = app_client.get("/api/metrics").json()
    assert data["by_status"].get("500") == 1
    assert data["by_error"] == {"internal_error": 1}
