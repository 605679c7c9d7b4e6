"""
쿼터 트래커 테스트 — 1시간 롤링 윈도우 5회
"""
import json

import pytest

from client.quota import USAGE_KEY, QuotaTracker, describe_window

WINDOW_MS = 60 * 60 * 1000


@pytest.fixture
def tracker(storage, clock):
    return QuotaTracker(storage, max_attempts=5, window_ms=WINDOW_MS, clock=clock)


def _put(storage, count, first_attempt):
    storage.set_item(USAGE_KEY, json.dumps({"count": count, "firstAttempt": first_attempt}))


def _get(storage):
    raw = storage.get_item(USAGE_KEY)
    return json.loads(raw) if raw is not None else None


# ===== check_usage =====

def test_기록_없으면_허용(tracker):
    status = tracker.check_usage()
    assert status.allowed is True
    assert status.attempts == 0


@pytest.mark.parametrize("count", [0, 1, 4])
def test_한도_미만이면_허용(tracker, storage, clock, count):
    _put(storage, count, clock.now - 1000)
    status = tracker.check_usage()
    assert status.allowed is True
    assert status.attempts == count


@pytest.mark.parametrize("count", [5, 6])
def test_한도_이상이면_거부(tracker, storage, clock, count):
    _put(storage, count, clock.now - 1000)
    status = tracker.check_usage()
    assert status.allowed is False
    assert status.attempts == count


def test_윈도우_경계_정확히_1시간은_아직_유효(tracker, storage, clock):
    _put(storage, 5, clock.now - WINDOW_MS)
    assert tracker.check_usage().allowed is False
    assert _get(storage) is not None


def test_윈도우_지나면_초기화_및_기록_삭제(tracker, storage, clock):
    _put(storage, 5, clock.now - WINDOW_MS - 1)
    status = tracker.check_usage()
    assert status.allowed is True
    assert status.attempts == 0
    assert _get(storage) is None


def test_손상된_기록은_없는_것으로_취급(tracker, storage):
    storage.set_item(USAGE_KEY, "{not json")
    status = tracker.check_usage()
    assert status.allowed is True
    assert status.attempts == 0


def test_문자열이_아닌_기록도_없는_것으로_취급(tracker, storage):
    # 값이 JSON 문자열이 아니라 객체로 직접 저장된 파일
    storage.path.write_text(
        json.dumps({USAGE_KEY: {"count": 1, "firstAttempt": 0}}), encoding="utf-8"
    )

    assert storage.get_item(USAGE_KEY) is None
    status = tracker.check_usage()
    assert status.allowed is True
    assert status.attempts == 0


# ===== record_usage =====

def test_첫_기록_생성(tracker, storage, clock):
    record = tracker.record_usage()
    assert record.count == 1
    assert _get(storage) == {"count": 1, "firstAttempt": clock.now}


def test_기존_기록_증가_시작시각_유지(tracker, storage, clock):
    _put(storage, 2, clock.now - 5000)
    clock.advance(1000)
    tracker.record_usage()
    assert _get(storage) == {"count": 3, "firstAttempt": clock.now - 6000}


def test_기록시에는_만료를_다시_보지_않음(tracker, storage, clock):
    """check_usage 없이 record_usage만 부르면 만료된 기록에도 그대로 +1"""
    _put(storage, 5, clock.now - WINDOW_MS * 2)
    tracker.record_usage()
    assert _get(storage)["count"] == 6


def test_저장소_파일에_영속(tmp_path, clock):
    from client.storage import LocalStorage
    path = tmp_path / "nested" / "storage.json"

    QuotaTracker(LocalStorage(path), clock=clock).record_usage()
    status = QuotaTracker(LocalStorage(path), clock=clock).check_usage()

    assert status.attempts == 1
    assert json.loads(path.read_text(encoding="utf-8"))[USAGE_KEY]


# ===== 안내 문구 =====

@pytest.mark.parametrize("window_ms,label", [
    (WINDOW_MS, "per hour"),
    (WINDOW_MS * 24, "per 24 hours"),
    (60_000, "per minute"),
    (15 * 60_000, "per 15 minutes"),
    (1000, "per second"),
    (30_000, "per 30 seconds"),
    (90_000, "per 90 seconds"),
])
def test_윈도우_문구(window_ms, label):
    assert describe_window(window_ms) == label
