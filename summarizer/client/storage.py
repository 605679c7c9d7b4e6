"""
로컬 키-값 저장소 — 브라우저 localStorage와 같은 인터페이스

파일 하나에 {key: 문자열 값} JSON을 저장합니다.
여러 프로세스가 같은 파일을 동시에 쓰면 마지막 쓰기가 이깁니다 (잠금 없음).
"""
import json
from pathlib import Path

from core.logger import get_logger

logger = get_logger("local_storage")


class LocalStorage:

    def __init__(self, path: Path):
        self.path = Path(path)

    def _load(self) -> dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, UnicodeDecodeError):
            logger.warning("저장소 파일이 손상되어 비어 있는 것으로 간주", extra={"extra_data": {"path": str(self.path)}})
            return {}
        return data if isinstance(data, dict) else {}

    def _save(self, data: dict[str, str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(data, ensure_ascii=False), encoding="utf-8")

    def get_item(self, key: str) -> str | None:
        value = self._load().get(key)
        # localStorage처럼 문자열만 값으로 인정
        if value is not None and not isinstance(value, str):
            logger.warning(
                "문자열이 아닌 값은 없는 것으로 간주",
                extra={"extra_data": {"path": str(self.path), "key": key, "value_type": type(value).__name__}},
            )
            return None
        return value

    def set_item(self, key: str, value: str) -> None:
        data = self._load()
        data[key] = value
        self._save(data)

    def remove_item(self, key: str) -> None:
        data = self._load()
        if key in data:
            del data[key]
            self._save(data)
