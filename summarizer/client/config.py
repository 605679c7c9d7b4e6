from pydantic_settings import BaseSettings, SettingsConfigDict
from pathlib import Path

class ClientSettings(BaseSettings):
    # 요약 API 서버 주소
    api_base_url: str = "http://localhost:8000"

    # LLM 응답은 오래 걸릴 수 있음 (초)
    request_timeout: float = 120.0

    # 사용량 기록을 저장할 로컬 파일 (브라우저 localStorage 역할)
    storage_path: Path = Path.home() / ".smart_summary" / "storage.json"

    # 쿼터 정책 — 1시간(롤링 윈도우)에 5회
    max_attempts: int = 5
    window_ms: int = 60 * 60 * 1000

    model_config = SettingsConfigDict(
        env_prefix="SUMMARY_",
        env_file=Path(__file__).parent.parent.parent / ".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",           # 서버용 GOOGLE_API_KEY 등은 무시
    )
