from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict
from pathlib import Path

class Settings(BaseSettings):
    # Google Generative AI 키 — 없거나 빈 문자열이면 Settings() 생성 시점에 ValidationError (서버 기동 실패)
    google_api_key: str = Field(min_length=1)

    # 사용할 Gemini 모델
    model_name: str = "gemini-1.5-flash"

    # 생성 온도 (요약의 다양성)
    temperature: float = 0.7

    # 로그 레벨
    log_level: str = "INFO"

    # Pydantic v2 방식: Config 내부 클래스 대신 model_config 사용
    model_config = SettingsConfigDict(
        # config.py -> core -> summarizer -> 프로젝트 루트 아래의 .env 찾기
        env_file=Path(__file__).parent.parent.parent / ".env",
        env_file_encoding="utf-8",
        case_sensitive=False,     # 환경변수 대소문자 무시
        protected_namespaces=(),  # 'model_' 접두사 경고 무시
        extra="ignore",           # 클라이언트용 SUMMARY_* 값이 .env에 섞여 있어도 무시
    )


# 싱글톤 인스턴스 — 앱 어디서든 import해서 사용
settings = Settings()
