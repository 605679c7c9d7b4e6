from pydantic import BaseModel, ConfigDict, StrictStr

class SummaryRequest(BaseModel):
    """POST /api/summarize 요청 본문 (문서화용 — 검증은 서비스에서 직접 수행)"""
    text: str

class SummaryResult(BaseModel):
    """AI가 돌려줘야 하는 세 가지 요약 — 키 누락/문자열 아님이면 파싱 실패로 취급"""
    tweet: StrictStr       # 280자 이내 + 해시태그 2~3개
    linkedin: StrictStr    # 조금 더 자세한 전문가용 글 + 행동 유도 문구
    email: StrictStr       # 격식 있는 비즈니스 이메일 요약

    model_config = ConfigDict(extra="ignore")

class ErrorResponse(BaseModel):
    error: str

# 원인과 무관하게 500에서 돌려주는 공개 메시지
GENERIC_ERROR_MESSAGE = "An internal error occurred while generating the summary."
