"""
요약 서비스 — 원문 → 프롬프트 → Gemini → JSON 파싱 → SummaryResult

흐름:
1. 입력 검증 (문자열이 아니거나 비어 있으면 ValidationError)
2. 프롬프트 생성
3. LLM 호출 (재시도/스트리밍/캐시 없음, 실패 시 ProviderError)
4. 응답 텍스트를 JSON으로 파싱 + 스키마 검증 (실패 시 MalformedResponseError)
"""
import json
from typing import Any

from langchain_core.language_models.chat_models import BaseChatModel
from langchain_core.messages import HumanMessage
from langchain_google_genai import ChatGoogleGenerativeAI, HarmBlockThreshold, HarmCategory
from pydantic import ValidationError as SchemaError

from core.exceptions import MalformedResponseError, ProviderError, ValidationError
from core.logger import get_logger
from schemas.summary import SummaryResult
from service.prompt import build_prompt

logger = get_logger("summary_service")

# 차단할 유해 카테고리 — 모두 '중간 이상' 등급부터 차단
SAFETY_CATEGORIES = (
    HarmCategory.HARM_CATEGORY_HARASSMENT,
    HarmCategory.HARM_CATEGORY_HATE_SPEECH,
    HarmCategory.HARM_CATEGORY_SEXUALLY_EXPLICIT,
    HarmCategory.HARM_CATEGORY_DANGEROUS_CONTENT,
)


def build_safety_settings() -> dict:
    return {category: HarmBlockThreshold.BLOCK_MEDIUM_AND_ABOVE for category in SAFETY_CATEGORIES}


def create_gemini_model(api_key: str, model_name: str, temperature: float) -> ChatGoogleGenerativeAI:
    """
    Gemini 채팅 모델 생성

    안전 설정은 모델 생성 시점에 한 번만 적용합니다 (호출 시점에 다시 넘기지 않음).
    max_retries=1: langchain-google-genai에서는 총 시도 횟수 — 1회만 호출하고 실패하면 바로 ProviderError.
    """
    return ChatGoogleGenerativeAI(
        model=model_name,
        google_api_key=api_key,
        temperature=temperature,
        safety_settings=build_safety_settings(),
        max_retries=1,
    )


def _message_text(content: Any) -> str:
    # 모델/버전에 따라 content가 문자열 또는 파트 리스트로 옴
    if isinstance(content, str):
        return content
    if isinstance(content, list):
        parts = []
        for part in content:
            if isinstance(part, str):
                parts.append(part)
            elif isinstance(part, dict) and part.get("type", "text") == "text":
                parts.append(part.get("text", ""))
        return "".join(parts)
    return ""


def parse_summary(raw: str) -> SummaryResult:
    """AI 응답 텍스트 → SummaryResult (JSON 문법 오류와 형태 불일치 모두 MalformedResponseError)"""
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        logger.warning(
            "AI 응답이 JSON이 아님",
            extra={"extra_data": {"error": str(e), "raw_preview": raw[:200]}},
        )
        raise MalformedResponseError() from e

    if not isinstance(data, dict):
        logger.warning(
            "AI 응답이 JSON 객체가 아님",
            extra={"extra_data": {"json_type": type(data).__name__}},
        )
        raise MalformedResponseError()

    try:
        return SummaryResult.model_validate(data)
    except SchemaError as e:
        logger.warning(
            "AI 응답 JSON의 키/타입이 맞지 않음",
            extra={"extra_data": {"errors": e.errors(include_url=False, include_input=False)}},
        )
        raise MalformedResponseError() from e


class SummaryService:
    """LLM 한 개를 감싸는 요약 서비스 — 테스트에서는 Fake 모델을 주입"""

    def __init__(self, llm: BaseChatModel):
        self.llm = llm

    async def summarize(self, text: Any) -> SummaryResult:
        # 1. 입력 검증
        if not text or not isinstance(text, str):
            raise ValidationError()

        # 2. 프롬프트
        prompt = build_prompt(text)

        # 3. LLM 호출 — 어떤 예외든 원인은 로그에만 남김
        try:
            response = await self.llm.ainvoke([HumanMessage(content=prompt)])
        except Exception as e:
            logger.error(
                "Gemini 호출 실패",
                exc_info=e,
                extra={"extra_data": {"text_length": len(text)}},
            )
            raise ProviderError() from e

        # 4. 파싱
        raw = _message_text(response.content)
        result = parse_summary(raw)

        logger.info(
            "요약 생성 완료",
            extra={"extra_data": {
                "text_length": len(text),
                "tweet_length": len(result.tweet),
            }},
        )
        return result
