import json
from fastapi import APIRouter, Depends, Request
from core.dependencies import get_summary_service
from core.exceptions import ValidationError
from schemas.summary import ErrorResponse, SummaryRequest, SummaryResult
from service.summary_service import SummaryService

router = APIRouter()


@router.post(
    "/summarize",
    response_model=SummaryResult,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
    openapi_extra={"requestBody": {
        "required": True,
        "content": {"application/json": {"schema": SummaryRequest.model_json_schema()}},
    }},
)
async def summarize(request: Request, service: SummaryService = Depends(get_summary_service)):
    """
    텍스트 → 세 가지 요약 (tweet / linkedin / email)

    본문은 직접 파싱합니다 — text 누락, 문자열 아님, JSON 아님 모두
    422가 아닌 400 {"error": ...} 으로 통일하기 위해서입니다.
    """
    try:
        body = await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise ValidationError() from e

    text = body.get("text") if isinstance(body, dict) else None
    return await service.summarize(text)
