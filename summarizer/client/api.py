import httpx
from pydantic import ValidationError as SchemaError

from schemas.summary import SummaryResult

API_FAILURE_MESSAGE = "Failed to fetch summary from the API."
UNREACHABLE_MESSAGE = "An error occurred while generating the summary. Please try again."


class SummaryApiError(Exception):
    """요약 API 호출 실패 — message는 사용자에게 그대로 보여줌"""

    def __init__(self, message: str, status_code: int | None = None):
        self.message = message
        self.status_code = status_code
        super().__init__(message)


def _error_message(response: httpx.Response) -> str:
    # 서버가 준 {"error": "..."} 가 있으면 그대로, 없으면 기본 문구
    try:
        body = response.json()
    except ValueError:
        return API_FAILURE_MESSAGE
    if isinstance(body, dict) and isinstance(body.get("error"), str) and body["error"]:
        return body["error"]
    return API_FAILURE_MESSAGE


class SummaryApiClient:
    """POST /api/summarize 호출 클라이언트 (httpx 비동기)"""

    def __init__(self, base_url: str, timeout: float = 120.0, transport: httpx.AsyncBaseTransport | None = None):
        self.base_url = base_url
        self.timeout = timeout
        self.transport = transport

    async def summarize(self, text: str) -> SummaryResult:
        async with httpx.AsyncClient(base_url=self.base_url, timeout=self.timeout, transport=self.transport) as client:
            try:
                response = await client.post("/api/summarize", json={"text": text})
            except httpx.HTTPError as e:
                raise SummaryApiError(UNREACHABLE_MESSAGE) from e

        if not response.is_success:
            raise SummaryApiError(_error_message(response), status_code=response.status_code)

        try:
            return SummaryResult.model_validate(response.json())
        except (ValueError, SchemaError) as e:
            raise SummaryApiError(UNREACHABLE_MESSAGE, status_code=response.status_code) from e
