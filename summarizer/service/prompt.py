"""
요약 프롬프트 — Gemini가 JSON 객체 하나만 돌려주도록 강제

1. 역할 부여 ("커뮤니케이션 전문가")
2. JSON 외의 텍스트/코드펜스 금지
3. 세 가지 키(tweet / linkedin / email)별 작성 지침
"""

SUMMARY_KEYS = ("tweet", "linkedin", "email")

TWEET_MAX_CHARS = 280

PROMPT_TEMPLATE = """You are a communication expert.
Analyze the text below and write three distinct summaries. Your answer MUST be a single valid JSON object, with no extra formatting, no surrounding text and no code fences.

The JSON object must have exactly three keys: "tweet", "linkedin" and "email".

Text to summarize:
---
{text}
---

Instructions for each summary:
1. "tweet": A short, punchy summary for Twitter (at most {tweet_max} characters). Use 2 to 3 relevant hashtags.
2. "linkedin": A professional summary for a LinkedIn post. It should be a bit more detailed and engaging, and end with a call to action.
3. "email": A formal, objective summary suited to a business email. Focus on the key points, clearly and directly.

Return only the JSON object."""


def build_prompt(text: str) -> str:
    return PROMPT_TEMPLATE.format(text=text, tweet_max=TWEET_MAX_CHARS)
