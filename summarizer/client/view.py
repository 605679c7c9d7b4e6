"""터미널 출력 뷰 — 상태에 따라 입력 안내 / 로딩 / 에러 / 결과 카드 중 하나만 그림"""
from client.session import SessionState

TITLE = "Smart Summary"

# (제목, SummaryResult 필드명)
CARDS = (
    ("Tweet", "tweet"),
    ("LinkedIn", "linkedin"),
    ("E-mail", "email"),
)


def render_usage(attempts: int, max_attempts: int, window_label: str = "per hour") -> str:
    return f"Limit: {attempts}/{max_attempts} {window_label}"


def render_card(title: str, content: str) -> str:
    rule = "-" * max(len(title), 20)
    return f"{title}\n{rule}\n{content}"


def render(state: SessionState, max_attempts: int, window_label: str = "per hour") -> str:
    lines = [TITLE, render_usage(state.attempts, max_attempts, window_label), ""]

    if state.loading:
        lines.append("Analyzing the text and generating the summaries...")
    elif state.error:
        lines.append(f"[error] {state.error}")
    elif state.results is not None:
        lines.append("Your generated summaries:")
        for title, field in CARDS:
            lines.append("")
            lines.append(render_card(title, getattr(state.results, field)))
    elif state.can_submit:
        lines.append("Type or paste your text, then finish with Ctrl-D.")
    else:
        lines.append("Summary limit reached for this window.")

    return "\n".join(lines)
