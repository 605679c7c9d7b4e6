"""
summarize-cli — 터미널에서 요약 받기

사용 예:
  summarize-cli "긴 글..."
  summarize-cli --file article.txt
  cat article.txt | summarize-cli
"""
import argparse
import asyncio
import sys

from client.api import SummaryApiClient
from client.config import ClientSettings
from client.quota import QuotaTracker, describe_window
from client.session import SessionState, SummarySession
from client.storage import LocalStorage
from client.view import render


def build_session(settings: ClientSettings, on_change=None) -> SummarySession:
    api = SummaryApiClient(settings.api_base_url, timeout=settings.request_timeout)
    quota = QuotaTracker(
        LocalStorage(settings.storage_path),
        max_attempts=settings.max_attempts,
        window_ms=settings.window_ms,
    )
    return SummarySession(api, quota, on_change=on_change)


def read_text(args: argparse.Namespace) -> str:
    if args.text is not None:
        return args.text
    if args.file:
        with open(args.file, encoding="utf-8") as f:
            return f.read()
    return sys.stdin.read()


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="summarize-cli",
        description="Generate Tweet / LinkedIn / E-mail summaries of a text.",
    )
    parser.add_argument("text", nargs="?", help="text to summarize (defaults to stdin)")
    parser.add_argument("-f", "--file", help="read the text from a file")
    parser.add_argument("--usage", action="store_true", help="only show the remaining quota")
    args = parser.parse_args(argv)

    settings = ClientSettings()
    window_label = describe_window(settings.window_ms)

    def show(state: SessionState) -> None:
        print(render(state, settings.max_attempts, window_label), flush=True)
        print()

    session = build_session(settings, on_change=show)
    state = session.refresh_usage()

    if args.usage:
        show(state)
        return 0

    # 쿼터 초과면 입력을 읽기 전에 바로 안내 (submit이 쿼터부터 확인)
    if not state.can_submit:
        state = asyncio.run(session.submit(""))
        show(state)
        return 1

    if args.text is None and not args.file and sys.stdin.isatty():
        show(state)

    state = asyncio.run(session.submit(read_text(args)))
    show(state)
    return 1 if state.error else 0


if __name__ == "__main__":
    sys.exit(main())
