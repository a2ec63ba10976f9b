"""Command-line entry point for the spam analyzer."""

from __future__ import annotations

import argparse
import asyncio
import json
import sys
from pathlib import Path

from spam_checker.analysis import AnalysisService, report_payload
from spam_checker.core import AppSettings, configure_logging, load_app_settings
from spam_checker.core.models import AnalysisReport
from spam_checker.triggers import GoogleSheetClient, TriggerImportError, TriggerStore


def build_parser() -> argparse.ArgumentParser:
    """Create and configure the CLI argument parser."""
    parser = argparse.ArgumentParser(description="Heuristic email spam analyzer")
    parser.add_argument(
        "--env-file",
        type=Path,
        default=None,
        help="Path to a .env file containing configuration overrides.",
    )
    parser.add_argument(
        "command",
        nargs="?",
        default="info",
        choices=["info", "analyze", "triggers", "serve"],
        help="Operation to execute.",
    )
    parser.add_argument(
        "--file",
        type=Path,
        default=None,
        help="Email text to analyze; reads standard input when omitted.",
    )
    parser.add_argument(
        "--sheet-url",
        dest="sheet_url",
        default=None,
        help="Google Sheets share link to import trigger words from first.",
    )
    parser.add_argument(
        "--json",
        dest="as_json",
        action="store_true",
        help="Print the analysis report as JSON.",
    )
    parser.add_argument("--host", default="127.0.0.1", help="Host for `serve`.")
    parser.add_argument("--port", type=int, default=8000, help="Port for `serve`.")
    return parser


def execute(args: argparse.Namespace, settings: AppSettings) -> int:
    """Execute the requested CLI command and return the exit status."""
    command = args.command
    if command == "info":
        store = TriggerStore()
        print("Spam analyzer is ready. Pipe an email into `spam-checker analyze`.")
        print(f"Default trigger words: {store.count}")
        print(f"High score threshold: {settings.scoring.high_score_threshold}")
        return 0
    if command == "serve":
        _run_server(settings, args.host, args.port)
        return 0

    store = TriggerStore(GoogleSheetClient(settings.sheets))
    if args.sheet_url:
        try:
            asyncio.run(store.import_from_sheet(args.sheet_url))
        except TriggerImportError as exc:
            print(f"Trigger import failed: {exc.user_message}", file=sys.stderr)
            return 1

    if command == "triggers":
        _print_triggers(store)
        return 0

    email_text = _read_email(args.file)
    report = AnalysisService(store, settings.scoring).analyze_now(email_text)
    if args.as_json:
        print(json.dumps(report_payload(report), indent=2))
    else:
        _print_report(report)
    return 0


def main() -> None:
    """CLI entry point."""
    parser = build_parser()
    args = parser.parse_args()

    settings = load_app_settings(env_file=args.env_file)
    configure_logging(settings.logging)
    sys.exit(execute(args, settings))


def _read_email(path: Path | None) -> str:
    if path is None:
        return sys.stdin.read()
    return path.read_text(encoding="utf-8")


def _run_server(settings: AppSettings, host: str, port: int) -> None:
    import uvicorn

    from spam_checker.web.app import create_app

    uvicorn.run(create_app(settings), host=host, port=port)


def _print_triggers(store: TriggerStore) -> None:
    print(f"{store.count} trigger word(s):")
    for trigger in store.triggers:
        print(f"  {trigger.severity:<6}  {trigger.word}")


def _print_report(report: AnalysisReport) -> None:
    print(f"Spam score: {report.spam_score}/100 ({report.score_band})")
    if report.triggers:
        print("Triggers:")
        for match in report.triggers:
            print(f"  +{match.impact:<3} {match.word} ({match.severity})")
    print(f"Length: {report.length_analysis} ({report.word_count} words)")
    print(f"Subject line: {'yes' if report.subject_line_present else 'no'}")
    print(f"HTML: {'present' if report.html_content else 'none detected'}")
    print(f"ALL CAPS: {'excessive' if report.all_caps else 'good'}")
    print(
        "Punctuation: "
        f"{'excessive' if report.excessive_punctuation else 'good'}"
    )
    if report.suggestions:
        print("Suggestions:")
        for suggestion in report.suggestions:
            print(f"  - {suggestion}")


if __name__ == "__main__":
    main()
