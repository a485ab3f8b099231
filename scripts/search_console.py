"""Query console for the contextual help engine.

    python scripts/search_console.py "adopt or adapt" --max-results 3
    python scripts/search_console.py --step pico
    python scripts/search_console.py            # interactive prompt
"""
from __future__ import annotations

import argparse
import atexit
import logging

from guideline_help.engine import HelpEngine
from guideline_help.logging_config import setup_logging
from guideline_help.schema import RetrievalResult
from guideline_help.settings import load_settings
from guideline_help.tracing import configure_tracing, get_tracer

ANSI_MARK = ("\033[1;33m", "\033[0m")


def format_result(rank: int, result: RetrievalResult, query: str) -> str:
    excerpt = HelpEngine.highlight(result.text, query)
    excerpt = excerpt.replace("<mark>", ANSI_MARK[0]).replace("</mark>", ANSI_MARK[1])
    lines = [
        f"{rank}. [{result.score_percent}%] {result.section} ({result.chunk_id})",
        f"   {excerpt}",
        f"   Source: {result.source}",
    ]
    if result.keywords:
        lines.append(f"   Keywords: {', '.join(result.keyword_preview())}")
    return "\n".join(lines)


def run_query(engine: HelpEngine, query: str, max_results: int) -> None:
    results = engine.search(query, max_results=max_results)
    if not results:
        print("No results found. Try different keywords, e.g. \"adopt vs adapt\" or \"AGREE II\".")
        return
    print(f"Found {len(results)} relevant passage{'s' if len(results) > 1 else ''}")
    for rank, result in enumerate(results, start=1):
        print(format_result(rank, result, query))


def main() -> None:
    settings, paths = load_settings()

    parser = argparse.ArgumentParser(description="Search the contextual help corpus.")
    parser.add_argument("query", nargs="?", help="Query text; omit for an interactive prompt.")
    parser.add_argument("--max-results", type=int, default=settings.max_results)
    parser.add_argument("--corpus", default=paths.corpus_file, help="Path to the corpus JSON file.")
    parser.add_argument("--step", help="Print the tips for a workflow step (e.g. pico).")
    parser.add_argument("--verbose", action="store_true", help="Log at DEBUG level.")
    parser.add_argument("--trace", metavar="ENDPOINT", nargs="?", const="", help="Record spans; optional OTLP endpoint.")
    args = parser.parse_args()

    setup_logging(
        console_level=logging.DEBUG if args.verbose else logging.WARNING,
        log_file=paths.log_file,
    )

    tracer = None
    if args.trace is not None:
        provider = configure_tracing(endpoint=args.trace or None, batch=True)
        atexit.register(provider.shutdown)
        tracer = get_tracer("guideline-help.console")

    engine = HelpEngine(args.corpus, settings=settings, tracer=tracer)
    engine.initialize()

    if args.step:
        for tip in engine.tips_for_location(args.step):
            print(f"* {tip}")

    if args.query:
        run_query(engine, args.query, args.max_results)
    elif not args.step:
        while True:
            try:
                query = input("help> ").strip()
            except EOFError:
                break
            if not query:
                continue
            run_query(engine, query, args.max_results)


if __name__ == "__main__":
    main()
