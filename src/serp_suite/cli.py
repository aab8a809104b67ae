from __future__ import annotations

import argparse
import asyncio
import logging
import sys

from playwright.async_api import Page

from serp_suite.arithmetic import is_close, parse_math_query
from serp_suite.browser import BrowserSession
from serp_suite.config import Settings
from serp_suite.models import LinkCheck, ResultPage
from serp_suite.predicates import run_checks
from serp_suite.search import execute_query, open_home, read_calculator_value, snapshot


def _print_snapshot(result: ResultPage, checks: list[LinkCheck]) -> None:
    print(f"\nQuery: {result.query}")
    print(f"Result nodes: {result.result_count}")
    print(f"Links: {len(result.links)}\n")
    for i, url in enumerate(result.links, start=1):
        failed = [c.operator for c in checks if url in c.failures]
        mark = f" [fails {', '.join(failed)}]" if failed else ""
        print(f"  {i}. {url}{mark}")
    for check in checks:
        status = "ok" if check.passed else f"{len(check.failures)} failing"
        print(f"\n  {check.operator}:{check.argument} -> {status}")
    print()


async def _probe(page: Page, query: str, settings: Settings) -> None:
    await execute_query(page, query, settings)

    math_query = parse_math_query(query)
    if math_query is not None:
        actual = await read_calculator_value(page)
        verdict = "close" if is_close(actual, math_query.expected, settings.close_digits) else "MISMATCH"
        print(f"\n{math_query.text} = {actual} (expected {math_query.expected}, {verdict})\n")
        return

    result = await snapshot(page, query)
    _print_snapshot(result, run_checks(query, result.links))


async def _run(headless: bool) -> None:
    probe_settings = Settings(browser_headless=headless)
    mode = "headless" if headless else "visible browser"

    async with BrowserSession(settings=probe_settings) as session:
        async with session.page() as page:
            await open_home(page, probe_settings)
            print(f"SERP probe ({mode}) - type 'help' for usage, 'quit' to exit")
            while True:
                try:
                    raw = input("probe> ").strip()
                except EOFError:
                    break

                if not raw:
                    continue
                if raw in ("exit", "quit", "q"):
                    break
                if raw == "help":
                    print("Usage: <query>, e.g. 'site:medium.com jest' or '37 + 482'")
                    print("Operators checked: site:, filetype:, inurl:")
                    print("Commands: help, exit/quit/q")
                    continue

                try:
                    await _probe(page, raw, probe_settings)
                except Exception as exc:
                    print(f"Error: {exc}")


def main() -> None:
    parser = argparse.ArgumentParser(description="Run queries against the results page and check its links")
    parser.add_argument(
        "--no-headless",
        action="store_true",
        help="Run browser in visible mode (for debugging)",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Log at INFO level")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        asyncio.run(_run(headless=not args.no_headless))
    except KeyboardInterrupt:
        print("\nBye!")
        sys.exit(0)
