from __future__ import annotations

import logging

from playwright.async_api import Page

from serp_suite.config import Settings, settings as default_settings
from serp_suite.models import ResultPage

logger = logging.getLogger(__name__)

SELECTORS = {
    "query_input": 'input[name="q"]',
    "query_form": 'form[name="f"]',
    "result_container": ".g",
    "result_link": ".g h3 a",
    "calculator_output": "#cwos",
}

_NUMBER_TRANSLATION = str.maketrans({",": None, "\u2212": "-"})


class SearchError(Exception):
    pass


async def open_home(page: Page, settings: Settings | None = None) -> None:
    s = settings or default_settings
    await page.goto(s.base_url, timeout=s.navigation_timeout)


async def execute_query(page: Page, query: str, settings: Settings | None = None) -> None:
    """Clear the search box, type ``query`` and submit the form.

    Returns once the navigation triggered by the submit has finished.  The
    navigation waiter is armed before the form is submitted; a waiter started
    after the submit can miss a navigation that is already underway.
    """
    s = settings or default_settings
    logger.info("Executing query: %s", query)

    await page.eval_on_selector(SELECTORS["query_input"], "input => { input.value = ''; }")
    await page.locator(SELECTORS["query_input"]).press_sequentially(query)

    async with page.expect_navigation(timeout=s.navigation_timeout):
        await page.eval_on_selector(SELECTORS["query_form"], "form => form.submit()")


async def count_results(page: Page) -> int:
    return await page.eval_on_selector_all(
        SELECTORS["result_container"],
        "nodes => nodes.length",
    )


async def extract_result_links(page: Page) -> list[str]:
    links = await page.eval_on_selector_all(
        SELECTORS["result_link"],
        "anchors => anchors.map((a) => a.href)",
    )
    if not links:
        logger.warning("No result links matched %r on %s", SELECTORS["result_link"], page.url)
    return links


def parse_number(text: str) -> float:
    cleaned = "".join(text.split()).translate(_NUMBER_TRANSLATION)
    try:
        return float(cleaned)
    except ValueError:
        raise SearchError(f"Calculator output is not a number: {text!r}") from None


async def read_calculator_value(page: Page) -> float:
    text = await page.eval_on_selector(SELECTORS["calculator_output"], "el => el.textContent")
    return parse_number(text or "")


async def snapshot(page: Page, query: str) -> ResultPage:
    return ResultPage(
        query=query,
        result_count=await count_results(page),
        links=await extract_result_links(page),
    )
