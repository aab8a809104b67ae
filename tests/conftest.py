import html
from urllib.parse import parse_qs, urlsplit

import pytest
from playwright.async_api import async_playwright

from serp_suite.arithmetic import parse_math_query
from serp_suite.config import Settings

FAKE_ENGINE_URL = "https://serp.test/"

SAMPLE_SERP_HTML = """\
<html><body>
<form name="f" action="/search"><input name="q" value="jest puppeteer"></form>
<div class="g">
    <h3><a href="https://medium.com/@dev/testing-with-jest">Testing with Jest</a></h3>
</div>
<div class="g">
    <h3><a href="https://medium.com/javascript/puppeteer-guide">Puppeteer guide</a></h3>
</div>
<div class="g">
    <h3><a href="https://jestjs.io/docs/puppeteer">Using with puppeteer</a></h3>
</div>
<div class="g">
    <span>Videos block without a title link</span>
</div>
<h3><a href="https://ads.example.com/">Sponsored, outside any result</a></h3>
</body></html>
"""

_FORM = '<form name="f" action="/search" method="get"><input name="q" value="{value}"></form>'


def render_results(query: str) -> str:
    """Results page of the fake engine: three links, plus the calculator for math queries."""
    value = html.escape(query, quote=True)
    blocks = [
        f'<div class="g"><h3><a href="https://example.com/{i}">{value} {i}</a></h3></div>'
        for i in range(1, 3)
    ]
    blocks.append('<div class="g"><h3><a href="/local/article.pdf">relative</a></h3></div>')
    math_query = parse_math_query(query)
    if math_query is not None:
        blocks.insert(0, f'<div id="cwos"> {math_query.expected:.12g} </div>')
    return "<html><body>" + _FORM.format(value=value) + "".join(blocks) + "</body></html>"


async def _serve_fake_engine(route) -> None:
    url = urlsplit(route.request.url)
    if url.path == "/search":
        query = parse_qs(url.query).get("q", [""])[0]
        body = render_results(query)
    else:
        body = "<html><body>" + _FORM.format(value="") + "</body></html>"
    await route.fulfill(status=200, content_type="text/html", body=body)


@pytest.fixture
def test_settings() -> Settings:
    return Settings(
        base_url=FAKE_ENGINE_URL,
        browser_headless=True,
        default_timeout=2000,
        navigation_timeout=5000,
        math_seed=1234,
    )


@pytest.fixture
def sample_serp_html() -> str:
    return SAMPLE_SERP_HTML


@pytest.fixture
async def browser():
    pw = await async_playwright().start()
    browser = await pw.chromium.launch(headless=True)
    yield browser
    await browser.close()
    await pw.stop()


@pytest.fixture
async def page(browser):
    page = await browser.new_page()
    yield page
    await page.close()


@pytest.fixture
async def engine_page(page, test_settings: Settings):
    """A page routed to an offline stand-in for the search engine, already on its home page."""
    await page.route(FAKE_ENGINE_URL + "**", _serve_fake_engine)
    await page.goto(test_settings.base_url)
    return page
