from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from camoufox.async_api import AsyncNewBrowser
from playwright.async_api import Browser, BrowserContext, Page, Playwright, async_playwright

from serp_suite.config import Settings, settings as default_settings

logger = logging.getLogger(__name__)


class BrowserSession:
    """Owns the Playwright driver, one camoufox browser and one context."""

    def __init__(self, settings: Settings | None = None) -> None:
        self._settings = settings or default_settings
        self._playwright: Playwright | None = None
        self._browser: Browser | None = None
        self._context: BrowserContext | None = None

    async def __aenter__(self) -> BrowserSession:
        await self.start()
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.shutdown()

    @property
    def context(self) -> BrowserContext:
        if self._context is None:
            raise RuntimeError("Browser session not started")
        return self._context

    async def start(self) -> None:
        self._playwright = await async_playwright().start()
        self._browser = await AsyncNewBrowser(
            self._playwright,
            headless=self._settings.browser_headless,
        )
        self._context = await self._browser.new_context(locale=self._settings.locale)
        self._context.set_default_timeout(self._settings.default_timeout)
        self._context.set_default_navigation_timeout(self._settings.navigation_timeout)
        logger.info("Browser session started (headless=%s)", self._settings.browser_headless)

    async def new_page(self) -> Page:
        return await self.context.new_page()

    @asynccontextmanager
    async def page(self) -> AsyncIterator[Page]:
        page = await self.new_page()
        try:
            yield page
        finally:
            await page.close()

    async def shutdown(self) -> None:
        if self._context:
            try:
                await self._context.close()
            except Exception:
                logger.warning("Failed to close browser context", exc_info=True)
            self._context = None
        if self._browser:
            await self._browser.close()
            self._browser = None
        if self._playwright:
            await self._playwright.stop()
            self._playwright = None

        logger.info("Browser session shut down")
