# axe_scout/browser.py
"""
Playwright implementation of :class:`axe_scout.scanner.ScanDriver`.

One browser process per run, one fresh context and page per test. HTTP
basic auth is taken from ``AXE_SCOUT_USERNAME`` / ``AXE_SCOUT_PASSWORD``
when both are set.
"""
from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union
from urllib.parse import urlsplit

from playwright.async_api import Browser, BrowserContext, Page, Playwright, Route, async_playwright

from axe_scout.logger import logger

__all__ = ["PlaywrightDriver", "credentials_from_env"]

CREDENTIAL_VARS = ("AXE_SCOUT_USERNAME", "AXE_SCOUT_PASSWORD")

_RUN_AXE = """
([context, options]) => context === null
    ? window.axe.run(options)
    : window.axe.run(context, options)
"""


def credentials_from_env(environ: Optional[Mapping[str, str]] = None) -> Optional[Dict[str, str]]:
    env = os.environ if environ is None else environ
    username, password = (env.get(name) for name in CREDENTIAL_VARS)
    if username and password:
        return {"username": username, "password": password}
    return None


class PlaywrightDriver:
    """Drives a real browser through ``playwright.async_api``."""

    def __init__(
        self,
        *,
        base_url: str,
        axe_core_path: Union[str, Path],
        browser: str = "chromium",
        headless: bool = True,
        timeout: float = 30.0,
        credentials: Optional[Dict[str, str]] = None,
    ) -> None:
        self.base_url = base_url
        self.axe_core_path = Path(axe_core_path)
        self.browser_name = browser
        self.headless = headless
        self.timeout = timeout
        self.credentials = credentials if credentials is not None else credentials_from_env()
        self.axe_version = "N/A"

        self._axe_source: Optional[str] = None
        self._playwright: Optional[Playwright] = None
        self._browser: Optional[Browser] = None
        self._context: Optional[BrowserContext] = None
        self._page: Optional[Page] = None

    async def __aenter__(self) -> PlaywrightDriver:
        await self.start()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    @property
    def page(self) -> Page:
        if self._page is None:
            raise RuntimeError("No page: call reset() first")
        return self._page

    async def start(self) -> None:
        self._playwright = await async_playwright().start()
        launcher = getattr(self._playwright, self.browser_name)
        try:
            self._browser = await launcher.launch(headless=self.headless)
        except BaseException:
            # __aexit__ is not called when __aenter__ fails
            await self.close()
            raise
        logger.info("Launched %s (headless=%s)", self.browser_name, self.headless)

    def resolve_url(self, url: str) -> str:
        """Absolute URLs pass through; others are appended to base_url, keeping its path."""
        if urlsplit(url).scheme:
            return url
        return f"{self.base_url.rstrip('/')}/{url.lstrip('/')}"

    async def reset(self) -> None:
        if self._browser is None:
            raise RuntimeError("Browser is not started")
        if self._context is not None:
            await self._context.close()
        self._context = await self._browser.new_context(http_credentials=self.credentials)
        self._context.set_default_timeout(self.timeout * 1000)
        self._page = await self._context.new_page()

    async def visit(self, url: str) -> None:
        target = self.resolve_url(url)
        logger.debug("Visiting %s", target)
        await self.page.goto(target)

    async def inject_axe(self) -> str:
        if self._axe_source is None:
            self._axe_source = self.axe_core_path.read_text(encoding="utf-8")
        await self.page.add_script_tag(content=self._axe_source)
        self.axe_version = await self.page.evaluate("() => window.axe.version")
        return self.axe_version

    async def click(self, selector: str) -> None:
        await self.page.click(selector)

    async def click_and_wait_for_request(self, selector: str, pattern: str, alias: str) -> None:
        async with self.page.expect_request(pattern) as request_info:
            await self.page.click(selector)
        request = await request_info.value
        logger.debug("@%s matched %s %s", alias, request.method, request.url)

    async def stub(self, content_type: str, url_glob: str) -> None:
        async def handler(route: Route) -> None:
            await route.fulfill(
                status=200,
                headers={"content-type": content_type, "cache-control": "no-store"},
                body="",
            )

        await self.page.route(url_glob, handler)

    async def run_axe(self, context: Optional[str], options: Mapping[str, Any]) -> Dict[str, Any]:
        return await self.page.evaluate(_RUN_AXE, [context, dict(options)])

    async def close(self) -> None:
        if self._context is not None:
            await self._context.close()
            self._context = None
            self._page = None
        if self._browser is not None:
            await self._browser.close()
            self._browser = None
        if self._playwright is not None:
            await self._playwright.stop()
            self._playwright = None
