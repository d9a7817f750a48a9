from __future__ import annotations

import asyncio
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class PlaywrightRenderOptions:
    timeout_ms: int = 10_000
    wait_until: str = "networkidle"  # domcontentloaded | load | networkidle


class PlaywrightRenderer:
    """Render a page in headless Chromium and return the final DOM HTML.

    Used for HTML responses so content produced by client-side script is
    captured. Launches a browser per call. Playwright is imported lazily so
    installs without it still work for non-HTML fetches.
    """

    def __init__(self, *, user_agent: str, options: Optional[PlaywrightRenderOptions] = None):
        self._user_agent = user_agent
        self._options = options or PlaywrightRenderOptions()
        self._executor = ThreadPoolExecutor(max_workers=3, thread_name_prefix="playwright")

    def _render_sync(self, url: str) -> str:
        try:
            from playwright.sync_api import sync_playwright  # type: ignore
        except ImportError as e:
            raise RuntimeError(
                "Render delegation requested but Playwright is not installed. "
                "Install 'playwright' and run 'python -m playwright install chromium'."
            ) from e

        with sync_playwright() as p:
            browser = p.chromium.launch(headless=True)
            try:
                context = browser.new_context(user_agent=self._user_agent)
                page = context.new_page()
                page.goto(url, wait_until=self._options.wait_until, timeout=self._options.timeout_ms)
                return page.content()
            finally:
                browser.close()

    def render(self, url: str) -> str:
        """Render in a worker thread when called from a running asyncio loop."""
        try:
            asyncio.get_running_loop()
        except RuntimeError:
            return self._render_sync(url)
        return self._executor.submit(self._render_sync, url).result()
