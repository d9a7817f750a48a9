from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional

from rawfetch.services.headless_renderer import PlaywrightRenderer, PlaywrightRenderOptions
from rawfetch.services.protocols import Renderer
from rawfetch.services.render_service_client import RenderServiceClient


class DisabledRenderer:
    def render(self, url: str) -> str:
        raise RuntimeError(
            f"HTML response for {url} needs render delegation but no renderer is configured"
        )


@dataclass(frozen=True)
class RendererFactory:
    user_agent: str
    timeout_seconds: float = 10
    wait_until: str = "networkidle"
    service_url: Optional[str] = None
    http_client: Optional[Callable] = None

    def get(self, render_mode: str) -> Renderer:
        if render_mode is None or (isinstance(render_mode, str) and render_mode.strip() == ""):
            raise ValueError("render_mode is required")
        mode = render_mode.strip().lower()
        if mode == "playwright":
            return PlaywrightRenderer(
                user_agent=self.user_agent,
                options=PlaywrightRenderOptions(
                    timeout_ms=int(self.timeout_seconds * 1000),
                    wait_until=self.wait_until,
                ),
            )
        if mode == "service":
            if not self.service_url:
                raise ValueError("render_mode=service requires RAWFETCH_RENDER_SERVICE_URL")
            if self.http_client is not None:
                return RenderServiceClient(self.service_url, http_client=self.http_client, timeout=self.timeout_seconds)
            return RenderServiceClient(self.service_url, timeout=self.timeout_seconds)
        if mode == "disabled":
            return DisabledRenderer()
        raise ValueError(f"Unknown render_mode: {render_mode!r}")
