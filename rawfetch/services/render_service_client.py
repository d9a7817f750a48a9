from typing import Callable

import requests


class RenderServiceClient:
    """JSON-over-HTTP client for a remote headless rendering service.

    POSTs `{"url": ...}` to `endpoint` and returns the response body as the
    rendered HTML. Requires http_client callable for dependency injection so
    tests run without a live service.
    """

    def __init__(self, endpoint: str, http_client: Callable = requests.post, timeout: float = 30):
        if not endpoint:
            raise ValueError("render service endpoint is required")
        self.endpoint = endpoint
        self.http_client = http_client
        self.timeout = timeout

    def render(self, url: str) -> str:
        resp = self.http_client(self.endpoint, json={"url": url}, timeout=self.timeout)
        resp.raise_for_status()
        return resp.text
