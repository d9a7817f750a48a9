"""Domain objects for rawfetch - explicit re-exports to satisfy linters."""
from .fetch_config import FetchConfig as FetchConfig
from .fetch_context import FetchContext as FetchContext, FetchState as FetchState
from .fetch_target import FetchTarget as FetchTarget
from .http_response import HttpResponse as HttpResponse
from .response import Response as Response

__all__ = ["FetchConfig", "FetchContext", "FetchState", "FetchTarget", "HttpResponse", "Response"]
