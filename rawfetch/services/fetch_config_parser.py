import dataclasses
import logging
from typing import Any, Optional

from rawfetch.domain.fetch_config import FetchConfig
from rawfetch.utils.parsing import to_bool, to_str_tuple

logger = logging.getLogger(__name__)

# YAML key -> (FetchConfig field, coercion)
_FIELDS = {
    "timeout": ("timeout", float),
    "max_content": ("max_content", int),
    "user_agent": ("user_agent", str),
    "accept_language": ("accept_language", str),
    "accept": ("accept", str),
    "tls_verify": ("tls_verify", lambda v: to_bool(v, "tls_verify")),
    "buffer_size": ("buffer_size", int),
    "render_content_types": ("render_content_types", lambda v: to_str_tuple(v, "render_content_types")),
}


class FetchConfigParser:
    """Parse a YAML dict into a FetchConfig layered over a base config.

    Responsibility: schema/validation for per-site fetch settings.
    It does NOT perform filesystem IO.

    Expected shape:

        fetch:
          timeout: 5
          max_content: 1048576
          proxy: {host: proxy.local, port: 3128, exceptions: [intranet]}
          render_content_types: [text/html]
    """

    def parse(self, data: dict, base: Optional[FetchConfig] = None) -> Optional[FetchConfig]:
        base = base or FetchConfig()
        if "fetch" not in data:
            return None

        fetch_dict = data.get("fetch") or {}
        if not isinstance(fetch_dict, dict):
            raise ValueError("fetch section must be a mapping")

        overrides: dict[str, Any] = {}
        for key, (field_name, coerce) in _FIELDS.items():
            if key in fetch_dict and fetch_dict[key] is not None:
                overrides[field_name] = coerce(fetch_dict[key])

        proxy = fetch_dict.get("proxy")
        if proxy is not None:
            overrides.update(self._parse_proxy(proxy))

        unknown = set(fetch_dict) - set(_FIELDS) - {"proxy"}
        if unknown:
            logger.warning("Ignoring unknown fetch settings: %s", ", ".join(sorted(unknown)))

        return dataclasses.replace(base, **overrides)

    def _parse_proxy(self, proxy) -> dict[str, Any]:
        if proxy is False:
            return {"use_proxy": False}
        if not isinstance(proxy, dict):
            raise ValueError("proxy must be a mapping or false")
        result: dict[str, Any] = {"use_proxy": to_bool(proxy.get("enabled", True), "proxy.enabled")}
        if proxy.get("host"):
            result["proxy_host"] = str(proxy["host"])
        if proxy.get("port") is not None:
            result["proxy_port"] = int(proxy["port"])
        if proxy.get("exceptions") is not None:
            result["proxy_exceptions"] = frozenset(to_str_tuple(proxy["exceptions"], "proxy.exceptions"))
        return result
