import os
from typing import Optional

import yaml

from rawfetch.domain.fetch_config import FetchConfig
from rawfetch.services.fetch_config_parser import FetchConfigParser


class FetchConfigFileStore:
    """Filesystem/YAML IO for per-site fetch config files."""

    def __init__(self, *, configs_dir: str = ".", parser: Optional[FetchConfigParser] = None):
        self.configs_dir = configs_dir
        self.parser = parser or FetchConfigParser()

    def _resolve_path(self, config_path: str) -> str:
        return config_path if os.path.isabs(config_path) else os.path.join(self.configs_dir, config_path)

    def load_yaml_dict(self, config_path: str) -> Optional[dict]:
        """Return parsed YAML dict for `config_path`, or None if missing or not a mapping."""
        full_path = self._resolve_path(config_path)
        if not os.path.isfile(full_path):
            return None
        with open(full_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
        return data if isinstance(data, dict) else None

    def load_config(self, config_path: str, base: Optional[FetchConfig] = None) -> Optional[FetchConfig]:
        data = self.load_yaml_dict(config_path)
        if data is None:
            return None
        return self.parser.parse(data, base=base)
