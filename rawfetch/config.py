import os
import logging
from pathlib import Path
from typing import Optional

from rawfetch.utils.parsing import parse_bool_text

try:
	from dotenv import load_dotenv
except ImportError:
	logging.warning("python-dotenv not available; using environment variables only")
else:
	loaded = load_dotenv()
	if not loaded and Path(".env").exists():
		raise RuntimeError(".env file present but failed to load")


def get_str_env(name: str, default: str) -> str:
	raw = os.getenv(name)
	if raw is None:
		return default
	return raw


def get_optional_str_env(name: str) -> Optional[str]:
	raw = os.getenv(name)
	if raw is None or raw.strip() == "":
		return None
	return raw


def get_int_env(name: str, default: int) -> int:
	raw = os.getenv(name)
	if raw is None or raw == "":
		return default
	try:
		return int(raw)
	except ValueError:
		logging.exception("Invalid %s: %r", name, raw)
		return default


def get_float_env(name: str, default: float) -> float:
	raw = os.getenv(name)
	if raw is None or raw == "":
		return default
	try:
		return float(raw)
	except ValueError:
		logging.exception("Invalid %s: %r", name, raw)
		return default


def get_bool_env(name: str, default: bool) -> bool:
	raw = os.getenv(name)
	if raw is None or raw.strip() == "":
		return default
	value = parse_bool_text(raw)
	if value is not None:
		return value
	logging.error("Invalid %s: %r", name, raw)
	return default


def get_csv_env(name: str, default: tuple[str, ...]) -> tuple[str, ...]:
	"""Comma separated list; blank items are dropped."""
	raw = os.getenv(name)
	if raw is None or raw.strip() == "":
		return default
	return tuple(item.strip() for item in raw.split(",") if item.strip())
