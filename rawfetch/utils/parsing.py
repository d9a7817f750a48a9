from typing import Any, Optional

TRUE_WORDS = ("1", "true", "yes", "on")
FALSE_WORDS = ("0", "false", "no", "off")


def parse_bool_text(raw: str) -> Optional[bool]:
    """Map 1/true/yes/on and 0/false/no/off (any case) to a bool, else None."""
    value = raw.strip().lower()
    if value in TRUE_WORDS:
        return True
    if value in FALSE_WORDS:
        return False
    return None


def to_bool(value: Any, name: str) -> bool:
    """Strict bool coercion for config values; raises ValueError on anything else."""
    if isinstance(value, bool):
        return value
    if isinstance(value, int) and value in (0, 1):
        return bool(value)
    if isinstance(value, str):
        parsed = parse_bool_text(value)
        if parsed is not None:
            return parsed
    raise ValueError(f"{name} must be a boolean, got {value!r}")


def to_str_tuple(value: Any, name: str) -> tuple[str, ...]:
    """Accept a YAML list of strings; a bare string is rejected."""
    if not isinstance(value, (list, tuple)):
        raise ValueError(f"{name} must be a list, got {type(value).__name__}")
    return tuple(str(item) for item in value)
