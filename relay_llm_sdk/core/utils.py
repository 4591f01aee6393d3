"""
Field access helpers for loosely-typed upstream payloads.

Upstream events arrive either as SDK objects (pydantic models with
attributes) or as plain dicts decoded from JSON. Every field lookup in the
provider parsers goes through these helpers.
"""

from collections.abc import Mapping, Sequence
from enum import Enum
from typing import Any, Optional


def safe_get(obj: Any, *path: Any, default: Any = None) -> Any:
    """Walk ``path`` through nested mappings, objects and sequences.

    String keys are looked up as mapping keys or attributes; integer keys
    index into sequences. Returns ``default`` as soon as a step is missing.
    """
    current = obj
    for key in path:
        if current is None:
            return default
        if isinstance(key, int):
            if isinstance(current, Sequence) and not isinstance(current, (str, bytes)):
                if -len(current) <= key < len(current):
                    current = current[key]
                    continue
            return default
        if isinstance(current, Mapping):
            current = current.get(key)
        else:
            current = getattr(current, key, None)
    return default if current is None else current


def first_present(obj: Any, *names: str) -> Any:
    """Return the first non-None field among ``names`` (snake or camel spellings)."""
    for name in names:
        value = safe_get(obj, name)
        if value is not None:
            return value
    return None


def get_int(obj: Any, *names: str) -> Optional[int]:
    """Return the first integer field among ``names``; bools and non-ints are ignored."""
    for name in names:
        value = safe_get(obj, name)
        if isinstance(value, int) and not isinstance(value, bool):
            return value
    return None


def get_str(obj: Any, *names: str) -> Optional[str]:
    """Return the first string field among ``names``."""
    for name in names:
        value = safe_get(obj, name)
        if isinstance(value, str):
            return value
    return None


# Class names whose printed members ('FinishReason.STOP') show up in SDK payloads
ENUM_CLASS_PREFIXES = frozenset({"FinishReason", "BlockedReason", "BlockReason"})


def enum_value(value: Any) -> Optional[str]:
    """Coerce an enum member or its printed form ('FinishReason.STOP') to a plain string."""
    if value is None:
        return None
    if isinstance(value, Enum):
        value = value.value if isinstance(value.value, str) else value.name
    text = str(value).strip()
    prefix, dot, member = text.rpartition(".")
    if dot and prefix.rpartition(".")[2] in ENUM_CLASS_PREFIXES:
        text = member
    return text or None


def is_structured(event: Any) -> bool:
    """True for values that can carry named fields (anything but scalars)."""
    return event is not None and not isinstance(event, (str, bytes, int, float, bool))
