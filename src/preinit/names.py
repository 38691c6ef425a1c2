"""Key normalisation and field-name validation."""

import logging
import re
from enum import Enum
from typing import Any, Final

from .exceptions import NameConflictError
from .settings import NameErrorAction

logger = logging.getLogger(__name__)

SIGIL: Final[str] = "@"

_IDENTIFIER_RE: Final = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")
_INVALID_RUN_RE: Final = re.compile(r"[^A-Za-z0-9_]+")
_UNDERSCORE_RUN_RE: Final = re.compile(r"_{2,}")


def normalize_key(key: Any) -> str:
    """
    Turn a mapping key into a plain name string.

    Enum members contribute their value, anything else is coerced with
    ``str()``. Leading sigils (``@``) are stripped.
    """
    if isinstance(key, Enum):
        key = key.value
    return str(key).lstrip(SIGIL)


def is_valid_name(name: str) -> bool:
    """Letters, digits and underscores, not starting with a digit, not a dunder."""
    if not _IDENTIFIER_RE.match(name):
        return False
    return not (len(name) > 4 and name.startswith("__") and name.endswith("__"))


def sanitize_name(name: str) -> str:
    """
    Replace every run of invalid characters with a single underscore, then
    collapse repeated underscores.

    >>> sanitize_name("foo-bar!!baz")
    'foo_bar_baz'
    """
    name = _INVALID_RUN_RE.sub("_", name)
    return _UNDERSCORE_RUN_RE.sub("_", name)


def resolve_name(key: Any, action: NameErrorAction) -> str | None:
    """
    Resolve *key* to a field name under *action*.

    Returns the name to assign, or ``None`` when the key is to be skipped.
    With ``CONVERT`` the sanitised name is validated exactly once more.

    Raises:
        NameConflictError: The key is invalid and cannot be used.
    """
    name = normalize_key(key)
    if is_valid_name(name):
        return name

    if action is NameErrorAction.IGNORE:
        logger.debug(f"Ignoring invalid attribute name {key!r}")
        return None

    if action is NameErrorAction.CONVERT:
        converted = sanitize_name(name)
        if is_valid_name(converted):
            logger.debug(f"Converted attribute name {key!r} to '{converted}'")
            return converted
        raise NameConflictError(key, converted)

    raise NameConflictError(key, name)
