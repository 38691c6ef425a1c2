"""
exceptions.py

Typed exception hierarchy raised while importing attributes into objects.
"""

from __future__ import annotations

from typing import Any

# --------------------------------------------------------------------------- #
#                              Base hierarchy                                 #
# --------------------------------------------------------------------------- #


class AttributeImportError(Exception):
    """
    Root of all errors raised by this project.
    """


class NameConflictError(AttributeImportError, ValueError):
    """
    Raised when a key cannot be turned into a valid field name.

    Attributes
    ----------
    key
        The key exactly as it was supplied by the caller.
    name
        The last name that was tried (after normalisation or conversion).
    """

    def __init__(self, key: Any, name: str | None = None):
        self.key = key
        self.name = name
        message = f"Invalid attribute name: {key!r}"
        if name is not None and name != key:
            message += f" (tried {name!r})"
        super().__init__(message)


class OverwriteConflictError(AttributeImportError, TypeError):
    """
    Raised when an import would replace a field that is already set and the
    active settings forbid overwriting.
    """

    def __init__(self, key: Any, name: str):
        self.key = key
        self.name = name
        super().__init__(f"Forbidden by rule: overwrite of '{name}' by import")


class SettingsLoadError(AttributeImportError):
    """
    Raised when a settings document cannot be read or parsed.

    Examples
    --------
    * File does not exist / bad extension
    * YAML or JSON syntax error
    * Top-level object is not a mapping
    """
