"""Projects key/value mappings onto an object's fields under a Settings policy."""

import inspect
import logging
from collections.abc import Callable, Iterable, Iterator, Mapping
from functools import partial
from types import MemberDescriptorType
from typing import Any, Final

from .exceptions import NameConflictError, OverwriteConflictError
from .names import normalize_key, resolve_name
from .settings import Settings

logger = logging.getLogger(__name__)

# Instance attribute holding the settings attached to a target.
SETTINGS_ATTRIBUTE: Final[str] = "_preinit_settings"

SETTER_PREFIX: Final[str] = "set_"

AttributeHandler = Callable[[Any, Any, Any], None]


# --------------------------------------------------------------------------- #
#                          Reflection primitives                              #
# --------------------------------------------------------------------------- #


def _instance_dict(target: Any) -> dict[str, Any] | None:
    fields = getattr(target, "__dict__", None)
    return fields if isinstance(fields, dict) else None


def _slot(target: Any, name: str) -> MemberDescriptorType | None:
    descriptor = inspect.getattr_static(type(target), name, None)
    return descriptor if isinstance(descriptor, MemberDescriptorType) else None


def has_field(target: Any, name: str) -> bool:
    """True if *target* already holds a value for field *name*."""
    fields = _instance_dict(target)
    if fields is not None and name in fields:
        return True

    slot = _slot(target, name)
    if slot is None:
        return False
    try:
        slot.__get__(target, type(target))
    except AttributeError:
        return False
    return True


def find_setter(target: Any, name: str) -> Callable[[Any], Any] | None:
    """
    Return a callable performing a controlled assignment of *name*.

    Looks for a class-level data descriptor that supports assignment (a
    ``property`` with a setter, or any non-slot descriptor defining
    ``__set__``), then for a ``set_<name>`` method.
    """
    descriptor = inspect.getattr_static(type(target), name, None)
    if isinstance(descriptor, property):
        if descriptor.fset is not None:
            return partial(descriptor.fset, target)
    elif descriptor is not None and not isinstance(descriptor, MemberDescriptorType):
        if hasattr(type(descriptor), "__set__"):
            return partial(descriptor.__set__, target)

    method = getattr(target, f"{SETTER_PREFIX}{name}", None)
    return method if callable(method) else None


def set_field(target: Any, name: str, value: Any) -> None:
    """
    Write field *name* directly, bypassing setters and ``__setattr__``.

    If the class defines a property for *name*, the value lands in the
    instance ``__dict__`` but attribute reads still go through the property.
    """
    fields = _instance_dict(target)
    if fields is not None and _slot(target, name) is None:
        fields[name] = value
    else:
        object.__setattr__(target, name, value)


# --------------------------------------------------------------------------- #
#                               Importer                                      #
# --------------------------------------------------------------------------- #


class AttributeImporter:
    """
    Projects ordered key/value collections onto an object's fields.

    The importer holds the default settings used the first time it meets a
    target. The settings resolved for a call are attached to the target and
    become the starting point of the next call on the same target.
    """

    def __init__(self, defaults: Settings | None = None):
        """Initializes the importer with its default settings."""
        self.defaults = defaults if defaults is not None else Settings()
        self._logger = logger.getChild(self.__class__.__name__)

    # --- Settings lifecycle ---

    def attached_settings(self, target: Any) -> Settings | None:
        """Returns the settings attached to *target*, if any."""
        fields = _instance_dict(target)
        if fields is not None:
            return fields.get(SETTINGS_ATTRIBUTE)
        return getattr(target, SETTINGS_ATTRIBUTE, None)

    def settings_for(self, target: Any) -> Settings:
        """
        Returns the settings attached to *target*, creating them from the
        importer defaults on first use.
        """
        settings = self.attached_settings(target)
        if settings is None:
            settings = self.defaults.clone()
            self.attach_settings(target, settings)
        return settings

    def attach_settings(self, target: Any, settings: Settings) -> None:
        """Stores *settings* on *target* for later imports."""
        fields = _instance_dict(target)
        if fields is not None:
            fields[SETTINGS_ATTRIBUTE] = settings
            return
        try:
            object.__setattr__(target, SETTINGS_ATTRIBUTE, settings)
        except AttributeError:
            self._logger.debug(
                f"Cannot attach settings to {type(target).__name__}; "
                "they apply to this call only."
            )

    def resolve_settings(
        self,
        target: Any,
        records: Iterable[Settings] = (),
        options: Mapping[str, Any] | Settings | None = None,
    ) -> Settings:
        """
        Folds *records* and then *options* onto the target's current settings.

        The result is not attached; see `import_attributes`.
        """
        settings = self.attached_settings(target)
        if settings is None:
            settings = self.defaults.clone()
        for record in records:
            settings = settings.merged(record)
        return settings.merged(options)

    # --- Import ---

    def import_attributes(
        self,
        target: Any,
        *mappings: Any,
        options: Mapping[str, Any] | Settings | None = None,
        handler: AttributeHandler | None = None,
    ) -> Any:
        """
        Imports every key/value pair of *mappings* into *target*.

        Args:
            target: The object being populated.
            *mappings: Leading ``Settings`` records, then mappings, iterables of
                pairs or bare keys, processed in order.
            options: Per-call overrides of the target's settings.
            handler: Optional ``handler(target, key, value)`` called for every
                pair instead of the built-in validation and assignment.

        Returns:
            The same target, for chaining.

        Raises:
            NameConflictError: A key is not a valid field name under the
                active policy.
            OverwriteConflictError: A key names a field that is already set
                and overwriting is forbidden.
            TypeError: A mapping argument has an unsupported type.
        """
        records, collections = _split_records(mappings)
        settings = self.resolve_settings(target, records, options)

        if handler is not None:
            self._logger.debug(
                f"Delegating import into {type(target).__name__} to custom handler"
            )
            self.attach_settings(target, settings)
            for key, value in _iter_pairs(collections, settings):
                handler(target, key, value)
            return target

        plan = self._plan(target, _iter_pairs(collections, settings), settings)
        self.attach_settings(target, settings)

        for name, value in plan:
            setter = find_setter(target, name) if settings.use_setters else None
            if setter is not None:
                setter(value)
            else:
                set_field(target, name, value)

        return target

    def _plan(
        self,
        target: Any,
        pairs: Iterable[tuple[Any, Any]],
        settings: Settings,
    ) -> list[tuple[str, Any]]:
        """
        Resolves and conflict-checks every pair before anything is assigned,
        so a failing pair leaves the target untouched.
        """
        plan: list[tuple[str, Any]] = []
        seen: set[str] = set()

        for key, value in pairs:
            name = resolve_name(key, settings.on_invalid_name)
            if name is None:
                continue
            if name == SETTINGS_ATTRIBUTE:
                raise NameConflictError(key, name)
            if not settings.allow_overwrite and (
                name in seen or has_field(target, name)
            ):
                raise OverwriteConflictError(key, name)
            seen.add(name)
            plan.append((name, value))

        return plan


# --------------------------------------------------------------------------- #
#                          Argument unpacking                                 #
# --------------------------------------------------------------------------- #


def _split_records(mappings: tuple[Any, ...]) -> tuple[list[Settings], list[Any]]:
    """Separates leading ``Settings`` records from attribute collections."""
    index = 0
    while index < len(mappings) and isinstance(mappings[index], Settings):
        index += 1
    return list(mappings[:index]), [m for m in mappings[index:] if m is not None]


def _iter_pairs(
    collections: Iterable[Any], settings: Settings
) -> Iterator[tuple[Any, Any]]:
    for collection in collections:
        if isinstance(collection, Settings):
            raise TypeError("Settings records must precede attribute mappings")
        if isinstance(collection, Mapping):
            yield from collection.items()
        elif isinstance(collection, str):
            yield collection, settings.default_for(normalize_key(collection))
        elif isinstance(collection, Iterable):
            for item in collection:
                if isinstance(item, str):
                    yield item, settings.default_for(normalize_key(item))
                else:
                    key, value = item
                    yield key, value
        else:
            raise TypeError(
                f"Cannot import attributes from {type(collection).__name__}"
            )


_default_importer = AttributeImporter()


def import_attributes(
    target: Any,
    *mappings: Any,
    options: Mapping[str, Any] | Settings | None = None,
    handler: AttributeHandler | None = None,
) -> Any:
    """Imports *mappings* into *target* with the shared default importer."""
    return _default_importer.import_attributes(
        target, *mappings, options=options, handler=handler
    )
