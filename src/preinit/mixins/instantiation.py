"""
Instantiation mixin.

Like `Construction`, but its configuration lives in a dedicated `Settings`
record. Settings records passed ahead of the attribute arguments are installed
(each overriding the previous) before anything is imported, and bare keys
take their value from ``default_values`` or ``default``::

    class Foo(Instantiation):
        pass

    policy = Settings(default=True, default_values={"size": 0})
    obj = Foo(policy, "enabled", "size", {"ivar1": 1})
    obj.enabled  # True
    obj.size     # 0
"""

from collections.abc import Mapping
from typing import Any, ClassVar

from ..importer import AttributeHandler, AttributeImporter
from ..settings import Settings


class Instantiation:
    """Constructor driven by positional settings records and mappings."""

    importer: ClassVar[AttributeImporter] = AttributeImporter()

    def __init__(
        self,
        *args: Any,
        options: Mapping[str, Any] | Settings | None = None,
        handler: AttributeHandler | None = None,
        **attributes: Any,
    ):
        super().__init__()
        type(self).importer.settings_for(self)
        if handler is not None or args or attributes or options:
            type(self).importer.import_attributes(
                self, *args, attributes, options=options, handler=handler
            )

    @classmethod
    def import_attributes(
        cls,
        target: Any,
        *args: Any,
        options: Mapping[str, Any] | Settings | None = None,
        handler: AttributeHandler | None = None,
    ) -> Any:
        """
        Handle the turning of a set of tuples into fields of *target*.

        This is what the constructor uses behind the scenes, but it can be
        invoked on any existing object to update or add values.

        Args:
            target: The object to populate.
            *args: Zero or more ``Settings`` records, followed by mappings,
                iterables of pairs or bare keys.
            options: Overrides applied after the settings records.
            handler: Called as ``handler(target, key, value)`` for every pair
                instead of the built-in assignment.

        Returns:
            The target.

        Raises:
            NameConflictError: A name is not a valid field name.
            OverwriteConflictError: Overwriting is forbidden and the field
                is already set.
        """
        return cls.importer.import_attributes(
            target, *args, options=options, handler=handler
        )

    @property
    def instantiation_settings(self) -> Settings:
        return type(self).importer.settings_for(self)

    @instantiation_settings.setter
    def instantiation_settings(self, value: Settings | Mapping[str, Any]) -> None:
        importer = type(self).importer
        if not isinstance(value, Settings):
            value = importer.defaults.clone().merged(value)
        importer.attach_settings(self, value)
