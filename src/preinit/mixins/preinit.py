"""PreInit mixin: persistent options plus an explicit bulk loader."""

from collections.abc import Mapping
from typing import Any, ClassVar

from ..importer import AttributeHandler, AttributeImporter
from ..settings import Settings, canonical_name


def _is_options(value: Any) -> bool:
    """A Settings record, or a non-empty mapping keyed only by setting names."""
    if isinstance(value, Settings):
        return True
    if not isinstance(value, Mapping) or not value:
        return False
    return all(canonical_name(key) in Settings.model_fields for key in value)


class PreInit:
    """
    Populates fields from mappings at construction time or later through
    `load_attrs`.

    Options are kept in ``preinit_options``, a `Settings` record that can be
    edited in place between loads. Setters are preferred by default.
    """

    importer: ClassVar[AttributeImporter] = AttributeImporter(
        Settings(use_setters=True)
    )

    def __init__(
        self,
        *args: Any,
        handler: AttributeHandler | None = None,
        **attributes: Any,
    ):
        super().__init__()
        type(self).importer.settings_for(self)
        if handler is not None:
            options = None
            if args and _is_options(args[0]):
                options, args = args[0], args[1:]
            type(self).importer.import_attributes(
                self, *args, attributes, options=options, handler=handler
            )
        elif args or attributes:
            self.load_attrs(*args, **attributes)

    @property
    def preinit_options(self) -> Settings:
        return type(self).importer.settings_for(self)

    @preinit_options.setter
    def preinit_options(self, value: Settings | Mapping[str, Any]) -> None:
        importer = type(self).importer
        if not isinstance(value, Settings):
            value = importer.defaults.clone().merged(value)
        importer.attach_settings(self, value)

    def load_attrs(
        self, *args: Any, handler: AttributeHandler | None = None, **attributes: Any
    ) -> "PreInit":
        """
        Import mappings (and keyword arguments) using the current options.

        Returns self, so calls can be chained.
        """
        type(self).importer.import_attributes(
            self, *args, attributes, handler=handler
        )
        return self
