"""
Construction mixin.

Classes mixing in `Construction` accept a mapping of initial field values
(plus keyword arguments) and an optional mapping of per-call options::

    class Foo(Construction):
        pass

    obj = Foo({"ivar1": "val1"}, {"on_invalid_name": "convert"}, extra=2)
    obj.ivar1   # "val1"
    obj.extra   # 2

No accessors are created for the imported fields: existing setters are used
when ``use_setters`` is on, otherwise the fields are written directly.
"""

from collections.abc import Mapping
from typing import Any, ClassVar

from ..importer import AttributeHandler, AttributeImporter
from ..settings import NameErrorAction, Settings


class Construction:
    """Constructor that imports a values mapping into instance fields."""

    importer: ClassVar[AttributeImporter] = AttributeImporter()

    def __init__(
        self,
        values: Mapping[str, Any] | Settings | None = None,
        options: Mapping[str, Any] | None = None,
        handler: AttributeHandler | None = None,
        **attributes: Any,
    ):
        super().__init__()
        type(self).importer.settings_for(self)
        if handler is not None or values or attributes:
            type(self).importer.import_attributes(
                self, values, attributes, options=options, handler=handler
            )

    @classmethod
    def import_attributes(
        cls,
        target: Any,
        values: Mapping[str, Any] | Settings | None,
        options: Mapping[str, Any] | None = None,
        handler: AttributeHandler | None = None,
    ) -> Any:
        """
        Import *values* into *target*, which need not mix in `Construction`.

        Returns the target.
        """
        return cls.importer.import_attributes(
            target, values, options=options, handler=handler
        )

    @property
    def construction_on_invalid_name(self) -> NameErrorAction:
        return type(self).importer.settings_for(self).on_invalid_name

    @property
    def construction_use_setters(self) -> bool:
        return type(self).importer.settings_for(self).use_setters

    @property
    def construction_allow_overwrite(self) -> bool:
        return type(self).importer.settings_for(self).allow_overwrite
