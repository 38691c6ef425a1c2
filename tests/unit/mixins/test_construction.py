"""Unit tests for the Construction mixin."""

from __future__ import annotations

from typing import Any

import pytest

from preinit.exceptions import NameConflictError, OverwriteConflictError
from preinit.importer import SETTINGS_ATTRIBUTE
from preinit.mixins import Construction
from preinit.settings import NameErrorAction, Settings


class Widget(Construction):
    pass


class Counter(Construction):
    @property
    def count(self) -> int:
        return self.__dict__.get("count", 0)

    @count.setter
    def count(self, value: int) -> None:
        self.__dict__["count"] = value * 2


def fields(obj: Any) -> dict[str, Any]:
    return {k: v for k, v in vars(obj).items() if k != SETTINGS_ATTRIBUTE}


class TestConstructionInit:
    def test_empty(self):
        w = Widget()
        assert isinstance(w, Construction)
        assert fields(w) == {}
        # defaults established even without values
        assert w.construction_on_invalid_name is NameErrorAction.RAISE
        assert w.construction_use_setters is False
        assert w.construction_allow_overwrite is True

    def test_values_mapping(self):
        w = Widget({"ivar1": 1, "ivar_1": "1"})
        assert fields(w) == {"ivar1": 1, "ivar_1": "1"}

    def test_keyword_attributes(self):
        w = Widget({"a": 1}, b=2)
        assert (w.a, w.b) == (1, 2)

    def test_keywords_follow_values(self):
        w = Widget({"a": 1}, a=2)
        assert w.a == 2

    def test_invalid_name_raises_by_default(self):
        with pytest.raises(NameConflictError):
            Widget({"foo-bar": 1})

    def test_options(self):
        w = Widget({"foo-bar": 1}, {"on_invalid_name": "convert"})
        assert w.foo_bar == 1
        assert w.construction_on_invalid_name is NameErrorAction.CONVERT

    def test_legacy_options(self):
        w = Widget({"foo-bar": 1, "ok": 2}, {"on_NameError": "ignore"})
        assert fields(w) == {"ok": 2}

    def test_settings_record_in_values_position(self):
        w = Widget(Settings(use_setters=True))
        assert w.construction_use_setters is True

    def test_setters(self):
        assert vars(Counter({"count": 5}, {"use_setters": True}))["count"] == 10
        assert vars(Counter({"count": 5}, {"use_setters": False}))["count"] == 5

    def test_handler(self):
        seen: list[tuple[str, Any]] = []
        w = Widget({"a": 1}, handler=lambda o, k, v: seen.append((k, v)))
        assert seen == [("a", 1)]
        assert fields(w) == {}


class TestConstructionImport:
    def test_import_into_foreign_object(self):
        class Foreign:
            pass

        obj = Foreign()
        result = Construction.import_attributes(obj, {"zed": "zed", "ivar_1": "s"})
        assert result is obj
        assert (obj.zed, obj.ivar_1) == ("zed", "s")

    def test_options_persist_on_instance(self):
        w = Widget({"a": 1}, {"allow_overwrite": False})
        with pytest.raises(OverwriteConflictError):
            Widget.import_attributes(w, {"a": 2})
        assert w.a == 1

    def test_import_on_existing_instance_adds_values(self):
        w = Widget({"a": 1})
        Widget.import_attributes(w, {"b": 2})
        assert fields(w) == {"a": 1, "b": 2}
