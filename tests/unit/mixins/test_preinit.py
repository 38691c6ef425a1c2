"""Unit tests for the PreInit mixin."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import pytest

from preinit.exceptions import NameConflictError
from preinit.importer import SETTINGS_ATTRIBUTE
from preinit.mixins import PreInit
from preinit.settings import NameErrorAction, Settings


@dataclass
class Point:
    x: int
    y: int


class Record(PreInit):
    pass


class Temperature(PreInit):
    """Keeps celsius; the setter converts from fahrenheit."""

    @property
    def fahrenheit(self) -> float:
        return self.celsius * 9 / 5 + 32

    @fahrenheit.setter
    def fahrenheit(self, value: float) -> None:
        self.celsius = (value - 32) * 5 / 9


def fields(obj: Any) -> dict[str, Any]:
    return {k: v for k, v in vars(obj).items() if k != SETTINGS_ATTRIBUTE}


SYMBOLIC = {"ivar1": 1, "ivar_1": "1", "ivar_one": "one"}

BOGUS = {
    "=bk1=": "_bk1_",
    "@bk2": "bk2",
    "really--+-long&bogus*one": "really_long_bogus_one",
}


class TestPreInitInit:
    def test_empty(self):
        r = Record()
        assert isinstance(r, PreInit)
        assert fields(r) == {}

    def test_mapping(self):
        r = Record(SYMBOLIC)
        assert fields(r) == SYMBOLIC

    def test_keywords(self):
        r = Record(ivar1=1)
        assert r.ivar1 == 1

    def test_bogus_keys_raise(self):
        with pytest.raises(NameConflictError):
            Record({**SYMBOLIC, **BOGUS})

    def test_setters_preferred_by_default(self):
        t = Temperature(fahrenheit=212)
        assert t.celsius == 100
        assert "fahrenheit" not in vars(t)

    def test_handler_with_leading_options(self):
        seen: list[tuple[str, Any]] = []

        def handler(o, key, value):
            seen.append((key, value))
            o.__dict__[key] = value

        r = Record({"on_invalid_name": "ignore"}, SYMBOLIC, handler=handler)
        assert seen == list(SYMBOLIC.items())
        assert fields(r) == SYMBOLIC
        assert r.preinit_options.on_invalid_name is NameErrorAction.IGNORE

    def test_handler_with_single_attribute_mapping(self):
        seen: list[tuple[str, Any]] = []

        def handler(o, key, value):
            seen.append((key, value))
            o.__dict__[key] = value

        r = Record({"a": 1}, handler=handler)
        assert seen == [("a", 1)]
        assert fields(r) == {"a": 1}

    def test_handler_mapping_mixing_setting_and_field_names(self):
        seen: list[tuple[str, Any]] = []

        def handler(o, key, value):
            seen.append((key, value))

        Record({"use_setters": False, "size": 3}, handler=handler)
        assert seen == [("use_setters", False), ("size", 3)]

    def test_object_default_from_options(self):
        point = Point(0, 0)
        r = Record()
        r.preinit_options = {"default": point}
        r.load_attrs("origin")
        r.load_attrs("again")
        assert r.origin is point
        assert r.again is point


class TestLoadAttrs:
    def test_returns_self(self):
        r = Record()
        assert r.load_attrs(SYMBOLIC) is r
        assert fields(r) == SYMBOLIC

    def test_options_edited_in_place(self):
        r = Record()
        r.preinit_options["on_invalid_name"] = "ignore"
        r.load_attrs({**SYMBOLIC, **BOGUS})
        # "@bk2" is a valid name once the sigil is stripped
        assert fields(r) == {**SYMBOLIC, "bk2": "bk2"}

    def test_convert(self):
        r = Record()
        r.preinit_options["on_NameError"] = "convert"
        r.load_attrs({**SYMBOLIC, **BOGUS})
        for value in BOGUS.values():
            assert getattr(r, value) == value

    def test_replace_options(self):
        r = Record()
        r.preinit_options = Settings(use_setters=False)
        t = Temperature()
        t.preinit_options = {"use_setters": False}
        t.load_attrs(fahrenheit=50)
        assert vars(t)["fahrenheit"] == 50
        assert r.preinit_options.use_setters is False

    def test_handler(self):
        r = Record()
        r.load_attrs(SYMBOLIC, handler=lambda o, k, v: o.__dict__.update({k: v}))
        assert fields(r) == SYMBOLIC

    def test_chained_loads(self):
        r = Record().load_attrs({"a": 1}).load_attrs({"b": 2})
        assert fields(r) == {"a": 1, "b": 2}
