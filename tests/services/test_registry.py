"""Tests for PreferenceRegistry — declaration, lookup, inheritance."""

from __future__ import annotations

import logging

import pytest
from pydantic import ValidationError

from preferable.domain.errors import UndeclaredPreferenceError
from preferable.domain.types import PreferenceType
from preferable.services.registry import PreferenceRegistry


class Base:
    pass


class Child(Base):
    pass


class Other:
    pass


class TestDeclare:
    def test_declare_and_lookup(self) -> None:
        registry = PreferenceRegistry()
        spec = registry.declare(Base, "color", "string", default="red")
        assert registry.spec_for(Base, "color") == spec
        assert spec.type is PreferenceType.STRING

    def test_redeclare_last_wins(self) -> None:
        registry = PreferenceRegistry()
        registry.declare(Base, "color", "string", default="red")
        registry.declare(Base, "size", "string", default="M")
        registry.declare(Base, "color", "text", default="blue")
        specs = registry.specs_for(Base)
        assert [s.name for s in specs] == ["color", "size"]
        assert specs[0].default == "blue"
        assert specs[0].type is PreferenceType.TEXT

    def test_unknown_type_fails_at_declaration(self) -> None:
        registry = PreferenceRegistry()
        with pytest.raises(ValidationError):
            registry.declare(Base, "when", "timestamp")
        assert registry.specs_for(Base) == []

    def test_logs_declaration(self, caplog: pytest.LogCaptureFixture) -> None:
        registry = PreferenceRegistry()
        with caplog.at_level(logging.DEBUG, logger="preferable"):
            registry.declare(Base, "color", "string")
        assert "Declared preference Base.color (string)" in caplog.text


class TestLookup:
    def test_insertion_order(self) -> None:
        registry = PreferenceRegistry()
        for name in ("b", "a", "c"):
            registry.declare(Base, name)
        assert registry.names_for(Base) == ["b", "a", "c"]

    def test_spec_for_missing_returns_none(self) -> None:
        registry = PreferenceRegistry()
        assert registry.spec_for(Base, "nope") is None

    def test_require_spec_raises(self) -> None:
        registry = PreferenceRegistry()
        with pytest.raises(UndeclaredPreferenceError, match="nope preference not defined"):
            registry.require_spec(Base, "nope")

    def test_types_are_isolated(self) -> None:
        registry = PreferenceRegistry()
        registry.declare(Base, "color", "string")
        assert registry.spec_for(Other, "color") is None
        assert registry.specs_for(Other) == []

    def test_declared_types(self) -> None:
        registry = PreferenceRegistry()
        registry.declare(Base, "color")
        registry.declare(Other, "size")
        assert registry.declared_types() == [Base, Other]


class TestInheritance:
    def test_subclass_inherits(self) -> None:
        registry = PreferenceRegistry()
        registry.declare(Base, "color", "string", default="red")
        registry.declare(Child, "size", "string", default="M")
        assert registry.names_for(Child) == ["color", "size"]
        assert registry.names_for(Base) == ["color"]
        assert registry.spec_for(Child, "color") is not None

    def test_subclass_override(self) -> None:
        registry = PreferenceRegistry()
        registry.declare(Base, "color", "string", default="red")
        registry.declare(Child, "color", "string", default="green")
        assert registry.spec_for(Child, "color").default == "green"
        assert registry.spec_for(Base, "color").default == "red"
        assert [s.default for s in registry.specs_for(Child)] == ["green"]
