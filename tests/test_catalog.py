# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Tests for the chainable class catalog."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass

import pytest

from classfinder.catalog import ClassCatalog
from classfinder.entries import Reflected, Unreflected
from classfinder.errors import UnreflectedEntryError, UnresolvableClassError
from classfinder.interfaces import StructuralHandle
from classfinder.sources import MappingClassSource

REGISTRY = {"App.Foo": "foo.src", "App.Bar": "bar.src", "Lib.Baz": "baz.src"}


@dataclass(frozen=True)
class FakeHandle:
    name: str
    kind: str = "class"
    bases: tuple[str, ...] = ()

    def is_instantiable(self) -> bool:
        return self.kind == "class"

    def is_trait(self) -> bool:
        return self.kind == "trait"

    def is_interface(self) -> bool:
        return self.kind == "interface"

    def is_subclass_of(self, other: str | type) -> bool:
        return other in self.bases


class FakeReflector:
    """Serve predefined handles and record which names were reflected."""

    def __init__(self, handles: Mapping[str, FakeHandle]) -> None:
        self.handles = dict(handles)
        self.calls: list[str] = []

    def __call__(self, class_name: str) -> FakeHandle:
        self.calls.append(class_name)
        try:
            return self.handles[class_name]
        except KeyError as exc:
            raise UnresolvableClassError(class_name, "not defined") from exc


class CountingSource(MappingClassSource):
    def __init__(self, mapping: Mapping[str, str]) -> None:
        super().__init__(mapping)
        self.calls = 0

    def class_map(self) -> Mapping[str, str]:
        self.calls += 1
        return super().class_map()


HANDLES = {
    "App.Foo": FakeHandle("App.Foo", bases=("App.Contract",)),
    "App.Bar": FakeHandle("App.Bar"),
    "App.Contract": FakeHandle("App.Contract", kind="interface"),
    "App.Shape": FakeHandle("App.Shape", kind="abstract"),
    "App.LoggingMixin": FakeHandle("App.LoggingMixin", kind="trait"),
    "Lib.Baz": FakeHandle("Lib.Baz"),
}


def _catalog(mapping: Mapping[str, str], reflector: FakeReflector | None = None) -> ClassCatalog:
    return ClassCatalog(source=MappingClassSource(mapping), reflector=reflector or FakeReflector(HANDLES))


def test_construct_without_entries_reads_source_once() -> None:
    source = CountingSource(REGISTRY)
    catalog = ClassCatalog(source=source, reflector=FakeReflector(HANDLES))

    assert source.calls == 1
    assert catalog.names() == ("App.Foo", "App.Bar", "Lib.Baz")
    assert catalog["App.Foo"] == Unreflected("foo.src")

    catalog.namespace("App").is_normal()
    assert source.calls == 1


def test_explicit_empty_entries_never_scan() -> None:
    source = CountingSource(REGISTRY)
    catalog = ClassCatalog({}, source=source)

    assert len(catalog) == 0
    assert source.calls == 0


def test_explicit_entries_are_wrapped_by_kind() -> None:
    handle = HANDLES["App.Bar"]
    catalog = ClassCatalog({"App.Foo": "foo.src", "App.Bar": handle}, source=MappingClassSource({}))

    assert catalog["App.Foo"] == Unreflected("foo.src")
    assert catalog["App.Bar"] == Reflected(handle)


def test_items_iterate_in_source_order_and_restart() -> None:
    catalog = _catalog(REGISTRY)

    first = list(catalog.items())
    second = list(catalog.items())

    assert first == second
    assert [name for name, _ in first] == ["App.Foo", "App.Bar", "Lib.Baz"]


def test_namespace_without_reflection_filters_by_prefix() -> None:
    catalog = _catalog(REGISTRY)

    narrowed = catalog.namespace("App", should_reflect=False)

    assert dict(narrowed) == {"App.Foo": Unreflected("foo.src"), "App.Bar": Unreflected("bar.src")}


@pytest.mark.parametrize(
    ("prefix", "expected"),
    [
        ("App.User", ["App.User", "App.UserProfile"]),
        ("app", []),
        ("", ["App.User", "App.UserProfile", "App.Users.Admin", "Lib.App.User"]),
        ("App.Users.", ["App.Users.Admin"]),
    ],
)
def test_namespace_uses_literal_prefix(prefix: str, expected: list[str]) -> None:
    catalog = _catalog(
        {"App.User": "a", "App.UserProfile": "b", "App.Users.Admin": "c", "Lib.App.User": "d"},
    )

    assert list(catalog.namespace(prefix, should_reflect=False)) == expected


def test_namespace_reflects_only_surviving_classes() -> None:
    reflector = FakeReflector(HANDLES)
    catalog = _catalog(REGISTRY, reflector)

    reflected = catalog.namespace("App")

    assert reflector.calls == ["App.Foo", "App.Bar"]
    assert all(isinstance(value, Reflected) for value in reflected.values())
    assert reflected.handles() == (HANDLES["App.Foo"], HANDLES["App.Bar"])


def test_reflect_false_returns_receiver() -> None:
    catalog = _catalog(REGISTRY)

    assert catalog.reflect(False) is catalog
    assert dict(catalog.reflect(False)) == dict(catalog)


def test_reflect_keeps_existing_handles() -> None:
    reflector = FakeReflector(HANDLES)
    reflected = _catalog({"App.Foo": "foo.src"}, reflector).reflect()

    again = reflected.reflect()

    assert reflector.calls == ["App.Foo"]
    assert dict(again) == dict(reflected)


def test_implements_keeps_only_realizing_classes() -> None:
    found = _catalog(REGISTRY).namespace("App").implements("App.Contract")

    assert found.names() == ("App.Foo",)
    assert isinstance(found["App.Foo"], Reflected)


def test_subclass_aliases_are_equivalent() -> None:
    catalog = _catalog({name: "src" for name in HANDLES}).reflect()

    for base in ("App.Contract", "App.Missing"):
        expected = catalog.is_subclass_of(base).names()
        assert catalog.extends(base).names() == expected
        assert catalog.implements(base).names() == expected


def test_unresolvable_class_aborts_reflection() -> None:
    registry = {**REGISTRY, "App.Broken": "broken.src"}
    catalog = _catalog(registry)

    with pytest.raises(UnresolvableClassError) as excinfo:
        catalog.namespace("App")

    assert excinfo.value.class_name == "App.Broken"
    assert all(isinstance(value, Unreflected) for value in catalog.values())
    assert catalog.namespace("Lib").names() == ("Lib.Baz",)


def test_empty_registry_yields_empty_catalog() -> None:
    found = _catalog({}).namespace("X").is_trait()

    assert len(found) == 0
    assert found.handles() == ()


def test_abstract_class_matches_no_kind_filter() -> None:
    catalog = _catalog({"App.Shape": "shape.src", "App.Bar": "bar.src"}).namespace("App")

    assert catalog.is_normal().names() == ("App.Bar",)
    assert catalog.is_trait().names() == ()
    assert catalog.is_interface().names() == ()


def test_kind_filters_partition_entries() -> None:
    catalog = _catalog({name: "src" for name in HANDLES}).reflect()

    normal = set(catalog.is_normal())
    traits = set(catalog.is_trait())
    interfaces = set(catalog.is_interface())

    assert normal == {"App.Foo", "App.Bar", "Lib.Baz"}
    assert traits == {"App.LoggingMixin"}
    assert interfaces == {"App.Contract"}
    assert normal.isdisjoint(traits) and normal.isdisjoint(interfaces) and traits.isdisjoint(interfaces)
    assert normal | traits | interfaces < set(catalog)


def test_chain_operations_leave_receiver_untouched() -> None:
    catalog = _catalog(REGISTRY)
    before = dict(catalog)

    reflected = catalog.namespace("App")
    reflected_before = dict(reflected)
    reflected.is_normal().implements("App.Contract")
    catalog.filter(lambda _value, name: False)
    catalog.map(lambda _value, _name: Unreflected("changed"))

    assert dict(catalog) == before
    assert dict(reflected) == reflected_before


def test_structural_filter_on_unreflected_entries_raises() -> None:
    catalog = _catalog(REGISTRY).namespace("App", should_reflect=False)

    with pytest.raises(UnreflectedEntryError) as excinfo:
        catalog.is_normal()

    assert excinfo.value.class_name == "App.Foo"
    assert excinfo.value.query == "is_instantiable"


def test_handles_require_reflection() -> None:
    with pytest.raises(UnreflectedEntryError):
        _catalog(REGISTRY).handles()


def test_quick_filter_rejects_unknown_queries() -> None:
    with pytest.raises(ValueError, match="Unknown structural query"):
        _catalog(REGISTRY).reflect().quick_filter("__class__")


def test_derived_catalogs_share_collaborators() -> None:
    reflector = FakeReflector(HANDLES)
    source = MappingClassSource(REGISTRY)
    catalog = ClassCatalog(source=source, reflector=reflector)

    derived = catalog.namespace("App").is_normal()

    assert type(derived) is ClassCatalog
    assert derived.source is source
    assert derived.reflector is reflector


def test_subclasses_are_preserved_by_transformations() -> None:
    class ServiceCatalog(ClassCatalog):
        __slots__ = ()

    catalog = ServiceCatalog(source=MappingClassSource(REGISTRY), reflector=FakeReflector(HANDLES))

    assert isinstance(catalog.namespace("App").is_normal(), ServiceCatalog)


def test_fake_handles_satisfy_protocol() -> None:
    assert isinstance(HANDLES["App.Foo"], StructuralHandle)
