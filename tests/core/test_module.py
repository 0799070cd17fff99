"""Tests for the Module registry.

This module tests provider registration, overriding, group accumulation and
merging of modules with import_module.
"""

import pytest

from stillhouse.core.errors import DuplicateProviderError, RegistrationError, TypeKindConflictError
from stillhouse.core.helpers import (
    create_group_token,
    create_token,
    define_provider,
    define_static_provider,
    define_static_provider_factory,
)
from stillhouse.core.module import (
    GroupProviderDefinition,
    Module,
    SingleProviderDefinition,
    create_module,
)


@pytest.mark.unit
class TestModuleBasics:
    """Test module creation and introspection."""

    def test_create_module(self):
        module = create_module()

        assert isinstance(module, Module)
        assert module.name is None
        assert len(module) == 0

    def test_module_name(self):
        assert Module("TestModule").name == "TestModule"

    def test_provide_returns_module(self, module, token):
        assert module.provide(token, define_static_provider_factory("x")) is module

    def test_provide_does_not_call_factory(self, module, token):
        calls = []
        module.provide(token, lambda injector: calls.append(injector))

        assert calls == []

    def test_introspection(self, module, token):
        factory = define_static_provider_factory("x")
        module.provide(token, factory)

        assert token in module
        assert module.has(token)
        assert list(module) == [token]
        assert module.get_definition(token) == SingleProviderDefinition(factory)
        assert module.get_definition(create_token()) is None
        assert "not-a-token" not in module

    def test_definitions_view_is_read_only(self, module, token):
        module.provide(token, define_static_provider_factory("x"))

        with pytest.raises(TypeError):
            module.definitions[token] = None


@pytest.mark.unit
class TestProvideSingle:
    """Test single-kind registration."""

    def test_stores_factory(self, module, token):
        factory = define_static_provider_factory({"test": "value"})
        module.provide(token, factory)

        assert module.definitions[token] == SingleProviderDefinition(factory)
        assert module.definitions[token].is_group is False

    def test_duplicate_raises(self, module):
        token = create_token(name="uniqueToken")
        module.provide(token, define_static_provider_factory("test value"))

        with pytest.raises(DuplicateProviderError, match=r"ProviderToken\(uniqueToken\)") as exc_info:
            module.provide(token, define_static_provider_factory("test value"))

        assert exc_info.value.token is token

    def test_override_replaces_factory(self, module, token):
        original = define_static_provider_factory("real")
        fake = define_static_provider_factory("fake")

        module.provide(token, original)
        module.provide(token, fake, override=True)

        assert module.definitions[token].factory is fake

    def test_override_on_fresh_token(self, module, token):
        factory = define_static_provider_factory("x")
        module.provide(token, factory, override=True)

        assert module.definitions[token].factory is factory

    def test_single_after_group_conflicts(self, module):
        token = create_group_token("mixed")
        module.provide(token, define_static_provider_factory("a"))

        # Flip the kind behind the registry's back
        token._is_group = False

        with pytest.raises(TypeKindConflictError):
            module.provide(token, define_static_provider_factory("b"), override=True)

    def test_missing_factory_raises(self, module, token):
        with pytest.raises(RegistrationError, match="No factory given"):
            module.provide(token)

    def test_invalid_ref_raises(self, module):
        with pytest.raises(TypeError):
            module.provide("token", define_static_provider_factory("x"))


@pytest.mark.unit
class TestProvideTokenized:
    """Test registration through tokenized providers."""

    def test_provider_registers_itself(self, module):
        provider = define_static_provider("value")
        module.provide(provider)

        assert module.definitions[provider.token].factory is provider.factory

    def test_explicit_factory_replaces_provider_factory(self, module):
        provider = define_provider(lambda injector: "test")
        replacement = define_static_provider_factory("test-2")

        module.provide(provider, replacement)

        assert module.definitions[provider.token].factory is replacement

    def test_tokenized_provider_as_factory(self, module, token):
        provider = define_static_provider("value")
        module.provide(token, provider)

        assert module.definitions[token].factory is provider


@pytest.mark.unit
class TestProvideGroup:
    """Test group-kind registration."""

    def test_factories_accumulate_in_order(self, module, group_token):
        first = define_static_provider_factory("1")
        second = define_static_provider_factory("2")
        third = define_static_provider_factory("3")

        module.provide(group_token, first).provide(group_token, second).provide(group_token, third)

        definition = module.definitions[group_token]
        assert isinstance(definition, GroupProviderDefinition)
        assert definition.factories == [first, second, third]

    def test_group_after_single_conflicts(self, module):
        token = create_token(name="mixed")
        module.provide(token, define_static_provider_factory("a"))

        token._is_group = True

        with pytest.raises(TypeKindConflictError):
            module.provide(token, define_static_provider_factory("b"))


@pytest.mark.unit
class TestImport:
    """Test merging modules."""

    def test_import_returns_module(self):
        module1 = create_module()
        assert module1.import_module(create_module()) is module1

    def test_import_copies_providers(self):
        factory1 = define_static_provider_factory("test1")
        factory2 = define_static_provider_factory("test2")
        token1 = create_token(factory1, "provider1")
        token2 = create_token(factory2, "provider2")

        module1 = create_module().provide(token1, factory1)
        module2 = create_module().provide(token2, factory2)

        module1.import_module(module2)

        assert module1.definitions[token1] == SingleProviderDefinition(factory1)
        assert module1.definitions[token2] == SingleProviderDefinition(factory2)
        # The imported module is left alone
        assert token1 not in module2

    def test_chained_imports(self):
        tokens = [create_token(name=f"provider{i}") for i in range(3)]
        modules = [
            create_module().provide(token, define_static_provider_factory(i))
            for i, token in enumerate(tokens)
        ]

        main = create_module().import_module(modules[0]).import_module(modules[1]).import_module(modules[2])

        assert all(token in main for token in tokens)

    def test_group_factories_concatenate(self, group_token):
        a = define_static_provider_factory("a")
        b = define_static_provider_factory("b")
        c = define_static_provider_factory("c")

        module1 = create_module().provide(group_token, a)
        module2 = create_module().provide(group_token, b).provide(group_token, c)

        module1.import_module(module2)

        assert module1.definitions[group_token].factories == [a, b, c]
        assert module2.definitions[group_token].factories == [b, c]

    def test_imported_group_is_not_shared(self, group_token):
        a = define_static_provider_factory("a")
        b = define_static_provider_factory("b")

        source = create_module().provide(group_token, a)
        target = create_module().import_module(source)
        target.provide(group_token, b)

        assert target.definitions[group_token].factories == [a, b]
        assert source.definitions[group_token].factories == [a]

    def test_duplicate_single_raises(self):
        factory = define_static_provider_factory("test")
        token = create_token(factory, "provider")

        module1 = create_module().provide(token, factory)
        module2 = create_module().provide(token, factory)

        with pytest.raises(DuplicateProviderError, match=r"ProviderToken\(provider\)"):
            module1.import_module(module2)

    def test_kind_mismatch_raises(self):
        token = create_group_token("shared")

        group_module = create_module().provide(token, define_static_provider_factory("g"))
        token._is_group = False
        single_module = create_module().provide(token, define_static_provider_factory("s"))

        with pytest.raises(TypeKindConflictError):
            group_module.import_module(single_module)

        with pytest.raises(TypeKindConflictError):
            single_module.import_module(group_module)
