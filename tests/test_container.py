from typing import Any

import pytest

from optwire.container import Container
from optwire.container_interface import IContainer
from optwire.exceptions import (
    BindingAlreadyDefinedError,
    BindingInUseError,
    BindingKindError,
    InvalidCallbackError,
    InvalidProviderMethodError,
)
from optwire.providers import BindingKind
from tests.sample_container import (
    Factory,
    FactoryOptions,
    SampleContainer,
    Service,
    ServiceOptions,
    increment_numeric_param,
)


def test_container_implements_interface(sample_container: SampleContainer) -> None:
    assert isinstance(sample_container, IContainer)


def test_init_methods_register_bindings(sample_container: SampleContainer) -> None:
    assert sample_container.has(Service)
    assert sample_container.has(Factory)
    assert Service in sample_container
    assert sample_container.is_service(Service)
    assert sample_container.is_factory(Factory)
    assert not sample_container.is_factory(Service)
    assert sample_container.is_type(Factory, BindingKind.FACTORY)
    assert not sample_container.has("missing")


def test_kind_aliases_match_enum() -> None:
    assert Container.SERVICE is BindingKind.SERVICE
    assert Container.FACTORY is BindingKind.FACTORY
    assert BindingKind.SERVICE.value == 0
    assert BindingKind.FACTORY.value == 1


def test_service_is_created_once(sample_container: SampleContainer) -> None:
    service1 = sample_container.get_service()
    config = ServiceOptions.factory(sample_container)
    config.numeric_param += 1
    service2 = sample_container.get_service()

    assert isinstance(service1, Service)
    assert service1 is service2
    assert service1.constructor_param == config.constructor_param
    # Options changed after creation do not affect the cached service.
    assert service1.numeric_param != config.numeric_param


def test_service_callback_runs_once(container: Container) -> None:
    calls: list[Any] = []

    def create(c: IContainer, name: Any) -> object:
        calls.append((c, name))
        return object()

    assert container.service("svc", create) is None
    first = container.service("svc")
    second = container.service("svc")

    assert first is second
    assert calls == [(container, "svc")]


def test_factory_creates_new_instance_per_call(sample_container: SampleContainer) -> None:
    factory1 = sample_container.get_factory()
    config = FactoryOptions.factory(sample_container)

    assert isinstance(factory1, Factory)
    assert factory1.constructor_param == config.constructor_param
    assert factory1.numeric_param == config.numeric_param

    config.numeric_param += 1
    factory2 = sample_container.get_factory()

    assert factory2.numeric_param == config.numeric_param
    assert factory1.numeric_param != factory2.numeric_param
    assert factory1 is not factory2


def test_factory_instances_are_independent(sample_container: SampleContainer) -> None:
    factory1 = sample_container.get_factory()
    factory2 = sample_container.get_factory()

    factory1.numeric_param = 10
    factory2.numeric_param = 20

    assert factory1.numeric_param == 10
    assert factory2.numeric_param == 20


def test_factory_callback_runs_every_call(container: Container) -> None:
    calls: list[str] = []

    def create(c: IContainer, name: Any) -> list[str]:
        calls.append(name)
        return []

    container.factory("items", create)
    container.factory("items")
    container.factory("items")

    assert calls == ["items", "items"]


def test_configured_value_reaches_service() -> None:
    container = SampleContainer({"ServiceOptions": {"constructor_param": "modifiedParam"}})

    assert ServiceOptions.factory(container).constructor_param == "modifiedParam"
    assert container.get_service().constructor_param == "modifiedParam"


def test_raw_returns_current_callback(container: Container) -> None:
    def create(c: IContainer, name: Any) -> int:
        return 1

    container.service("one", create)

    assert container.raw("one") is create
    assert container.raw("missing") is None


class TestRegistration:
    def test_service_requires_callable(self, container: Container) -> None:
        with pytest.raises(InvalidCallbackError, match='Invalid callback for "svc" service'):
            container.service("svc")

    def test_factory_requires_callable(self, container: Container) -> None:
        with pytest.raises(InvalidCallbackError, match='Invalid callback for "fac" factory'):
            container.factory("fac", "not callable")  # type: ignore[arg-type]

    def test_service_cannot_be_redefined(self, sample_container: SampleContainer) -> None:
        with pytest.raises(BindingAlreadyDefinedError, match="Use extend instead"):
            sample_container.service(Service, lambda c, n: Service("x"))

    def test_factory_cannot_be_redefined(self, sample_container: SampleContainer) -> None:
        with pytest.raises(BindingAlreadyDefinedError, match="factory is already defined"):
            sample_container.factory(Factory, lambda c, n: Factory("x"))

    def test_kind_cannot_change(self, sample_container: SampleContainer) -> None:
        with pytest.raises(BindingAlreadyDefinedError):
            sample_container.factory(Service, lambda c, n: Service("x"))

    def test_service_access_to_factory_fails(self, sample_container: SampleContainer) -> None:
        with pytest.raises(BindingKindError, match="using SERVICE type"):
            sample_container.service(Factory)

    def test_factory_access_to_service_fails(self, sample_container: SampleContainer) -> None:
        with pytest.raises(BindingKindError, match="using FACTORY type"):
            sample_container.factory(Service)


class TestExtend:
    def test_extending_services(self, sample_container: SampleContainer) -> None:
        sample_container.extend(Service, Container.SERVICE, increment_numeric_param)
        sample_container.extend(Service, Container.SERVICE, increment_numeric_param)

        service = sample_container.get_service()
        options = ServiceOptions.factory(sample_container)

        assert isinstance(service, Service)
        assert service.numeric_param == options.numeric_param + 2

    def test_extending_factories(self, sample_container: SampleContainer) -> None:
        sample_container.extend(Factory, Container.FACTORY, increment_numeric_param)
        sample_container.extend(Factory, Container.FACTORY, increment_numeric_param)

        factory = sample_container.get_factory()
        options = FactoryOptions.factory(sample_container)

        assert factory.numeric_param == options.numeric_param + 2

    def test_last_extension_runs_first(self, container: Container) -> None:
        order: list[str] = []

        def base(c: IContainer, name: Any) -> list[str]:
            order.append("base")
            return order

        def first(original: Any, c: IContainer, name: Any) -> Any:
            order.append("first")
            return original(c, name)

        def second(original: Any, c: IContainer, name: Any) -> Any:
            order.append("second")
            return original(c, name)

        container.service("chain", base)
        container.extend("chain", Container.SERVICE, first)
        container.extend("chain", Container.SERVICE, second)
        container.service("chain")

        assert order == ["second", "first", "base"]

    def test_extension_receives_original_callback(self, container: Container) -> None:
        def base(c: IContainer, name: Any) -> str:
            return "base"

        received: list[Any] = []

        def extension(original: Any, c: IContainer, name: Any) -> str:
            received.append((original, c, name))
            return original(c, name) + "+ext"

        container.factory("value", base)
        container.extend("value", Container.FACTORY, extension)

        assert container.raw("value") is not base
        assert container.factory("value") == "base+ext"
        assert received == [(base, container, "value")]

    def test_extending_service_with_wrong_type(self, sample_container: SampleContainer) -> None:
        with pytest.raises(BindingKindError, match="of the same type"):
            sample_container.extend(Service, Container.FACTORY, increment_numeric_param)

    def test_extending_factory_with_wrong_type(self, sample_container: SampleContainer) -> None:
        with pytest.raises(BindingKindError):
            sample_container.extend(Factory, Container.SERVICE, increment_numeric_param)

    def test_extending_unknown_binding(self, container: Container) -> None:
        with pytest.raises(BindingKindError):
            container.extend("missing", Container.SERVICE, increment_numeric_param)

    def test_extending_services_in_use(self, sample_container: SampleContainer) -> None:
        sample_container.get_service()
        with pytest.raises(BindingInUseError, match="already in use"):
            sample_container.extend(Service, Container.SERVICE, increment_numeric_param)

    def test_extending_factories_in_use(self, sample_container: SampleContainer) -> None:
        sample_container.get_factory()
        with pytest.raises(BindingInUseError):
            sample_container.extend(Factory, Container.FACTORY, increment_numeric_param)

    def test_extension_requires_callable(self, sample_container: SampleContainer) -> None:
        with pytest.raises(InvalidCallbackError):
            sample_container.extend(Service, Container.SERVICE, None)  # type: ignore[arg-type]


class TestInitMethods:
    def test_explicit_method_names_replace_discovery(self) -> None:
        container = SampleContainer(init_methods=["service_provider_init"])

        assert container.has(Service)
        assert not container.has(Factory)

    def test_explicit_callables_receive_container(self) -> None:
        seen: list[Container] = []

        def register(container: Container) -> None:
            seen.append(container)
            container.service("greeting", lambda c, n: "hello")

        container = Container(init_methods=[register])

        assert seen == [container]
        assert container.service("greeting") == "hello"

    def test_empty_list_runs_nothing(self) -> None:
        container = SampleContainer(init_methods=[])

        assert not container.has(Service)
        assert not container.has(Factory)

    def test_unknown_method_name_fails(self) -> None:
        with pytest.raises(InvalidProviderMethodError, match="missing_provider_init"):
            SampleContainer(init_methods=["missing_provider_init"])

    def test_discovery_follows_class_definition_order(self) -> None:
        calls: list[str] = []

        class Base(Container):
            def base_provider_init(self) -> None:
                calls.append("base")

        class Child(Base):
            def zeta_provider_init(self) -> None:
                calls.append("zeta")

            def alpha_provider_init(self) -> None:
                calls.append("alpha")

            def helper(self) -> None:
                calls.append("helper")

        Child()

        assert calls == ["base", "zeta", "alpha"]

    def test_overridden_init_runs_once(self) -> None:
        calls: list[str] = []

        class Base(Container):
            def thing_provider_init(self) -> None:
                calls.append("base")

        class Child(Base):
            def thing_provider_init(self) -> None:
                calls.append("child")

        Child()

        assert calls == ["child"]
