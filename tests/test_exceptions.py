"""Tests for custom exception hierarchy."""

import pytest

from optwire.container import Container
from optwire.exceptions import (
    BindingAlreadyDefinedError,
    BindingInUseError,
    BindingKindError,
    InvalidCallbackError,
    InvalidOptionsProviderError,
    InvalidProviderMethodError,
    OptionsAlreadyRegisteredError,
    OptionsEntryError,
    OptionsFieldError,
    OptionsNotRegisteredError,
    OptionsOwnershipError,
    OptionsProtectedError,
    OptionsValueError,
    OptwireError,
)
from tests.sample_container import SampleContainer, Service, ServiceOptions


@pytest.mark.parametrize(
    "error_type",
    [
        BindingAlreadyDefinedError,
        BindingInUseError,
        BindingKindError,
        InvalidCallbackError,
        InvalidOptionsProviderError,
        InvalidProviderMethodError,
        OptionsAlreadyRegisteredError,
        OptionsEntryError,
        OptionsFieldError,
        OptionsNotRegisteredError,
        OptionsOwnershipError,
        OptionsProtectedError,
        OptionsValueError,
    ],
)
def test_errors_derive_from_base(error_type: type[Exception]) -> None:
    assert issubclass(error_type, OptwireError)


class TestBuiltinCompatibility:
    def test_unknown_options_is_key_error(self, container: Container) -> None:
        with pytest.raises(KeyError):
            container.get_options("Missing", autoload=False)

    def test_wrong_kind_is_key_error(self, sample_container: SampleContainer) -> None:
        with pytest.raises(KeyError):
            sample_container.factory(Service)

    def test_invalid_callback_is_type_error(self, container: Container) -> None:
        with pytest.raises(TypeError):
            container.service("svc", 42)  # type: ignore[arg-type]

    def test_unknown_field_is_attribute_error(self, container: Container) -> None:
        with pytest.raises(AttributeError):
            ServiceOptions(container).from_dict({"ServiceOptions": {"nope": 1}})


class TestErrorContext:
    def test_field_error_names_identity_and_field(self, container: Container) -> None:
        with pytest.raises(OptionsFieldError) as exc_info:
            ServiceOptions(container).from_dict({"ServiceOptions": {"nope": 1}})

        assert exc_info.value.identity == "ServiceOptions"
        assert exc_info.value.field_name == "nope"

    def test_not_registered_error_message(self, container: Container) -> None:
        with pytest.raises(OptionsNotRegisteredError) as exc_info:
            container.get_options("Missing")

        assert exc_info.value.identity == "Missing"
        assert str(exc_info.value) == 'Invalid configuration option class "Missing".'

    def test_kind_error_message_names_binding(self, sample_container: SampleContainer) -> None:
        with pytest.raises(BindingKindError) as exc_info:
            sample_container.factory(Service)

        assert "tests.sample_container.Service" in str(exc_info.value)

    def test_ownership_error_identity(self) -> None:
        config = ServiceOptions.factory(SampleContainer())

        with pytest.raises(OptionsOwnershipError) as exc_info:
            SampleContainer().protect_options(config)

        assert exc_info.value.identity == "ServiceOptions"
