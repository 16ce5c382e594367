from optwire.container import Container
from optwire.container_interface import IContainer
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
from optwire.options import ContainerOptions, IContainerOptions
from optwire.protected_options import ProtectedContainerOptions
from optwire.providers import Binding, BindingKind

__all__ = [
    "Binding",
    "BindingAlreadyDefinedError",
    "BindingInUseError",
    "BindingKind",
    "BindingKindError",
    "Container",
    "ContainerOptions",
    "IContainer",
    "IContainerOptions",
    "InvalidCallbackError",
    "InvalidOptionsProviderError",
    "InvalidProviderMethodError",
    "OptionsAlreadyRegisteredError",
    "OptionsEntryError",
    "OptionsFieldError",
    "OptionsNotRegisteredError",
    "OptionsOwnershipError",
    "OptionsProtectedError",
    "OptionsValueError",
    "OptwireError",
    "ProtectedContainerOptions",
]
