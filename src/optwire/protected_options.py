from __future__ import annotations

import copy
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, NoReturn

from optwire.exceptions import OptionsFieldError, OptionsProtectedError
from optwire.options import ContainerOptions, IContainerOptions

if TYPE_CHECKING:
    from optwire.container_interface import IContainer

_PROTECTED_OBJECT_ATTR = "_protected_object"


class ProtectedContainerOptions(IContainerOptions):
    """Read-only view over a registered options object.

    The container replaces the options entry with this wrapper when the
    options are protected. Reads and method calls pass through to the wrapped
    object; every write fails with ``OptionsProtectedError``.

    Instances are only created by ``Container.protect_options``.
    """

    def __init__(self, container: IContainer) -> None:
        # container is ignored, it is read through the wrapped object.
        object.__setattr__(self, _PROTECTED_OBJECT_ATTR, None)

    def set_protected_object(self, options: IContainerOptions) -> None:
        """Bind the wrapped object. Only the first call has an effect."""
        if isinstance(options, ProtectedContainerOptions):
            raise OptionsProtectedError(
                options.get_config_class_name(),
                f'Option class "{options.get_config_class_name()}" is already protected.',
            )
        if self._protected_object is None:
            object.__setattr__(self, _PROTECTED_OBJECT_ATTR, options)

    @property
    def protected_object(self) -> IContainerOptions:
        if self._protected_object is None:
            msg = "Protected options wrapper is not bound to an options object."
            raise RuntimeError(msg)
        return self._protected_object

    @classmethod
    def factory(cls, container: IContainer) -> NoReturn:
        msg = "Factory method can't be invoked on protected option class."
        raise OptionsProtectedError(cls.__name__, msg)

    @property
    def container(self) -> IContainer:
        return self.protected_object.container

    def to_dict(self) -> dict[str, dict[str, Any]]:
        return self.protected_object.to_dict()

    def from_dict(self, data: Mapping[str, Mapping[str, Any]]) -> NoReturn:
        raise OptionsProtectedError(self.get_config_class_name())

    def get_config_class_name(self) -> str:
        return self.protected_object.get_config_class_name()

    def is_protected(self) -> bool:
        return True

    def protect(self) -> ProtectedContainerOptions:
        return self

    def __getattr__(self, name: str) -> Any:
        # Only reached for names missing on the wrapper itself.
        if name == _PROTECTED_OBJECT_ATTR or name.startswith("__"):
            raise AttributeError(name)
        wrapped = self.protected_object
        try:
            value = getattr(wrapped, name)
        except AttributeError:
            raise OptionsFieldError(wrapped.get_config_class_name(), name) from None
        if isinstance(wrapped, ContainerOptions) and name in wrapped.field_names():
            # Fields are returned as copies so lists and dicts stay read-only.
            return copy.deepcopy(value)
        return value

    def __setattr__(self, name: str, value: Any) -> NoReturn:
        raise OptionsProtectedError(self.get_config_class_name())

    def __delattr__(self, name: str) -> NoReturn:
        raise OptionsProtectedError(self.get_config_class_name())

    def __eq__(self, other: object) -> bool:
        if isinstance(other, ProtectedContainerOptions):
            other = other.protected_object
        return self.protected_object == other

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._protected_object!r})"
