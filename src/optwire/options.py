"""Typed configuration objects owned by container providers.

Each provider declares its tunables as a ``ContainerOptions`` subclass:

.. code-block:: python

    class MailerOptions(ContainerOptions):
        host: str = "localhost"
        port: int = 25

The container keeps one live instance per options identity. The raw
configuration mapping passed to the container is applied to that instance
when it is first registered, and ``Container.generate_config`` serializes
every provider's options back into the same nested shape::

    {"MailerOptions": {"host": "localhost", "port": 25}}
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, ClassVar

from pydantic import BaseModel, ConfigDict, PrivateAttr, ValidationError

from optwire.exceptions import OptionsEntryError, OptionsFieldError, OptionsValueError

if TYPE_CHECKING:
    from typing_extensions import Self

    from optwire.container_interface import IContainer
    from optwire.protected_options import ProtectedContainerOptions


class IContainerOptions(ABC):
    """Interface shared by plain and protected options objects."""

    __slots__ = ()

    @classmethod
    @abstractmethod
    def factory(cls, container: IContainer) -> Self:
        """Return the live instance registered with ``container``.

        Prefer this over the constructor: every call with the same container
        returns the same object, so changes made by one provider are seen by
        the others.
        """

    @property
    @abstractmethod
    def container(self) -> IContainer:
        """The container these options belong to."""

    @abstractmethod
    def to_dict(self) -> dict[str, dict[str, Any]]:
        """Serialize every declared field under the options identity.

        The result has a single root key, ``get_config_class_name()``::

            {"FullOptionsName": {"field1": "value1", "field2": "value2"}}
        """

    @abstractmethod
    def from_dict(self, data: Mapping[str, Mapping[str, Any]]) -> Self:
        """Assign fields from the entry of ``data`` keyed by the options identity."""

    @abstractmethod
    def get_config_class_name(self) -> str:
        """Return the identity used as registry key and serialization root."""

    @abstractmethod
    def is_protected(self) -> bool:
        """Tell whether the options can be modified."""

    @abstractmethod
    def protect(self) -> Self | ProtectedContainerOptions:
        """Make the options read-only within the container and return the wrapper."""


class ContainerOptions(BaseModel, IContainerOptions):
    """Base class for provider options.

    Declare typed fields with defaults on a subclass. Unknown fields are
    rejected and assignments are validated against the declared types.

    The class name is the options identity. Set ``config_class_name`` on a
    subclass to serialize it under another root key.
    """

    model_config = ConfigDict(extra="forbid", validate_assignment=True)

    config_class_name: ClassVar[str | None] = None

    _container: IContainer | None = PrivateAttr(default=None)

    def __init__(self, container: IContainer, /, **data: Any) -> None:
        super().__init__(**data)
        self._container = container

    @classmethod
    def factory(cls, container: IContainer) -> Self:
        return container.get_options(cls)

    @property
    def container(self) -> IContainer:
        if self._container is None:
            msg = f'Options "{self.get_config_class_name()}" are not bound to a container.'
            raise RuntimeError(msg)
        return self._container

    @classmethod
    def get_config_class_name(cls) -> str:
        return cls.config_class_name or cls.__name__

    @classmethod
    def field_names(cls) -> tuple[str, ...]:
        """Return the declared field names in declaration order."""
        return tuple(cls.model_fields)

    def to_dict(self) -> dict[str, dict[str, Any]]:
        return {self.get_config_class_name(): self.model_dump()}

    def from_dict(self, data: Mapping[str, Mapping[str, Any]]) -> Self:
        identity = self.get_config_class_name()
        if identity not in data:
            return self

        values = data[identity]
        if not isinstance(values, Mapping):
            raise OptionsEntryError(identity, values)

        declared = self.field_names()
        for field_name in values:
            if field_name not in declared:
                raise OptionsFieldError(identity, field_name)

        for field_name, value in values.items():
            try:
                setattr(self, field_name, value)
            except ValidationError as exc:
                raise OptionsValueError(identity, field_name, value) from exc
        return self

    def is_protected(self) -> bool:
        return False

    def protect(self) -> ProtectedContainerOptions:
        return self.container.protect_options(self)
