from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, ClassVar, TypeVar, overload

from optwire.providers import BindingKind, BindingName, CreationCallback, ExtensionCallback

if TYPE_CHECKING:
    from optwire.options import IContainerOptions
    from optwire.protected_options import ProtectedContainerOptions

O = TypeVar("O", bound="IContainerOptions")


class IContainer(ABC):
    """Interface for container-like objects."""

    SERVICE: ClassVar[BindingKind] = BindingKind.SERVICE
    """SERVICE kind: one instance shared by every request."""
    FACTORY: ClassVar[BindingKind] = BindingKind.FACTORY
    """FACTORY kind: a new instance for every request."""
    OPTION_SUFFIX: ClassVar[str] = "_provider_options"
    """Suffix of methods used by ``generate_config`` to build the template."""
    INIT_SUFFIX: ClassVar[str] = "_provider_init"
    """Suffix of methods run at construction to register bindings."""

    # region Options
    @abstractmethod
    def add_options(self, options: O, *, update: bool = True) -> O:
        """Register an options object and optionally apply the raw configuration."""

    @abstractmethod
    def has_options(self, identity: str | type[IContainerOptions]) -> bool:
        """Check if options are registered under ``identity``."""

    @overload
    @abstractmethod
    def get_options(self, identity: type[O], *, autoload: bool = True) -> O: ...

    @overload
    @abstractmethod
    def get_options(self, identity: str, *, autoload: bool = True) -> IContainerOptions: ...

    @abstractmethod
    def get_options(
        self,
        identity: str | type[IContainerOptions],
        *,
        autoload: bool = True,
    ) -> IContainerOptions:
        """Return registered options, building them on first request when allowed."""

    @abstractmethod
    def protect_options(self, options: IContainerOptions) -> ProtectedContainerOptions:
        """Make an options object read-only and return its wrapper."""

    # endregion Options

    # region Bindings
    @abstractmethod
    def service(self, name: BindingName, callback: CreationCallback | None = None) -> Any:
        """Define a SERVICE when ``callback`` is given, otherwise return its instance."""

    @abstractmethod
    def factory(self, name: BindingName, callback: CreationCallback | None = None) -> Any:
        """Define a FACTORY when ``callback`` is given, otherwise build a new value."""

    @abstractmethod
    def extend(self, name: BindingName, kind: BindingKind, callback: ExtensionCallback) -> None:
        """Decorate the creation callback of an unused binding."""

    @abstractmethod
    def raw(self, name: BindingName) -> CreationCallback | None:
        """Return the current creation callback for ``name``."""

    @abstractmethod
    def has(self, name: BindingName) -> bool:
        """Check if a SERVICE or FACTORY is registered under ``name``."""

    @abstractmethod
    def is_type(self, name: BindingName, kind: BindingKind) -> bool:
        """Check if ``name`` is registered with the given kind."""

    def is_service(self, name: BindingName) -> bool:
        return self.is_type(name, BindingKind.SERVICE)

    def is_factory(self, name: BindingName) -> bool:
        return self.is_type(name, BindingKind.FACTORY)

    # endregion Bindings

    @abstractmethod
    def generate_config(self) -> dict[str, dict[str, Any]]:
        """Generate a configuration template covering every option provider."""

    @property
    @abstractmethod
    def configs(self) -> Mapping[str, Mapping[str, Any]]:
        """The raw configuration mapping the container was built with."""
