from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Mapping
from types import MappingProxyType
from typing import Any, TypeVar, Union

from optwire.container_interface import IContainer
from optwire.exceptions import (
    BindingAlreadyDefinedError,
    BindingInUseError,
    BindingKindError,
    InvalidCallbackError,
    InvalidOptionsProviderError,
    InvalidProviderMethodError,
    OptionsAlreadyRegisteredError,
    OptionsNotRegisteredError,
    OptionsOwnershipError,
    OptionsProtectedError,
)
from optwire.options import ContainerOptions, IContainerOptions
from optwire.protected_options import ProtectedContainerOptions
from optwire.providers import (
    Binding,
    BindingKind,
    BindingName,
    CreationCallback,
    ExtensionCallback,
    describe_name,
)

O = TypeVar("O", bound=IContainerOptions)

ProviderMethod = Union[str, Callable[..., Any]]
"""A container method name, or a callable receiving the container."""

logger = logging.getLogger(__name__)


class Container(IContainer):
    """Register and build services, factories and their options.

    Providers are plain methods on a ``Container`` subclass, usually mixed in
    from one class per provider. Methods whose names end with
    ``INIT_SUFFIX`` run at construction and register bindings; methods whose
    names end with ``OPTION_SUFFIX`` return the provider's options and are
    used by ``generate_config``.

    .. code-block:: python

        class MailerProvider:
            def mailer_provider_options(self) -> MailerOptions:
                return MailerOptions.factory(self)

            def mailer_provider_init(self) -> None:
                self.service(Mailer, lambda container, name: Mailer(self.mailer_provider_options().host))


        class AppContainer(Container, MailerProvider):
            pass


        container = AppContainer({"MailerOptions": {"host": "smtp.example.com"}})
        mailer = container.service(Mailer)

    Bindings are registered once and may only be decorated with ``extend``
    until their first use. Options are kept one per identity and are updated
    from the raw configuration when first registered.
    """

    def __init__(
        self,
        configs: Mapping[str, Mapping[str, Any]] | None = None,
        init_methods: Iterable[ProviderMethod] | None = None,
        option_methods: Iterable[ProviderMethod] | None = None,
    ) -> None:
        """Initialize the container and run its provider init methods.

        Args:
            configs: Raw configuration keyed by options identity, each entry
                mapping field names to override values.
            init_methods: Explicit initializers to run instead of discovering
                methods ending with ``INIT_SUFFIX``. Entries are method names
                or callables receiving the container.
            option_methods: Explicit option providers used by
                ``generate_config`` instead of methods ending with
                ``OPTION_SUFFIX``.

        Raises:
            InvalidProviderMethodError: If an explicit method name does not
                name a callable on the container.

        """
        self._configs: dict[str, Mapping[str, Any]] = dict(configs or {})
        self._options: dict[str, IContainerOptions] = {}
        self._bindings: dict[BindingName, Binding] = {}
        self._instances: dict[BindingName, Any] = {}
        self._init_methods = list(init_methods) if init_methods is not None else None
        self._option_methods = list(option_methods) if option_methods is not None else None

        self._init_service_providers()

    @property
    def configs(self) -> Mapping[str, Mapping[str, Any]]:
        return MappingProxyType(self._configs)

    # region Provider Discovery
    def _init_service_providers(self) -> None:
        if self._init_methods is None:
            self._init_methods = self._extract_methods(self.INIT_SUFFIX)
        for label, method in self._resolve_provider_methods(self._init_methods):
            logger.debug("Running provider init %s", label)
            method()

    def _extract_methods(self, suffix: str) -> list[ProviderMethod]:
        """Return names of methods ending with ``suffix``, base classes first."""
        names: dict[str, None] = {}
        for klass in reversed(type(self).__mro__):
            for name, value in vars(klass).items():
                if name.endswith(suffix) and callable(value):
                    names.setdefault(name, None)
        return list(names)

    def _resolve_provider_methods(
        self,
        entries: Iterable[ProviderMethod],
    ) -> list[tuple[str, Callable[[], Any]]]:
        resolved: list[tuple[str, Callable[[], Any]]] = []
        for entry in entries:
            if isinstance(entry, str):
                method = getattr(self, entry, None)
                if not callable(method):
                    msg = f'Provider method "{entry}" does not exist in "{type(self).__name__}".'
                    raise InvalidProviderMethodError(msg)
                resolved.append((entry, method))
            elif callable(entry):
                label = getattr(entry, "__qualname__", repr(entry))
                resolved.append((label, _bind_provider(entry, self)))
            else:
                msg = f"Provider method must be a method name or a callable, got {entry!r}."
                raise InvalidProviderMethodError(msg)
        return resolved

    # endregion Provider Discovery

    # region Options
    def add_options(self, options: O, *, update: bool = True) -> O:
        """Register an options object under its identity.

        Args:
            options: Options to register.
            update: Apply the raw configuration entry for this identity, if
                any, before registering.

        Raises:
            OptionsAlreadyRegisteredError: If the identity is already taken.

        """
        identity = options.get_config_class_name()
        if self.has_options(identity):
            raise OptionsAlreadyRegisteredError(identity)

        if update and identity in self._configs:
            options.from_dict(self._configs)
        self._options[identity] = options
        logger.debug("Registered options %s", identity)
        return options

    def has_options(self, identity: str | type[IContainerOptions]) -> bool:
        return _options_identity(identity) in self._options

    def get_options(
        self,
        identity: str | type[IContainerOptions],
        *,
        autoload: bool = True,
    ) -> IContainerOptions:
        """Return the options registered under ``identity``.

        When nothing is registered and ``autoload`` is enabled, an options
        class is instantiated with this container and registered, which also
        applies the raw configuration.

        Raises:
            OptionsNotRegisteredError: If the options are missing and cannot
                be autoloaded.

        """
        key = _options_identity(identity)
        if key not in self._options:
            if not autoload or not _is_options_class(identity):
                raise OptionsNotRegisteredError(key)
            self.add_options(identity(self))
        return self._options[key]

    def protect_options(self, options: IContainerOptions) -> ProtectedContainerOptions:
        """Replace the registered options with a read-only wrapper.

        Raises:
            OptionsOwnershipError: If ``options`` belongs to another container.
            OptionsProtectedError: If the options are already protected.

        """
        identity = options.get_config_class_name()
        if options.container is not self:
            raise OptionsOwnershipError(identity)

        registered = self._options.get(identity)
        if options.is_protected() or (registered is not None and registered.is_protected()):
            msg = f'Option class "{identity}" is already protected.'
            raise OptionsProtectedError(identity, msg)

        protected = ProtectedContainerOptions(self)
        protected.set_protected_object(options)
        self._options[identity] = protected
        logger.debug("Protected options %s", identity)
        return protected

    # endregion Options

    # region Bindings
    def service(self, name: BindingName, callback: CreationCallback | None = None) -> Any:
        """Define or retrieve a SERVICE.

        With a ``callback`` and an unknown ``name`` the SERVICE is defined and
        ``None`` is returned. Without a ``callback`` the cached instance is
        returned, created by ``callback(container, name)`` on the first call.

        Raises:
            InvalidCallbackError: If defining with a non-callable callback.
            BindingAlreadyDefinedError: If ``name`` is bound and a callback is given.
            BindingKindError: If ``name`` is bound as a FACTORY.

        """
        binding = self._bindings.get(name)
        if binding is None:
            self._register(name, BindingKind.SERVICE, callback)
            return None
        if callback is not None:
            msg = f'"{describe_name(name)}" service is already defined. Use extend instead.'
            raise BindingAlreadyDefinedError(msg)
        if binding.kind is not BindingKind.SERVICE:
            msg = f'Can\'t access "{describe_name(name)}" using SERVICE type.'
            raise BindingKindError(msg)

        if name not in self._instances:
            logger.debug("Creating service %s", describe_name(name))
            self._instances[name] = binding.create(self)
        return self._instances[name]

    def factory(self, name: BindingName, callback: CreationCallback | None = None) -> Any:
        """Define a FACTORY or build a new value from it.

        Works like ``service`` except that every retrieval runs the callback
        and nothing is cached.

        Raises:
            InvalidCallbackError: If defining with a non-callable callback.
            BindingAlreadyDefinedError: If ``name`` is bound and a callback is given.
            BindingKindError: If ``name`` is bound as a SERVICE.

        """
        binding = self._bindings.get(name)
        if binding is None:
            self._register(name, BindingKind.FACTORY, callback)
            return None
        if callback is not None:
            msg = f'"{describe_name(name)}" factory is already defined. Use extend instead.'
            raise BindingAlreadyDefinedError(msg)
        if binding.kind is not BindingKind.FACTORY:
            msg = f'Can\'t access "{describe_name(name)}" using FACTORY type.'
            raise BindingKindError(msg)

        self._instances[name] = True
        return binding.create(self)

    def _register(self, name: BindingName, kind: BindingKind, callback: Any) -> None:
        if not callable(callback):
            msg = f'Invalid callback for "{describe_name(name)}" {kind.name.lower()}.'
            raise InvalidCallbackError(msg)
        self._bindings[name] = Binding(name=name, kind=kind, callback=callback)
        logger.debug("Registered %s %s", kind.name, describe_name(name))

    def extend(self, name: BindingName, kind: BindingKind, callback: ExtensionCallback) -> None:
        """Decorate the creation callback of a binding that was not used yet.

        The new callback receives the previous one as ``original``:
        ``callback(original, container, name)``. Each extension wraps the
        chain built so far, so the most recent extension runs first.

        .. code-block:: python

            def add_retries(original, container, name):
                client = original(container, name)
                client.retries = 3
                return client


            container.extend(HttpClient, Container.SERVICE, add_retries)

        Raises:
            BindingKindError: If ``name`` is not bound with ``kind``.
            BindingInUseError: If the binding was already used.
            InvalidCallbackError: If ``callback`` is not callable.

        """
        binding = self._bindings.get(name)
        if binding is None or binding.kind is not kind:
            msg = (
                f'To extend "{describe_name(name)}" SERVICE or FACTORY '
                "it needs to be defined and of the same type."
            )
            raise BindingKindError(msg)
        if name in self._instances:
            msg = f'Extending is not possible once "{describe_name(name)}" SERVICE or FACTORY is already in use.'
            raise BindingInUseError(msg)
        if not callable(callback):
            msg = f'Invalid extension callback for "{describe_name(name)}".'
            raise InvalidCallbackError(msg)

        binding.callback = _extended(binding.callback, callback)
        logger.debug("Extended %s %s", kind.name, describe_name(name))

    def raw(self, name: BindingName) -> CreationCallback | None:
        binding = self._bindings.get(name)
        return binding.callback if binding is not None else None

    def has(self, name: BindingName) -> bool:
        return name in self._bindings

    def is_type(self, name: BindingName, kind: BindingKind) -> bool:
        binding = self._bindings.get(name)
        return binding is not None and binding.kind is kind

    def __contains__(self, name: object) -> bool:
        return self.has(name)  # type: ignore[arg-type]

    # endregion Bindings

    def generate_config(self) -> dict[str, dict[str, Any]]:
        """Generate a configuration template from every option provider.

        Each option method must return options; their ``to_dict()`` results
        are merged, later identities overriding earlier ones.

        Raises:
            InvalidOptionsProviderError: If an option method returns something
                other than options.

        """
        if self._option_methods is None:
            self._option_methods = self._extract_methods(self.OPTION_SUFFIX)

        config: dict[str, dict[str, Any]] = {}
        for label, method in self._resolve_provider_methods(self._option_methods):
            options = method()
            if not isinstance(options, IContainerOptions):
                msg = f'Method "{label}" should return "{IContainerOptions.__name__}" instance.'
                raise InvalidOptionsProviderError(msg)
            config.update(options.to_dict())

        logger.info("Generated configuration template: option_count=%d", len(config))
        return config


def _options_identity(identity: str | type[IContainerOptions]) -> str:
    if isinstance(identity, str):
        return identity
    if _is_options_class(identity):
        return identity.get_config_class_name()
    return getattr(identity, "__name__", repr(identity))


def _is_options_class(candidate: object) -> bool:
    return isinstance(candidate, type) and issubclass(candidate, ContainerOptions)


def _bind_provider(provider: Callable[[Container], Any], container: Container) -> Callable[[], Any]:
    return lambda: provider(container)


def _extended(original: CreationCallback, callback: ExtensionCallback) -> CreationCallback:
    def extended(container: IContainer, name: BindingName) -> Any:
        return callback(original, container, name)

    return extended
