class OptwireError(Exception):
    """Represent a base class for all optwire-specific failures.

    Catch this type when you want to handle any optwire error path without
    matching each concrete exception class individually.
    """


class OptionsAlreadyRegisteredError(OptwireError):
    """Signal a second registration of the same options identity.

    Raised by ``Container.add_options`` when the container already holds an
    options object under ``identity``.

    Typical fix is calling ``Options.factory(container)`` to reuse the live
    instance instead of registering a new one.
    """

    def __init__(self, identity: str) -> None:
        self.identity = identity
        super().__init__(f'Configuration options already exist for "{identity}".')


class OptionsNotRegisteredError(OptwireError, KeyError):
    """Signal a lookup of options that are neither registered nor loadable.

    Raised by ``Container.get_options`` when ``autoload`` is disabled, or when
    the requested identity is a plain string or a class that does not derive
    from ``ContainerOptions``.
    """

    def __init__(self, identity: object) -> None:
        self.identity = identity
        super().__init__(identity)

    def __str__(self) -> str:
        return f'Invalid configuration option class "{self.identity}".'


class OptionsFieldError(OptwireError, AttributeError):
    """Signal access to a field that the options class does not declare.

    Raised by ``ContainerOptions.from_dict`` for unknown configuration keys and
    by ``ProtectedContainerOptions`` for unknown attribute reads.

    Typical fix is checking the key spelling against ``generate_config()``
    output.
    """

    def __init__(self, identity: str, field_name: str) -> None:
        self.identity = identity
        self.field_name = field_name
        super().__init__(f'Invalid configuration property "{field_name}" for "{identity}".')


class OptionsEntryError(OptwireError, TypeError):
    """Signal a configuration entry that is not a field-to-value mapping.

    Raised by ``ContainerOptions.from_dict`` when the entry stored under the
    options identity is, for example, ``None`` or a list.
    """

    def __init__(self, identity: str, entry: object) -> None:
        self.identity = identity
        self.entry = entry
        super().__init__(
            f'Configuration entry for "{identity}" must be a mapping, got {type(entry).__name__}.',
        )


class OptionsValueError(OptwireError, ValueError):
    """Signal a configuration value rejected by field validation.

    Raised by ``ContainerOptions.from_dict``. The originating pydantic
    ``ValidationError`` is available as ``__cause__``.
    """

    def __init__(self, identity: str, field_name: str, value: object) -> None:
        self.identity = identity
        self.field_name = field_name
        self.value = value
        super().__init__(
            f'Invalid value {value!r} for configuration property "{field_name}" of "{identity}".',
        )


class OptionsProtectedError(OptwireError):
    """Signal a modification attempt on read-only options.

    Raised when writing to a ``ProtectedContainerOptions`` wrapper, calling its
    ``from_dict`` or ``factory``, or protecting options a second time.
    """

    def __init__(self, identity: str, msg: str | None = None) -> None:
        self.identity = identity
        super().__init__(msg or f'This instance of "{identity}" is protected and can\'t be modified.')


class OptionsOwnershipError(OptwireError):
    """Signal protection of options that belong to another container.

    Raised by ``Container.protect_options``. Protect options through the
    container that created them, usually via ``options.protect()``.
    """

    def __init__(self, identity: str) -> None:
        self.identity = identity
        super().__init__(f'Given option class "{identity}" is created with different container.')


class InvalidCallbackError(OptwireError, TypeError):
    """Signal a registration or extension without a callable creation function.

    Raised by ``Container.service``, ``Container.factory`` and
    ``Container.extend``.
    """


class BindingAlreadyDefinedError(OptwireError):
    """Signal re-registration of a service or factory name.

    Raised by ``Container.service`` and ``Container.factory`` when a callback
    is passed for a name that is already bound. Use ``Container.extend`` to
    decorate an existing binding instead.
    """


class BindingKindError(OptwireError, KeyError):
    """Signal access to a binding through the wrong kind.

    Raised when a FACTORY is retrieved with ``service()`` (or the reverse), and
    by ``Container.extend`` when the name is unknown or bound with another kind.
    """

    def __str__(self) -> str:
        return str(self.args[0]) if self.args else super().__str__()


class BindingInUseError(OptwireError):
    """Signal an extension of a binding that has already produced a value.

    Raised by ``Container.extend`` once a service was materialized or a
    factory was invoked at least once. Register extensions during the
    initialization phase, before any retrieval.
    """


class InvalidOptionsProviderError(OptwireError, TypeError):
    """Signal an option provider that did not return options.

    Raised by ``Container.generate_config`` when an option method returns
    something other than an ``IContainerOptions`` instance.
    """


class InvalidProviderMethodError(OptwireError, AttributeError):
    """Signal an explicit init or option method name missing on the container.

    Raised while running ``init_methods`` at construction and
    ``option_methods`` in ``generate_config``.
    """
