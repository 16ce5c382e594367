from __future__ import annotations

from collections.abc import Callable, Hashable
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any, TypeAlias

if TYPE_CHECKING:
    from optwire.container_interface import IContainer

BindingName: TypeAlias = Hashable
"""Key of a binding: usually a string or the provided class itself."""

CreationCallback: TypeAlias = "Callable[[IContainer, Any], Any]"
"""Build a value from ``(container, name)``."""

ExtensionCallback: TypeAlias = "Callable[[CreationCallback, IContainer, Any], Any]"
"""Decorate a creation callback from ``(original, container, name)``."""


class BindingKind(Enum):
    """Define how often a binding's creation callback runs."""

    SERVICE = 0
    """Run the callback once per container and reuse the cached value."""

    FACTORY = 1
    """Run the callback on every retrieval and never cache the value."""


@dataclass(slots=True)
class Binding:
    """Describe a single named registration.

    ``kind`` is fixed at registration time. ``callback`` is replaced when the
    binding is extended, always by a callable that wraps the previous one.
    """

    name: BindingName
    """The key the binding is registered under."""
    kind: BindingKind
    """Whether values are cached (SERVICE) or built per call (FACTORY)."""
    callback: CreationCallback
    """The current creation callback, including any extensions."""

    def create(self, container: IContainer) -> Any:
        return self.callback(container, self.name)


def describe_name(name: BindingName) -> str:
    """Return a readable label for a binding key used in error messages."""
    if isinstance(name, type):
        return f"{name.__module__}.{name.__qualname__}"
    return str(name)
