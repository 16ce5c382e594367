"""Decorate existing bindings with ``extend``.

Each extension receives the previous creation callback as ``original``. The
most recent extension runs first. Extending is only allowed until the binding
is used for the first time.
"""

from __future__ import annotations

from typing import Any

from optwire import BindingInUseError, Container


def with_suffix(suffix: str) -> Any:
    def extension(original: Any, container: Container, name: Any) -> list[str]:
        steps = original(container, name)
        steps.append(suffix)
        return steps

    return extension


def main() -> None:
    container = Container()
    container.service("pipeline", lambda c, name: ["base"])
    container.extend("pipeline", Container.SERVICE, with_suffix("first"))
    container.extend("pipeline", Container.SERVICE, with_suffix("second"))

    print(f"pipeline={'>'.join(container.service('pipeline'))}")  # => pipeline=base>first>second

    try:
        container.extend("pipeline", Container.SERVICE, with_suffix("late"))
    except BindingInUseError:
        print("late_extend=rejected")  # => late_extend=rejected


if __name__ == "__main__":
    main()
