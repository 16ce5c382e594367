"""Freeze options once the application is configured.

``protect()`` swaps the container's options entry for a read-only wrapper.
Reads still work, every write raises ``OptionsProtectedError``.
"""

from __future__ import annotations

from optwire import Container, ContainerOptions, OptionsProtectedError


class FeatureOptions(ContainerOptions):
    beta_enabled: bool = False


def main() -> None:
    container = Container({"FeatureOptions": {"beta_enabled": True}})
    options = FeatureOptions.factory(container).protect()

    print(f"beta_enabled={options.beta_enabled}")  # => beta_enabled=True
    print(f"registered_is_protected={FeatureOptions.factory(container).is_protected()}")  # => registered_is_protected=True

    try:
        options.beta_enabled = False
    except OptionsProtectedError:
        print("write=rejected")  # => write=rejected


if __name__ == "__main__":
    main()
