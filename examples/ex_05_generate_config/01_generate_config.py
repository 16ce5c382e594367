"""Generate a configuration template from every provider.

``generate_config`` calls each ``*_provider_options`` method and merges the
results. The output has the same shape the container accepts, so it can be
written to a file, edited and fed back in.
"""

from __future__ import annotations

import json
from typing import Any

from optwire import Container, ContainerOptions


class CacheOptions(ContainerOptions):
    ttl: int = 60


class MailerOptions(ContainerOptions):
    host: str = "localhost"
    port: int = 25


class AppContainer(Container):
    def cache_provider_options(self) -> CacheOptions:
        return CacheOptions.factory(self)

    def mailer_provider_options(self) -> MailerOptions:
        return MailerOptions.factory(self)


def main() -> None:
    container = AppContainer({"MailerOptions": {"port": 2525}})
    template: dict[str, Any] = container.generate_config()

    print(json.dumps(template, sort_keys=True))  # => {"CacheOptions": {"ttl": 60}, "MailerOptions": {"host": "localhost", "port": 2525}}


if __name__ == "__main__":
    main()
