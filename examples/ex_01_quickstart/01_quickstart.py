"""Quickstart: a provider with options and a configuration override.

A provider is a mixin with an ``*_provider_init`` method that registers its
bindings and an ``*_provider_options`` method that returns its options. The
container runs every init method at construction and applies the raw
configuration to options the first time they are requested.
"""

from __future__ import annotations

from typing import Any

from optwire import Container, ContainerOptions


class Database:
    def __init__(self, host: str, port: int) -> None:
        self.host = host
        self.port = port


class DatabaseOptions(ContainerOptions):
    host: str = "localhost"
    port: int = 5432


class DatabaseProvider:
    def database_provider_options(self: Any) -> DatabaseOptions:
        return DatabaseOptions.factory(self)

    def database_provider_init(self: Any) -> None:
        def create(container: Any, name: Any) -> Database:
            options = self.database_provider_options()
            return Database(options.host, options.port)

        self.service(Database, create)


class AppContainer(Container, DatabaseProvider):
    pass


def main() -> None:
    container = AppContainer({"DatabaseOptions": {"host": "db.internal"}})
    database = container.service(Database)

    print(f"db={database.host}:{database.port}")  # => db=db.internal:5432
    print(f"same_instance={database is container.service(Database)}")  # => same_instance=True


if __name__ == "__main__":
    main()
