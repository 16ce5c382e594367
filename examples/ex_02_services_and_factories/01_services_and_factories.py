"""Services are built once, factories on every request.

Bindings can be registered directly on a container, without provider
mixins. Keys may be strings or classes.
"""

from __future__ import annotations

import itertools
from typing import Any

from optwire import Container

_ids = itertools.count(1)


class RequestContext:
    def __init__(self) -> None:
        self.request_id = next(_ids)


def main() -> None:
    container = Container()
    container.service("settings", lambda c, name: {"debug": True})
    container.factory(RequestContext, lambda c, name: RequestContext())

    first: Any = container.factory(RequestContext)
    second: Any = container.factory(RequestContext)

    print(f"settings_shared={container.service('settings') is container.service('settings')}")  # => settings_shared=True
    print(f"request_ids={first.request_id},{second.request_id}")  # => request_ids=1,2
    print(f"is_factory={container.is_factory(RequestContext)}")  # => is_factory=True


if __name__ == "__main__":
    main()
