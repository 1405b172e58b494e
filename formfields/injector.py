"""Service configuration lookup for the dependency injector."""

from __future__ import annotations

from typing import Any, Optional, Protocol


class ConfigLocator(Protocol):
    def locate_config_for(self, name: str) -> Optional[Any]:
        ...

    def reset(self) -> None:
        ...


class ServiceConfigurationLocator:
    """Locates configuration for a named service. Finds none."""

    def locate_config_for(self, name: str) -> Optional[Any]:
        return None

    def reset(self) -> None:
        pass
