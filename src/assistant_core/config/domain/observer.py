"""Observer port for the config domain — defines events in domain language."""

from typing import Protocol


class ConfigObserver(Protocol):
    def config_loaded(self, name: str, model: str) -> None: ...

    def config_temperature_warning(self, temperature: float) -> None: ...

    def config_unhandled_tools(self, tool_names: list[str]) -> None: ...
