"""Fake ConfigObserver for use in tests — records events without mocking."""


class FakeConfigObserver:
    def __init__(self) -> None:
        self.loaded: list[dict[str, str]] = []
        self.temperature_warnings: list[float] = []
        self.unhandled_tools: list[list[str]] = []

    def config_loaded(self, name: str, model: str) -> None:
        self.loaded.append({"name": name, "model": model})

    def config_temperature_warning(self, temperature: float) -> None:
        self.temperature_warnings.append(temperature)

    def config_unhandled_tools(self, tool_names: list[str]) -> None:
        self.unhandled_tools.append(tool_names)
