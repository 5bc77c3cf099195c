"""Structlog implementation of the ConfigObserver port."""

import structlog


class StructlogConfigObserver:
    """Delegates config domain events to structlog.

    Satisfies the ConfigObserver protocol structurally.
    """

    def __init__(self) -> None:
        self._log = structlog.get_logger()

    def config_loaded(self, name: str, model: str) -> None:
        self._log.info("config.loaded", name=name, model=model)

    def config_temperature_warning(self, temperature: float) -> None:
        self._log.warning(
            "config.temperature_warning",
            temperature=temperature,
            message="Temperature > 1.0 makes tool-call arguments unreliable",
        )

    def config_unhandled_tools(self, tool_names: list[str]) -> None:
        self._log.warning(
            "config.unhandled_tools",
            tool_names=tool_names,
            message="Declared tools have no handler and are not offered to the model",
        )
