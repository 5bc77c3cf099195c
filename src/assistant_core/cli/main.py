"""CLI entrypoint for assistant-core — typer app with `run` and `check` commands."""

import asyncio
import json
import sys
from pathlib import Path

import structlog
import typer
from rich.console import Console
from rich.markup import escape

from assistant_core.config.domain.config import AppConfig
from assistant_core.config.domain.observer import ConfigObserver
from assistant_core.config.infrastructure.observer import StructlogConfigObserver
from assistant_core.config.infrastructure.yaml_loader import YamlConfigLoader
from assistant_core.context.domain.context import AssistantContext
from assistant_core.context.infrastructure.static_context import StaticContextService
from assistant_core.core.errors import AssistantCoreError
from assistant_core.core.result import Failure
from assistant_core.llm.infrastructure.litellm_client import LiteLLMModelClient
from assistant_core.llm.infrastructure.observer import StructlogModelObserver
from assistant_core.loop.infrastructure.observer import StructlogLoopObserver
from assistant_core.orchestration.application.orchestrator import Orchestrator
from assistant_core.orchestration.domain.events import (
    ErrorEvent,
    MessageCompleteEvent,
    MessageDeltaEvent,
    StreamEvent,
    ToolCompleteEvent,
    ToolStartEvent,
)
from assistant_core.orchestration.domain.request import (
    OrchestratorInput,
    OrchestratorResult,
)
from assistant_core.orchestration.infrastructure.observer import (
    StructlogOrchestratorObserver,
)
from assistant_core.tools.infrastructure.local_executor import LocalToolExecutor

app = typer.Typer(add_completion=False)

_out = Console()
_err = Console(stderr=True)


def _configure_structlog(log_format: str) -> None:
    """Configure structlog based on the requested format."""
    if log_format == "console":
        renderer: structlog.types.Processor = structlog.dev.ConsoleRenderer()
    elif log_format == "json":
        renderer = structlog.processors.JSONRenderer()
    else:
        _err.print(f"Invalid log format: {log_format!r}. Must be 'console' or 'json'.")
        raise typer.Exit(code=1)

    # Logs go to stderr so stdout carries only the assistant's answer.
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(0),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
    )


def _load_config(config_path: Path, observer: ConfigObserver) -> AppConfig:
    loader = YamlConfigLoader(observer=observer)
    try:
        return loader.load(path=config_path)
    except AssistantCoreError as exc:
        _err.print(f"[red]{escape(str(exc))}[/red]", highlight=False)
        raise typer.Exit(code=1) from exc


def _build_orchestrator(
    config: AppConfig, config_observer: ConfigObserver
) -> Orchestrator:
    tool_executor = LocalToolExecutor()
    context = _offered_tools_only(
        context=config.context,
        handled=set(tool_executor.tool_names),
        observer=config_observer,
    )
    return Orchestrator(
        model_client=LiteLLMModelClient(
            config=config.llm, observer=StructlogModelObserver()
        ),
        tool_executor=tool_executor,
        context_service=StaticContextService(
            context=context, transcript_path=config.transcript_path
        ),
        config=config.orchestrator,
        observer=StructlogOrchestratorObserver(),
        loop_observer=StructlogLoopObserver(),
    )


def _offered_tools_only(
    context: AssistantContext, handled: set[str], observer: ConfigObserver
) -> AssistantContext:
    """Drop declared tools the executor cannot run so the model never calls them."""
    unhandled = [tool.name for tool in context.tools if tool.name not in handled]
    if not unhandled:
        return context
    observer.config_unhandled_tools(tool_names=unhandled)
    return context.model_copy(
        update={"tools": [tool for tool in context.tools if tool.name in handled]}
    )


def _print_result(result: OrchestratorResult) -> None:
    _out.print(result.content, markup=False, highlight=False)
    for call in result.tool_calls:
        colour = "green" if call.status == "success" else "red"
        _err.print(
            f"[{colour}]{call.status}[/{colour}] {escape(call.tool_name)} ({call.duration_ms} ms)",
            highlight=False,
        )
    stopped = f", stopped: {result.stopped_reason}" if result.stopped_reason else ""
    _err.print(
        f"[dim]{escape(result.model)} · {result.iterations} iteration(s) · "
        f"{result.usage.input_tokens} in / {result.usage.output_tokens} out{stopped}[/dim]",
        highlight=False,
    )


def _print_event(event: StreamEvent) -> bool:
    """Render one stream event; returns False for error events."""
    match event:
        case ToolStartEvent():
            _err.print(
                f"[cyan]→ {escape(event.tool_name)}[/cyan] {escape(json.dumps(event.input))}",
                highlight=False,
            )
        case ToolCompleteEvent():
            colour = "green" if event.status == "success" else "red"
            _err.print(
                f"[{colour}]← {escape(event.tool_name)} {event.status}[/{colour}] "
                f"({event.duration_ms} ms)",
                highlight=False,
            )
        case MessageDeltaEvent():
            _out.print(event.content, markup=False, highlight=False, end="")
        case MessageCompleteEvent():
            _out.print()
            _err.print(
                f"[dim]{escape(event.model)} · {event.usage.input_tokens} in / "
                f"{event.usage.output_tokens} out[/dim]",
                highlight=False,
            )
        case ErrorEvent():
            _err.print(f"[red]{event.code}: {escape(event.message)}[/red]", highlight=False)
            return False
    return True


async def _run_once(orchestrator: Orchestrator, request: OrchestratorInput) -> bool:
    result = await orchestrator.run(request)
    if isinstance(result, Failure):
        _err.print(f"[red]{result.code}: {escape(result.message)}[/red]", highlight=False)
        return False
    _print_result(result.data)
    return True


async def _stream_once(orchestrator: Orchestrator, request: OrchestratorInput) -> bool:
    ok = True
    async for event in orchestrator.stream(request):
        ok = _print_event(event) and ok
    return ok


@app.command()
def run(
    config_path: Path = typer.Argument(..., help="Path to assistant config YAML"),
    message: str = typer.Option(..., "--message", "-m", help="User message to send"),
    chat_id: str = typer.Option("cli", "--chat-id", help="Conversation identifier"),
    user_id: str = typer.Option("cli-user", "--user-id", help="User identifier"),
    stream: bool = typer.Option(False, "--stream", help="Print lifecycle events live"),
    log_format: str = typer.Option(
        "console",
        "--log-format",
        help="Log format: 'console' or 'json'",
    ),
) -> None:
    """Send one message through the orchestrator and print the answer."""
    _configure_structlog(log_format=log_format)
    config_observer = StructlogConfigObserver()
    config = _load_config(config_path, observer=config_observer)
    orchestrator = _build_orchestrator(config, config_observer=config_observer)
    request = OrchestratorInput(user_message=message, chat_id=chat_id, user_id=user_id)

    try:
        if stream:
            ok = asyncio.run(_stream_once(orchestrator, request))
        else:
            ok = asyncio.run(_run_once(orchestrator, request))
    except KeyboardInterrupt:
        _err.print("Interrupted.")
        sys.exit(1)
    except AssistantCoreError as exc:
        _err.print(f"[red]{escape(str(exc))}[/red]", highlight=False)
        sys.exit(1)

    if not ok:
        raise typer.Exit(code=1)


@app.command()
def check(
    config_path: Path = typer.Argument(..., help="Path to assistant config YAML"),
    log_format: str = typer.Option(
        "console",
        "--log-format",
        help="Log format: 'console' or 'json'",
    ),
) -> None:
    """Validate a config file and print the resolved orchestrator settings."""
    _configure_structlog(log_format=log_format)
    config = _load_config(config_path, observer=StructlogConfigObserver())
    _out.print_json(
        data={
            "name": config.name,
            "orchestrator": config.orchestrator.model_dump(),
            "tools": [tool.name for tool in config.context.tools],
            "transcript_path": str(config.transcript_path)
            if config.transcript_path
            else None,
        }
    )


if __name__ == "__main__":
    app()
