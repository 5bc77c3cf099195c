"""Tagged parsing of model-emitted tool-call argument payloads."""

import json
from typing import Any

from pydantic import BaseModel


class ParsedArguments(BaseModel, frozen=True):
    value: dict[str, Any]


class ArgumentParseError(BaseModel, frozen=True):
    reason: str


def parse_arguments(raw: str) -> ParsedArguments | ArgumentParseError:
    """Parse a JSON argument string into a structured tool input.

    An empty payload means "no arguments". Anything that is not a JSON object
    is an ArgumentParseError; this function never raises.
    """
    if not raw.strip():
        return ParsedArguments(value={})
    try:
        value = json.loads(raw)
    except json.JSONDecodeError as exc:
        return ArgumentParseError(reason=f"Invalid tool arguments: {exc.msg}")
    if not isinstance(value, dict):
        return ArgumentParseError(
            reason=f"Invalid tool arguments: expected a JSON object, got {type(value).__name__}"
        )
    return ParsedArguments(value=value)
