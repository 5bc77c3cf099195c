"""${ENV_VAR} and ${ENV_VAR:-default} substitution over parsed YAML data."""

import os
import re
from typing import TypeAlias

# ${NAME} or ${NAME:-fallback}; the fallback may be empty.
_REFERENCE = re.compile(r"\$\{(?P<name>[A-Za-z_][A-Za-z0-9_]*)(?::-(?P<default>[^}]*))?\}")

RawValue: TypeAlias = (
    str | int | float | bool | None | list["RawValue"] | dict[str, "RawValue"]
)


def collect_missing_vars(data: RawValue) -> list[str]:
    """Return every referenced variable that is unset and has no fallback.

    Names are reported once each, in the order they are first seen.
    """
    seen: dict[str, None] = {}
    for text in _strings(data):
        for match in _REFERENCE.finditer(text):
            name = match.group("name")
            if match.group("default") is None and name not in os.environ:
                seen.setdefault(name, None)
    return list(seen)


def interpolate(data: RawValue) -> RawValue:
    """Return a copy of data with every reference replaced by its value.

    Unset variables with a fallback take the fallback. Callers check
    collect_missing_vars first; an unset variable without one raises KeyError.
    """
    match data:
        case str():
            return _REFERENCE.sub(_resolve, data)
        case list():
            return [interpolate(item) for item in data]
        case dict():
            return {key: interpolate(value) for key, value in data.items()}
        case _:
            return data


def _resolve(match: re.Match[str]) -> str:
    default = match.group("default")
    if default is None:
        return os.environ[match.group("name")]
    return os.environ.get(match.group("name"), default)


def _strings(data: RawValue) -> list[str]:
    if isinstance(data, str):
        return [data]
    if isinstance(data, list):
        return [text for item in data for text in _strings(item)]
    if isinstance(data, dict):
        return [text for value in data.values() for text in _strings(value)]
    return []
