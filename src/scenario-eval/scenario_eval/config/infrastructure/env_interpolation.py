"""${ENV_VAR} references in raw config data: discovery and substitution."""

import re
from collections.abc import Iterator, Mapping
from typing import TypeAlias

_ENV_REF = re.compile(r"\$\{([A-Za-z_][A-Za-z0-9_]*)\}")

RawValue: TypeAlias = (
    str | int | float | bool | None | list["RawValue"] | dict[str, "RawValue"]
)


def referenced_vars(data: RawValue) -> list[str]:
    """Return every env var name referenced in *data*, first occurrence order."""
    found: dict[str, None] = {}
    for text in _strings(data):
        for match in _ENV_REF.finditer(text):
            found.setdefault(match.group(1), None)
    return list(found)


def missing_vars(data: RawValue, env: Mapping[str, str]) -> list[str]:
    return [name for name in referenced_vars(data) if name not in env]


def substitute(data: RawValue, env: Mapping[str, str]) -> RawValue:
    """Return a copy of *data* with each ${VAR} replaced from *env*.

    Every referenced name must be present in *env*; check with `missing_vars`
    first.
    """
    if isinstance(data, str):
        return _ENV_REF.sub(lambda m: env[m.group(1)], data)
    if isinstance(data, list):
        return [substitute(item, env) for item in data]
    if isinstance(data, dict):
        return {key: substitute(value, env) for key, value in data.items()}
    return data


def _strings(data: RawValue) -> Iterator[str]:
    if isinstance(data, str):
        yield data
    elif isinstance(data, list):
        for item in data:
            yield from _strings(item)
    elif isinstance(data, dict):
        for value in data.values():
            yield from _strings(value)
