from __future__ import annotations

import os
from dataclasses import dataclass
from enum import StrEnum
from pathlib import Path
from typing import Final, Optional

from dotenv import load_dotenv

__all__ = ["DuplicatePolicy", "RegistryConfig", "load_config"]


class DuplicatePolicy(StrEnum):
    REJECT = "reject"
    REPLACE = "replace"


@dataclass(frozen=True, slots=True)
class RegistryConfig:
    """Registry behavior switches.

    Attributes:
        on_duplicate: What `ToolRegistry.register` does with a name that is
            already taken.
        self_check: Decode each tool's schema examples when it is registered.
    """

    on_duplicate: DuplicatePolicy = DuplicatePolicy.REJECT
    self_check: bool = False


_ENV_ON_DUPLICATE: Final = "TOOL_BRIDGE_ON_DUPLICATE"
_ENV_SELF_CHECK: Final = "TOOL_BRIDGE_SELF_CHECK"

_TRUTHY: Final = frozenset({"1", "true", "yes", "on"})
_FALSY: Final = frozenset({"0", "false", "no", "off", ""})


def _parse_bool(env_var: str, raw: str) -> bool:
    value = raw.strip().lower()
    if value in _TRUTHY:
        return True
    if value in _FALSY:
        return False
    raise ValueError(f"{env_var} must be a boolean, got {raw!r}")


def load_config(
    *,
    dotenv: bool = True,
    dotenv_path: Optional[str | Path] = None,
) -> RegistryConfig:
    """
    Build a RegistryConfig from the environment.

    Args:
        dotenv: Load a ``.env`` file first. Variables already set in the
            environment win over the file.
        dotenv_path: Explicit ``.env`` location; searched for when omitted.

    Raises:
        ValueError: A variable holds an unknown value.
    """
    if dotenv:
        load_dotenv(dotenv_path)

    raw_policy = os.environ.get(_ENV_ON_DUPLICATE, DuplicatePolicy.REJECT.value)
    try:
        policy = DuplicatePolicy(raw_policy.strip().lower())
    except ValueError:
        choices = ", ".join(p.value for p in DuplicatePolicy)
        raise ValueError(f"{_ENV_ON_DUPLICATE} must be one of {choices}, got {raw_policy!r}") from None

    self_check = _parse_bool(_ENV_SELF_CHECK, os.environ.get(_ENV_SELF_CHECK, ""))
    return RegistryConfig(on_duplicate=policy, self_check=self_check)
