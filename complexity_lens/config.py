"""Analysis configuration.

Settings can be given directly or read from the environment:

- ``COMPLEXITY_LENS_VARIANT``: ``classic`` (default) or ``modified``
- ``COMPLEXITY_LENS_THRESHOLD``: complexity above which a function is flagged
- ``COMPLEXITY_LENS_BASE``: base complexity of every function (default 1)
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping

from complexity_lens.constants import DEFAULT_BASE_COMPLEXITY, DEFAULT_COMPLEXITY_THRESHOLD
from complexity_lens.types.core import Variant
from complexity_lens.types.errors import ConfigurationError, ErrorContext, RecoveryAction

ENV_VARIANT = "COMPLEXITY_LENS_VARIANT"
ENV_THRESHOLD = "COMPLEXITY_LENS_THRESHOLD"
ENV_BASE = "COMPLEXITY_LENS_BASE"


def _positive_int(env: Mapping[str, str], name: str, default: int) -> int:
    raw = env.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = int(raw)
    except ValueError as e:
        raise ConfigurationError(
            f"{name} must be an integer, got {raw!r}",
            user_message=f"Invalid value for {name}.",
            context=ErrorContext(
                operation="load_config",
                component="config",
                additional_info={"variable": name, "value": raw},
            ),
            recovery_actions=[RecoveryAction(description=f"Set {name} to a positive integer")],
            original_error=e,
        ) from e
    if value < 1:
        raise ConfigurationError(
            f"{name} must be >= 1, got {value}",
            user_message=f"Invalid value for {name}.",
            context=ErrorContext(
                operation="load_config",
                component="config",
                additional_info={"variable": name, "value": raw},
            ),
            recovery_actions=[RecoveryAction(description=f"Set {name} to a positive integer")],
        )
    return value


@dataclass(frozen=True)
class AnalysisConfig:
    """Settings shared by every file in one analysis run."""

    # Switch counting convention used by the decision-point extractor
    variant: Variant = Variant.CLASSIC

    # Complexity every function starts with
    base_complexity: int = DEFAULT_BASE_COMPLEXITY

    # Functions above this complexity are flagged
    complexity_threshold: int = DEFAULT_COMPLEXITY_THRESHOLD

    def __post_init__(self) -> None:
        object.__setattr__(self, "variant", Variant.coerce(self.variant))

    @classmethod
    def from_env(cls, env: Mapping[str, str] | None = None) -> AnalysisConfig:
        """
        Build a config from environment variables.

        Raises:
            ConfigurationError: If the variant is not ``classic``/``modified``
                or a numeric setting is not a positive integer.
        """
        env = os.environ if env is None else env
        raw_variant = env.get(ENV_VARIANT, "").strip().lower()
        if raw_variant and raw_variant not in (Variant.CLASSIC.value, Variant.MODIFIED.value):
            raise ConfigurationError(
                f"{ENV_VARIANT} must be 'classic' or 'modified', got {raw_variant!r}",
                user_message=f"Invalid value for {ENV_VARIANT}.",
                context=ErrorContext(
                    operation="load_config",
                    component="config",
                    additional_info={"variable": ENV_VARIANT, "value": raw_variant},
                ),
                recovery_actions=[
                    RecoveryAction(description=f"Set {ENV_VARIANT} to 'classic' or 'modified'")
                ],
            )

        return cls(
            variant=Variant.coerce(raw_variant or Variant.CLASSIC),
            base_complexity=_positive_int(env, ENV_BASE, DEFAULT_BASE_COMPLEXITY),
            complexity_threshold=_positive_int(env, ENV_THRESHOLD, DEFAULT_COMPLEXITY_THRESHOLD),
        )
