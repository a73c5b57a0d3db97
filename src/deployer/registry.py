"""Registry of post-build extensions.

A build host looks a step up by its display name and only talks to it
through the DeploymentStep protocol.
"""

from __future__ import annotations

from typing import Optional, Protocol, runtime_checkable

from .core import MarathonRecorder
from .models import BuildOutcome, RunResult, TriggerConfig, ValidationVerdict


@runtime_checkable
class DeploymentStep(Protocol):
    display_name: str

    def trigger(self, outcome: Optional[BuildOutcome], config: TriggerConfig) -> RunResult:
        ...

    def validate_field(self, field_name: str, value: Optional[str]) -> ValidationVerdict:
        ...


class ExtensionRegistry:
    """Registry of post-build steps keyed by display name."""

    def __init__(self) -> None:
        self._steps: dict[str, DeploymentStep] = {}

    def register(self, step: DeploymentStep) -> DeploymentStep:
        """Register a step under its display name.

        Raises ValueError if the name is already taken.
        """
        if step.display_name in self._steps:
            raise ValueError(
                f"Step '{step.display_name}' is already registered. "
                f"Unregister it first to re-register."
            )
        self._steps[step.display_name] = step
        return step

    def unregister(self, name: str) -> None:
        self._steps.pop(name, None)

    def get(self, name: str) -> DeploymentStep | None:
        return self._steps.get(name)

    def is_registered(self, name: str) -> bool:
        return name in self._steps

    @property
    def step_names(self) -> set[str]:
        return set(self._steps)


extensions = ExtensionRegistry()
extensions.register(MarathonRecorder())
