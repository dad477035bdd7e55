"""Shared wizard state."""

from dataclasses import dataclass, field
from typing import Any


@dataclass
class WizardState:
    """Mutable answers collected during the setup wizard."""

    api: dict[str, Any] = field(default_factory=dict)
    referral: dict[str, Any] = field(default_factory=dict)
    launch_gate: dict[str, Any] = field(default_factory=dict)
    storage: dict[str, Any] = field(default_factory=dict)
    auth_token: str | None = None
