"""Data models for winprovision.

This module exports the core data structures used throughout the application.
"""

from winprovision.models.config import (
    AppEntry,
    DebloatEntry,
    FontsConfig,
    NerdFontsConfig,
    PhaseToggles,
    ProvisionConfig,
)
from winprovision.models.item import (
    Auxiliary,
    DesiredState,
    Item,
    LocationPolicy,
    Provider,
)
from winprovision.models.outcome import (
    MethodResult,
    OutcomeKind,
    PhaseOutcome,
    PhaseReport,
    RunSummary,
)

__all__ = [
    "AppEntry",
    "Auxiliary",
    "DebloatEntry",
    "DesiredState",
    "FontsConfig",
    "Item",
    "LocationPolicy",
    "MethodResult",
    "NerdFontsConfig",
    "OutcomeKind",
    "PhaseOutcome",
    "PhaseReport",
    "PhaseToggles",
    "Provider",
    "ProvisionConfig",
    "RunSummary",
]
