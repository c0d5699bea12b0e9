"""Multi-step issue mutations."""

from linear_toon.orchestration.orchestrator import MutationOrchestrator
from linear_toon.orchestration.plan import (
    LinkAttach,
    MutationPlan,
    PrimaryWrite,
    RelationCreate,
    RelationReplace,
)

__all__ = [
    "LinkAttach",
    "MutationOrchestrator",
    "MutationPlan",
    "PrimaryWrite",
    "RelationCreate",
    "RelationReplace",
]
