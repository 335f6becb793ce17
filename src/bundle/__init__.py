"""Bundle assembly: cascade, conflicts, action plan and the orchestrator."""

from src.bundle.action_plan import build_action_plan
from src.bundle.builder import build_bundle, resolve_entitlements
from src.bundle.cascade import resolve_cascade
from src.bundle.conflicts import CONFLICT_RESOLVERS, resolve_conflicts

__all__ = [
    "build_action_plan",
    "build_bundle",
    "resolve_entitlements",
    "resolve_cascade",
    "CONFLICT_RESOLVERS",
    "resolve_conflicts",
]
