"""Action plan synthesizer: turns a cascade into a phased claim order.

Phases, each emitted only when it has actions:
  1. gateways (critical and "This week" when a time-critical situation is
     present, otherwise important and "Week 1")
  2. independent schemes ("Next week" / "Week 2")
  3. one phase per cascaded group, "After <gateway> is awarded"
"""

from __future__ import annotations

from collections.abc import Collection, Sequence

from src.catalogue.loader import DEFAULT_TIME_CRITICAL
from src.models.enums import ActionPriority
from src.schemas.catalogue import DependencyEdge
from src.schemas.entitlements import ActionItem, ActionPlanStep, CascadeResult, EntitlementResult


def _apply_action(entitlement: EntitlementResult, priority: ActionPriority) -> ActionItem:
    return ActionItem(
        entitlement_id=entitlement.id,
        entitlement_name=entitlement.name,
        action=f"Apply for {entitlement.name}: {entitlement.application_method}",
        priority=priority,
    )


def _check_automatic_action(entitlement: EntitlementResult, gateway_name: str) -> ActionItem:
    return ActionItem(
        entitlement_id=entitlement.id,
        entitlement_name=entitlement.name,
        action=f"Check {entitlement.name} is applied automatically once {gateway_name} is awarded",
        priority=ActionPriority.WHEN_READY,
    )


def build_action_plan(
    cascade: CascadeResult,
    situations: Sequence[str],
    time_critical: Collection[str] | None = None,
    dependency_edges: Sequence[DependencyEdge] = (),
) -> list[ActionPlanStep]:
    """Ordered claim phases for a resolved cascade.

    ``time_critical`` is the set of situation ids that make gateway claims
    urgent; it defaults to job loss. Dependency edges flagged ``auto`` turn
    the matching cascaded action into a reminder to check it was applied.
    """
    urgent_ids = DEFAULT_TIME_CRITICAL if time_critical is None else time_critical
    urgent = any(s in urgent_ids for s in situations)
    automatic = {(e.from_id, e.to) for e in dependency_edges if e.auto}

    steps: list[ActionPlanStep] = []

    gateway_priority = ActionPriority.CRITICAL if urgent else ActionPriority.IMPORTANT
    gateway_actions = tuple(_apply_action(g, gateway_priority) for g in cascade.gateway_entitlements)
    if gateway_actions:
        steps.append(ActionPlanStep(week="This week" if urgent else "Week 1", actions=gateway_actions))

    independent_actions = tuple(
        _apply_action(e, ActionPriority.IMPORTANT) for e in cascade.independent_entitlements
    )
    if independent_actions:
        steps.append(ActionPlanStep(week="Next week" if urgent else "Week 2", actions=independent_actions))

    for group in cascade.cascaded_entitlements:
        actions = tuple(
            _check_automatic_action(e, group.gateway_name)
            if (group.gateway_id, e.id) in automatic
            else _apply_action(e, ActionPriority.WHEN_READY)
            for e in group.entitlements
        )
        if actions:
            steps.append(ActionPlanStep(week=f"After {group.gateway_name} is awarded", actions=actions))

    return steps
