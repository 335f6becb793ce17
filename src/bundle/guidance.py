"""Per-scheme guidance text shown alongside each entitlement.

Static English copy: application method labels, document checklists and
typical decision times. Schemes without specific copy get a generic line.
"""

from __future__ import annotations

from collections.abc import Collection, Mapping, Sequence

from src.schemas.catalogue import DependencyEdge, EntitlementDefinition

_DEFAULT_NEEDS = ("Contact the administering body for requirements",)
_DEFAULT_TIMELINE = "Contact the administering body for timeline"

METHOD_LABELS: dict[str, str] = {
    "online": "Online at GOV.UK",
    "phone": "By phone",
    "paper_form": "Paper form",
    "online_council": "Online via your council",
    "phone_then_paper": "Phone to request form",
    "letter": "By letter",
    "letter_or_online": "Online or by letter",
    "automatic": "Paid automatically",
    "automatic_if_pension_credit": "Automatic if on Pension Credit",
    "apply_to_supplier": "Apply to your supplier",
    "online_provider": "Online via your provider",
    "phone_provider": "By phone to your provider",
}

WHAT_YOU_NEED: dict[str, tuple[str, ...]] = {
    "attendance_allowance": (
        "GP or consultant details",
        "Description of daily care needs",
        "Any relevant medical letters",
    ),
    "pension_credit": (
        "National Insurance number",
        "Bank account details",
        "Income and savings information",
        "Housing costs details",
    ),
    "universal_credit": (
        "National Insurance number",
        "Bank account details",
        "Proof of identity",
        "Income details",
        "Rent agreement (if renting)",
        "Childcare costs (if applicable)",
    ),
    "carers_allowance": (
        "National Insurance number",
        "Cared-for person's details and their disability benefit reference",
        "Your employment details",
        "Bank account details",
    ),
    "child_benefit": (
        "Child's birth certificate",
        "Your National Insurance number",
        "Bank account details",
    ),
    "ehcp_assessment": (
        "Letter to the local authority requesting assessment",
        "Evidence of your child's needs (school reports, medical letters)",
        "Parental views on your child's needs",
    ),
    "dla_child": (
        "Child's details and diagnosis (if any)",
        "Description of care needs compared to peers",
        "Medical evidence from GP or specialist",
    ),
    "pip": (
        "Details of your health condition",
        "How it affects daily living and mobility",
        "Medical evidence and treatment details",
        "GP and specialist contact details",
    ),
    "bereavement_support_payment": (
        "Death certificate",
        "Your partner's National Insurance number",
        "Bank account details",
    ),
    "jobseekers_allowance_new_style": (
        "National Insurance number",
        "Employment history for the last 2 tax years",
        "P45 or last payslip",
    ),
}

TIMELINES: dict[str, str] = {
    "attendance_allowance": "Decision usually within 8 weeks",
    "pension_credit": "Decision usually within 5 weeks, backdatable 3 months",
    "universal_credit": "5-week wait before first payment (advance available)",
    "carers_allowance": "Decision usually within 4 weeks",
    "child_benefit": "Usually backdated and paid within 2-3 weeks",
    "council_tax_reduction_full": "Applied to your next bill",
    "council_tax_support_working_age": "Applied to your next bill",
    "council_tax_reduction_scotland": "Applied to your next bill",
    "council_tax_reduction_wales": "Applied to your next bill",
    "warm_home_discount": "Credited to your electricity account",
    "free_school_meals": "Usually confirmed within 2 weeks",
    "ehcp_assessment": "Council must decide to assess within 6 weeks; the full process takes up to 20 weeks",
    "dla_child": "Decision usually within 12 weeks",
    "pip": "Typically 3-4 months from application to decision",
    "tax_free_childcare": "Account set up within 2-3 weeks",
    "marriage_allowance": "Applied to your tax code, backdatable 4 years",
    "social_tariff_broadband": "Usually switched within 2-4 weeks",
    "bereavement_support_payment": "Claim within 3 months of the death to get the full amount",
    "jobseekers_allowance_new_style": "Claim as soon as you stop work; payments are not backdated by default",
}


def format_application_method(methods: Sequence[str]) -> str:
    """Human-readable labels joined with " / "; unknown methods pass through."""
    return " / ".join(METHOD_LABELS.get(m, m) for m in methods)


def what_you_need(entitlement_id: str) -> tuple[str, ...]:
    return WHAT_YOU_NEED.get(entitlement_id, _DEFAULT_NEEDS)


def timeline(entitlement_id: str) -> str:
    return TIMELINES.get(entitlement_id, _DEFAULT_TIMELINE)


def why_this_matters(
    definition: EntitlementDefinition,
    dependency_edges: Sequence[DependencyEdge],
    eligible_ids: Collection[str],
    names: dict[str, str],
    owners: Mapping[str, str] | None = None,
) -> str | None:
    """For gateways: the other eligible schemes this one helps unlock.

    ``owners`` maps a cascaded scheme to the gateway whose group it sits in.
    A dependent grouped under a different gateway is named with that gateway.
    """
    if not definition.is_gateway:
        return None
    owners = owners or {}
    unlocked: list[str] = []
    for edge in dependency_edges:
        if edge.from_id != definition.id or edge.to not in eligible_ids or edge.to == definition.id:
            continue
        name = names.get(edge.to)
        if not name:
            continue
        owner = owners.get(edge.to)
        if owner is not None and owner != definition.id:
            name = f"{name} (listed under {names.get(owner, owner)})"
        if name not in unlocked:
            unlocked.append(name)
    if not unlocked:
        return None
    return f"Claiming this first helps you qualify for: {', '.join(unlocked)}."
