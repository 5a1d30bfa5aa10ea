"""
Slot Plan Resolver.

Two lookup strategies coexist:
  - category: gender -> literal base category -> slots (ranked path)
  - role:     base role -> slots, gender independent (sampled path)

Category lookup is exact key, then alias, then case-insensitive key.
A missing entry yields EMPTY_PLAN; callers turn that into a "no outfit
available" result.
"""

from typing import Dict, Iterable, Optional

from core.utils import normalize_gender, normalize_text
from outfits.models import EMPTY_PLAN, OutfitPlan, Role, SelectionMode, Slot
from outfits.rules import CATEGORY_ALIASES, CATEGORY_PLANS, ROLE_CATEGORIES, ROLE_PLANS, PlanSpec


def _build(spec: PlanSpec, key: str) -> OutfitPlan:
    return OutfitPlan(
        slots=tuple(Slot(role=role, categories=tuple(categories)) for role, categories in spec),
        key=key,
    )


def _lookup(table: Dict[str, PlanSpec], category: str) -> Optional[str]:
    if category in table:
        return category
    alias = CATEGORY_ALIASES.get(normalize_text(category))
    if alias and alias in table:
        return alias
    wanted = normalize_text(category)
    for key in table:
        if key.lower() == wanted:
            return key
    return None


def resolve_category_plan(gender: Optional[str], category: Optional[str]) -> OutfitPlan:
    """Fine plan for a (gender, base category) pair, or EMPTY_PLAN."""
    table = CATEGORY_PLANS.get(normalize_gender(gender) or "")
    if not table or not category or not category.strip():
        return EMPTY_PLAN
    key = _lookup(table, category.strip())
    if key is None:
        return EMPTY_PLAN
    return _build(table[key], key)


def resolve_role_plan(role: Role) -> OutfitPlan:
    """Coarse plan for a base role. Other has no plan."""
    roles = ROLE_PLANS.get(role)
    if not roles:
        return EMPTY_PLAN
    return OutfitPlan(
        slots=tuple(Slot(role=r, categories=tuple(ROLE_CATEGORIES[r])) for r in roles),
        key=role.value,
    )


def resolve_plan(
    strategy: SelectionMode,
    gender: Optional[str],
    base_role: Role,
    base_categories: Iterable[Optional[str]],
) -> OutfitPlan:
    """
    Resolve the plan for one request.

    Ranked uses the category table, trying each candidate category in
    order (sub-category first). Sampled uses the role table and falls
    back to the category table when the base role is Other (Dresses).
    """
    categories = [c for c in base_categories if c]

    if strategy is SelectionMode.SAMPLED and base_role is not Role.OTHER:
        return resolve_role_plan(base_role)

    for category in categories:
        plan = resolve_category_plan(gender, category)
        if plan:
            return plan
    return EMPTY_PLAN
