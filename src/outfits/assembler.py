"""
Outfit Assembler.

Turns per-slot fills into an OutfitResult: items grouped by role in plan
order, a deterministic reason per item, placeholders for unfilled slots,
and a cap on the total number of items. Configuration gaps (no plan,
non-outfit base) and all-slots-empty outcomes are normal results with an
explanatory message.
"""

from typing import List, Optional, Sequence

from outfits.cascade import SlotFill
from outfits.models import CatalogItem, OutfitItem, OutfitResult, OutfitStatus, Role, SelectionMode


RANKED_TITLE = "Styled outfit for {name}"
SAMPLED_TITLE = "Style Studio Collection"

MESSAGE_RANKED = "Deterministic outfit based on gender, category, and color harmony."
MESSAGE_SAMPLED = "A curated collection of options based on your item."
MESSAGE_PARTIAL = " Some pieces could not be matched right now."
MESSAGE_EMPTY = "No compatible outfit items found for this product."
MESSAGE_NO_PLAN = 'Outfit generation rules for "{category}" are being expanded. Please try again later.'
MESSAGE_BLOCKED = "Outfit suggestions are not available for {category} products."


def _title(policy: SelectionMode, base: CatalogItem) -> str:
    if policy is SelectionMode.SAMPLED:
        return SAMPLED_TITLE
    return RANKED_TITLE.format(name=base.name or base.product_id)


def _base_label(base: CatalogItem, base_category: Optional[str]) -> str:
    return base_category or base.sub_category or base.category or "item"


def build_reason(base_category: str, role: Role, matched_category: str) -> str:
    return f"Matches {base_category} with {role.value} category {matched_category}"


def _item(fill: SlotFill, product: CatalogItem, base_label: str) -> OutfitItem:
    matched = fill.slot.matched_category(product) or fill.slot.categories[0]
    return OutfitItem(
        role=fill.slot.role,
        suggested_category=matched,
        color_hint=product.color_name or "",
        color_hex_hint=product.color_hex or "",
        reason=build_reason(base_label, fill.slot.role, matched),
        product=product,
    )


def _placeholder(fill: SlotFill, base_label: str) -> OutfitItem:
    return OutfitItem(
        role=fill.slot.role,
        suggested_category=fill.slot.categories[0] if fill.slot.categories else fill.slot.role.value,
        color_hint="",
        color_hex_hint="",
        reason=f"No {fill.slot.role.value} found to match {base_label}",
        product=None,
    )


def assemble_outfit(
    base: CatalogItem,
    fills: Sequence[SlotFill],
    policy: SelectionMode,
    base_category: Optional[str] = None,
    max_items: Optional[int] = None,
) -> OutfitResult:
    """
    Compose the result for a resolved plan.

    fills must be in plan order. Unfilled slots become product=None
    placeholders when at least one slot filled; when none filled the
    result has no items and status "empty".
    """
    label = _base_label(base, base_category)
    title = _title(policy, base)

    if not any(f.filled for f in fills):
        return OutfitResult(
            title=title, message=MESSAGE_EMPTY, status=OutfitStatus.EMPTY,
            policy=policy, items=(), base=base,
        )

    items: List[OutfitItem] = []
    unfilled = False
    for fill in fills:
        if fill.filled:
            items.extend(_item(fill, p, label) for p in fill.items)
        else:
            unfilled = True
            items.append(_placeholder(fill, label))

    if max_items is not None:
        items = items[:max_items]

    message = MESSAGE_SAMPLED if policy is SelectionMode.SAMPLED else MESSAGE_RANKED
    status = OutfitStatus.OK
    if unfilled:
        status = OutfitStatus.PARTIAL
        message += MESSAGE_PARTIAL
    return OutfitResult(
        title=title, message=message, status=status,
        policy=policy, items=tuple(items), base=base,
    )


def no_plan_result(base: CatalogItem, policy: SelectionMode, base_category: Optional[str] = None) -> OutfitResult:
    return OutfitResult(
        title=_title(policy, base),
        message=MESSAGE_NO_PLAN.format(category=_base_label(base, base_category)),
        status=OutfitStatus.NO_PLAN,
        policy=policy,
        base=base,
    )


def blocked_result(base: CatalogItem, policy: SelectionMode, base_category: Optional[str] = None) -> OutfitResult:
    return OutfitResult(
        title=_title(policy, base),
        message=MESSAGE_BLOCKED.format(category=_base_label(base, base_category)),
        status=OutfitStatus.BLOCKED,
        policy=policy,
        base=base,
    )
