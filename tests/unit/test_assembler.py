"""
Unit tests for outfit assembly: reasons, placeholders, status and caps.
"""

from outfits.assembler import assemble_outfit, blocked_result, build_reason, no_plan_result
from outfits.cascade import CascadeStage, SlotFill
from outfits.models import CatalogItem, OutfitStatus, Role, SelectionMode, Slot


BASE = CatalogItem(product_id="base", name="Oxford Shirt", category="Topwear", sub_category="Shirts")
BOTTOM = Slot(role=Role.BOTTOM, categories=("Pants", "Trousers", "Jeans"))
FOOTWEAR = Slot(role=Role.FOOTWEAR, categories=("Shoes", "Sneakers"))


def _item(product_id, sub_category, **kwargs):
    return CatalogItem(product_id=product_id, name=product_id, sub_category=sub_category, **kwargs)


def test_build_reason():
    assert build_reason("Shirts", Role.BOTTOM, "Jeans") == "Matches Shirts with Bottom category Jeans"


def test_filled_items_in_plan_order():
    fills = [
        SlotFill(slot=BOTTOM, items=[_item("j1", "Jeans", color_name="Navy", color_hex="#1f2a44")],
                 stage=CascadeStage.STRICT),
        SlotFill(slot=FOOTWEAR, items=[_item("s1", "Sneakers")], stage=CascadeStage.MOOD_RELAXED),
    ]
    result = assemble_outfit(BASE, fills, SelectionMode.RANKED, "Shirts")

    assert result.status is OutfitStatus.OK
    assert result.product_ids == ["j1", "s1"]
    first = result.items[0]
    assert first.suggested_category == "Jeans"
    assert first.color_hint == "Navy"
    assert first.color_hex_hint == "#1f2a44"
    assert first.reason == "Matches Shirts with Bottom category Jeans"


def test_unfilled_slot_becomes_placeholder():
    fills = [
        SlotFill(slot=BOTTOM, items=[_item("j1", "Jeans")], stage=CascadeStage.STRICT),
        SlotFill(slot=FOOTWEAR, failed=True),
    ]
    result = assemble_outfit(BASE, fills, SelectionMode.RANKED, "Shirts")

    assert result.status is OutfitStatus.PARTIAL
    placeholder = result.items[1]
    assert placeholder.product is None
    assert placeholder.role is Role.FOOTWEAR
    assert placeholder.suggested_category == "Shoes"
    assert placeholder.reason == "No Footwear found to match Shirts"
    assert result.product_ids == ["j1"]
    assert result.message.endswith("could not be matched right now.")


def test_nothing_filled_is_empty():
    result = assemble_outfit(BASE, [SlotFill(slot=BOTTOM), SlotFill(slot=FOOTWEAR)], SelectionMode.SAMPLED)
    assert result.status is OutfitStatus.EMPTY
    assert result.items == ()
    assert result.title == "Style Studio Collection"


def test_max_items_cap():
    fills = [
        SlotFill(slot=BOTTOM, items=[_item("j1", "Jeans"), _item("j2", "Pants")]),
        SlotFill(slot=FOOTWEAR, items=[_item("s1", "Shoes")]),
    ]
    result = assemble_outfit(BASE, fills, SelectionMode.RANKED, max_items=2)
    assert result.product_ids == ["j1", "j2"]


def test_label_falls_back_to_base_fields():
    result = no_plan_result(BASE, SelectionMode.RANKED)
    assert result.status is OutfitStatus.NO_PLAN
    assert '"Shirts"' in result.message
    assert result.title == "Styled outfit for Oxford Shirt"


def test_blocked_result():
    lipstick = CatalogItem(product_id="l1", name="Lipstick", category="Cosmetics")
    result = blocked_result(lipstick, SelectionMode.SAMPLED)
    assert result.status is OutfitStatus.BLOCKED
    assert result.items == ()
    assert "Cosmetics" in result.message


def test_api_dict_shape():
    fills = [SlotFill(slot=BOTTOM, items=[_item("j1", "Jeans", price=1999.0)])]
    data = assemble_outfit(BASE, fills, SelectionMode.RANKED, "Shirts").to_api_dict()
    assert data["status"] == "ok"
    assert data["policy"] == "ranked"
    assert data["base"]["product_id"] == "base"
    assert data["items"][0]["product"]["price"] == 1999.0
    assert data["product_ids"] == ["j1"]
