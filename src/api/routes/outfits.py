"""
Outfit composition routes.

One endpoint composes an outfit around a base product. The caller owns
the exclusion memory: send back the previous response's product_ids in
excluded_ids to get a fresh "shuffle".
"""

from typing import Any, Dict, List, Literal, Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field

from core.logging import get_logger
from outfits.exceptions import BaseProductNotFoundError, InvalidInputError, RetrievalError
from outfits.models import OutfitRequest, SelectionMode
from services.outfit_engine import OutfitEngine, get_outfit_engine


logger = get_logger(__name__)

router = APIRouter(prefix="/api/outfits", tags=["Outfits"])


# =============================================================================
# Request Models
# =============================================================================

class OutfitComposeRequest(BaseModel):
    """Request to compose an outfit around a base product."""
    base_product_id: str = Field(..., description="Catalog id of the base product")
    gender: Optional[str] = Field(
        default=None,
        description="Men / Women / Kids (overrides the base product's gender)"
    )
    base_category: Optional[str] = Field(
        default=None,
        description="Category override for plan lookup (e.g. 'Shirts')"
    )
    vibe: Optional[str] = Field(
        default=None,
        description="Style vibe (e.g. 'office_casual', 'Street & Casual')"
    )
    mood: Optional[str] = Field(
        default=None,
        description="Free-text mood for the keyword filter; defaults to vibe"
    )
    excluded_ids: List[str] = Field(
        default_factory=list,
        description="Product ids already shown in this session"
    )
    policy: Literal["ranked", "sampled"] = Field(
        default="ranked",
        description="'ranked' for the recommended look, 'sampled' for a shuffle"
    )

    def to_outfit_request(self) -> OutfitRequest:
        return OutfitRequest(
            base_product_id=self.base_product_id,
            gender=self.gender,
            base_category=self.base_category,
            vibe=self.vibe,
            mood=self.mood,
            excluded_ids=tuple(self.excluded_ids),
            policy=SelectionMode(self.policy),
        )


# =============================================================================
# Dependencies
# =============================================================================

def get_engine() -> OutfitEngine:
    """Engine dependency; overridden in tests."""
    return get_outfit_engine()


# =============================================================================
# Endpoints
# =============================================================================

@router.post("/compose", summary="Compose an outfit around a base product")
def compose_outfit(
    request: OutfitComposeRequest,
    engine: OutfitEngine = Depends(get_engine),
) -> Dict[str, Any]:
    """
    Compose a ranked or sampled outfit.

    Missing rules, non-outfit products and empty candidate pools are
    normal responses (see `status` and `message`). Only an unknown base
    product or a failed base lookup is an error.
    """
    try:
        result = engine.compose(request.to_outfit_request())
    except BaseProductNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except InvalidInputError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except RetrievalError as e:
        logger.error("Base product lookup failed", error=str(e))
        raise HTTPException(status_code=503, detail="Catalog temporarily unavailable")

    return result.to_api_dict()
