"""
Section presets per restaurant type.
"""

from shared.utils.dashboard_schemas import SectionPresetOutput
from shared.utils.exceptions import InvalidCodeError
from shared.config.constants import RESTAURANT_TYPES
from rest_api.services.domain import get_section_presets
from ._base import APIRouter, Depends, current_user


router = APIRouter(prefix="/section-presets", tags=["menus"])


@router.get("/{restaurant_type}", response_model=list[SectionPresetOutput])
def list_section_presets(
    restaurant_type: str,
    user: dict = Depends(current_user),
) -> list[SectionPresetOutput]:
    """Starter sections offered when creating a menu for this type."""
    if restaurant_type not in RESTAURANT_TYPES:
        raise InvalidCodeError("restaurant type", restaurant_type)
    return [SectionPresetOutput(**preset._asdict()) for preset in get_section_presets(restaurant_type)]
