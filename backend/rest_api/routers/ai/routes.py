"""
AI enrichment router.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from shared.infrastructure.db import get_db
from shared.security.auth import current_user_context
from shared.utils.dashboard_schemas import (
    AutocompleteRequest,
    AutocompleteResponse,
    ImageGenerateRequest,
    ImageGenerateResponse,
)
from rest_api.routers._common import get_user_id
from rest_api.services.ai import AutocompleteService, ImageService
from rest_api.services.llm import OpenAIClient, get_llm_client
from rest_api.services.storage import StorageClient, get_storage_client


router = APIRouter(prefix="/api", tags=["ai"])


@router.post("/items/autocomplete", response_model=AutocompleteResponse)
async def autocomplete_item(
    body: AutocompleteRequest,
    ctx: dict = Depends(current_user_context),
    llm: OpenAIClient = Depends(get_llm_client),
) -> AutocompleteResponse:
    """
    Suggest description, about text, ingredients, allergens and calories
    for a dish name. Output is sanitised before it is returned.
    """
    return await AutocompleteService(llm).suggest(body.item_name, body.item_type)


@router.post("/images/generate", response_model=ImageGenerateResponse)
async def generate_image(
    body: ImageGenerateRequest,
    db: Session = Depends(get_db),
    ctx: dict = Depends(current_user_context),
    llm: OpenAIClient = Depends(get_llm_client),
    storage: StorageClient = Depends(get_storage_client),
) -> ImageGenerateResponse:
    """
    Generate a menu photo and store it in the item-images bucket.

    userId must be the caller; with referenceImageUrl a variation of that
    image is tried before falling back to text-to-image.
    """
    return await ImageService(db, llm, storage).generate(body, get_user_id(ctx))
