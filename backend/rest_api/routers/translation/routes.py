"""
Translation router.

The dashboard's batch workflow posts one (unit, language) pair per
request to /batch; /store translates without persisting.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from shared.infrastructure.db import get_db
from shared.security.auth import current_user_context
from shared.utils.dashboard_schemas import (
    TranslationBatchRequest,
    TranslationBatchResponse,
    TranslationStoreRequest,
    TranslationStoreResponse,
)
from rest_api.routers._common import get_user_id
from rest_api.services.llm import OpenAIClient, get_llm_client
from rest_api.services.translation import TranslationService


router = APIRouter(prefix="/api/translation", tags=["translation"])


@router.post("/batch", response_model=TranslationBatchResponse)
async def translate_batch_unit(
    body: TranslationBatchRequest,
    db: Session = Depends(get_db),
    ctx: dict = Depends(current_user_context),
    llm: OpenAIClient = Depends(get_llm_client),
) -> TranslationBatchResponse:
    """
    Translate one text into one language and store it on the entity
    named by (type, entityId).

    Menu-level kinds are rejected with 422 before the model is called;
    repeating a pair overwrites the stored translation.
    """
    translated = await TranslationService(db, llm).translate_and_store(
        get_user_id(ctx),
        body.text,
        body.language_code,
        body.type,
        body.entity_id,
        menu_id=body.menu_id,
    )
    return TranslationBatchResponse(translated_text=translated, saved=True)


@router.post("/store", response_model=TranslationStoreResponse)
async def translate_text(
    body: TranslationStoreRequest,
    db: Session = Depends(get_db),
    ctx: dict = Depends(current_user_context),
    llm: OpenAIClient = Depends(get_llm_client),
) -> TranslationStoreResponse:
    translated = await TranslationService(db, llm).translate_only(body.text, body.language_code)
    return TranslationStoreResponse(translated_text=translated)
