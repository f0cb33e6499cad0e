"""
성분 지식 API
"""
import logging

from fastapi import APIRouter, Depends

from matchcare.api.dependencies import get_container, get_knowledge
from matchcare.models.request import CompatibilityRequest
from matchcare.models.response import CompatibilityResponse, ErrorResponse, IngredientResponse
from matchcare.services.container import ServiceContainer
from matchcare.services.knowledge_service import KnowledgeService

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/v1/ingredients",
    tags=["ingredients"],
    responses={500: {"model": ErrorResponse, "description": "서버 내부 오류"}},
)


@router.post("/compatibility", response_model=CompatibilityResponse, summary="성분-프로필 호환성")
async def ingredient_compatibility(
    request: CompatibilityRequest,
    container: ServiceContainer = Depends(get_container),
):
    knowledge = container.knowledge
    profile = request.profile
    treated = knowledge.get_treated_concerns(request.ingredient_name)

    return CompatibilityResponse(
        ingredient_name=request.ingredient_name,
        score=container.compatibility.compatibility(request.ingredient_name, profile),
        suitable_for_skin_type=bool(
            profile.skin_type and profile.skin_type in knowledge.get_suitable_skin_types(request.ingredient_name)
        ),
        matched_concerns=[concern for concern in profile.skin_concerns if concern in treated],
    )


@router.get("/{name}", response_model=IngredientResponse, summary="성분 지식 조회")
async def get_ingredient(name: str, knowledge: KnowledgeService = Depends(get_knowledge)):
    fact = knowledge.get_ingredient_fact(name)
    return IngredientResponse(**fact.to_dict(), source=knowledge.source)
