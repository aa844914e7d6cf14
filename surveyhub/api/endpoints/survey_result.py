import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, status

from surveyhub.api.deps import get_current_user_id, get_result_service
from surveyhub.schemas.api import IdResponse
from surveyhub.schemas.survey_result import SurveyResultInput, SurveyResultRead
from surveyhub.services.result_service import ResultService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/results/{result_id}", response_model=SurveyResultRead)
async def read_survey_result(
    result_id: str, service: ResultService = Depends(get_result_service)
):
    db_result = await service.get_survey_result_by_id(result_id)
    if db_result is None:
        raise HTTPException(status_code=404, detail="Survey result not found")
    return db_result


@router.get("/users/{user_id}/results", response_model=List[SurveyResultRead])
async def read_results_of_user(
    user_id: str, service: ResultService = Depends(get_result_service)
):
    return await service.get_survey_results_by_user(user_id)


@router.get("/surveys/{survey_id}/results", response_model=List[SurveyResultRead])
async def read_results_of_survey(
    survey_id: str, service: ResultService = Depends(get_result_service)
):
    return await service.get_survey_results(survey_id)


@router.post("/results", response_model=IdResponse)
async def save_survey_result(
    result_in: SurveyResultInput,
    user_id: str = Depends(get_current_user_id),
    service: ResultService = Depends(get_result_service),
):
    """Submit a result, or update it when the body carries an ``id``."""
    if result_in.responder.user_id != user_id:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Responder must be the calling user",
        )
    if result_in.id:
        existing = await service.get_survey_result_by_id(result_in.id)
        if existing is not None and existing.responder_user_id != user_id:
            logger.warning("user %s tried to update result %s", user_id, result_in.id)
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Not your result")
    result_id = await service.update_survey_result(user_id, result_in)
    return IdResponse(id=result_id)


@router.delete("/results/{result_id}", response_model=IdResponse)
async def delete_survey_result(
    result_id: str,
    user_id: str = Depends(get_current_user_id),
    service: ResultService = Depends(get_result_service),
):
    existing = await service.get_survey_result_by_id(result_id)
    if existing is not None and existing.responder_user_id != user_id:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Not your result")
    await service.delete_survey_result(result_id)
    return IdResponse(id=result_id, message="deleted")
