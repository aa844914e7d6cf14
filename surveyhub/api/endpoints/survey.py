import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, status

from surveyhub.api.deps import get_current_user_id, get_survey_service
from surveyhub.schemas.api import IdResponse
from surveyhub.schemas.survey import SurveyInput, SurveyRead
from surveyhub.services.survey_service import SurveyService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/surveys/{survey_id}", response_model=SurveyRead)
async def read_survey(
    survey_id: str, service: SurveyService = Depends(get_survey_service)
):
    db_survey = await service.get_survey_by_id(survey_id)
    if db_survey is None:
        raise HTTPException(status_code=404, detail="Survey not found")
    return db_survey


@router.get("/users/{user_id}/surveys", response_model=List[SurveyRead])
async def read_surveys_of_user(
    user_id: str, service: SurveyService = Depends(get_survey_service)
):
    return await service.get_survey_by_user(user_id)


@router.post("/surveys", response_model=IdResponse)
async def save_survey(
    survey_in: SurveyInput,
    user_id: str = Depends(get_current_user_id),
    service: SurveyService = Depends(get_survey_service),
):
    """Create a survey, or update it when the body carries an ``id``."""
    if survey_in.id:
        existing = await service.get_survey_by_id(survey_in.id)
        if existing is not None and existing.user_id != user_id:
            logger.warning("user %s tried to update survey %s", user_id, survey_in.id)
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Not your survey")
    survey_id = await service.update_survey(user_id, survey_in)
    return IdResponse(id=survey_id)


@router.delete("/surveys/{survey_id}", response_model=IdResponse)
async def delete_survey(
    survey_id: str,
    user_id: str = Depends(get_current_user_id),
    service: SurveyService = Depends(get_survey_service),
):
    existing = await service.get_survey_by_id(survey_id)
    if existing is not None and existing.user_id != user_id:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Not your survey")
    await service.delete_survey(survey_id)
    return IdResponse(id=survey_id, message="deleted")
