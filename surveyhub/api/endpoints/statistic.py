from typing import List

from fastapi import APIRouter, Depends, HTTPException

from surveyhub.api.deps import get_result_service, get_statistic_index
from surveyhub.schemas.statistic import (
    AnswerTallyRead,
    SurveyStatisticRead,
    UserStatistic,
)
from surveyhub.services.result_service import ResultService
from surveyhub.services.statistic import StatisticIndex

router = APIRouter()


@router.get("/users/{user_id}/statistic", response_model=UserStatistic)
async def read_user_statistic(
    user_id: str, service: ResultService = Depends(get_result_service)
):
    return await service.get_statistic_by_user(user_id)


@router.get("/surveys/{survey_id}/statistic", response_model=SurveyStatisticRead)
async def read_survey_statistic(
    survey_id: str, statistic_index: StatisticIndex = Depends(get_statistic_index)
):
    entry = await statistic_index.get_survey_statistic(survey_id)
    if entry is None:
        raise HTTPException(status_code=404, detail="Statistic not found")
    return entry


@router.get("/surveys/{survey_id}/tallies", response_model=List[AnswerTallyRead])
async def read_answer_tallies(
    survey_id: str, statistic_index: StatisticIndex = Depends(get_statistic_index)
):
    if await statistic_index.get_survey_statistic(survey_id) is None:
        raise HTTPException(status_code=404, detail="Statistic not found")
    return await statistic_index.get_answer_tallies(survey_id)
