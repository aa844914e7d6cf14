from typing import Optional

from fastapi import Depends, Header, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from surveyhub.database import get_db_session
from surveyhub.services.result_service import ResultService
from surveyhub.services.statistic import StatisticIndex
from surveyhub.services.survey_service import SurveyService


async def get_current_user_id(x_user_id: Optional[str] = Header(None)) -> str:
    """The caller's user id, as forwarded by the gateway in ``X-User-Id``."""
    if not x_user_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated: X-User-Id header required.",
        )
    return x_user_id


def get_statistic_index(db: AsyncSession = Depends(get_db_session)) -> StatisticIndex:
    return StatisticIndex(db)


def get_survey_service(
    db: AsyncSession = Depends(get_db_session),
    statistic_index: StatisticIndex = Depends(get_statistic_index),
) -> SurveyService:
    return SurveyService(db, statistic_index)


def get_result_service(
    db: AsyncSession = Depends(get_db_session),
    survey_service: SurveyService = Depends(get_survey_service),
    statistic_index: StatisticIndex = Depends(get_statistic_index),
) -> ResultService:
    return ResultService(db, survey_service, statistic_index)
