from typing import List, Optional

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from surveyhub.models.survey_result import SurveyResult


async def get_survey_result(db: AsyncSession, result_id: str) -> Optional[SurveyResult]:
    result = await db.execute(select(SurveyResult).where(SurveyResult.id == result_id))
    return result.scalar_one_or_none()


async def get_survey_results_by_user(db: AsyncSession, user_id: str) -> List[SurveyResult]:
    result = await db.execute(
        select(SurveyResult).where(SurveyResult.responder_user_id == user_id)
    )
    return list(result.scalars().all())


async def get_survey_results_for_survey(
    db: AsyncSession, survey_id: str
) -> List[SurveyResult]:
    result = await db.execute(
        select(SurveyResult).where(SurveyResult.survey_id == survey_id)
    )
    return list(result.scalars().all())


async def create_survey_result(db: AsyncSession, db_result: SurveyResult) -> SurveyResult:
    db.add(db_result)
    await db.flush()
    await db.refresh(db_result)
    return db_result


async def save_survey_result(db: AsyncSession, db_result: SurveyResult) -> SurveyResult:
    await db.flush()
    await db.refresh(db_result)
    return db_result


async def delete_survey_result(db: AsyncSession, result_id: str) -> None:
    await db.execute(delete(SurveyResult).where(SurveyResult.id == result_id))
