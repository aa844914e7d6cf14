from typing import List, Optional

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from surveyhub.models.survey import Survey


async def get_survey(db: AsyncSession, survey_id: str) -> Optional[Survey]:
    result = await db.execute(select(Survey).where(Survey.id == survey_id))
    return result.scalar_one_or_none()


async def get_surveys_by_user(db: AsyncSession, user_id: str) -> List[Survey]:
    result = await db.execute(select(Survey).where(Survey.user_id == user_id))
    return list(result.scalars().all())


async def create_survey(db: AsyncSession, db_survey: Survey) -> Survey:
    db.add(db_survey)
    await db.flush()
    await db.refresh(db_survey)
    return db_survey


async def save_survey(db: AsyncSession, db_survey: Survey) -> Survey:
    await db.flush()
    await db.refresh(db_survey)
    return db_survey


async def delete_survey(db: AsyncSession, survey_id: str) -> None:
    # Missing ids are fine
    await db.execute(delete(Survey).where(Survey.id == survey_id))
