from typing import List, Optional

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from surveyhub.models.statistic import AnswerTally, SurveyStatistic


async def get_survey_statistic(
    db: AsyncSession, survey_id: str
) -> Optional[SurveyStatistic]:
    result = await db.execute(
        select(SurveyStatistic).where(SurveyStatistic.survey_id == survey_id)
    )
    return result.scalar_one_or_none()


async def get_survey_statistics_by_user(
    db: AsyncSession, user_id: str
) -> List[SurveyStatistic]:
    result = await db.execute(
        select(SurveyStatistic).where(SurveyStatistic.user_id == user_id)
    )
    return list(result.scalars().all())


async def upsert_survey_statistic(
    db: AsyncSession, entry: SurveyStatistic
) -> SurveyStatistic:
    # merge keeps a single row per survey_id however often this is called
    merged = await db.merge(entry)
    await db.flush()
    await db.refresh(merged)
    return merged


async def delete_survey_statistic(db: AsyncSession, survey_id: str) -> None:
    await db.execute(
        delete(SurveyStatistic).where(SurveyStatistic.survey_id == survey_id)
    )


async def increment_answer_tally(
    db: AsyncSession, survey_id: str, subject_id: int, value: str
) -> AnswerTally:
    result = await db.execute(
        select(AnswerTally).where(
            AnswerTally.survey_id == survey_id,
            AnswerTally.subject_id == subject_id,
            AnswerTally.value == value,
        )
    )
    tally = result.scalar_one_or_none()
    if tally is None:
        tally = AnswerTally(survey_id=survey_id, subject_id=subject_id, value=value, count=1)
        db.add(tally)
    else:
        tally.count = tally.count + 1
    await db.flush()
    return tally


async def get_answer_tallies(db: AsyncSession, survey_id: str) -> List[AnswerTally]:
    result = await db.execute(
        select(AnswerTally)
        .where(AnswerTally.survey_id == survey_id)
        .order_by(AnswerTally.subject_id, AnswerTally.value)
    )
    return list(result.scalars().all())
