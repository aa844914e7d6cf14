import logging
from typing import List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from surveyhub.crud import crud_statistic
from surveyhub.models.statistic import AnswerTally, SurveyStatistic
from surveyhub.models.survey import Survey
from surveyhub.schemas.survey_result import SurveyResultInput

logger = logging.getLogger(__name__)


class StatisticIndex:
    """Derived reporting data, pushed by the services and never read back from the stores.

    Two disjoint key spaces live here: one ``SurveyStatistic`` row per existing
    survey, and ``AnswerTally`` counters fed by submitted results.
    """

    def __init__(self, db: AsyncSession):
        self.db = db

    async def add_survey_statistic(self, survey: Survey) -> None:
        logger.debug("add statistic for survey %s", survey.id)
        entry = SurveyStatistic(
            survey_id=survey.id,
            user_id=survey.user_id,
            type=survey.type,
            title=survey.title,
            subject_count=len(survey.subjects or []),
            conclusion_count=len(survey.conclusions or []),
        )
        await crud_statistic.upsert_survey_statistic(self.db, entry)

    async def delete_survey_statistic(self, survey_id: str) -> None:
        logger.debug("delete statistic for survey %s", survey_id)
        await crud_statistic.delete_survey_statistic(self.db, survey_id)

    async def add_survey_result(self, result_in: SurveyResultInput) -> None:
        if await crud_statistic.get_survey_statistic(self.db, result_in.survey_id) is None:
            logger.debug("survey %s is not indexed, answers not counted", result_in.survey_id)
            return
        logger.debug("count answers of a new result for survey %s", result_in.survey_id)
        for answer in result_in.answers:
            for chosen in answer.result:
                if chosen.value is None:
                    continue
                await crud_statistic.increment_answer_tally(
                    self.db, result_in.survey_id, answer.id, chosen.value
                )

    async def get_survey_statistic(self, survey_id: str) -> Optional[SurveyStatistic]:
        return await crud_statistic.get_survey_statistic(self.db, survey_id)

    async def get_survey_statistics_by_user(self, user_id: str) -> List[SurveyStatistic]:
        return await crud_statistic.get_survey_statistics_by_user(self.db, user_id)

    async def get_answer_tallies(self, survey_id: str) -> List[AnswerTally]:
        return await crud_statistic.get_answer_tallies(self.db, survey_id)
