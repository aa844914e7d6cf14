import logging
from typing import Callable, List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from surveyhub.core.errors import NotFoundError
from surveyhub.core.ids import new_id
from surveyhub.crud import crud_survey
from surveyhub.models.survey import Survey
from surveyhub.schemas.commands import CreateCommand, SaveCommand, to_command
from surveyhub.schemas.survey import SurveyInput, survey_document
from surveyhub.services.statistic import StatisticIndex

logger = logging.getLogger(__name__)


class SurveyService:
    """Create, update, delete and look up surveys.

    Every write goes to the survey store first and to the statistic index
    second. The two steps are not atomic: if the index call fails after the
    store write, the survey exists without its statistic entry.
    """

    def __init__(
        self,
        db: AsyncSession,
        statistic_index: StatisticIndex,
        id_factory: Callable[[], str] = new_id,
    ):
        self.db = db
        self.statistic_index = statistic_index
        self.id_factory = id_factory

    async def get_survey_by_id(self, survey_id: str) -> Optional[Survey]:
        logger.debug("Looking up survey by id %s", survey_id)
        return await crud_survey.get_survey(self.db, survey_id)

    async def get_survey_by_user(self, user_id: str) -> List[Survey]:
        logger.debug("Looking up survey by user id %s", user_id)
        return await crud_survey.get_surveys_by_user(self.db, user_id)

    async def add_survey(self, user_id: str, survey_in: SurveyInput) -> str:
        logger.debug("add new survey for user %s", user_id)
        survey_id = self.id_factory()
        db_survey = Survey(id=survey_id, user_id=user_id, **survey_document(survey_in))
        await crud_survey.create_survey(self.db, db_survey)
        await self.statistic_index.add_survey_statistic(db_survey)
        logger.debug("Add new survey %s for user %s successful!", survey_id, user_id)
        return survey_id

    async def update_survey(self, user_id: str, survey_in: SurveyInput) -> str:
        return await self.save_survey(user_id, to_command(survey_in))

    async def save_survey(self, user_id: str, command: SaveCommand[SurveyInput]) -> str:
        if isinstance(command, CreateCommand):
            return await self.add_survey(user_id, command.input)

        logger.debug("update survey %s for user %s", command.id, user_id)
        db_survey = await crud_survey.get_survey(self.db, command.id)
        if db_survey is None:
            raise NotFoundError("survey", command.id, user_id)

        for field, value in survey_document(command.input, partial=True).items():
            setattr(db_survey, field, value)
        await crud_survey.save_survey(self.db, db_survey)

        # Statistic entry is rebuilt, not patched
        await self.statistic_index.delete_survey_statistic(command.id)
        await self.statistic_index.add_survey_statistic(db_survey)
        logger.debug("update survey %s for user %s successful!", command.id, user_id)
        return command.id

    async def delete_survey(self, survey_id: str) -> None:
        await crud_survey.delete_survey(self.db, survey_id)
        await self.statistic_index.delete_survey_statistic(survey_id)
        logger.debug("delete survey %s successful!", survey_id)
