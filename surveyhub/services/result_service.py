import logging
from typing import Callable, List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from surveyhub.core.errors import NotFoundError
from surveyhub.core.ids import new_id
from surveyhub.crud import crud_survey_result
from surveyhub.models.survey_result import SurveyResult
from surveyhub.schemas.commands import CreateCommand, SaveCommand, to_command
from surveyhub.schemas.statistic import UserStatistic
from surveyhub.schemas.survey import survey_snapshot
from surveyhub.schemas.survey_result import SurveyResultInput, result_document
from surveyhub.services.statistic import StatisticIndex
from surveyhub.services.survey_service import SurveyService

logger = logging.getLogger(__name__)


class ResultService:
    def __init__(
        self,
        db: AsyncSession,
        survey_service: SurveyService,
        statistic_index: StatisticIndex,
        id_factory: Callable[[], str] = new_id,
    ):
        self.db = db
        self.survey_service = survey_service
        self.statistic_index = statistic_index
        self.id_factory = id_factory

    async def get_survey_result_by_id(self, result_id: str) -> Optional[SurveyResult]:
        logger.debug("get survey result %s", result_id)
        return await crud_survey_result.get_survey_result(self.db, result_id)

    async def get_survey_results_by_user(self, user_id: str) -> List[SurveyResult]:
        logger.debug("get survey result by user %s", user_id)
        return await crud_survey_result.get_survey_results_by_user(self.db, user_id)

    async def get_survey_results(self, survey_id: str) -> List[SurveyResult]:
        logger.debug("find results of survey %s", survey_id)
        return await crud_survey_result.get_survey_results_for_survey(self.db, survey_id)

    async def add_survey_result(self, user_id: str, result_in: SurveyResultInput) -> str:
        """Store a submission together with a frozen copy of its survey as it is right now."""
        logger.debug("add new survey result of user %s", user_id)
        survey = await self.survey_service.get_survey_by_id(result_in.survey_id)
        if survey is None:
            logger.warning(
                "survey %s not found, storing result without snapshot", result_in.survey_id
            )

        result_id = self.id_factory()
        db_result = SurveyResult(
            id=result_id, survey=survey_snapshot(survey), **result_document(result_in)
        )
        await crud_survey_result.create_survey_result(self.db, db_result)
        await self.statistic_index.add_survey_result(result_in)
        logger.debug(
            "Add new survey result %s of survey %s successful!",
            result_id,
            result_in.survey_id,
        )
        return result_id

    async def update_survey_result(self, user_id: str, result_in: SurveyResultInput) -> str:
        return await self.save_survey_result(user_id, to_command(result_in))

    async def save_survey_result(
        self, user_id: str, command: SaveCommand[SurveyResultInput]
    ) -> str:
        if isinstance(command, CreateCommand):
            return await self.add_survey_result(user_id, command.input)

        logger.debug("update survey result %s of user %s", command.id, user_id)
        db_result = await crud_survey_result.get_survey_result(self.db, command.id)
        if db_result is None:
            raise NotFoundError("survey result", command.id, user_id)

        # survey snapshot is left as it was
        for field, value in result_document(command.input).items():
            setattr(db_result, field, value)
        await crud_survey_result.save_survey_result(self.db, db_result)
        logger.debug("update survey result %s of user %s successful!", command.id, user_id)
        return command.id

    async def delete_survey_result(self, result_id: str) -> None:
        await crud_survey_result.delete_survey_result(self.db, result_id)
        logger.debug("delete survey result %s successful!", result_id)

    async def get_statistic_by_user(self, user_id: str) -> UserStatistic:
        logger.debug("get statistic by user %s", user_id)
        statistic = UserStatistic()
        created_surveys = await self.survey_service.get_survey_by_user(user_id)
        received_surveys = await self.get_survey_results_by_user(user_id)
        if created_surveys:
            statistic.created_count = len(created_surveys)
        if received_surveys:
            statistic.received_count = len(received_surveys)
        return statistic
