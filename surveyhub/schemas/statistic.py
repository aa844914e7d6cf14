from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class UserStatistic(BaseModel):
    created_count: int = Field(default=0, alias="createdCount")
    received_count: int = Field(default=0, alias="receivedCount")

    model_config = ConfigDict(populate_by_name=True)


class SurveyStatisticRead(BaseModel):
    survey_id: str = Field(alias="surveyId")
    user_id: str = Field(alias="userId")
    type: str
    title: str
    subject_count: int = Field(alias="subjectCount")
    conclusion_count: int = Field(alias="conclusionCount")
    created_at: Optional[datetime] = Field(default=None, alias="createdAt")

    model_config = ConfigDict(populate_by_name=True, from_attributes=True)


class AnswerTallyRead(BaseModel):
    subject_id: int = Field(alias="subjectId")
    value: str
    count: int

    model_config = ConfigDict(populate_by_name=True, from_attributes=True)
