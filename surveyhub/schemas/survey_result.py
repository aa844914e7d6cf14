from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from .survey import Answer


class Responder(BaseModel):
    user_id: str = Field(..., alias="userId", min_length=1)
    nick_name: Optional[str] = Field(default=None, alias="nickName")
    avatar_url: Optional[str] = Field(default=None, alias="avatarUrl")

    model_config = ConfigDict(populate_by_name=True)


class AnswerResult(BaseModel):
    id: int  # subject id
    result: List[Answer] = Field(default_factory=list)


class SurveyResultFields(BaseModel):
    survey_id: str = Field(..., alias="surveyId")
    responder: Responder
    answers: List[AnswerResult] = Field(default_factory=list)
    score: Optional[float] = None
    conclusion: Optional[int] = None

    model_config = ConfigDict(populate_by_name=True)


class SurveyResultInput(SurveyResultFields):
    """Incoming result body. Without ``id`` it submits, with ``id`` it updates."""

    id: Optional[str] = None


class SurveyResultRead(SurveyResultFields):
    id: str
    survey: Optional[Dict[str, Any]] = None
    created_at: Optional[datetime] = Field(default=None, alias="createdAt")
    updated_at: Optional[datetime] = Field(default=None, alias="updatedAt")

    model_config = ConfigDict(populate_by_name=True, from_attributes=True)


def result_document(result_in: SurveyResultInput) -> Dict[str, Any]:
    """Column values a submission or an update writes. The snapshot is not among them."""
    return {
        "survey_id": result_in.survey_id,
        "responder": result_in.responder.model_dump(
            mode="json", by_alias=True, exclude_none=True
        ),
        "responder_user_id": result_in.responder.user_id,
        "answers": [
            answer.model_dump(mode="json", by_alias=True, exclude_none=True)
            for answer in result_in.answers
        ],
        "score": result_in.score,
        "conclusion": result_in.conclusion,
    }
