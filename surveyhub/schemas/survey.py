from datetime import datetime
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

SurveyType = Literal["inquiry", "poll", "exam", "branch-quiz"]
SubjectType = Literal["radio", "checkbox", "text", "date", "position", "phone"]


# --- Building blocks of a survey document ---


class Answer(BaseModel):
    value: Optional[str] = None
    image_url: Optional[str] = Field(default=None, alias="imageUrl")
    correct: Optional[bool] = None  # exam
    next: Optional[int] = None  # branch-quiz: subject id to jump to
    end: Optional[int] = None  # branch-quiz: conclusion id that ends the quiz

    model_config = ConfigDict(populate_by_name=True)


class Subject(BaseModel):
    id: int
    type: Optional[SubjectType] = None
    nlu: Optional[bool] = None
    question: Optional[str] = None
    image_url: Optional[str] = Field(default=None, alias="imageUrl")
    answers: List[Answer] = Field(default_factory=list)

    model_config = ConfigDict(populate_by_name=True)


class ScoreRange(BaseModel):
    min: Optional[float] = None
    max: Optional[float] = None

    @model_validator(mode="after")
    def check_bounds(self) -> "ScoreRange":
        if self.min is not None and self.max is not None and self.min > self.max:
            raise ValueError("scoreRange.min must not be greater than scoreRange.max")
        return self


class Conclusion(BaseModel):
    id: Optional[int] = None
    score_range: Optional[ScoreRange] = Field(default=None, alias="scoreRange")
    text: Optional[str] = None
    image_url: Optional[str] = Field(default=None, alias="imageUrl")

    model_config = ConfigDict(populate_by_name=True)


# --- Survey ---


class SurveyFields(BaseModel):
    intro: Optional[str] = None
    avatar_url: Optional[str] = Field(default=None, alias="avatarUrl")
    subjects: List[Subject] = Field(default_factory=list)
    conclusions: List[Conclusion] = Field(default_factory=list)

    model_config = ConfigDict(populate_by_name=True)

    @field_validator("subjects")
    @classmethod
    def check_unique_subject_ids(cls, v: List[Subject]) -> List[Subject]:
        seen = set()
        for subject in v:
            if subject.id in seen:
                raise ValueError(f"duplicate subject id {subject.id}")
            seen.add(subject.id)
        return v


class SurveyInput(SurveyFields):
    """Incoming survey body. Without ``id`` it creates, with ``id`` it updates."""

    id: Optional[str] = None
    type: Optional[SurveyType] = None
    title: Optional[str] = Field(default=None, min_length=1)

    @model_validator(mode="after")
    def check_required_fields(self) -> "SurveyInput":
        for name in ("type", "title"):
            value = getattr(self, name)
            if self.id is None and value is None:
                raise ValueError(f"{name} is required when creating a survey")
            if name in self.model_fields_set and value is None:
                raise ValueError(f"{name} must not be null")
        return self


class SurveyRead(SurveyFields):
    id: str
    user_id: str = Field(alias="userId")
    type: SurveyType
    title: str
    created_at: Optional[datetime] = Field(default=None, alias="createdAt")
    updated_at: Optional[datetime] = Field(default=None, alias="updatedAt")

    model_config = ConfigDict(populate_by_name=True, from_attributes=True)


_SCALAR_FIELDS = ("type", "title", "intro", "avatar_url")
_LIST_FIELDS = ("subjects", "conclusions")


def survey_document(survey_in: SurveyInput, partial: bool = False) -> Dict[str, Any]:
    """Map an input onto ``Survey`` column values.

    With ``partial`` only the fields present in the request are returned, so an
    update overwrites what was sent and leaves the rest. Lists are always
    replaced as a whole.
    """
    provided = survey_in.model_fields_set if partial else set(SurveyInput.model_fields)
    document: Dict[str, Any] = {}
    for name in _SCALAR_FIELDS:
        if name in provided:
            document[name] = getattr(survey_in, name)
    for name in _LIST_FIELDS:
        if name in provided:
            document[name] = [
                item.model_dump(mode="json", by_alias=True, exclude_none=True)
                for item in getattr(survey_in, name)
            ]
    return document


def survey_snapshot(survey: Any) -> Optional[Dict[str, Any]]:
    """Freeze a survey row into a plain dict, or ``None`` if there is no survey."""
    if survey is None:
        return None
    return SurveyRead.model_validate(survey).model_dump(
        mode="json", by_alias=True, exclude_none=True
    )
