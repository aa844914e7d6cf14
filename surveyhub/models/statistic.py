from sqlalchemy import (
    Column,
    DateTime,
    Integer,
    String,
    UniqueConstraint,
    func,
)

from surveyhub.database import Base


class SurveyStatistic(Base):
    """Derived index entry, one per existing survey."""

    __tablename__ = "survey_statistics"

    survey_id = Column(String, primary_key=True, index=True)
    user_id = Column(String, nullable=False, index=True)
    type = Column(String, nullable=False)
    title = Column(String, nullable=False)
    subject_count = Column(Integer, nullable=False, default=0)
    conclusion_count = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), server_default=func.now())


class AnswerTally(Base):
    """How often an answer value was chosen for one subject of a survey."""

    __tablename__ = "answer_tallies"
    __table_args__ = (UniqueConstraint("survey_id", "subject_id", "value"),)

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    survey_id = Column(String, nullable=False, index=True)
    subject_id = Column(Integer, nullable=False)
    value = Column(String, nullable=False)
    count = Column(Integer, nullable=False, default=0)
