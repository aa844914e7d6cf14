from sqlalchemy import JSON, Column, DateTime, Float, Integer, String, func

from surveyhub.database import Base


class SurveyResult(Base):
    __tablename__ = "survey_results"

    id = Column(String, primary_key=True, index=True)
    # Plain reference, no foreign key: deleting a survey leaves its results alone
    survey_id = Column(String, nullable=False, index=True)
    responder = Column(JSON, nullable=False)  # {userId, nickName, avatarUrl}
    responder_user_id = Column(String, nullable=False, index=True)
    answers = Column(JSON, nullable=False, default=list)  # [{id, result: [Answer]}]
    score = Column(Float, nullable=True)
    conclusion = Column(Integer, nullable=True)
    # Frozen copy of the survey at submission time, never refreshed
    survey = Column(JSON, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(
        DateTime(timezone=True), onupdate=func.now(), server_default=func.now()
    )
