from sqlalchemy import JSON, Column, DateTime, String, Text, func

from surveyhub.database import Base


class Survey(Base):
    __tablename__ = "surveys"

    id = Column(String, primary_key=True, index=True)
    user_id = Column(String, nullable=False, index=True)
    type = Column(String, nullable=False)  # inquiry | poll | exam | branch-quiz
    title = Column(String, nullable=False)
    intro = Column(Text, nullable=True)
    avatar_url = Column(String, nullable=True)
    # Ordered lists of plain dicts, stored with their camelCase document keys
    subjects = Column(JSON, nullable=False, default=list)
    conclusions = Column(JSON, nullable=False, default=list)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(
        DateTime(timezone=True), onupdate=func.now(), server_default=func.now()
    )
