from __future__ import annotations

import asyncio
import itertools
import os

import pytest

# Never let an exported DATABASE_URL point the tests at a real database
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ.setdefault("LOG_LEVEL", "INFO")

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker  # noqa: E402

from surveyhub.database import create_db_and_tables, make_engine  # noqa: E402
from surveyhub.services.result_service import ResultService  # noqa: E402
from surveyhub.services.statistic import StatisticIndex  # noqa: E402
from surveyhub.services.survey_service import SurveyService  # noqa: E402


@pytest.fixture
def run_db():
    """Run ``body(session_factory)`` against a fresh in-memory database."""

    def runner(body):
        async def main():
            engine = make_engine("sqlite+aiosqlite:///:memory:")
            await create_db_and_tables(engine)
            factory = async_sessionmaker(
                bind=engine, class_=AsyncSession, autoflush=False, expire_on_commit=False
            )
            try:
                return await body(factory)
            finally:
                await engine.dispose()

        return asyncio.run(main())

    return runner


@pytest.fixture
def id_factory():
    counter = itertools.count(1)
    return lambda: f"id-{next(counter)}"


@pytest.fixture
def build_services(id_factory):
    def builder(db, statistic_index=None):
        statistic_index = statistic_index or StatisticIndex(db)
        survey_service = SurveyService(db, statistic_index, id_factory=id_factory)
        result_service = ResultService(
            db, survey_service, statistic_index, id_factory=id_factory
        )
        return survey_service, result_service

    return builder


@pytest.fixture
def survey_payload():
    return {
        "type": "exam",
        "title": "T",
        "intro": "A short quiz",
        "avatarUrl": "http://img/avatar.png",
        "subjects": [
            {
                "id": 1,
                "type": "radio",
                "question": "2 + 2?",
                "answers": [
                    {"value": "4", "correct": True},
                    {"value": "5", "correct": False},
                ],
            },
            {
                "id": 2,
                "type": "checkbox",
                "question": "Pick primes",
                "answers": [{"value": "2"}, {"value": "3"}, {"value": "4"}],
            },
        ],
        "conclusions": [
            {"id": 1, "scoreRange": {"min": 0, "max": 50}, "text": "Try again"},
            {"id": 2, "scoreRange": {"min": 51, "max": 100}, "text": "Well done"},
        ],
    }


@pytest.fixture
def result_payload():
    def make(survey_id, user_id="u2", **overrides):
        payload = {
            "surveyId": survey_id,
            "responder": {"userId": user_id, "nickName": "Bob"},
            "answers": [
                {"id": 1, "result": [{"value": "4"}]},
                {"id": 2, "result": [{"value": "2"}, {"value": "3"}]},
            ],
            "score": 100,
            "conclusion": 2,
        }
        payload.update(overrides)
        return payload

    return make
