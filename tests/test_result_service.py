from __future__ import annotations

import pytest

from surveyhub.core.errors import NotFoundError
from surveyhub.crud import crud_statistic
from surveyhub.schemas.survey import SurveyInput
from surveyhub.schemas.survey_result import SurveyResultInput, SurveyResultRead


def test_result_snapshot_survives_survey_edit(
    run_db, build_services, survey_payload, result_payload
):
    async def body(factory):
        async with factory() as db:
            surveys, results = build_services(db)
            survey_id = await surveys.add_survey("u1", SurveyInput(**survey_payload))
            result_id = await results.add_survey_result(
                "u2", SurveyResultInput(**result_payload(survey_id))
            )
            await db.commit()

        async with factory() as db:
            surveys, results = build_services(db)
            at_submit = (await results.get_survey_result_by_id(result_id)).survey["title"]
            await surveys.update_survey("u1", SurveyInput(id=survey_id, title="T2"))
            await db.commit()

        async with factory() as db:
            surveys, results = build_services(db)
            live = await surveys.get_survey_by_id(survey_id)
            stored = await results.get_survey_result_by_id(result_id)
            return at_submit, live.title, stored.survey["title"]

    assert run_db(body) == ("T", "T2", "T")


def test_result_embeds_full_survey_document(
    run_db, build_services, survey_payload, result_payload
):
    async def body(factory):
        async with factory() as db:
            surveys, results = build_services(db)
            survey_id = await surveys.add_survey("u1", SurveyInput(**survey_payload))
            result_id = await results.add_survey_result(
                "u2", SurveyResultInput(**result_payload(survey_id))
            )
            await db.commit()

        async with factory() as db:
            _, results = build_services(db)
            return SurveyResultRead.model_validate(
                await results.get_survey_result_by_id(result_id)
            )

    stored = run_db(body)

    assert stored.survey_id == "id-1"
    assert stored.responder.user_id == "u2"
    assert stored.responder.nick_name == "Bob"
    assert [a.id for a in stored.answers] == [1, 2]
    assert stored.score == 100
    assert stored.conclusion == 2
    assert stored.survey["id"] == "id-1"
    assert stored.survey["userId"] == "u1"
    assert stored.survey["subjects"][0]["answers"][0] == {"value": "4", "correct": True}


def test_result_for_deleted_survey_has_null_snapshot(
    run_db, build_services, survey_payload, result_payload
):
    async def body(factory):
        async with factory() as db:
            surveys, results = build_services(db)
            survey_id = await surveys.add_survey("u1", SurveyInput(**survey_payload))
            await surveys.delete_survey(survey_id)
            result_id = await results.add_survey_result(
                "u2", SurveyResultInput(**result_payload(survey_id))
            )
            stored = await results.get_survey_result_by_id(result_id)
            return stored.survey, stored.survey_id

    assert run_db(body) == (None, "id-1")


def test_deleting_survey_keeps_its_results(
    run_db, build_services, survey_payload, result_payload
):
    async def body(factory):
        async with factory() as db:
            surveys, results = build_services(db)
            survey_id = await surveys.add_survey("u1", SurveyInput(**survey_payload))
            await results.add_survey_result("u2", SurveyResultInput(**result_payload(survey_id)))
            await surveys.delete_survey(survey_id)
            remaining = await results.get_survey_results(survey_id)
            return [r.survey["title"] for r in remaining]

    assert run_db(body) == ["T"]


def test_update_result_keeps_snapshot_even_with_other_survey(
    run_db, build_services, survey_payload, result_payload
):
    async def body(factory):
        async with factory() as db:
            surveys, results = build_services(db)
            first = await surveys.add_survey("u1", SurveyInput(**survey_payload))
            other = await surveys.add_survey(
                "u1", SurveyInput(**dict(survey_payload, title="Other"))
            )
            result_id = await results.add_survey_result(
                "u2", SurveyResultInput(**result_payload(first))
            )
            returned = await results.update_survey_result(
                "u2",
                SurveyResultInput(
                    **result_payload(
                        other,
                        id=result_id,
                        responder={"userId": "u2", "nickName": "Robert"},
                        answers=[{"id": 1, "result": [{"value": "5"}]}],
                        score=0,
                    )
                ),
            )
            await db.commit()

        async with factory() as db:
            _, results = build_services(db)
            stored = SurveyResultRead.model_validate(
                await results.get_survey_result_by_id(result_id)
            )
            return returned, result_id, stored

    returned, result_id, stored = run_db(body)

    assert returned == result_id
    assert stored.survey_id == "id-2"
    assert stored.survey["id"] == "id-1"
    assert stored.survey["title"] == "T"
    assert stored.responder.nick_name == "Robert"
    assert stored.score == 0
    assert [a.result[0].value for a in stored.answers] == ["5"]


def test_update_result_without_id_adds(run_db, build_services, survey_payload, result_payload):
    async def body(factory):
        async with factory() as db:
            surveys, results = build_services(db)
            survey_id = await surveys.add_survey("u1", SurveyInput(**survey_payload))
            result_id = await results.update_survey_result(
                "u2", SurveyResultInput(**result_payload(survey_id))
            )
            stored = await results.get_survey_result_by_id(result_id)
            return result_id, stored.survey["title"]

    assert run_db(body) == ("id-2", "T")


def test_update_unknown_result_names_requested_id(
    run_db, build_services, result_payload
):
    async def body(factory):
        async with factory() as db:
            _, results = build_services(db)
            with pytest.raises(NotFoundError) as excinfo:
                await results.update_survey_result(
                    "u2", SurveyResultInput(**result_payload("s", id="r-404"))
                )
            return excinfo.value, await results.get_survey_results_by_user("u2")

    error, stored = run_db(body)

    assert error.entity == "survey result"
    assert error.entity_id == "r-404"
    assert "r-404" in str(error)
    assert stored == []


def test_delete_result(run_db, build_services, survey_payload, result_payload):
    async def body(factory):
        async with factory() as db:
            surveys, results = build_services(db)
            survey_id = await surveys.add_survey("u1", SurveyInput(**survey_payload))
            result_id = await results.add_survey_result(
                "u2", SurveyResultInput(**result_payload(survey_id))
            )
            await results.delete_survey_result(result_id)
            await results.delete_survey_result(result_id)
            statistic = await crud_statistic.get_survey_statistic(db, survey_id)
            return await results.get_survey_result_by_id(result_id), statistic

    missing, statistic = run_db(body)

    assert missing is None
    assert statistic is not None


def test_lookups_by_user_and_survey(run_db, build_services, survey_payload, result_payload):
    async def body(factory):
        async with factory() as db:
            surveys, results = build_services(db)
            s1 = await surveys.add_survey("u1", SurveyInput(**survey_payload))
            s2 = await surveys.add_survey("u1", SurveyInput(**survey_payload))
            await results.add_survey_result("u2", SurveyResultInput(**result_payload(s1)))
            await results.add_survey_result("u3", SurveyResultInput(**result_payload(s1, "u3")))
            await results.add_survey_result("u2", SurveyResultInput(**result_payload(s2)))
            return (
                sorted(r.survey_id for r in await results.get_survey_results_by_user("u2")),
                sorted(r.responder_user_id for r in await results.get_survey_results(s1)),
                await results.get_survey_results("unknown"),
            )

    by_user, by_survey, unknown = run_db(body)

    assert by_user == ["id-1", "id-2"]
    assert by_survey == ["u2", "u3"]
    assert unknown == []


def test_statistic_by_user_counts_created_and_received(
    run_db, build_services, survey_payload, result_payload
):
    async def body(factory):
        async with factory() as db:
            surveys, results = build_services(db)
            s1 = await surveys.add_survey("u", SurveyInput(**survey_payload))
            await surveys.add_survey("u", SurveyInput(**survey_payload))
            other = await surveys.add_survey("x", SurveyInput(**survey_payload))
            for survey_id in (s1, other, other):
                await results.add_survey_result(
                    "u", SurveyResultInput(**result_payload(survey_id, "u"))
                )
            await db.commit()

        async with factory() as db:
            _, results = build_services(db)
            return (
                await results.get_statistic_by_user("u"),
                await results.get_statistic_by_user("nobody"),
            )

    busy, idle = run_db(body)

    assert busy.model_dump(by_alias=True) == {"createdCount": 2, "receivedCount": 3}
    assert idle.model_dump(by_alias=True) == {"createdCount": 0, "receivedCount": 0}


def test_result_submission_feeds_answer_tallies(
    run_db, build_services, survey_payload, result_payload
):
    async def body(factory):
        async with factory() as db:
            surveys, results = build_services(db)
            survey_id = await surveys.add_survey("u1", SurveyInput(**survey_payload))
            await results.add_survey_result("u2", SurveyResultInput(**result_payload(survey_id)))
            await results.add_survey_result(
                "u3",
                SurveyResultInput(
                    **result_payload(
                        survey_id, "u3", answers=[{"id": 1, "result": [{"value": "4"}]}]
                    )
                ),
            )
            tallies = await crud_statistic.get_answer_tallies(db, survey_id)
            return [(t.subject_id, t.value, t.count) for t in tallies]

    assert run_db(body) == [(1, "4", 2), (2, "2", 1), (2, "3", 1)]


def test_results_for_missing_surveys_are_not_counted(
    run_db, build_services, survey_payload, result_payload
):
    async def body(factory):
        async with factory() as db:
            surveys, results = build_services(db)
            survey_id = await surveys.add_survey("u1", SurveyInput(**survey_payload))
            await surveys.delete_survey(survey_id)
            await results.add_survey_result("u2", SurveyResultInput(**result_payload(survey_id)))
            await results.add_survey_result("u2", SurveyResultInput(**result_payload("unknown")))
            return (
                await crud_statistic.get_answer_tallies(db, survey_id),
                await crud_statistic.get_answer_tallies(db, "unknown"),
                len(await results.get_survey_results_by_user("u2")),
            )

    assert run_db(body) == ([], [], 2)
