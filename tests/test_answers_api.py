import uuid

import pytest

from doubtdesk.domain.lifecycle import DoubtStatus
from doubtdesk.models import Answer

ANSWER = {"content": "Shorter wavelengths scatter much more strongly."}


def test_instructor_answers_doubt(client, student, instructor, instructor_headers, make_doubt):
    doubt = make_doubt(student)

    response = client.post(f"/doubts/{doubt.id}/answers", json=ANSWER, headers=instructor_headers)

    assert response.status_code == 201
    data = response.json()
    assert data["content"] == ANSWER["content"]
    assert data["doubt_id"] == str(doubt.id)
    assert data["author_id"] == str(instructor.id)
    assert data["author"] == {"name": "Carol Instructor"}


def test_answering_keeps_doubt_open(client, student, instructor_headers, make_doubt):
    doubt = make_doubt(student)
    client.post(f"/doubts/{doubt.id}/answers", json=ANSWER, headers=instructor_headers)

    response = client.get(f"/doubts/{doubt.id}", headers=instructor_headers)

    assert response.json()["status"] == "OPEN"
    assert len(response.json()["answers"]) == 1


def test_resolved_doubts_can_still_be_answered(client, student, instructor_headers, make_doubt):
    doubt = make_doubt(student, status=DoubtStatus.RESOLVED)
    assert client.post(f"/doubts/{doubt.id}/answers", json=ANSWER, headers=instructor_headers).status_code == 201


@pytest.mark.parametrize("headers_fixture", ["student_headers", "other_student_headers"])
def test_students_cannot_answer(client, request, db_session, student, make_doubt, headers_fixture):
    doubt = make_doubt(student)
    headers = request.getfixturevalue(headers_fixture)

    response = client.post(f"/doubts/{doubt.id}/answers", json=ANSWER, headers=headers)

    assert response.status_code == 403
    assert response.json()["detail"] == "Only instructors can answer doubts."
    assert db_session.query(Answer).count() == 0


@pytest.mark.parametrize("content", ["", "   ", "too short", "a" * 2001])
def test_answer_validation(client, db_session, student, instructor_headers, make_doubt, content):
    doubt = make_doubt(student)

    response = client.post(f"/doubts/{doubt.id}/answers", json={"content": content}, headers=instructor_headers)

    assert response.status_code == 400
    assert response.json()["field"] == "content"
    assert db_session.query(Answer).count() == 0


def test_answer_content_is_trimmed(client, student, instructor_headers, make_doubt):
    doubt = make_doubt(student)
    response = client.post(
        f"/doubts/{doubt.id}/answers", json={"content": "  " + ANSWER["content"] + "\n"}, headers=instructor_headers
    )
    assert response.json()["content"] == ANSWER["content"]


def test_answer_on_missing_doubt(client, instructor_headers):
    response = client.post(f"/doubts/{uuid.uuid4()}/answers", json=ANSWER, headers=instructor_headers)
    assert response.status_code == 404
