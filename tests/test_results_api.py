import pytest
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Query, Session

from madrasa_portal.core import messages
from madrasa_portal.services.result import result as crud_result

API = "/api/v1/results"


def test_create_result_copies_student_name_and_class(client, create_student):
    student = create_student(fullName="Fatima Khatun", className="madani-first")

    response = client.post(f"{API}/", json={
        "studentId": student["id"],
        "exam": "  Half-yearly ",
        "grade": "A+",
        "marks": 91,
        "subject": "Arabic",
    })

    assert response.status_code == 201
    body = response.json()
    assert body["success"] is True
    assert body["message"] == messages.RESULT_CREATED
    result = body["data"]
    assert result["studentId"] == student["id"]
    assert result["studentName"] == "Fatima Khatun"
    assert result["className"] == "madani-first"
    assert result["exam"] == "Half-yearly"
    assert result["marks"] == 91
    assert result["isPassed"] is True
    assert result["createdBy"] == "principal"
    assert result["examDate"] is not None


def test_result_keeps_snapshot_after_student_is_edited(client, create_student, create_result):
    student = create_student(fullName="Yusuf Hossain", className="nazera")
    result = create_result(student["id"])

    response = client.put(f"/api/v1/students/{student['id']}", json={
        "fullName": "Yusuf Hossain Khan",
        "className": "qaida",
    })
    assert response.status_code == 200

    data = client.get(f"{API}/{result['id']}").json()["data"]
    assert data["studentName"] == "Yusuf Hossain"
    assert data["className"] == "nazera"
    # The expanded reference is read live from the students table
    assert data["studentId"]["fullName"] == "Yusuf Hossain Khan"


def test_get_result_expands_student_details(client, create_student, create_result):
    student = create_student()
    result = create_result(student["id"])

    response = client.get(f"{API}/{result['id']}")

    assert response.status_code == 200
    ref = response.json()["data"]["studentId"]
    assert set(ref) == {"id", "fullName", "className", "dateOfBirth", "phone", "fatherName", "motherName"}
    assert ref["id"] == student["id"]
    assert ref["dateOfBirth"] == "2014-03-12"


def test_get_result_not_found(client):
    response = client.get(f"{API}/999")

    assert response.status_code == 404
    body = response.json()
    assert body["success"] is False
    assert body["code"] == "NOT_FOUND"
    assert body["error"] == messages.RESULT_NOT_FOUND


def test_get_result_with_dangling_student_reference(client, create_student, create_result):
    student = create_student()
    result = create_result(student["id"])

    assert client.delete(f"/api/v1/students/{student['id']}").status_code == 200

    data = client.get(f"{API}/{result['id']}").json()["data"]
    assert data["studentId"] == student["id"]
    assert data["studentName"] == "Abdullah Rahman"


def test_duplicate_result_without_subject_is_rejected(client, create_student, create_result):
    student = create_student()
    create_result(student["id"], exam="Final")

    response = client.post(f"{API}/", json={"studentId": student["id"], "exam": "Final", "grade": "B"})

    assert response.status_code == 400
    body = response.json()
    assert body["success"] is False
    assert body["code"] == "DUPLICATE_RESULT"
    assert body["error"] == messages.RESULT_DUPLICATE


def test_same_exam_with_different_subjects_is_allowed(client, create_student, create_result):
    student = create_student()

    first = create_result(student["id"], exam="Final", subject="Quran")
    second = create_result(student["id"], exam="Final", subject="Arabic")

    assert first["id"] != second["id"]


def test_same_exam_and_subject_is_rejected(client, create_student, create_result):
    student = create_student()
    create_result(student["id"], exam="Final", subject="Quran")

    response = client.post(f"{API}/", json={
        "studentId": student["id"], "exam": "Final", "grade": "A", "subject": "Quran",
    })

    assert response.status_code == 400
    assert response.json()["code"] == "DUPLICATE_RESULT"


def test_result_without_subject_conflicts_with_any_subject(client, create_student, create_result):
    student = create_student()
    create_result(student["id"], exam="Final", subject="Quran")

    response = client.post(f"{API}/", json={"studentId": student["id"], "exam": "Final", "grade": "A"})

    assert response.status_code == 400
    assert response.json()["code"] == "DUPLICATE_RESULT"


def test_create_result_requires_student_exam_and_grade(client, create_student):
    student = create_student()

    response = client.post(f"{API}/", json={"studentId": student["id"], "exam": ""})

    assert response.status_code == 400
    body = response.json()
    assert body["code"] == "VALIDATION_ERROR"
    assert body["error"] == messages.RESULT_REQUIRED_FIELDS
    assert set(body["details"]) == {"exam", "grade"}


def test_create_result_rejects_unknown_grade_and_marks_out_of_range(client, create_student):
    student = create_student()

    bad_grade = client.post(f"{API}/", json={"studentId": student["id"], "exam": "Final", "grade": "E"})
    bad_marks = client.post(f"{API}/", json={
        "studentId": student["id"], "exam": "Final", "grade": "A", "marks": 101,
    })

    assert bad_grade.status_code == 400
    assert "grade" in bad_grade.json()["details"]
    assert bad_marks.status_code == 400
    assert "marks" in bad_marks.json()["details"]


def test_create_result_for_unknown_student(client):
    response = client.post(f"{API}/", json={"studentId": 42, "exam": "Final", "grade": "A"})

    assert response.status_code == 404
    assert response.json()["error"] == messages.STUDENT_NOT_FOUND


def test_update_result_merges_supplied_fields(client, create_student, create_result):
    student = create_student()
    result = create_result(student["id"], exam="Final", grade="B", marks=70, remarks="Good")

    response = client.put(f"{API}/{result['id']}", json={"grade": "D", "marks": 45})

    assert response.status_code == 200
    body = response.json()
    assert body["message"] == messages.RESULT_UPDATED
    data = body["data"]
    assert data["grade"] == "D"
    assert data["marks"] == 45
    assert data["isPassed"] is False
    assert data["exam"] == "Final"
    assert data["remarks"] == "Good"


def test_update_result_validates_fields(client, create_student, create_result):
    student = create_student()
    result = create_result(student["id"])

    bad_grade = client.put(f"{API}/{result['id']}", json={"grade": "Z"})
    bad_class = client.put(f"{API}/{result['id']}", json={"className": "grade-10"})
    cleared_exam = client.put(f"{API}/{result['id']}", json={"exam": None})

    assert bad_grade.status_code == 400
    assert bad_class.status_code == 400
    assert cleared_exam.status_code == 400
    assert cleared_exam.json()["details"] == {"exam": "required"}


def test_update_missing_result(client):
    response = client.put(f"{API}/123", json={"grade": "A"})

    assert response.status_code == 404


def test_update_into_existing_exam_is_a_conflict(client, create_student, create_result):
    student = create_student()
    create_result(student["id"], exam="Mid-term")
    final = create_result(student["id"], exam="Final")

    response = client.put(f"{API}/{final['id']}", json={"exam": "Mid-term"})

    assert response.status_code == 400
    assert response.json()["code"] == "DUPLICATE_RESULT"


def test_delete_result_twice(client, create_student, create_result):
    student = create_student()
    result = create_result(student["id"])

    first = client.delete(f"{API}/{result['id']}")
    second = client.delete(f"{API}/{result['id']}")

    assert first.status_code == 200
    assert first.json() == {"success": True, "message": messages.RESULT_DELETED, "data": {}}
    assert second.status_code == 404
    assert second.json()["success"] is False


def test_delete_missing_result(client):
    response = client.delete(f"{API}/77")

    assert response.status_code == 404
    assert response.json()["code"] == "NOT_FOUND"


def test_non_numeric_id_is_a_validation_error(client):
    response = client.get(f"{API}/not-an-id")

    assert response.status_code == 400
    assert response.json()["code"] == "VALIDATION_ERROR"


def test_concurrent_duplicate_is_caught_by_unique_constraint(client, create_student, create_result, monkeypatch):
    student = create_student()
    create_result(student["id"], exam="Final")
    # Another request inserted the same result after this one's existence check
    monkeypatch.setattr(crud_result, "find_duplicate", lambda *args, **kwargs: None)

    response = client.post(f"{API}/", json={"studentId": student["id"], "exam": "Final", "grade": "B"})

    assert response.status_code == 400
    body = response.json()
    assert body["code"] == "DUPLICATE_RESULT"
    assert body["error"] == messages.RESULT_DUPLICATE
    assert client.get(f"{API}/student/{student['id']}").json()["count"] == 1


@pytest.fixture
def break_commits(monkeypatch):
    """Call to make every following commit fail as a broken database would."""
    def _break():
        def commit(self):
            raise OperationalError("COMMIT", {}, Exception("disk I/O error"))

        monkeypatch.setattr(Session, "commit", commit)

    return _break


def test_store_failure_on_create(client, create_student, break_commits):
    student = create_student()
    break_commits()

    response = client.post(f"{API}/", json={"studentId": student["id"], "exam": "Final", "grade": "A"})

    assert response.status_code == 500
    assert response.json() == {"success": False, "error": messages.STORE_FAILURE, "code": "STORE_ERROR"}


def test_store_failure_on_update_and_delete(client, create_student, create_result, break_commits):
    student = create_student()
    result = create_result(student["id"])
    break_commits()

    updated = client.put(f"{API}/{result['id']}", json={"grade": "B"})
    deleted = client.delete(f"{API}/{result['id']}")

    assert updated.status_code == 500
    assert updated.json()["code"] == "STORE_ERROR"
    assert deleted.status_code == 500
    assert deleted.json()["code"] == "STORE_ERROR"


def test_store_failure_on_read(client, monkeypatch):
    def count(self):
        raise OperationalError("SELECT", {}, Exception("database is locked"))

    monkeypatch.setattr(Query, "count", count)

    response = client.get(f"{API}/")

    assert response.status_code == 500
    assert response.json() == {"success": False, "error": messages.STORE_FAILURE, "code": "STORE_ERROR"}
