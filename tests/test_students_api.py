from madrasa_portal.core import messages

API = "/api/v1/students"


def test_create_and_get_student(client, create_student):
    student = create_student(fullName="Fatima Khatun", className="madani-second")

    response = client.get(f"{API}/{student['id']}")

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["fullName"] == "Fatima Khatun"
    assert data["className"] == "madani-second"
    assert data["dateOfBirth"] == "2014-03-12"
    assert "createdAt" in data and "updatedAt" in data


def test_create_student_validation(client):
    missing_name = client.post(f"{API}/", json={"className": "nazera"})
    unknown_class = client.post(f"{API}/", json={"fullName": "Ali", "className": "class-9"})

    assert missing_name.status_code == 400
    assert "fullName" in missing_name.json()["details"]
    assert unknown_class.status_code == 400
    assert "className" in unknown_class.json()["details"]


def test_list_students_filters_and_paginates(client, create_student):
    create_student(fullName="Zaid", className="nazera")
    create_student(fullName="Aisha", className="nazera")
    create_student(fullName="Bilal", className="qaida")

    nazera = client.get(f"{API}/", params={"className": "nazera"}).json()
    search = client.get(f"{API}/", params={"search": "BIL"}).json()
    paged = client.get(f"{API}/", params={"limit": 2, "page": 2}).json()

    assert [s["fullName"] for s in nazera["data"]] == ["Aisha", "Zaid"]
    assert [s["fullName"] for s in search["data"]] == ["Bilal"]
    assert paged["pagination"] == {
        "currentPage": 2,
        "totalPages": 2,
        "totalStudents": 3,
        "studentsPerPage": 2,
    }
    assert [s["fullName"] for s in paged["data"]] == ["Zaid"]


def test_list_students_page_past_the_end(client, create_student):
    create_student()

    response = client.get(f"{API}/", params={"page": 10 ** 19, "limit": 10 ** 19})

    assert response.status_code == 200
    assert response.json()["data"] == []
    assert response.json()["pagination"]["currentPage"] == 10 ** 19
    assert response.json()["pagination"]["totalStudents"] == 1


def test_update_student_partially(client, create_student):
    student = create_student()

    response = client.put(f"{API}/{student['id']}", json={"phone": "01999999999"})

    assert response.status_code == 200
    body = response.json()
    assert body["message"] == messages.STUDENT_UPDATED
    assert body["data"]["phone"] == "01999999999"
    assert body["data"]["fullName"] == student["fullName"]


def test_update_student_cannot_clear_name(client, create_student):
    student = create_student()

    response = client.put(f"{API}/{student['id']}", json={"fullName": None})

    assert response.status_code == 400
    assert response.json()["details"] == {"fullName": "required"}


def test_missing_student(client):
    assert client.get(f"{API}/5").status_code == 404
    assert client.put(f"{API}/5", json={"phone": "1"}).status_code == 404
    assert client.delete(f"{API}/5").status_code == 404


def test_deleting_student_keeps_results(client, create_student, create_result):
    student = create_student()
    create_result(student["id"], exam="Final")

    response = client.delete(f"{API}/{student['id']}")

    assert response.status_code == 200
    assert response.json()["message"] == messages.STUDENT_DELETED
    remaining = client.get(f"/api/v1/results/student/{student['id']}").json()
    assert remaining["count"] == 1
    assert remaining["data"][0]["studentName"] == student["fullName"]
