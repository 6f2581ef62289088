import os

# Must be set before the application modules build the engine
os.environ["DATABASE_URL"] = "sqlite://"

import pytest
from fastapi.testclient import TestClient

from madrasa_portal.core.database import SessionLocal, create_database_tables, drop_database_tables
from madrasa_portal.main import app

API = "/api/v1"


@pytest.fixture(autouse=True)
def tables():
    create_database_tables()
    yield
    drop_database_tables()


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def create_student(client):
    def _create(**overrides):
        payload = {
            "fullName": "Abdullah Rahman",
            "className": "hifz-beginner",
            "phone": "01711000001",
            "fatherName": "Abdur Rahman",
            "motherName": "Ayesha Begum",
            "dateOfBirth": "2014-03-12",
        }
        payload.update(overrides)
        response = client.post(f"{API}/students/", json=payload)
        assert response.status_code == 201, response.text
        return response.json()["data"]

    return _create


@pytest.fixture
def create_result(client):
    def _create(student_id, exam="Half-yearly", grade="A", **fields):
        payload = {"studentId": student_id, "exam": exam, "grade": grade, **fields}
        response = client.post(f"{API}/results/", json=payload)
        assert response.status_code == 201, response.text
        return response.json()["data"]

    return _create
