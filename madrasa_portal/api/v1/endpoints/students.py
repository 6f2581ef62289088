from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from typing import Any, Dict, List, Optional
from madrasa_portal.api.deps import get_db
from madrasa_portal.core import messages
from madrasa_portal.schemas.common import Envelope, envelope, make_pagination
from madrasa_portal.services.student import student as crud_student
from madrasa_portal.schemas.student import Student, StudentCreate, StudentUpdate

router = APIRouter()


def _dump(student) -> dict:
    return Student.model_validate(student).model_dump(by_alias=True, mode="json")


@router.get("/", response_model=Envelope[List[Student]], response_model_exclude_unset=True)
def get_students(
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=10, ge=1),
    class_name: Optional[str] = Query(default=None, alias="className"),
    search: Optional[str] = None,
    db: Session = Depends(get_db)
):
    """
    Paginated list of students ordered by name

    - **page**, **limit**: pagination (defaults 1 and 10)
    - **className**: only students of this class
    - **search**: part of the student's name
    """
    students, total = crud_student.get_students(
        db, skip=(page - 1) * limit, limit=limit, class_name=class_name, search=search
    )
    return envelope(
        data=[_dump(s) for s in students],
        pagination=make_pagination(total, page, limit, noun="students"),
    )


@router.get("/{student_id}", response_model=Envelope[Student], response_model_exclude_unset=True)
def get_student(
    student_id: int,
    db: Session = Depends(get_db)
):
    """
    One student by ID
    """
    return envelope(data=_dump(crud_student.get_student_or_404(db, student_id)))


@router.post(
    "/",
    status_code=status.HTTP_201_CREATED,
    response_model=Envelope[Student],
    response_model_exclude_unset=True,
)
def create_student(
    student: StudentCreate,
    db: Session = Depends(get_db)
):
    """
    Create a student

    Required:
    - **fullName**
    - **className**: one of the madrasa classes
    """
    db_student = crud_student.create_student(db=db, student=student)
    return envelope(data=_dump(db_student), message=messages.STUDENT_CREATED)


@router.put("/{student_id}", response_model=Envelope[Student], response_model_exclude_unset=True)
def update_student(
    student_id: int,
    student: StudentUpdate,
    db: Session = Depends(get_db)
):
    """
    Partially update a student. Existing results keep the name and class
    recorded when they were created.
    """
    db_student = crud_student.update_student(db=db, student_id=student_id, student=student)
    return envelope(data=_dump(db_student), message=messages.STUDENT_UPDATED)


@router.delete("/{student_id}", response_model=Envelope[Dict[str, Any]], response_model_exclude_unset=True)
def delete_student(
    student_id: int,
    db: Session = Depends(get_db)
):
    """
    Delete a student. Their results are kept.
    """
    crud_student.delete_student(db=db, student_id=student_id)
    return envelope(data={}, message=messages.STUDENT_DELETED)
