import logging
from typing import List, Optional, Tuple

from pydantic.alias_generators import to_camel
from sqlalchemy import func
from sqlalchemy.orm import Session

from madrasa_portal.core import messages
from madrasa_portal.core.exceptions import NotFoundException, ValidationException
from madrasa_portal.models.student import Student
from madrasa_portal.schemas.student import StudentCreate, StudentUpdate
from madrasa_portal.services.common import commit

logger = logging.getLogger(__name__)


def get_student(db: Session, student_id: int) -> Optional[Student]:
    """Fetch one student by ID, or None."""
    return db.query(Student).filter(Student.id == student_id).first()


def get_student_or_404(db: Session, student_id: int) -> Student:
    student = get_student(db, student_id)
    if not student:
        raise NotFoundException(messages.STUDENT_NOT_FOUND)
    return student


def get_students_by_ids(db: Session, student_ids) -> dict:
    """Map of id -> Student for the given ids; unknown ids are simply absent."""
    ids = set(student_ids)
    if not ids:
        return {}
    return {s.id: s for s in db.query(Student).filter(Student.id.in_(ids)).all()}


def get_students(
    db: Session,
    skip: int = 0,
    limit: int = 10,
    class_name: Optional[str] = None,
    search: Optional[str] = None,
) -> Tuple[List[Student], int]:
    """Page of students ordered by name, plus the total matching count."""
    query = db.query(Student)
    if class_name:
        query = query.filter(Student.class_name == class_name)
    if search:
        query = query.filter(func.lower(Student.full_name).contains(search.lower(), autoescape=True))

    total = query.count()
    if skip >= total:
        return [], total
    students = (
        query.order_by(Student.full_name.asc(), Student.id.asc())
        .offset(skip)
        .limit(min(limit, total - skip))
        .all()
    )
    return students, total


def create_student(db: Session, student: StudentCreate) -> Student:
    """Create a new student"""
    db_student = Student(**student.model_dump())
    db.add(db_student)
    commit(db, "create student")
    db.refresh(db_student)
    logger.info(f"Student created: id={db_student.id} class={db_student.class_name}")
    return db_student


def update_student(db: Session, student_id: int, student: StudentUpdate) -> Student:
    """
    Apply a partial update. Results already recorded for this student keep
    the name and class they were created with.
    """
    db_student = get_student_or_404(db, student_id)
    for field, value in student.model_dump(exclude_unset=True).items():
        if field in ("full_name", "class_name") and value is None:
            raise ValidationException(messages.FIELD_REQUIRED, details={to_camel(field): "required"})
        setattr(db_student, field, value)
    commit(db, "update student")
    db.refresh(db_student)
    return db_student


def delete_student(db: Session, student_id: int) -> None:
    """
    Delete a student. Results referencing the student are left in place and
    keep their snapshot of the student's name and class.
    """
    db_student = get_student_or_404(db, student_id)
    db.delete(db_student)
    commit(db, "delete student")
    logger.info(f"Student deleted: id={student_id}")
