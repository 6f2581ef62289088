import logging
from typing import Optional

from pydantic.alias_generators import to_camel
from sqlalchemy.orm import Session

from madrasa_portal.core import messages
from madrasa_portal.core.exceptions import ConflictException, NotFoundException, ValidationException
from madrasa_portal.models.mixins import utcnow
from madrasa_portal.models.result import Result
from madrasa_portal.schemas.result import ResultCreate, ResultUpdate
from madrasa_portal.services.common import commit
from madrasa_portal.services.student import student as student_service

logger = logging.getLogger(__name__)

# Fields that a partial update may change but never clear
REQUIRED_FIELDS = ("student_id", "student_name", "class_name", "exam", "grade")


def get_result(db: Session, result_id: int) -> Optional[Result]:
    return db.query(Result).filter(Result.id == result_id).first()


def get_result_or_404(db: Session, result_id: int) -> Result:
    result = get_result(db, result_id)
    if not result:
        raise NotFoundException(messages.RESULT_NOT_FOUND)
    return result


def find_duplicate(db: Session, student_id: int, exam: str, subject: Optional[str] = None) -> Optional[Result]:
    """
    Existing result for the same student and exam. When a subject is given it
    must match too; without one, any subject counts as a duplicate.
    """
    query = db.query(Result).filter(Result.student_id == student_id, Result.exam == exam)
    if subject:
        query = query.filter(Result.subject == subject)
    return query.first()


def create_result(db: Session, payload: ResultCreate) -> Result:
    """
    Record a result for an existing student.

    The student's current name and class are copied onto the result.
    Raises ValidationException, NotFoundException or ConflictException.
    """
    missing = [
        to_camel(field)
        for field in ("student_id", "exam", "grade")
        if not getattr(payload, field)
    ]
    if missing:
        raise ValidationException(
            messages.RESULT_REQUIRED_FIELDS,
            details={field: "required" for field in missing},
        )

    student = student_service.get_student_or_404(db, payload.student_id)

    subject = payload.subject or None
    if find_duplicate(db, student.id, payload.exam, subject):
        raise ConflictException(messages.RESULT_DUPLICATE)

    db_result = Result(
        student_id=student.id,
        student_name=student.full_name,
        class_name=student.class_name,
        exam=payload.exam,
        grade=payload.grade,
        marks=payload.marks,
        subject=subject,
        remarks=payload.remarks or None,
        exam_date=payload.exam_date or utcnow(),
    )
    db.add(db_result)
    # The unique constraint catches a concurrent insert that slipped past find_duplicate
    commit(db, "create result", conflict_message=messages.RESULT_DUPLICATE)
    db.refresh(db_result)

    logger.info(
        f"Result created: id={db_result.id} student={student.id} exam={db_result.exam!r} grade={db_result.grade}"
    )
    return db_result


def update_result(db: Session, result_id: int, payload: ResultUpdate) -> Result:
    """
    Merge the supplied fields into an existing result.

    The duplicate lookup is not repeated here and the student snapshot is not
    refreshed, even when ``studentId`` changes.
    """
    db_result = get_result_or_404(db, result_id)

    changes = payload.model_dump(exclude_unset=True)
    cleared = [to_camel(f) for f in REQUIRED_FIELDS if f in changes and not changes[f]]
    if cleared:
        raise ValidationException(messages.FIELD_REQUIRED, details={field: "required" for field in cleared})

    for field in ("subject", "remarks"):
        if field in changes:
            changes[field] = changes[field] or None

    for field, value in changes.items():
        setattr(db_result, field, value)

    commit(db, "update result", conflict_message=messages.RESULT_DUPLICATE)
    db.refresh(db_result)
    logger.info(f"Result updated: id={result_id} fields={sorted(changes)}")
    return db_result


def delete_result(db: Session, result_id: int) -> None:
    db_result = get_result_or_404(db, result_id)
    db.delete(db_result)
    commit(db, "delete result")
    logger.info(f"Result deleted: id={result_id}")
