"""
Read side of the results API: listing, lookups and statistics.

Results carry a snapshot of the student's name and class. Where a view asks
for more student detail, ``studentId`` is expanded from the students table at
read time into an object holding only the requested fields.
"""
from typing import Iterable, List, Optional, Sequence, Tuple

from pydantic.alias_generators import to_camel
from sqlalchemy import func
from sqlalchemy.orm import Session

from madrasa_portal.core import messages
from madrasa_portal.core.config import settings
from madrasa_portal.core.constants import FAILING_GRADES, MAX_SQL_INTEGER
from madrasa_portal.core.exceptions import ValidationException
from madrasa_portal.models.result import Result
from madrasa_portal.models.student import Student
from madrasa_portal.schemas.common import make_pagination
from madrasa_portal.schemas.result import ClassStats, GradeCount, Result as ResultSchema, ResultStatistics
from madrasa_portal.schemas.student import Student as StudentSchema
from madrasa_portal.services.result.result import get_result_or_404
from madrasa_portal.services.student.student import get_student, get_students_by_ids

# Student fields embedded in each view
LIST_STUDENT_FIELDS = ("full_name", "class_name", "phone")
DETAIL_STUDENT_FIELDS = ("full_name", "class_name", "date_of_birth", "phone", "father_name", "mother_name")
CLASS_STUDENT_FIELDS = ("full_name",)
RECENT_STUDENT_FIELDS = ("full_name", "class_name")

_SORTABLE_COLUMNS = (
    "id", "student_id", "student_name", "class_name", "exam", "grade", "marks",
    "subject", "exam_date", "created_at", "updated_at",
)
# Accept both the wire name (createdAt) and the column name (created_at)
SORTABLE_FIELDS = {
    **{name: getattr(Result, name) for name in _SORTABLE_COLUMNS},
    **{to_camel(name): getattr(Result, name) for name in _SORTABLE_COLUMNS},
}


# =============================================================================
# SERIALIZATION
# =============================================================================

def _student_ref(student: Student, fields: Sequence[str]) -> dict:
    return StudentSchema.model_validate(student).model_dump(
        by_alias=True, mode="json", include={"id", *fields}
    )


def serialize_result(result: Result, student: Optional[Student] = None, student_fields=None) -> dict:
    """
    Result as JSON-ready dict. With ``student_fields``, ``studentId`` becomes an
    object holding those student fields; it stays the bare id when the student
    no longer exists.
    """
    data = ResultSchema.model_validate(result).model_dump(by_alias=True, mode="json")
    if student_fields is not None and student is not None:
        data["studentId"] = _student_ref(student, student_fields)
    return data


def serialize_results(db: Session, results: List[Result], student_fields=None) -> List[dict]:
    students = get_students_by_ids(db, (r.student_id for r in results)) if student_fields else {}
    return [serialize_result(r, students.get(r.student_id), student_fields) for r in results]


# =============================================================================
# QUERY HELPERS
# =============================================================================

def _filters(**equals) -> list:
    """Equality predicates for the supplied values only; None and "" mean no constraint."""
    return [getattr(Result, column) == value for column, value in equals.items() if value not in (None, "")]


def _ordering(column, descending: bool) -> Iterable:
    # Missing values sort lowest, ties fall back to insertion order
    if descending:
        return column.desc().nulls_last(), Result.id.desc()
    return column.asc().nulls_first(), Result.id.asc()


def cap_limit(limit: int) -> int:
    """Clamp a requested page size to RESULTS_MAX_PAGE_SIZE, when one is configured."""
    if settings.RESULTS_MAX_PAGE_SIZE and limit > settings.RESULTS_MAX_PAGE_SIZE:
        return settings.RESULTS_MAX_PAGE_SIZE
    return limit


def parse_recent_limit(raw: Optional[str]) -> int:
    """Path parameter of /recent/{limit}; anything unusable means the default."""
    try:
        limit = int(raw)
    except (TypeError, ValueError):
        return settings.RECENT_RESULTS_DEFAULT
    if limit <= 0:
        return settings.RECENT_RESULTS_DEFAULT
    return cap_limit(min(limit, MAX_SQL_INTEGER))


# =============================================================================
# OPERATIONS
# =============================================================================

def list_results(
    db: Session,
    page: int = 1,
    limit: int = 10,
    class_name: Optional[str] = None,
    exam: Optional[str] = None,
    student_id: Optional[int] = None,
    grade: Optional[str] = None,
    sort_by: str = "createdAt",
    sort_order: str = "desc",
) -> Tuple[List[dict], dict]:
    """Page of results with the pagination summary."""
    column = SORTABLE_FIELDS.get(sort_by)
    if column is None:
        raise ValidationException(messages.INVALID_SORT_FIELD, details={"sortBy": sort_by})

    limit = cap_limit(limit)
    query = db.query(Result).filter(
        *_filters(class_name=class_name, exam=exam, student_id=student_id, grade=grade)
    )
    total = query.count()
    offset = (page - 1) * limit
    results = []
    # A page past the end is empty; offset and limit never exceed the row count
    if offset < total:
        results = (
            query.order_by(*_ordering(column, descending=sort_order != "asc"))
            .offset(offset)
            .limit(min(limit, total - offset))
            .all()
        )
    return serialize_results(db, results, LIST_STUDENT_FIELDS), make_pagination(total, page, limit)


def get_result_detail(db: Session, result_id: int) -> dict:
    result = get_result_or_404(db, result_id)
    return serialize_result(result, get_student(db, result.student_id), DETAIL_STUDENT_FIELDS)


def results_by_student(db: Session, student_id: int) -> List[dict]:
    """Every result of one student, latest exam first."""
    results = (
        db.query(Result)
        .filter(Result.student_id == student_id)
        .order_by(Result.exam_date.desc().nulls_last(), Result.created_at.desc(), Result.id.desc())
        .all()
    )
    return serialize_results(db, results)


def results_by_class(db: Session, class_name: str, exam: Optional[str] = None) -> List[dict]:
    """Results of one class, optionally for a single exam, by student name."""
    results = (
        db.query(Result)
        .filter(*_filters(class_name=class_name, exam=exam))
        .order_by(Result.student_name.asc(), Result.id.asc())
        .all()
    )
    return serialize_results(db, results, CLASS_STUDENT_FIELDS)


def recent_results(db: Session, limit: int) -> List[dict]:
    results = (
        db.query(Result)
        .order_by(Result.created_at.desc(), Result.id.desc())
        .limit(limit)
        .all()
    )
    return serialize_results(db, results, RECENT_STUDENT_FIELDS)


def result_statistics(db: Session, class_name: Optional[str] = None, exam: Optional[str] = None) -> dict:
    """
    Grade distribution, pass/fail counts and per-class averages.

    ``passPercentage`` is rounded to two decimals and is 0 when nothing matches.
    ``avgMarks`` ignores results without marks and is null for a class that has none.
    """
    filters = _filters(class_name=class_name, exam=exam)

    total = db.query(func.count(Result.id)).filter(*filters).scalar()

    grade_rows = (
        db.query(Result.grade, func.count(Result.id))
        .filter(*filters)
        .group_by(Result.grade)
        .all()
    )
    # Sorted in Python: database collations disagree on punctuation ("A+" vs "A-")
    grade_distribution = [
        GradeCount(grade=grade, count=count)
        for grade, count in sorted(grade_rows, key=lambda row: row[0])
    ]

    passed = (
        db.query(func.count(Result.id))
        .filter(*filters, Result.grade.notin_(FAILING_GRADES))
        .scalar()
    )
    failed = total - passed
    pass_percentage = round(passed / total * 100, 2) if total else 0

    class_rows = (
        db.query(Result.class_name, func.count(Result.id), func.avg(Result.marks))
        .filter(*filters)
        .group_by(Result.class_name)
        .order_by(Result.class_name)
        .all()
    )
    classwise_stats = [
        ClassStats(
            class_name=name,
            count=count,
            avg_marks=float(avg) if avg is not None else None,
        )
        for name, count, avg in class_rows
    ]

    stats = ResultStatistics(
        total_results=total,
        passed=passed,
        failed=failed,
        pass_percentage=pass_percentage,
        grade_distribution=grade_distribution,
        classwise_stats=classwise_stats,
    )
    return stats.model_dump(by_alias=True, mode="json")
