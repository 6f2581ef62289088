from typing import Any, Dict, List, Literal, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from madrasa_portal.api.deps import get_db
from madrasa_portal.core import messages
from madrasa_portal.core.config import settings
from madrasa_portal.core.constants import Grade
from madrasa_portal.schemas.common import Envelope, envelope
from madrasa_portal.schemas.result import (
    DetailStudentRef,
    ListStudentRef,
    NameStudentRef,
    RecentStudentRef,
    Result,
    ResultCreate,
    ResultStatistics,
    ResultUpdate,
    ResultView,
)
from madrasa_portal.services.result import query as result_query
from madrasa_portal.services.result import result as crud_result

router = APIRouter()

# Static paths are declared before /{result_id} so they are not parsed as ids.


@router.get("/statistics", response_model=Envelope[ResultStatistics], response_model_exclude_unset=True)
def get_results_statistics(
    class_name: Optional[str] = Query(default=None, alias="className"),
    exam: Optional[str] = None,
    db: Session = Depends(get_db),
):
    """
    Aggregate statistics for the matching results

    - **className**, **exam**: optional filters
    """
    return envelope(data=result_query.result_statistics(db, class_name=class_name, exam=exam))


RecentResults = Envelope[List[ResultView[RecentStudentRef]]]


@router.get("/recent", response_model=RecentResults, response_model_exclude_unset=True)
@router.get("/recent/{limit}", response_model=RecentResults, response_model_exclude_unset=True)
def get_recent_results(limit: Optional[str] = None, db: Session = Depends(get_db)):
    """
    The most recently created results (10 when the limit is missing or invalid)
    """
    results = result_query.recent_results(db, result_query.parse_recent_limit(limit))
    return envelope(data=results, count=len(results))


@router.get("/student/{student_id}", response_model=Envelope[List[Result]], response_model_exclude_unset=True)
def get_results_by_student(student_id: int, db: Session = Depends(get_db)):
    """
    All results of one student, latest exam first
    """
    results = result_query.results_by_student(db, student_id)
    return envelope(data=results, count=len(results))


@router.get(
    "/class/{class_name}",
    response_model=Envelope[List[ResultView[NameStudentRef]]],
    response_model_exclude_unset=True,
)
def get_results_by_class(
    class_name: str,
    exam: Optional[str] = None,
    db: Session = Depends(get_db),
):
    """
    Results of one class ordered by student name

    - **exam**: restrict to one exam
    """
    results = result_query.results_by_class(db, class_name, exam=exam)
    return envelope(data=results, count=len(results))


@router.get("/", response_model=Envelope[List[ResultView[ListStudentRef]]], response_model_exclude_unset=True)
def get_results(
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=settings.RESULTS_DEFAULT_PAGE_SIZE, ge=1),
    class_name: Optional[str] = Query(default=None, alias="className"),
    exam: Optional[str] = None,
    student_id: Optional[int] = Query(default=None, alias="studentId"),
    grade: Optional[Grade] = None,
    sort_by: str = Query(default="createdAt", alias="sortBy"),
    sort_order: Literal["asc", "desc"] = Query(default="desc", alias="sortOrder"),
    db: Session = Depends(get_db),
):
    """
    Paginated list of results

    - **page**, **limit**: pagination (defaults 1 and 10)
    - **className**, **exam**, **studentId**, **grade**: optional equality filters
    - **sortBy**, **sortOrder**: ordering (default createdAt desc)
    """
    results, pagination = result_query.list_results(
        db,
        page=page,
        limit=limit,
        class_name=class_name,
        exam=exam,
        student_id=student_id,
        grade=grade,
        sort_by=sort_by,
        sort_order=sort_order,
    )
    return envelope(data=results, pagination=pagination)


@router.get("/{result_id}", response_model=Envelope[ResultView[DetailStudentRef]], response_model_exclude_unset=True)
def get_result(result_id: int, db: Session = Depends(get_db)):
    """
    One result with the student's details
    """
    return envelope(data=result_query.get_result_detail(db, result_id))


@router.post(
    "/",
    status_code=status.HTTP_201_CREATED,
    response_model=Envelope[Result],
    response_model_exclude_unset=True,
)
def create_result(result: ResultCreate, db: Session = Depends(get_db)):
    """
    Record a new result

    Required:
    - **studentId**: an existing student
    - **exam**: exam name
    - **grade**: A+ ... F

    A student can have only one result per exam (per exam and subject when a
    subject is given).
    """
    db_result = crud_result.create_result(db, result)
    return envelope(data=result_query.serialize_result(db_result), message=messages.RESULT_CREATED)


@router.put("/{result_id}", response_model=Envelope[Result], response_model_exclude_unset=True)
def update_result(result_id: int, result: ResultUpdate, db: Session = Depends(get_db)):
    """
    Partially update a result
    """
    db_result = crud_result.update_result(db, result_id, result)
    return envelope(data=result_query.serialize_result(db_result), message=messages.RESULT_UPDATED)


@router.delete("/{result_id}", response_model=Envelope[Dict[str, Any]], response_model_exclude_unset=True)
def delete_result(result_id: int, db: Session = Depends(get_db)):
    """
    Delete a result
    """
    crud_result.delete_result(db, result_id)
    return envelope(data={}, message=messages.RESULT_DELETED)
