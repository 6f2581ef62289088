from datetime import date, datetime
from typing import Generic, List, Optional, TypeVar, Union

from pydantic import Field

from madrasa_portal.core.constants import ClassName, Grade
from madrasa_portal.schemas.common import CamelModel


class ResultCreate(CamelModel):
    # Required fields are checked by the service so a missing one gets the
    # localized "student, exam and grade are required" message.
    student_id: Optional[int] = None
    exam: Optional[str] = None
    grade: Optional[Grade] = None
    marks: Optional[float] = Field(default=None, ge=0, le=100)
    subject: Optional[str] = None
    remarks: Optional[str] = None
    exam_date: Optional[datetime] = None


class ResultUpdate(CamelModel):
    """Partial update: only the fields present in the request body are applied."""
    student_id: Optional[int] = None
    student_name: Optional[str] = None
    class_name: Optional[ClassName] = None
    exam: Optional[str] = None
    grade: Optional[Grade] = None
    marks: Optional[float] = Field(default=None, ge=0, le=100)
    subject: Optional[str] = None
    remarks: Optional[str] = None
    exam_date: Optional[datetime] = None


class Result(CamelModel):
    id: int
    student_id: int
    student_name: str
    class_name: str
    exam: str
    grade: str
    marks: Optional[float] = None
    subject: Optional[str] = None
    remarks: Optional[str] = None
    exam_date: Optional[datetime] = None
    created_by: str
    created_at: datetime
    updated_at: datetime
    is_passed: bool



# =============================================================================
# STUDENT REFERENCES
# =============================================================================
# Views that expand studentId embed one of these; a deleted student stays a bare id.

class StudentRef(CamelModel):
    id: int


class NameStudentRef(StudentRef):
    full_name: str


class RecentStudentRef(NameStudentRef):
    class_name: str


class ListStudentRef(RecentStudentRef):
    phone: Optional[str] = None


class DetailStudentRef(ListStudentRef):
    date_of_birth: Optional[date] = None
    father_name: Optional[str] = None
    mother_name: Optional[str] = None


RefT = TypeVar("RefT", bound=StudentRef)


class ResultView(Result, Generic[RefT]):
    student_id: Union[RefT, int]


# =============================================================================
# STATISTICS
# =============================================================================

class GradeCount(CamelModel):
    grade: str
    count: int


class ClassStats(CamelModel):
    class_name: str
    count: int
    avg_marks: Optional[float] = None


class ResultStatistics(CamelModel):
    total_results: int
    passed: int
    failed: int
    pass_percentage: float
    grade_distribution: List[GradeCount]
    classwise_stats: List[ClassStats]
