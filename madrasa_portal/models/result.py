from sqlalchemy import CheckConstraint, Column, DateTime, Float, Index, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import validates
from madrasa_portal.core.constants import DEFAULT_CREATED_BY, FAILING_GRADES
from madrasa_portal.core.database import Base
from madrasa_portal.models.mixins import TimestampMixin


class Result(TimestampMixin, Base):
    """
    One exam grade for one student.

    ``student_id`` is a plain column, not a foreign key: deleting a student
    leaves its results in place. ``student_name`` and ``class_name`` are
    copied from the student when the result is created and never re-synced.
    """
    __tablename__ = "results"
    __table_args__ = (
        # subject_key is "" when no subject was given, so NULL subjects still collide
        UniqueConstraint("student_id", "exam", "subject_key", name="uq_results_student_exam_subject"),
        CheckConstraint("marks IS NULL OR (marks >= 0 AND marks <= 100)", name="ck_results_marks_range"),
        Index("ix_results_student_exam_class", "student_id", "exam", "class_name"),
    )

    id = Column(Integer, primary_key=True, index=True)
    student_id = Column(Integer, nullable=False, index=True)
    student_name = Column(String, nullable=False)
    class_name = Column(String, nullable=False, index=True)
    exam = Column(String, nullable=False, index=True)
    grade = Column(String(2), nullable=False)
    marks = Column(Float, nullable=True)
    subject = Column(String, nullable=True)
    subject_key = Column(String, nullable=False, default="")
    remarks = Column(Text, nullable=True)
    exam_date = Column(DateTime(timezone=True), nullable=True)
    created_by = Column(String, nullable=False, default=DEFAULT_CREATED_BY)

    @validates("subject")
    def _sync_subject_key(self, key, value):
        self.subject_key = value or ""
        return value

    @property
    def is_passed(self) -> bool:
        return self.grade not in FAILING_GRADES
