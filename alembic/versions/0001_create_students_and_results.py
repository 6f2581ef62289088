"""create students and results tables

Revision ID: 0001
Revises:
Create Date: 2026-10-17 09:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "0001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "students",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("full_name", sa.String(), nullable=False),
        sa.Column("class_name", sa.String(), nullable=False),
        sa.Column("phone", sa.String(), nullable=True),
        sa.Column("father_name", sa.String(), nullable=True),
        sa.Column("mother_name", sa.String(), nullable=True),
        sa.Column("date_of_birth", sa.Date(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_students_id"), "students", ["id"], unique=False)
    op.create_index(op.f("ix_students_full_name"), "students", ["full_name"], unique=False)
    op.create_index(op.f("ix_students_class_name"), "students", ["class_name"], unique=False)
    op.create_index(op.f("ix_students_created_at"), "students", ["created_at"], unique=False)

    op.create_table(
        "results",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("student_id", sa.Integer(), nullable=False),
        sa.Column("student_name", sa.String(), nullable=False),
        sa.Column("class_name", sa.String(), nullable=False),
        sa.Column("exam", sa.String(), nullable=False),
        sa.Column("grade", sa.String(length=2), nullable=False),
        sa.Column("marks", sa.Float(), nullable=True),
        sa.Column("subject", sa.String(), nullable=True),
        sa.Column("subject_key", sa.String(), nullable=False),
        sa.Column("remarks", sa.Text(), nullable=True),
        sa.Column("exam_date", sa.DateTime(timezone=True), nullable=True),
        sa.Column("created_by", sa.String(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("student_id", "exam", "subject_key", name="uq_results_student_exam_subject"),
        sa.CheckConstraint("marks IS NULL OR (marks >= 0 AND marks <= 100)", name="ck_results_marks_range"),
    )
    op.create_index(op.f("ix_results_id"), "results", ["id"], unique=False)
    op.create_index(op.f("ix_results_student_id"), "results", ["student_id"], unique=False)
    op.create_index(op.f("ix_results_class_name"), "results", ["class_name"], unique=False)
    op.create_index(op.f("ix_results_exam"), "results", ["exam"], unique=False)
    op.create_index(op.f("ix_results_created_at"), "results", ["created_at"], unique=False)
    op.create_index("ix_results_student_exam_class", "results", ["student_id", "exam", "class_name"], unique=False)


def downgrade() -> None:
    op.drop_index("ix_results_student_exam_class", table_name="results")
    op.drop_index(op.f("ix_results_created_at"), table_name="results")
    op.drop_index(op.f("ix_results_exam"), table_name="results")
    op.drop_index(op.f("ix_results_class_name"), table_name="results")
    op.drop_index(op.f("ix_results_student_id"), table_name="results")
    op.drop_index(op.f("ix_results_id"), table_name="results")
    op.drop_table("results")

    op.drop_index(op.f("ix_students_created_at"), table_name="students")
    op.drop_index(op.f("ix_students_class_name"), table_name="students")
    op.drop_index(op.f("ix_students_full_name"), table_name="students")
    op.drop_index(op.f("ix_students_id"), table_name="students")
    op.drop_table("students")
