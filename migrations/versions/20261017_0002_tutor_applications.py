"""tutor applications, course tutors and user role

Revision ID: 20261017_0002
Revises: 20261017_0001
Create Date: 2026-10-17 15:00:00.000000
"""

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision = "20261017_0002"
down_revision = "20261017_0001"
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.add_column("users", sa.Column("role", sa.String(length=32), nullable=False, server_default="student"))
    op.alter_column("users", "role", server_default=None)

    op.create_table(
        "course_tutors",
        sa.Column("id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("course_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("user_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("role", sa.String(length=32), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.ForeignKeyConstraint(["course_id"], ["courses.id"]),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"]),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("course_id", "user_id", name="uq_course_tutor_course_user"),
    )
    op.create_index("ix_course_tutors_course_id", "course_tutors", ["course_id"], unique=False)
    op.create_index("ix_course_tutors_user_id", "course_tutors", ["user_id"], unique=False)

    op.create_table(
        "tutor_applications",
        sa.Column("id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("full_name", sa.String(length=120), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("phone", sa.String(length=64), nullable=True),
        sa.Column("headline", sa.String(length=255), nullable=False),
        sa.Column("course_title", sa.String(length=255), nullable=False),
        sa.Column("course_description", sa.Text(), nullable=False),
        sa.Column("target_audience", sa.Text(), nullable=False),
        sa.Column("expertise_area", sa.Text(), nullable=False),
        sa.Column("experience_years", sa.Integer(), nullable=False),
        sa.Column("availability", sa.Text(), nullable=False),
        sa.Column("status", sa.String(length=32), nullable=False),
        sa.Column("user_id", postgresql.UUID(as_uuid=True), nullable=True),
        sa.Column("course_id", postgresql.UUID(as_uuid=True), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.ForeignKeyConstraint(["course_id"], ["courses.id"]),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_tutor_applications_email", "tutor_applications", ["email"], unique=False)
    op.create_index("ix_tutor_applications_status", "tutor_applications", ["status"], unique=False)


def downgrade() -> None:
    op.drop_index("ix_tutor_applications_status", table_name="tutor_applications")
    op.drop_index("ix_tutor_applications_email", table_name="tutor_applications")
    op.drop_table("tutor_applications")
    op.drop_index("ix_course_tutors_user_id", table_name="course_tutors")
    op.drop_index("ix_course_tutors_course_id", table_name="course_tutors")
    op.drop_table("course_tutors")
    op.drop_column("users", "role")
