"""initial

Revision ID: 20261019_0001
Revises:
Create Date: 2026-10-19

"""

from __future__ import annotations

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = "20261019_0001"
down_revision = None
branch_labels = None
depends_on = None


user_role = sa.Enum("INSTRUCTOR", "STUDENT", name="user_role")


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True, nullable=False),
        sa.Column("first_name", sa.String(length=100), nullable=False),
        sa.Column("last_name", sa.String(length=100), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("password_hash", sa.Text(), nullable=False),
        sa.Column("role", user_role, nullable=False),
        sa.Column(
            "instructor_id",
            sa.Integer(),
            sa.ForeignKey("users.id", ondelete="SET NULL", name="fk_users_instructor_id_users"),
            nullable=True,
        ),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint("id", name="pk_users"),
    )
    op.create_index("ix_users_email", "users", ["email"], unique=True)
    op.create_index("ix_users_instructor_id", "users", ["instructor_id"], unique=False)

    op.create_table(
        "instructor_codes",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True, nullable=False),
        sa.Column(
            "instructor_id",
            sa.Integer(),
            sa.ForeignKey("users.id", ondelete="CASCADE", name="fk_instructor_codes_instructor_id_users"),
            nullable=False,
        ),
        sa.Column("code", sa.String(length=16), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint("id", name="pk_instructor_codes"),
        sa.UniqueConstraint("instructor_id", name="uq_instructor_codes_instructor_id"),
    )
    op.create_index("ix_instructor_codes_code", "instructor_codes", ["code"], unique=True)

    op.create_table(
        "routines",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True, nullable=False),
        sa.Column(
            "instructor_id",
            sa.Integer(),
            sa.ForeignKey("users.id", ondelete="CASCADE", name="fk_routines_instructor_id_users"),
            nullable=False,
        ),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint("id", name="pk_routines"),
    )
    op.create_index("ix_routines_instructor_id", "routines", ["instructor_id"], unique=False)

    op.create_table(
        "segments",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True, nullable=False),
        sa.Column(
            "routine_id",
            sa.Integer(),
            sa.ForeignKey("routines.id", ondelete="CASCADE", name="fk_segments_routine_id_routines"),
            nullable=False,
        ),
        sa.Column("position", sa.Integer(), nullable=False),
        sa.Column("duration", sa.Integer(), nullable=False),
        sa.Column("effort", sa.Integer(), nullable=True),
        sa.Column("description", sa.Text(), nullable=True),
        sa.PrimaryKeyConstraint("id", name="pk_segments"),
        sa.UniqueConstraint("routine_id", "position", name="uq_segments_routine_position"),
        sa.CheckConstraint("duration > 0", name="ck_segments_duration_positive"),
        sa.CheckConstraint("effort IS NULL OR effort BETWEEN 1 AND 10", name="ck_segments_effort_range"),
    )
    op.create_index("ix_segments_routine_id", "segments", ["routine_id"], unique=False)

    op.create_table(
        "routine_assignments",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True, nullable=False),
        sa.Column(
            "routine_id",
            sa.Integer(),
            sa.ForeignKey("routines.id", ondelete="CASCADE", name="fk_routine_assignments_routine_id_routines"),
            nullable=False,
        ),
        sa.Column(
            "student_id",
            sa.Integer(),
            sa.ForeignKey("users.id", ondelete="CASCADE", name="fk_routine_assignments_student_id_users"),
            nullable=False,
        ),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint("id", name="pk_routine_assignments"),
    )
    op.create_index("ix_routine_assignments_routine_id", "routine_assignments", ["routine_id"], unique=False)
    op.create_index("ix_routine_assignments_student_id", "routine_assignments", ["student_id"], unique=False)


def downgrade() -> None:
    op.drop_index("ix_routine_assignments_student_id", table_name="routine_assignments")
    op.drop_index("ix_routine_assignments_routine_id", table_name="routine_assignments")
    op.drop_table("routine_assignments")

    op.drop_index("ix_segments_routine_id", table_name="segments")
    op.drop_table("segments")

    op.drop_index("ix_routines_instructor_id", table_name="routines")
    op.drop_table("routines")

    op.drop_index("ix_instructor_codes_code", table_name="instructor_codes")
    op.drop_table("instructor_codes")

    op.drop_index("ix_users_instructor_id", table_name="users")
    op.drop_index("ix_users_email", table_name="users")
    op.drop_table("users")

    user_role.drop(op.get_bind(), checkfirst=True)
