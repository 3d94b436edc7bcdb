"""create organizations, gates, staff_members, shift_assignments

Revision ID: 4c1e2f7a9b30
Revises:
Create Date: 2026-10-18 09:12:44.318402
"""
from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "4c1e2f7a9b30"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

ROLE_ENUM = "security_role"
STATUS_ENUM = "shift_status"


def upgrade() -> None:
    op.create_table(
        "organizations",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("name"),
    )

    # --- custom gates (fixed gates live in code) ---
    op.create_table(
        "gates",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("org_id", sa.Integer(), nullable=False),
        sa.Column("code", sa.String(length=64), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.text("true")),
        sa.ForeignKeyConstraint(["org_id"], ["organizations.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("org_id", "code", name="uq_gate_org_code"),
    )
    op.create_index(op.f("ix_gates_org_id"), "gates", ["org_id"], unique=False)

    # --- staff directory replica ---
    op.create_table(
        "staff_members",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("org_id", sa.Integer(), nullable=False),
        sa.Column("first_name", sa.String(length=120), nullable=False),
        sa.Column("last_name", sa.String(length=120), nullable=False),
        sa.Column(
            "role",
            sa.Enum("security_manager", "team_lead", "security_guard", name=ROLE_ENUM),
            nullable=False,
        ),
        sa.Column("badge_number", sa.String(length=32), nullable=True),
        sa.Column("assigned_gate", sa.String(length=64), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.text("true")),
        sa.ForeignKeyConstraint(["org_id"], ["organizations.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_staff_members_org_id"), "staff_members", ["org_id"], unique=False)

    # --- shift assignments ---
    op.create_table(
        "shift_assignments",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("org_id", sa.Integer(), nullable=False),
        sa.Column("staff_id", sa.Integer(), nullable=False),
        sa.Column("staff_name", sa.String(length=255), nullable=False),
        sa.Column("gate_location", sa.String(length=64), nullable=False),
        sa.Column("shift_date", sa.Date(), nullable=False),
        sa.Column("shift_start_time", sa.Time(), nullable=False),
        sa.Column("shift_end_time", sa.Time(), nullable=False),
        sa.Column(
            "status",
            sa.Enum("scheduled", "active", "completed", "missed", "cancelled", name=STATUS_ENUM),
            nullable=False,
        ),
        sa.Column("requires_handover", sa.Boolean(), nullable=False, server_default=sa.text("false")),
        sa.Column("handover_notes", sa.Text(), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("cancel_reason", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
        sa.ForeignKeyConstraint(["org_id"], ["organizations.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_shift_assignments_org_id"), "shift_assignments", ["org_id"], unique=False)
    op.create_index(
        "ix_shift_assignments_staff_date", "shift_assignments", ["org_id", "staff_id", "shift_date"], unique=False
    )
    op.create_index(
        "ix_shift_assignments_gate_date", "shift_assignments", ["org_id", "gate_location", "shift_date"], unique=False
    )


def downgrade() -> None:
    op.drop_index("ix_shift_assignments_gate_date", table_name="shift_assignments")
    op.drop_index("ix_shift_assignments_staff_date", table_name="shift_assignments")
    op.drop_index(op.f("ix_shift_assignments_org_id"), table_name="shift_assignments")
    op.drop_table("shift_assignments")
    op.drop_index(op.f("ix_staff_members_org_id"), table_name="staff_members")
    op.drop_table("staff_members")
    op.drop_index(op.f("ix_gates_org_id"), table_name="gates")
    op.drop_table("gates")
    op.drop_table("organizations")

    # drop enum types explicitly (postgres keeps them around)
    sa.Enum(name=STATUS_ENUM).drop(op.get_bind(), checkfirst=True)
    sa.Enum(name=ROLE_ENUM).drop(op.get_bind(), checkfirst=True)
