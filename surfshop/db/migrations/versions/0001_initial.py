"""initial schema

Revision ID: 0001_initial
Revises:
Create Date: 2024-05-20 00:00:00.000000
"""

from alembic import op
import sqlalchemy as sa

revision = "0001_initial"
down_revision = None
branch_labels = None
depends_on = None

ACTIVE_SLOT_PREDICATE = sa.text("status IN ('pending', 'confirmed')")


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("password_hash", sa.String(length=255)),
        sa.Column("google_id", sa.String(length=255), unique=True),
        sa.Column("auth_provider", sa.Enum("local", "google", name="authprovider"), server_default="local"),
        sa.Column("is_admin", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("last_login_at", sa.DateTime(timezone=True)),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index("ix_users_email", "users", ["email"], unique=True)

    op.create_table(
        "lessons",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("owner_id", sa.Integer(), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column("package_id", sa.Integer(), nullable=False),
        sa.Column("lesson_date", sa.Date(), nullable=False),
        sa.Column("time", sa.String(length=5), nullable=False),
        sa.Column("price", sa.Numeric(10, 2), nullable=False),
        sa.Column("hours", sa.Numeric(4, 2), nullable=False),
        sa.Column(
            "status",
            sa.Enum("pending", "confirmed", "cancelled", name="lessonstatus"),
            server_default="pending",
        ),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.CheckConstraint("price >= 0", name="ck_lessons_price_non_negative"),
        sa.CheckConstraint("hours >= 0", name="ck_lessons_hours_non_negative"),
    )
    op.create_index("ix_lessons_owner_id", "lessons", ["owner_id"])
    op.create_index(
        "uq_lessons_active_slot",
        "lessons",
        ["lesson_date", "time"],
        unique=True,
        postgresql_where=ACTIVE_SLOT_PREDICATE,
        sqlite_where=ACTIVE_SLOT_PREDICATE,
    )

    op.create_table(
        "repair_requests",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("owner_id", sa.Integer(), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("phone", sa.String(length=32), nullable=False),
        sa.Column("zip_code", sa.String(length=16), nullable=False),
        sa.Column("board_size", sa.String(length=64), nullable=False),
        sa.Column("board_type", sa.String(length=64), server_default="other"),
        sa.Column("ding_location", sa.String(length=255), nullable=False),
        sa.Column("ding_size", sa.String(length=64), nullable=False),
        sa.Column("description", sa.Text()),
        sa.Column("delivery_method", sa.Enum("dropoff", "pickup", name="deliverymethod"), nullable=False),
        sa.Column("pickup_address", sa.String(length=512)),
        sa.Column("pickup_date", sa.Date()),
        sa.Column("pickup_notes", sa.Text()),
        sa.Column("dropoff_date", sa.Date()),
        sa.Column(
            "status",
            sa.Enum(
                "submitted",
                "in_progress",
                "completed",
                "delivered",
                "cancelled",
                name="repairstatus",
            ),
            server_default="submitted",
        ),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index(
        "ix_repair_requests_owner_created", "repair_requests", ["owner_id", "created_at"]
    )

    op.create_table(
        "audit_logs",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("actor_type", sa.Enum("user", "admin", "system", name="actortype")),
        sa.Column("actor_id", sa.Integer()),
        sa.Column("action", sa.String(length=255)),
        sa.Column("payload", sa.JSON()),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )


def downgrade() -> None:
    op.drop_table("audit_logs")
    op.drop_index("ix_repair_requests_owner_created", table_name="repair_requests")
    op.drop_table("repair_requests")
    op.drop_index("uq_lessons_active_slot", table_name="lessons")
    op.drop_index("ix_lessons_owner_id", table_name="lessons")
    op.drop_table("lessons")
    op.drop_index("ix_users_email", table_name="users")
    op.drop_table("users")
    for enum_name in ("actortype", "repairstatus", "deliverymethod", "lessonstatus", "authprovider"):
        sa.Enum(name=enum_name).drop(op.get_bind(), checkfirst=True)
