"""initial clinic schema

Revision ID: 0001_initial
Revises:
Create Date: 2026-10-19 09:00:00

"""
from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

revision = "0001_initial"
down_revision = None
branch_labels = None
depends_on = None

json_type = sa.JSON().with_variant(postgresql.JSONB(), "postgresql")


def upgrade() -> None:
    op.create_table(
        "user_account",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("password_hash", sa.String(255), nullable=False),
        sa.Column("full_name", sa.String(120)),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        sa.Column(
            "role",
            sa.Enum("ADMIN", "DENTIST", "ASSISTANT", "ACCOUNTANT", name="userrole"),
            nullable=False,
        ),
    )
    op.create_index("ix_user_account_email", "user_account", ["email"], unique=True)

    op.create_table(
        "supplier",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("phone", sa.String(30)),
        sa.Column("email", sa.String(255)),
        sa.Column("customer_reference", sa.String(100)),
        sa.Column("created_at", sa.DateTime()),
        sa.Column("updated_at", sa.DateTime()),
    )

    op.create_table(
        "product",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("sku", sa.String(60), nullable=False, unique=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("category", sa.String(100), nullable=False),
        sa.Column("description", sa.Text()),
        sa.Column("supplier_id", sa.Integer(), sa.ForeignKey("supplier.id"), nullable=False),
        sa.Column("unit_cost", sa.Numeric(12, 2)),
        sa.Column("sale_price", sa.Numeric(12, 2)),
        sa.Column("reorder_point", sa.Integer(), nullable=False),
        sa.Column("reorder_quantity", sa.Integer(), nullable=False),
        sa.Column("storage_location", sa.String(120)),
        sa.Column(
            "status",
            sa.Enum("ACTIVE", "INACTIVE", "OUT_OF_STOCK", name="productstatus"),
            nullable=False,
        ),
        sa.Column("created_at", sa.DateTime()),
        sa.Column("updated_at", sa.DateTime()),
    )

    op.create_table(
        "inventory_item",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("product_id", sa.Integer(), sa.ForeignKey("product.id"), nullable=False),
        sa.Column("batch_number", sa.String(80), nullable=False),
        sa.Column("quantity", sa.Integer(), nullable=False),
        sa.Column("expiration_date", sa.Date()),
        sa.Column("created_at", sa.DateTime()),
        sa.Column("updated_at", sa.DateTime()),
    )

    op.create_table(
        "inventory_movement",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("product_id", sa.Integer(), sa.ForeignKey("product.id"), nullable=False),
        sa.Column("type", sa.Enum("IN", "OUT", name="movementtype"), nullable=False),
        sa.Column("quantity", sa.Integer(), nullable=False),
        sa.Column("batch_number", sa.String(80), nullable=False),
        sa.Column("reference", sa.String(120)),
        sa.Column("notes", sa.Text()),
        sa.Column(
            "created_by", sa.Integer(), sa.ForeignKey("user_account.id"), nullable=False
        ),
        sa.Column("created_at", sa.DateTime()),
    )

    op.create_table(
        "patient",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("first_name", sa.String(120), nullable=False),
        sa.Column("last_name", sa.String(120), nullable=False),
        sa.Column("email", sa.String(255)),
        sa.Column("phone", sa.String(30)),
        sa.Column("date_of_birth", sa.Date()),
        sa.Column("medical_history", json_type),
        sa.Column("dental_history", json_type),
        sa.Column("created_at", sa.DateTime()),
        sa.Column("updated_at", sa.DateTime()),
    )

    op.create_table(
        "treatment",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("patient_id", sa.Integer(), sa.ForeignKey("patient.id"), nullable=False),
        sa.Column("date", sa.DateTime(), nullable=False),
        sa.Column(
            "type",
            sa.Enum(
                "IMPLANT", "CLEANING", "EXTRACTION", "FILLING", "CROWN", "OTHER",
                name="treatmenttype",
            ),
            nullable=False,
        ),
        sa.Column("notes", sa.Text()),
        sa.Column("cost", sa.Numeric(12, 2), nullable=False),
        sa.Column(
            "created_by", sa.Integer(), sa.ForeignKey("user_account.id"), nullable=False
        ),
        sa.Column("created_at", sa.DateTime()),
        sa.Column("updated_at", sa.DateTime()),
    )

    op.create_table(
        "treatment_product",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column(
            "treatment_id",
            sa.Integer(),
            sa.ForeignKey("treatment.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("product_id", sa.Integer(), sa.ForeignKey("product.id"), nullable=False),
        sa.Column("quantity", sa.Integer(), nullable=False),
    )


def downgrade() -> None:
    op.drop_table("treatment_product")
    op.drop_table("treatment")
    op.drop_table("patient")
    op.drop_table("inventory_movement")
    op.drop_table("inventory_item")
    op.drop_table("product")
    op.drop_table("supplier")
    op.drop_index("ix_user_account_email", table_name="user_account")
    op.drop_table("user_account")
    for enum_name in ("treatmenttype", "movementtype", "productstatus", "userrole"):
        sa.Enum(name=enum_name).drop(op.get_bind(), checkfirst=True)
