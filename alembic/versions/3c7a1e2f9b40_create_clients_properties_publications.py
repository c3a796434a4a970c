"""create clients, properties, publications

Revision ID: 3c7a1e2f9b40
Revises:
Create Date: 2025-06-23 10:12:41.204117
"""
from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "3c7a1e2f9b40"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

TIME_SLOT_ENUM = "time_slot"
STATUS_ENUM = "publication_status"


def upgrade() -> None:
    op.create_table(
        "clients",
        sa.Column("id", sa.String(length=64), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_table(
        "properties",
        sa.Column("id", sa.String(length=64), nullable=False),
        sa.Column("client_id", sa.String(length=64), nullable=False),
        sa.Column("address", sa.String(length=255), nullable=False),
        sa.Column("type", sa.String(length=64), nullable=False),
        sa.Column("rooms", sa.Integer(), nullable=False),
        sa.Column("size", sa.Float(), nullable=False),
        sa.Column("created_date", sa.Date(), nullable=False),
        sa.CheckConstraint("rooms > 0", name="ck_property_rooms_positive"),
        sa.CheckConstraint("size > 0", name="ck_property_size_positive"),
        sa.ForeignKeyConstraint(["client_id"], ["clients.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_properties_client_id"), "properties", ["client_id"], unique=False)

    op.create_table(
        "publications",
        sa.Column("id", sa.String(length=64), nullable=False),
        sa.Column("property_id", sa.String(length=64), nullable=False),
        sa.Column("client_id", sa.String(length=64), nullable=False),
        sa.Column("date", sa.Date(), nullable=False),
        sa.Column(
            "time_slot",
            sa.Enum("morning", "afternoon", "evening", name=TIME_SLOT_ENUM),
            nullable=False,
        ),
        sa.Column(
            "status",
            sa.Enum("published", "scheduled", name=STATUS_ENUM),
            nullable=False,
            server_default="published",
        ),
        sa.ForeignKeyConstraint(["client_id"], ["clients.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["property_id"], ["properties.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        # one publication per client per day
        sa.UniqueConstraint("client_id", "date", name="uq_publication_client_date"),
    )
    op.create_index(op.f("ix_publications_client_id"), "publications", ["client_id"], unique=False)
    op.create_index(op.f("ix_publications_property_id"), "publications", ["property_id"], unique=False)


def downgrade() -> None:
    op.drop_index(op.f("ix_publications_property_id"), table_name="publications")
    op.drop_index(op.f("ix_publications_client_id"), table_name="publications")
    op.drop_table("publications")
    sa.Enum(name=STATUS_ENUM).drop(op.get_bind(), checkfirst=True)
    sa.Enum(name=TIME_SLOT_ENUM).drop(op.get_bind(), checkfirst=True)

    op.drop_index(op.f("ix_properties_client_id"), table_name="properties")
    op.drop_table("properties")
    op.drop_table("clients")
