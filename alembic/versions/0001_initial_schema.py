"""Initial schema: cities, clients, ledger entries and exchange rates.

Revision ID: 0001_initial
Revises:
Create Date: 2026-10-17 00:00:00
"""

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = "0001_initial"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "cities",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("name", sa.String(length=128), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_cities")),
    )
    op.create_index(op.f("ix_cities_name"), "cities", ["name"], unique=False)

    op.create_table(
        "clients",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("city_id", sa.Uuid(), nullable=True),
        sa.Column("name", sa.String(length=128), nullable=False),
        sa.Column("phone", sa.String(length=32), nullable=True),
        sa.Column("tags", sa.JSON(), nullable=False),
        sa.Column("archived", sa.Boolean(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(
            ["city_id"],
            ["cities.id"],
            name=op.f("fk_clients_city_id_cities"),
            ondelete="SET NULL",
        ),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_clients")),
    )
    op.create_index(op.f("ix_clients_city_id"), "clients", ["city_id"], unique=False)
    op.create_index(op.f("ix_clients_name"), "clients", ["name"], unique=False)
    op.create_index(op.f("ix_clients_updated_at"), "clients", ["updated_at"], unique=False)
    op.create_index("ix_clients_city_archived", "clients", ["city_id", "archived"], unique=False)

    op.create_table(
        "ledger_entries",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("client_id", sa.Uuid(), nullable=False),
        sa.Column("type", sa.String(length=16), nullable=False),
        sa.Column("amount", sa.Numeric(24, 8), nullable=False),
        sa.Column("currency", sa.String(length=16), nullable=False),
        sa.Column("note", sa.String(length=1024), nullable=False),
        sa.Column("entry_date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("created_by", sa.String(length=128), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.CheckConstraint(
            "type IN ('DEBT_ADD', 'PAYMENT', 'ADJUSTMENT', 'NOTE')",
            name=op.f("ck_ledger_entries_type_allowed"),
        ),
        sa.CheckConstraint(
            "type != 'PAYMENT' OR amount <= 0",
            name=op.f("ck_ledger_entries_payment_not_positive"),
        ),
        sa.ForeignKeyConstraint(["client_id"], ["clients.id"], name=op.f("fk_ledger_entries_client_id_clients")),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_ledger_entries")),
    )
    op.create_index(op.f("ix_ledger_entries_client_id"), "ledger_entries", ["client_id"], unique=False)
    op.create_index(op.f("ix_ledger_entries_type"), "ledger_entries", ["type"], unique=False)
    op.create_index(
        "ix_ledger_entries_client_entry_date",
        "ledger_entries",
        ["client_id", "entry_date"],
        unique=False,
    )

    op.create_table(
        "exchange_rates",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("usd_to_uzs", sa.Numeric(24, 8), nullable=False),
        sa.Column("usd_to_rub", sa.Numeric(24, 8), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_by", sa.String(length=128), nullable=True),
        sa.CheckConstraint("usd_to_uzs > 0", name=op.f("ck_exchange_rates_usd_to_uzs_positive")),
        sa.CheckConstraint("usd_to_rub > 0", name=op.f("ck_exchange_rates_usd_to_rub_positive")),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_exchange_rates")),
    )
    op.create_index(op.f("ix_exchange_rates_updated_at"), "exchange_rates", ["updated_at"], unique=False)


def downgrade() -> None:
    op.drop_index(op.f("ix_exchange_rates_updated_at"), table_name="exchange_rates")
    op.drop_table("exchange_rates")

    op.drop_index("ix_ledger_entries_client_entry_date", table_name="ledger_entries")
    op.drop_index(op.f("ix_ledger_entries_type"), table_name="ledger_entries")
    op.drop_index(op.f("ix_ledger_entries_client_id"), table_name="ledger_entries")
    op.drop_table("ledger_entries")

    op.drop_index("ix_clients_city_archived", table_name="clients")
    op.drop_index(op.f("ix_clients_updated_at"), table_name="clients")
    op.drop_index(op.f("ix_clients_name"), table_name="clients")
    op.drop_index(op.f("ix_clients_city_id"), table_name="clients")
    op.drop_table("clients")

    op.drop_index(op.f("ix_cities_name"), table_name="cities")
    op.drop_table("cities")
