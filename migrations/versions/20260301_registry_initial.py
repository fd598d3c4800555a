"""registry: certificados, issuers, estado, eventos e contas

Revision ID: 20260301_registry_initial
Revises:
Create Date: 2026-03-01 12:00:00
"""
from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa

revision: str = "20260301_registry_initial"
down_revision: Union[str, Sequence[str], None] = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "accounts",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("identity", sa.String(42), nullable=False),
        sa.Column("hashed_password", sa.String(255), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_accounts")),
    )
    op.create_index(op.f("ix_accounts_identity"), "accounts", ["identity"], unique=True)

    op.create_table(
        "certificates",
        sa.Column("certificate_id", sa.String(66), nullable=False),
        sa.Column("recipient_name", sa.Text(), nullable=False),
        sa.Column("course_name", sa.Text(), nullable=False),
        sa.Column("issuing_institution", sa.Text(), nullable=False),
        sa.Column("issue_date", sa.BigInteger(), nullable=False),
        sa.Column("certificate_hash", sa.Text(), nullable=False),
        sa.Column("is_valid", sa.Boolean(), nullable=False),
        sa.Column("issuer", sa.String(42), nullable=False),
        sa.PrimaryKeyConstraint("certificate_id", name=op.f("pk_certificates")),
    )
    op.create_index(op.f("ix_certificates_issuer"), "certificates", ["issuer"], unique=False)

    op.create_table(
        "issuers",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("identity", sa.String(42), nullable=False),
        sa.Column("authorized", sa.Boolean(), nullable=False),
        sa.Column("issued_count", sa.Integer(), nullable=False),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_issuers")),
    )
    op.create_index(op.f("ix_issuers_identity"), "issuers", ["identity"], unique=True)

    op.create_table(
        "issuer_certificates",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("issuer_id", sa.Integer(), nullable=False),
        sa.Column("certificate_id", sa.String(66), nullable=False),
        sa.ForeignKeyConstraint(["issuer_id"], ["issuers.id"],
                                name=op.f("fk_issuer_certificates_issuer_id_issuers")),
        sa.ForeignKeyConstraint(["certificate_id"], ["certificates.certificate_id"],
                                name=op.f("fk_issuer_certificates_certificate_id_certificates")),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_issuer_certificates")),
        sa.UniqueConstraint("certificate_id", name=op.f("uq_issuer_certificates_certificate_id")),
    )
    op.create_index(op.f("ix_issuer_certificates_issuer_id"), "issuer_certificates", ["issuer_id"], unique=False)

    op.create_table(
        "registry_state",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("owner", sa.String(42), nullable=False),
        sa.Column("total_certificates", sa.Integer(), nullable=False),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_registry_state")),
    )

    op.create_table(
        "registry_events",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("name", sa.String(40), nullable=False),
        sa.Column("key", sa.String(66), nullable=False),
        sa.Column("args", sa.JSON(), nullable=False),
        sa.Column("caller", sa.String(42), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_registry_events")),
    )
    op.create_index(op.f("ix_registry_events_name"), "registry_events", ["name"], unique=False)
    op.create_index(op.f("ix_registry_events_key"), "registry_events", ["key"], unique=False)


def downgrade() -> None:
    op.drop_table("registry_events")
    op.drop_table("registry_state")
    op.drop_table("issuer_certificates")
    op.drop_table("issuers")
    op.drop_table("certificates")
    op.drop_table("accounts")
