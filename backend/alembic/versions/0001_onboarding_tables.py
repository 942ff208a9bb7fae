"""Onboarding tables: submissions, requests, approvals, risk profiles.

Revision ID: 0001
Revises: (none)
Create Date: 2026-10-19

Run with:
    cd backend && alembic upgrade head
"""

revision = "0001"
down_revision = None
branch_labels = None
depends_on = None

from alembic import op
import sqlalchemy as sa


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    ]


def _step_flags() -> list[sa.Column]:
    return [
        sa.Column(f"step_{n}_completed", sa.Boolean(), nullable=False, server_default=sa.false())
        for n in range(1, 5)
    ]


def upgrade() -> None:
    # ── Company (KYB) submissions ────────────────────────────

    op.create_table(
        "kyb_submissions",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("user_id", sa.String(36), nullable=False),
        # step 1
        sa.Column("company_name", sa.String(255)),
        sa.Column("trades_under_different_name", sa.Boolean()),
        sa.Column("trading_name", sa.String(255)),
        sa.Column("company_registration_number", sa.String(100)),
        sa.Column("company_registration_date", sa.String(10)),
        sa.Column("entity_type", sa.String(50)),
        sa.Column("website_or_business_channel", sa.Text()),
        sa.Column("country_of_registration", sa.String(100)),
        # step 2
        sa.Column("industry", sa.String(255)),
        sa.Column("sub_industry", sa.String(255)),
        sa.Column("goods_or_services", sa.String(50)),
        # step 3
        sa.Column("incoming_payments_monthly_euro", sa.String(50)),
        sa.Column("incoming_payment_countries", sa.Text()),
        sa.Column("incoming_transaction_amount", sa.String(50)),
        sa.Column("outgoing_payments_monthly_euro", sa.String(50)),
        sa.Column("outgoing_payment_countries", sa.Text()),
        sa.Column("outgoing_transaction_amount", sa.String(50)),
        # step 4
        sa.Column("applicant_first_name", sa.String(100)),
        sa.Column("applicant_last_name", sa.String(100)),
        sa.Column("applicant_email", sa.String(255)),
        *_step_flags(),
        sa.Column("status", sa.String(20), nullable=False, server_default="in_progress"),
        sa.Column("results", sa.JSON()),
        sa.Column("completed_at", sa.DateTime(timezone=True)),
        *_timestamps(),
    )
    op.create_index("ix_kyb_submissions_user_id", "kyb_submissions", ["user_id"], unique=True)
    op.create_index(
        "ix_kyb_submissions_company_registration_number",
        "kyb_submissions",
        ["company_registration_number"],
    )

    # ── Individual (KYC) submissions ─────────────────────────

    op.create_table(
        "kyc_submissions",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("user_id", sa.String(36), nullable=False),
        sa.Column("full_name", sa.String(100)),
        sa.Column("date_of_birth", sa.String(10)),
        sa.Column("place_of_birth", sa.String(100)),
        sa.Column("nationality", sa.String(100)),
        sa.Column("additional_citizenships", sa.String(255)),
        sa.Column("residential_address", sa.String(200)),
        sa.Column("length_of_residence", sa.String(50)),
        sa.Column("contact_email", sa.String(255)),
        sa.Column("contact_phone", sa.String(20)),
        sa.Column("document_type", sa.String(50)),
        sa.Column("document_number", sa.String(50)),
        sa.Column("issuing_country", sa.String(100)),
        sa.Column("document_expiry_date", sa.String(10)),
        sa.Column("document_reference", sa.String(255)),
        sa.Column("is_us_person", sa.Boolean()),
        sa.Column("tax_residency_countries", sa.String(200)),
        sa.Column("tax_identification_numbers", sa.String(100)),
        sa.Column("occupation", sa.String(100)),
        sa.Column("employer", sa.String(100)),
        sa.Column("annual_income", sa.String(20)),
        sa.Column("source_of_funds", sa.Text()),
        sa.Column("source_of_wealth", sa.Text()),
        *_step_flags(),
        sa.Column("status", sa.String(20), nullable=False, server_default="in_progress"),
        sa.Column("completed_at", sa.DateTime(timezone=True)),
        *_timestamps(),
    )
    op.create_index("ix_kyc_submissions_user_id", "kyc_submissions", ["user_id"], unique=True)

    # ── Verification requests ────────────────────────────────

    op.create_table(
        "kyb_requests",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("requester_user_id", sa.String(36), nullable=False),
        sa.Column("requester_email", sa.String(255), nullable=False),
        sa.Column("company_registration_number", sa.String(100), nullable=False),
        sa.Column("requested_user_id", sa.String(36)),
        sa.Column("status", sa.String(20), nullable=False, server_default="pending"),
        *_timestamps(),
    )
    op.create_index("ix_kyb_requests_requester_user_id", "kyb_requests", ["requester_user_id"])
    op.create_index(
        "ix_kyb_requests_company_registration_number",
        "kyb_requests",
        ["company_registration_number"],
    )

    op.create_table(
        "kyb_approved_requests",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("user_id", sa.String(36), nullable=False),
        sa.Column("requested_user_id", sa.String(36), nullable=False),
        sa.Column("company_registration_number", sa.String(100)),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True)),
        sa.UniqueConstraint(
            "user_id",
            "requested_user_id",
            "company_registration_number",
            name="uq_kyb_approved_requests_pair",
        ),
    )
    op.create_index("ix_kyb_approved_requests_user_id", "kyb_approved_requests", ["user_id"])

    # ── Risk profiles (written by the screening pipeline) ────

    op.create_table(
        "company_risk_profiles",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column(
            "submission_id",
            sa.String(36),
            sa.ForeignKey("kyb_submissions.id"),
            nullable=False,
        ),
        sa.Column("registration_number", sa.String(100), nullable=False),
        sa.Column("company_name", sa.String(255)),
        sa.Column("legal_form", sa.String(100)),
        sa.Column("address", sa.String(255)),
        sa.Column("city", sa.String(100)),
        sa.Column("region", sa.String(100)),
        sa.Column("registration_date", sa.String(10)),
        sa.Column("is_active", sa.Boolean()),
        sa.Column("closed_status", sa.String(100)),
        sa.Column("terminated_date", sa.String(10)),
        sa.Column("risk_level", sa.String(20)),
        sa.Column("overall_risk_level", sa.String(20)),
        sa.Column("is_sanctioned", sa.Boolean()),
        sa.Column("sanctions_match", sa.Boolean()),
        sa.Column("sanction_details", sa.JSON()),
        sa.Column("sanction_sources", sa.JSON()),
        sa.Column("is_pep", sa.Boolean()),
        sa.Column("pep_details", sa.JSON()),
        sa.Column("has_insolvency", sa.Boolean()),
        sa.Column("has_insolvency_history", sa.Boolean()),
        sa.Column("insolvency_type", sa.String(100)),
        sa.Column("insolvency_details", sa.Text()),
        sa.Column("insolvency_started_date", sa.String(10)),
        sa.Column("insolvency_ended_date", sa.String(10)),
        sa.Column("adverse_media_mentions", sa.Integer()),
        sa.Column("adverse_media_risk_score", sa.Float()),
        sa.Column("adverse_media_summary", sa.Text()),
        sa.Column("adverse_media_links", sa.JSON()),
        sa.Column("tax_rating", sa.String(50)),
        sa.Column("tax_status_explanation", sa.Text()),
        sa.Column("vies_valid", sa.Boolean()),
        sa.Column("vies_address", sa.String(255)),
        sa.Column("profile_data", sa.JSON()),
        sa.Column("checked_at", sa.DateTime(timezone=True)),
    )
    op.create_index(
        "ix_company_risk_profiles_submission_id",
        "company_risk_profiles",
        ["submission_id"],
    )


def downgrade() -> None:
    op.drop_table("company_risk_profiles")
    op.drop_table("kyb_approved_requests")
    op.drop_table("kyb_requests")
    op.drop_table("kyc_submissions")
    op.drop_table("kyb_submissions")
