from alembic import op
import sqlalchemy as sa

revision = "0001_init"
down_revision = None
branch_labels = None
depends_on = None

def _created_at():
    return sa.Column("created_at", sa.DateTime(), server_default=sa.text("now()"), nullable=True)

def upgrade():
    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("username", sa.String(length=64), nullable=False),
        sa.Column("password_hash", sa.String(length=255), nullable=False),
        sa.Column("role", sa.String(length=16), nullable=False, server_default="user"),
        _created_at(),
    )
    op.create_index("ix_users_username", "users", ["username"], unique=True)

    op.create_table(
        "members",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(length=128), nullable=False),
        sa.Column("phone", sa.String(length=32), nullable=False, server_default=""),
        sa.Column("joined_date", sa.String(length=10), nullable=False),
        _created_at(),
    )
    op.create_index("ix_members_name", "members", ["name"], unique=False)

    op.create_table(
        "savings_transactions",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("member_id", sa.Integer(), sa.ForeignKey("members.id", ondelete="CASCADE"), nullable=False),
        sa.Column("fiscal_year", sa.String(length=9), nullable=False),
        sa.Column("date_key", sa.String(length=10), nullable=False),
        sa.Column("kind", sa.String(length=16), nullable=False),
        sa.Column("amount", sa.Numeric(14, 2), nullable=False),
        sa.Column("note", sa.String(length=256), nullable=True),
        _created_at(),
    )
    op.create_index("ix_savings_transactions_member_id", "savings_transactions", ["member_id"], unique=False)
    op.create_index("ix_savings_transactions_fiscal_year", "savings_transactions", ["fiscal_year"], unique=False)
    op.create_index("ix_savings_transactions_identity", "savings_transactions", ["member_id", "fiscal_year", "date_key"], unique=False)

    op.create_table(
        "loan_transactions",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("member_id", sa.Integer(), sa.ForeignKey("members.id", ondelete="CASCADE"), nullable=False),
        sa.Column("fiscal_year", sa.String(length=9), nullable=False),
        sa.Column("date_key", sa.String(length=10), nullable=False),
        sa.Column("kind", sa.String(length=16), nullable=False),
        sa.Column("amount", sa.Numeric(14, 2), nullable=False),
        _created_at(),
    )
    op.create_index("ix_loan_transactions_member_id", "loan_transactions", ["member_id"], unique=False)
    op.create_index("ix_loan_transactions_fiscal_year", "loan_transactions", ["fiscal_year"], unique=False)
    op.create_index("ix_loan_transactions_identity", "loan_transactions", ["member_id", "fiscal_year", "date_key"], unique=False)

    op.create_table(
        "group_transactions",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("fiscal_year", sa.String(length=9), nullable=False),
        sa.Column("date_key", sa.String(length=10), nullable=False),
        sa.Column("kind", sa.String(length=16), nullable=False),
        sa.Column("amount", sa.Numeric(14, 2), nullable=False),
        sa.Column("note", sa.String(length=256), nullable=True),
        _created_at(),
    )
    op.create_index("ix_group_transactions_fiscal_year", "group_transactions", ["fiscal_year"], unique=False)

    op.create_table(
        "ledger_settings",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("savings_interest_rate", sa.Numeric(8, 4), nullable=False, server_default="5.0"),
        sa.Column("loan_interest_rate", sa.Numeric(8, 4), nullable=False, server_default="7.0"),
        sa.Column("fiscal_year_start", sa.String(length=9), nullable=True),
        sa.Column("currency_symbol", sa.String(length=8), nullable=False, server_default="Rs."),
        _created_at(),
    )

    op.create_table(
        "fiscal_years",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("label", sa.String(length=9), nullable=False),
        _created_at(),
    )
    op.create_index("ix_fiscal_years_label", "fiscal_years", ["label"], unique=True)

    op.create_table(
        "audit_logs",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("created_at", sa.DateTime(), server_default=sa.text("now()"), nullable=True),
        sa.Column("username", sa.String(length=64), nullable=False),
        sa.Column("action", sa.String(length=64), nullable=False),
        sa.Column("collection", sa.String(length=32), nullable=False),
        sa.Column("record_id", sa.Integer(), nullable=True),
        sa.Column("details", sa.JSON(), nullable=True),
    )
    op.create_index("ix_audit_logs_created_at", "audit_logs", ["created_at"], unique=False)
    op.create_index("ix_audit_logs_username", "audit_logs", ["username"], unique=False)
    op.create_index("ix_audit_logs_action", "audit_logs", ["action"], unique=False)
    op.create_index("ix_audit_logs_collection", "audit_logs", ["collection"], unique=False)
    op.create_index("ix_audit_logs_record_id", "audit_logs", ["record_id"], unique=False)
    op.create_index("ix_audit_logs_record", "audit_logs", ["collection", "record_id"], unique=False)

def downgrade():
    op.drop_table("audit_logs")
    op.drop_index("ix_fiscal_years_label", table_name="fiscal_years")
    op.drop_table("fiscal_years")
    op.drop_table("ledger_settings")
    op.drop_table("group_transactions")
    op.drop_table("loan_transactions")
    op.drop_table("savings_transactions")
    op.drop_table("members")
    op.drop_index("ix_users_username", table_name="users")
    op.drop_table("users")
