"""Initial marketplace schema

Revision ID: 001_initial_schema
Revises: 
Create Date: 2026-10-19 00:00:00.000000

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '001_initial_schema'
down_revision = None
branch_labels = None
depends_on = None


def _timestamps(with_updated: bool = True) -> list[sa.Column]:
    columns = [
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    ]
    if with_updated:
        columns.append(
            sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now())
        )
    return columns


def upgrade() -> None:
    """Create users, jobs, applications, contracts, reviews and tickets."""
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), nullable=False, autoincrement=True),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('password', sa.String(length=255), nullable=False),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('role', sa.String(length=20), nullable=False, server_default='TALENT'),
        sa.Column('phone', sa.String(length=20), nullable=True),
        sa.Column('address', sa.Text(), nullable=True),
        sa.Column('city', sa.String(length=100), nullable=True),
        sa.Column('state', sa.String(length=100), nullable=True),
        sa.Column('pincode', sa.String(length=10), nullable=True),
        sa.Column('profile_photo', sa.String(length=2048), nullable=True),
        sa.Column('aadhaar_number', sa.String(length=12), nullable=True),
        sa.Column('aadhaar_verified', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('gst_number', sa.String(length=15), nullable=True),
        sa.Column('gst_verified', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('is_banned', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('skills', sa.Text(), nullable=True),
        sa.Column('bio', sa.Text(), nullable=True),
        sa.Column('experience_years', sa.Integer(), nullable=True),
        sa.Column('hourly_rate', sa.Integer(), nullable=True),
        sa.Column('rating', sa.Float(), nullable=True),
        sa.Column('jobs_completed', sa.Integer(), nullable=False, server_default='0'),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
        sa.CheckConstraint('jobs_completed >= 0', name='ck_users_jobs_completed_non_negative'),
        sa.CheckConstraint('rating IS NULL OR (rating >= 0 AND rating <= 5)', name='ck_users_rating_range'),
    )
    op.create_index('ix_users_email', 'users', ['email'], unique=True)
    op.create_index('ix_users_role', 'users', ['role'])

    op.create_table(
        'jobs',
        sa.Column('id', sa.Integer(), nullable=False, autoincrement=True),
        sa.Column('company_id', sa.Integer(), nullable=False),
        sa.Column('title', sa.String(length=200), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('category', sa.String(length=50), nullable=False),
        sa.Column('location', sa.String(length=200), nullable=False),
        sa.Column('pay_type', sa.String(length=20), nullable=False, server_default='FIXED'),
        sa.Column('pay_amount', sa.Float(), nullable=False),
        sa.Column('start_date', sa.DateTime(timezone=True), nullable=True),
        sa.Column('end_date', sa.DateTime(timezone=True), nullable=True),
        sa.Column('status', sa.String(length=20), nullable=False, server_default='OPEN'),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(['company_id'], ['users.id'], ondelete='CASCADE'),
        sa.CheckConstraint('pay_amount >= 0', name='ck_jobs_pay_amount_non_negative'),
    )
    op.create_index('ix_jobs_company_id', 'jobs', ['company_id'])
    op.create_index('ix_jobs_title', 'jobs', ['title'])
    op.create_index('ix_jobs_status', 'jobs', ['status'])
    op.create_index('idx_jobs_status_created', 'jobs', ['status', 'created_at'])
    op.create_index('idx_jobs_category_status', 'jobs', ['category', 'status'])

    op.create_table(
        'applications',
        sa.Column('id', sa.Integer(), nullable=False, autoincrement=True),
        sa.Column('job_id', sa.Integer(), nullable=False),
        sa.Column('talent_id', sa.Integer(), nullable=False),
        sa.Column('status', sa.String(length=20), nullable=False, server_default='PENDING'),
        sa.Column('cover_letter', sa.Text(), nullable=True),
        sa.Column('proposed_rate', sa.Float(), nullable=True),
        sa.Column('estimated_days', sa.Integer(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(['job_id'], ['jobs.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['talent_id'], ['users.id'], ondelete='CASCADE'),
        sa.UniqueConstraint('job_id', 'talent_id', name='uq_applications_job_talent'),
        sa.CheckConstraint(
            'proposed_rate IS NULL OR proposed_rate >= 0',
            name='ck_applications_proposed_rate_non_negative',
        ),
        sa.CheckConstraint(
            'estimated_days IS NULL OR (estimated_days >= 1 AND estimated_days <= 365)',
            name='ck_applications_estimated_days_range',
        ),
    )
    op.create_index('idx_applications_job_status', 'applications', ['job_id', 'status'])
    op.create_index('idx_applications_talent', 'applications', ['talent_id'])

    op.create_table(
        'contracts',
        sa.Column('id', sa.Integer(), nullable=False, autoincrement=True),
        sa.Column('job_id', sa.Integer(), nullable=False),
        sa.Column('talent_id', sa.Integer(), nullable=False),
        sa.Column('company_id', sa.Integer(), nullable=False),
        sa.Column('status', sa.String(length=20), nullable=False, server_default='ACTIVE'),
        sa.Column('payment_status', sa.String(length=20), nullable=False, server_default='PENDING'),
        sa.Column('total_amount', sa.Float(), nullable=False),
        sa.Column('amount_paid', sa.Float(), nullable=False, server_default='0'),
        sa.Column('terms', sa.Text(), nullable=True),
        sa.Column('start_date', sa.DateTime(timezone=True), nullable=False),
        sa.Column('end_date', sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(['job_id'], ['jobs.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['talent_id'], ['users.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['company_id'], ['users.id'], ondelete='CASCADE'),
        sa.CheckConstraint('total_amount >= 0', name='ck_contracts_total_amount_non_negative'),
        sa.CheckConstraint('amount_paid >= 0', name='ck_contracts_amount_paid_non_negative'),
        sa.CheckConstraint('amount_paid <= total_amount', name='ck_contracts_amount_paid_le_total'),
    )
    op.create_index('ix_contracts_job_id', 'contracts', ['job_id'])
    op.create_index('ix_contracts_talent_id', 'contracts', ['talent_id'])
    op.create_index('ix_contracts_company_id', 'contracts', ['company_id'])
    op.create_index('idx_contracts_talent_status', 'contracts', ['talent_id', 'status'])

    op.create_table(
        'reviews',
        sa.Column('id', sa.Integer(), nullable=False, autoincrement=True),
        sa.Column('contract_id', sa.Integer(), nullable=False),
        sa.Column('reviewer_id', sa.Integer(), nullable=False),
        sa.Column('reviewee_id', sa.Integer(), nullable=False),
        sa.Column('rating', sa.Integer(), nullable=False),
        sa.Column('comment', sa.Text(), nullable=True),
        *_timestamps(with_updated=False),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(['contract_id'], ['contracts.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['reviewer_id'], ['users.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['reviewee_id'], ['users.id'], ondelete='CASCADE'),
        sa.UniqueConstraint('contract_id', 'reviewer_id', name='uq_reviews_contract_reviewer'),
        sa.CheckConstraint('rating >= 1 AND rating <= 5', name='ck_reviews_rating_range'),
    )
    op.create_index('ix_reviews_reviewee_id', 'reviews', ['reviewee_id'])

    op.create_table(
        'tickets',
        sa.Column('id', sa.Integer(), nullable=False, autoincrement=True),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('subject', sa.String(length=200), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('status', sa.String(length=20), nullable=False, server_default='OPEN'),
        sa.Column('priority', sa.String(length=20), nullable=False, server_default='MEDIUM'),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
    )
    op.create_index('ix_tickets_user_id', 'tickets', ['user_id'])
    op.create_index('idx_tickets_status_priority', 'tickets', ['status', 'priority'])


def downgrade() -> None:
    """Drop all marketplace tables in reverse dependency order."""
    op.drop_index('idx_tickets_status_priority', table_name='tickets')
    op.drop_index('ix_tickets_user_id', table_name='tickets')
    op.drop_table('tickets')

    op.drop_index('ix_reviews_reviewee_id', table_name='reviews')
    op.drop_table('reviews')

    op.drop_index('idx_contracts_talent_status', table_name='contracts')
    op.drop_index('ix_contracts_company_id', table_name='contracts')
    op.drop_index('ix_contracts_talent_id', table_name='contracts')
    op.drop_index('ix_contracts_job_id', table_name='contracts')
    op.drop_table('contracts')

    op.drop_index('idx_applications_talent', table_name='applications')
    op.drop_index('idx_applications_job_status', table_name='applications')
    op.drop_table('applications')

    op.drop_index('idx_jobs_category_status', table_name='jobs')
    op.drop_index('idx_jobs_status_created', table_name='jobs')
    op.drop_index('ix_jobs_status', table_name='jobs')
    op.drop_index('ix_jobs_title', table_name='jobs')
    op.drop_index('ix_jobs_company_id', table_name='jobs')
    op.drop_table('jobs')

    op.drop_index('ix_users_role', table_name='users')
    op.drop_index('ix_users_email', table_name='users')
    op.drop_table('users')
