"""create_users_and_job_applications

Creates the users table and the job_applications table owned by it.

Revision ID: 3f9a1c7d2e54
Revises:
Create Date: 2026-10-19 10:12:41.508113

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3f9a1c7d2e54'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create users and job_applications."""

    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), primary_key=True, nullable=False),
        sa.Column('email', sa.String(), nullable=False),
        sa.Column('hashed_password', sa.String(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )
    op.create_index('ix_users_id', 'users', ['id'])
    op.create_index('ix_users_email', 'users', ['email'], unique=True)

    op.create_table(
        'job_applications',
        sa.Column('id', sa.Integer(), primary_key=True, nullable=False),
        sa.Column('company_name', sa.String(), nullable=False),
        sa.Column('job_title', sa.String(), nullable=False),
        sa.Column(
            'status',
            sa.Enum('Applied', 'Interview', 'Rejected', 'Offer', name='applicationstatus'),
            nullable=False,
        ),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
        sa.ForeignKeyConstraint(['user_id'], ['users.id']),
    )
    op.create_index('ix_job_applications_id', 'job_applications', ['id'])
    op.create_index('ix_job_applications_company_name', 'job_applications', ['company_name'])
    op.create_index('ix_job_applications_job_title', 'job_applications', ['job_title'])
    op.create_index('ix_job_applications_status', 'job_applications', ['status'])
    op.create_index('ix_job_applications_user_id', 'job_applications', ['user_id'])
    op.create_index('ix_job_applications_created_at', 'job_applications', ['created_at'])


def downgrade() -> None:
    """Drop job_applications and users."""

    op.drop_table('job_applications')
    op.drop_table('users')

    op.execute('DROP TYPE IF EXISTS applicationstatus')
