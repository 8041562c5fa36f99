"""Create results, contact_messages and admission_inquiries tables.

Revision ID: create_results_and_inquiries
Revises:
Create Date: 2026-10-19

The unique constraint on (roll_no, class_code, exam_type) lets the database
reject a second result for the same exam even when two admins submit at once.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = 'create_results_and_inquiries'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


exam_type = sa.Enum('Quarterly', 'Half-yearly', 'Annual', name='exam_type')
result_status = sa.Enum('Pass', 'Fail', name='result_status')
contact_status = sa.Enum('unread', 'read', name='contact_status')
admission_status = sa.Enum('pending', 'reviewed', 'contacted', 'admitted', name='admission_status')


def _timestamp(name: str) -> sa.Column:
    return sa.Column(name, sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False)


def upgrade() -> None:
    """Create tables."""
    op.create_table(
        'results',
        sa.Column('id', sa.BigInteger(), primary_key=True, autoincrement=True),
        sa.Column('student_name', sa.String(255), nullable=False),
        sa.Column('roll_no', sa.String(6), nullable=False),
        sa.Column('class', sa.String(50), nullable=False),
        sa.Column('class_code', sa.String(50), nullable=False),
        sa.Column('exam_type', exam_type, nullable=True),
        sa.Column('result_status', result_status, nullable=False),
        sa.Column('grade', sa.String(10), nullable=True),
        sa.Column('subjects', postgresql.JSONB(), server_default=sa.text("'[]'::jsonb"), nullable=False),
        _timestamp('created_at'),
        _timestamp('updated_at'),
        sa.UniqueConstraint('roll_no', 'class_code', 'exam_type', name='uq_results_roll_class_exam'),
    )
    op.create_index('ix_results_roll_no', 'results', ['roll_no'])
    op.create_index('ix_results_class_code', 'results', ['class_code'])
    op.create_index('ix_results_created_at', 'results', ['created_at'])

    op.create_table(
        'contact_messages',
        sa.Column('id', sa.BigInteger(), primary_key=True, autoincrement=True),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('phone', sa.String(50), nullable=False),
        sa.Column('subject', sa.String(255), nullable=False),
        sa.Column('message', sa.Text(), nullable=False),
        sa.Column('status', contact_status, nullable=False, server_default='unread'),
        _timestamp('created_at'),
    )
    op.create_index('ix_contact_messages_created_at', 'contact_messages', ['created_at'])

    op.create_table(
        'admission_inquiries',
        sa.Column('id', sa.BigInteger(), primary_key=True, autoincrement=True),
        sa.Column('student_name', sa.String(255), nullable=False),
        sa.Column('parent_name', sa.String(255), nullable=False),
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('phone', sa.String(50), nullable=False),
        sa.Column('class_interested', sa.String(50), nullable=False),
        sa.Column('subject', sa.String(255), nullable=False),
        sa.Column('message', sa.Text(), nullable=False),
        sa.Column('status', admission_status, nullable=False, server_default='pending'),
        _timestamp('created_at'),
    )
    op.create_index('ix_admission_inquiries_created_at', 'admission_inquiries', ['created_at'])


def downgrade() -> None:
    """Drop tables and enum types."""
    op.drop_table('admission_inquiries')
    op.drop_table('contact_messages')
    op.drop_table('results')
    bind = op.get_bind()
    for enum_type in (admission_status, contact_status, result_status, exam_type):
        enum_type.drop(bind, checkfirst=True)
