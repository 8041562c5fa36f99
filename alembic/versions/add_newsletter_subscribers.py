"""Add newsletter_subscribers table.

Revision ID: add_newsletter_subscribers
Revises: create_results_and_inquiries
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = 'add_newsletter_subscribers'
down_revision: Union[str, None] = 'create_results_and_inquiries'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


subscriber_status = sa.Enum('Active', 'Unsubscribed', name='subscriber_status')


def upgrade() -> None:
    """Create newsletter_subscribers."""
    op.create_table(
        'newsletter_subscribers',
        sa.Column('id', sa.BigInteger(), primary_key=True, autoincrement=True),
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('status', subscriber_status, nullable=False, server_default='Active'),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )
    op.create_index('ix_newsletter_subscribers_email', 'newsletter_subscribers', ['email'])
    op.create_index('ix_newsletter_subscribers_created_at', 'newsletter_subscribers', ['created_at'])


def downgrade() -> None:
    """Drop newsletter_subscribers and its enum type."""
    op.drop_index('ix_newsletter_subscribers_created_at', table_name='newsletter_subscribers')
    op.drop_index('ix_newsletter_subscribers_email', table_name='newsletter_subscribers')
    op.drop_table('newsletter_subscribers')
    subscriber_status.drop(op.get_bind(), checkfirst=True)
