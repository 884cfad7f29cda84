"""initial_schema

Revision ID: 4c2d8e1a9b37
Revises:
Create Date: 2025-03-11 14:20:08.118204

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = '4c2d8e1a9b37'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps():
    return [
        sa.Column('created_at', sa.TIMESTAMP(timezone=True), nullable=False, server_default=sa.text('now()')),
        sa.Column('updated_at', sa.TIMESTAMP(timezone=True), nullable=False, server_default=sa.text('now()')),
    ]


def upgrade() -> None:
    op.create_table('pipelines',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('name', sa.Text(), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id')
    )

    op.create_table('stages',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('pipeline_id', sa.Integer(), nullable=False),
        sa.Column('name', sa.Text(), nullable=False),
        sa.Column('position', sa.Integer(), nullable=True, server_default='0'),
        *_timestamps(),
        sa.ForeignKeyConstraint(['pipeline_id'], ['pipelines.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id')
    )

    op.create_table('tags',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('name', sa.Text(), nullable=False),
        sa.Column('color', sa.Text(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id')
    )

    op.create_table('contacts',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('name', sa.Text(), nullable=False),
        sa.Column('email', sa.Text(), nullable=True),
        sa.Column('phone', sa.Text(), nullable=True),
        sa.Column('stage_id', sa.Integer(), nullable=False),
        sa.Column('deal_value', sa.Float(), nullable=True, server_default='0'),
        sa.Column('tag_id', sa.Integer(), nullable=True),
        sa.Column('status', sa.Text(), nullable=True, server_default='open'),
        sa.Column('registered_on', sa.Date(), nullable=True),
        sa.Column('closed_on', sa.Date(), nullable=True),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('confidence', sa.Integer(), nullable=True),
        sa.Column('employee_id', sa.Integer(), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(['stage_id'], ['stages.id'], ),
        sa.ForeignKeyConstraint(['tag_id'], ['tags.id'], ),
        sa.PrimaryKeyConstraint('id')
    )

    op.create_table('messages',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('content', sa.Text(), nullable=False),
        sa.Column('sender_id', sa.Integer(), nullable=False),
        sa.Column('receiver_id', sa.Integer(), nullable=True),
        sa.Column('department_id', sa.Integer(), nullable=True),
        sa.Column('company_id', sa.Integer(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id')
    )

    op.create_table('tasks',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('title', sa.Text(), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('status', sa.Text(), nullable=True, server_default='pending'),
        sa.Column('due_date', sa.Date(), nullable=True),
        sa.Column('employee_id', sa.Integer(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id')
    )

    op.create_table('goals',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('title', sa.Text(), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('start_date', sa.Date(), nullable=True),
        sa.Column('end_date', sa.Date(), nullable=True),
        sa.Column('target_amount', sa.Float(), nullable=True),
        sa.Column('achieved', sa.Float(), nullable=True, server_default='0'),
        sa.Column('item_id', sa.Integer(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id')
    )

    op.create_table('projects',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('name', sa.Text(), nullable=False),
        sa.Column('amount', sa.Float(), nullable=True),
        sa.Column('start_date', sa.Date(), nullable=True),
        sa.Column('expected_end_date', sa.Date(), nullable=True),
        sa.Column('end_date', sa.Date(), nullable=True),
        sa.Column('priority', sa.Text(), nullable=True),
        sa.Column('manager_id', sa.Integer(), nullable=True),
        sa.Column('status', sa.Text(), nullable=True, server_default='planning'),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id')
    )

    op.create_index('idx_contacts_stage_id', 'contacts', ['stage_id'], unique=False)
    op.create_index('idx_stages_pipeline_id', 'stages', ['pipeline_id'], unique=False)
    op.create_index('idx_messages_company_id', 'messages', ['company_id'], unique=False)
    op.create_index('idx_tasks_status', 'tasks', ['status'], unique=False)
    op.create_index('idx_projects_status', 'projects', ['status'], unique=False)

    op.execute("""
        CREATE OR REPLACE VIEW stages_with_contacts AS
        SELECT
            c.name AS contact_name,
            c.id AS contact_id,
            c.phone,
            c.description,
            s.id,
            s.name,
            s.position,
            s.created_at
        FROM contacts c
        JOIN stages s ON c.stage_id = s.id
    """)


def downgrade() -> None:
    op.execute("DROP VIEW IF EXISTS stages_with_contacts")

    op.drop_index('idx_projects_status', table_name='projects')
    op.drop_index('idx_tasks_status', table_name='tasks')
    op.drop_index('idx_messages_company_id', table_name='messages')
    op.drop_index('idx_stages_pipeline_id', table_name='stages')
    op.drop_index('idx_contacts_stage_id', table_name='contacts')

    # Reverse order of creation because of foreign keys
    op.drop_table('projects')
    op.drop_table('goals')
    op.drop_table('tasks')
    op.drop_table('messages')
    op.drop_table('contacts')
    op.drop_table('tags')
    op.drop_table('stages')
    op.drop_table('pipelines')
