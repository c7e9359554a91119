"""Initial RFI tracker schema

Revision ID: 001
Revises:
Create Date: 2026-10-19 09:00:00.000000

"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = '001'
down_revision = None
branch_labels = None
depends_on = None


def _id() -> sa.Column:
    return sa.Column('id', sa.String(36), primary_key=True)


def _timestamps() -> list:
    return [
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
    ]


def _deleted_at() -> sa.Column:
    return sa.Column('deleted_at', sa.DateTime(), nullable=True)


def upgrade() -> None:
    """Create clients, users, projects, RFIs and their dependent tables."""

    op.create_table(
        'users',
        _id(),
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('hashed_password', sa.String(255), nullable=False),
        sa.Column('role', sa.String(20), nullable=False),
        sa.Column('active', sa.Boolean(), nullable=False),
        *_timestamps(),
        _deleted_at(),
    )
    op.create_index('ix_users_email', 'users', ['email'], unique=True)
    op.create_index('ix_users_deleted_at', 'users', ['deleted_at'])

    op.create_table(
        'clients',
        _id(),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('contact_name', sa.String(255), nullable=True),
        sa.Column('email', sa.String(255), nullable=True),
        sa.Column('phone', sa.String(50), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('active', sa.Boolean(), nullable=False),
        *_timestamps(),
        _deleted_at(),
    )
    op.create_index('ix_clients_deleted_at', 'clients', ['deleted_at'])

    op.create_table(
        'contacts',
        _id(),
        sa.Column('client_id', sa.String(36), sa.ForeignKey('clients.id'), nullable=False),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('phone', sa.String(50), nullable=True),
        sa.Column('title', sa.String(255), nullable=True),
        sa.Column('hashed_password', sa.String(255), nullable=True),
        sa.Column('role', sa.String(20), nullable=True),
        sa.Column('active', sa.Boolean(), nullable=False),
        *_timestamps(),
        _deleted_at(),
    )
    op.create_index('ix_contacts_client_id', 'contacts', ['client_id'])
    op.create_index('ix_contacts_deleted_at', 'contacts', ['deleted_at'])

    op.create_table(
        'projects',
        _id(),
        sa.Column('client_id', sa.String(36), sa.ForeignKey('clients.id'), nullable=False),
        sa.Column('manager_id', sa.String(36), sa.ForeignKey('users.id'), nullable=True),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('project_number', sa.String(50), nullable=True),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('status', sa.String(20), nullable=False),
        sa.Column('active', sa.Boolean(), nullable=False),
        *_timestamps(),
        _deleted_at(),
    )
    op.create_index('ix_projects_client_id', 'projects', ['client_id'])
    op.create_index('ix_projects_manager_id', 'projects', ['manager_id'])
    op.create_index('ix_projects_deleted_at', 'projects', ['deleted_at'])

    op.create_table(
        'rfis',
        _id(),
        sa.Column('rfi_number', sa.String(50), nullable=False),
        sa.Column('client_id', sa.String(36), sa.ForeignKey('clients.id'), nullable=False),
        sa.Column('project_id', sa.String(36), sa.ForeignKey('projects.id'), nullable=True),
        sa.Column('created_by_id', sa.String(36), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('title', sa.String(255), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('status', sa.String(20), nullable=False),
        sa.Column('priority', sa.String(20), nullable=False),
        *_timestamps(),
        _deleted_at(),
    )
    op.create_index('ix_rfis_client_id', 'rfis', ['client_id'])
    op.create_index('ix_rfis_project_id', 'rfis', ['project_id'])
    op.create_index('ix_rfis_created_by_id', 'rfis', ['created_by_id'])
    op.create_index('ix_rfis_deleted_at', 'rfis', ['deleted_at'])
    # RFI numbers are unique per project among rows that are not soft deleted
    op.create_index(
        'uq_rfis_project_number_active',
        'rfis',
        ['project_id', 'rfi_number'],
        unique=True,
        postgresql_where=sa.text('deleted_at IS NULL'),
        sqlite_where=sa.text('deleted_at IS NULL'),
    )

    op.create_table(
        'attachments',
        _id(),
        sa.Column('rfi_id', sa.String(36), sa.ForeignKey('rfis.id'), nullable=False),
        sa.Column('filename', sa.String(255), nullable=False),
        sa.Column('stored_name', sa.String(255), nullable=False, unique=True),
        sa.Column('mime_type', sa.String(100), nullable=True),
        sa.Column('size', sa.Integer(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False),
    )
    op.create_index('ix_attachments_rfi_id', 'attachments', ['rfi_id'])

    op.create_table(
        'responses',
        _id(),
        sa.Column('rfi_id', sa.String(36), sa.ForeignKey('rfis.id'), nullable=False),
        sa.Column('author_id', sa.String(36), sa.ForeignKey('users.id'), nullable=True),
        sa.Column('content', sa.Text(), nullable=False),
        *_timestamps(),
    )
    op.create_index('ix_responses_rfi_id', 'responses', ['rfi_id'])
    op.create_index('ix_responses_author_id', 'responses', ['author_id'])

    op.create_table(
        'email_logs',
        _id(),
        sa.Column('rfi_id', sa.String(36), sa.ForeignKey('rfis.id'), nullable=False),
        sa.Column('recipient', sa.String(255), nullable=False),
        sa.Column('subject', sa.String(500), nullable=True),
        sa.Column('status', sa.String(20), nullable=False),
        sa.Column('sent_at', sa.DateTime(), nullable=False),
    )
    op.create_index('ix_email_logs_rfi_id', 'email_logs', ['rfi_id'])

    op.create_table(
        'email_queue',
        _id(),
        sa.Column('rfi_id', sa.String(36), sa.ForeignKey('rfis.id'), nullable=False),
        sa.Column('recipient', sa.String(255), nullable=False),
        sa.Column('subject', sa.String(500), nullable=True),
        sa.Column('status', sa.String(20), nullable=False),
        sa.Column('scheduled_for', sa.DateTime(), nullable=False),
        sa.Column('attempts', sa.Integer(), nullable=False),
    )
    op.create_index('ix_email_queue_rfi_id', 'email_queue', ['rfi_id'])

    op.create_table(
        'project_stakeholders',
        _id(),
        sa.Column('project_id', sa.String(36), sa.ForeignKey('projects.id'), nullable=False),
        sa.Column('contact_id', sa.String(36), sa.ForeignKey('contacts.id'), nullable=False),
        sa.Column('added_by_id', sa.String(36), sa.ForeignKey('users.id'), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.UniqueConstraint('project_id', 'contact_id', name='uq_project_stakeholder'),
    )
    op.create_index('ix_project_stakeholders_project_id', 'project_stakeholders', ['project_id'])
    op.create_index('ix_project_stakeholders_contact_id', 'project_stakeholders', ['contact_id'])

    op.create_table(
        'access_requests',
        _id(),
        sa.Column('project_id', sa.String(36), sa.ForeignKey('projects.id'), nullable=False),
        sa.Column('contact_id', sa.String(36), sa.ForeignKey('contacts.id'), nullable=True),
        sa.Column('status', sa.String(20), nullable=False),
        sa.Column('message', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False),
    )
    op.create_index('ix_access_requests_project_id', 'access_requests', ['project_id'])
    op.create_index('ix_access_requests_contact_id', 'access_requests', ['contact_id'])

    op.create_table(
        'registration_tokens',
        _id(),
        sa.Column('token', sa.String(128), nullable=False, unique=True),
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('contact_id', sa.String(36), sa.ForeignKey('contacts.id'), nullable=True),
        sa.Column('expires_at', sa.DateTime(), nullable=False),
        sa.Column('used_at', sa.DateTime(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False),
    )
    op.create_index('ix_registration_tokens_contact_id', 'registration_tokens', ['contact_id'])


def downgrade() -> None:
    """Drop every table, children first."""
    for table in (
        'registration_tokens',
        'access_requests',
        'project_stakeholders',
        'email_queue',
        'email_logs',
        'responses',
        'attachments',
        'rfis',
        'projects',
        'contacts',
        'clients',
        'users',
    ):
        op.drop_table(table)
