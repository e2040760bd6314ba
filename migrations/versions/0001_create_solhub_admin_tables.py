"""create solhub admin tables

Revision ID: 0001
Revises: None
Create Date: 2025-10-01
"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = '0001'
down_revision = None
branch_labels = None
depends_on = None


def _timestamps():
    return [
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
    ]


def upgrade():
    op.create_table(
        'laboratories',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('slug', sa.String(100), nullable=False, unique=True),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('status', sa.String(20), nullable=False, server_default='active'),
        sa.Column('branding', sa.JSON(), nullable=False),
        sa.Column('config', sa.JSON(), nullable=False),
        sa.Column('features', sa.JSON(), nullable=False),
        *_timestamps(),
    )

    op.create_table(
        'feature_catalog',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('key', sa.String(100), nullable=False, unique=True),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('description', sa.Text()),
        sa.Column('category', sa.String(20), nullable=False, server_default='core'),
        sa.Column('required_plan', sa.String(20), nullable=False, server_default='free'),
        sa.Column('icon', sa.String(100)),
        sa.Column('component_path', sa.String(255)),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('default_value', sa.Boolean(), nullable=False, server_default=sa.false()),
        *_timestamps(),
    )

    op.create_table(
        'module_catalog',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('feature_key', sa.String(100), nullable=False),
        sa.Column('module_name', sa.String(100), nullable=False, unique=True),
        sa.Column('structure', sa.JSON(), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        *_timestamps(),
    )

    op.create_table(
        'laboratory_codes',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('laboratory_id', sa.String(36),
                  sa.ForeignKey('laboratories.id', ondelete='CASCADE'), nullable=False),
        sa.Column('code', sa.String(100), nullable=False, unique=True),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('max_uses', sa.Integer()),
        sa.Column('current_uses', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('expires_at', sa.DateTime()),
        sa.Column('created_by', sa.String(36)),
        *_timestamps(),
    )

    op.create_table(
        'profiles',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('display_name', sa.String(255)),
        sa.Column('role', sa.String(50), nullable=False, server_default='employee'),
        sa.Column('estado', sa.String(50), nullable=False, server_default='pendiente'),
        sa.Column('assigned_branch', sa.String(100)),
        sa.Column('laboratory_id', sa.String(36),
                  sa.ForeignKey('laboratories.id', ondelete='CASCADE'), nullable=False),
        *_timestamps(),
    )

    op.create_table(
        'admin_users',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('email', sa.String(255), nullable=False, unique=True),
        sa.Column('password_hash', sa.String(255)),
        sa.Column('role', sa.String(20), nullable=False, server_default='support'),
        sa.Column('is_dashboard_admin', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('last_login', sa.DateTime()),
        *_timestamps(),
    )

    op.create_table(
        'audit_logs',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('admin_id', sa.String(36)),
        sa.Column('action', sa.String(50), nullable=False),
        sa.Column('entity_type', sa.String(50), nullable=False),
        sa.Column('entity_id', sa.String(36)),
        sa.Column('changes', sa.JSON()),
        sa.Column('ip_address', sa.String(45)),
        sa.Column('user_agent', sa.String(255)),
        sa.Column('endpoint', sa.String(255)),
        sa.Column('timestamp', sa.DateTime(), nullable=False),
    )

    for table in ('laboratories', 'feature_catalog', 'module_catalog', 'laboratory_codes', 'profiles', 'admin_users'):
        op.create_index(f'ix_{table}_created_at', table, ['created_at'])
    op.create_index('ix_module_catalog_feature_key', 'module_catalog', ['feature_key'])
    op.create_index('ix_laboratory_codes_laboratory_id', 'laboratory_codes', ['laboratory_id'])
    op.create_index('ix_profiles_laboratory_id', 'profiles', ['laboratory_id'])
    op.create_index('ix_audit_logs_admin_id', 'audit_logs', ['admin_id'])


def downgrade():
    op.drop_table('audit_logs')
    op.drop_table('admin_users')
    op.drop_table('profiles')
    op.drop_table('laboratory_codes')
    op.drop_table('module_catalog')
    op.drop_table('feature_catalog')
    op.drop_table('laboratories')
