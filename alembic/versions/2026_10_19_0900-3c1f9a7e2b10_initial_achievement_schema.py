"""initial_achievement_schema

Revision ID: 3c1f9a7e2b10
Revises:
Create Date: 2026-10-19 09:00:00.000000+00:00

"""
from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision = '3c1f9a7e2b10'
down_revision = None
branch_labels = None
depends_on = None


def _timestamps():
    return [
        sa.Column('id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
    ]


def upgrade() -> None:
    """Institutions, profiles, achievements, queries and saved candidates."""
    op.create_table(
        'institutions',
        *_timestamps(),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('email_domain', sa.String(length=255), nullable=False),
        sa.PrimaryKeyConstraint('id', name='pk_institutions'),
        sa.UniqueConstraint('name', name='uq_institutions_name'),
    )
    op.create_index('ix_institutions_id', 'institutions', ['id'], unique=False)

    op.create_table(
        'profiles',
        *_timestamps(),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('password_hash', sa.String(length=255), nullable=False),
        sa.Column('full_name', sa.String(length=255), nullable=False),
        sa.Column('role', sa.String(length=20), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        sa.Column('institution_id', postgresql.UUID(as_uuid=True), nullable=True),
        sa.ForeignKeyConstraint(
            ['institution_id'], ['institutions.id'],
            name='fk_profiles_institution_id_institutions', ondelete='SET NULL',
        ),
        sa.PrimaryKeyConstraint('id', name='pk_profiles'),
    )
    op.create_index('ix_profiles_id', 'profiles', ['id'], unique=False)
    op.create_index('ix_profiles_email', 'profiles', ['email'], unique=True)
    op.create_index('ix_profiles_institution_id', 'profiles', ['institution_id'], unique=False)

    # Admin scope: many institutions per admin
    op.create_table(
        'admin_institutions',
        sa.Column('profile_id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('institution_id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.ForeignKeyConstraint(
            ['profile_id'], ['profiles.id'],
            name='fk_admin_institutions_profile_id_profiles', ondelete='CASCADE',
        ),
        sa.ForeignKeyConstraint(
            ['institution_id'], ['institutions.id'],
            name='fk_admin_institutions_institution_id_institutions', ondelete='CASCADE',
        ),
        sa.PrimaryKeyConstraint('profile_id', 'institution_id', name='pk_admin_institutions'),
    )

    op.create_table(
        'achievements',
        *_timestamps(),
        sa.Column('student_id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('title', sa.String(length=255), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('category', sa.String(length=100), nullable=False),
        sa.Column('date_achieved', sa.Date(), nullable=False),
        sa.Column('document_url', sa.String(length=500), nullable=True),
        sa.Column('verification_status', sa.String(length=20), nullable=False),
        sa.Column('rejection_reason', sa.Text(), nullable=True),
        sa.Column('verified_by', postgresql.UUID(as_uuid=True), nullable=True),
        sa.Column('verified_at', sa.DateTime(), nullable=True),
        sa.ForeignKeyConstraint(
            ['student_id'], ['profiles.id'],
            name='fk_achievements_student_id_profiles', ondelete='CASCADE',
        ),
        sa.ForeignKeyConstraint(
            ['verified_by'], ['profiles.id'],
            name='fk_achievements_verified_by_profiles', ondelete='SET NULL',
        ),
        sa.PrimaryKeyConstraint('id', name='pk_achievements'),
    )
    op.create_index('ix_achievements_id', 'achievements', ['id'], unique=False)
    op.create_index('idx_achievements_student', 'achievements', ['student_id'], unique=False)
    op.create_index('idx_achievements_status', 'achievements', ['verification_status'], unique=False)
    op.create_index(
        'idx_achievements_status_date', 'achievements',
        ['verification_status', 'date_achieved'], unique=False,
    )
    op.create_index('idx_achievements_category', 'achievements', ['category'], unique=False)

    op.create_table(
        'queries',
        *_timestamps(),
        sa.Column('achievement_id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('student_id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('query_text', sa.Text(), nullable=False),
        sa.Column('status', sa.String(length=20), nullable=False),
        sa.Column('admin_response', sa.Text(), nullable=True),
        sa.Column('responded_by', postgresql.UUID(as_uuid=True), nullable=True),
        sa.Column('responded_at', sa.DateTime(), nullable=True),
        sa.ForeignKeyConstraint(
            ['achievement_id'], ['achievements.id'],
            name='fk_queries_achievement_id_achievements', ondelete='CASCADE',
        ),
        sa.ForeignKeyConstraint(
            ['student_id'], ['profiles.id'],
            name='fk_queries_student_id_profiles', ondelete='CASCADE',
        ),
        sa.ForeignKeyConstraint(
            ['responded_by'], ['profiles.id'],
            name='fk_queries_responded_by_profiles', ondelete='SET NULL',
        ),
        sa.PrimaryKeyConstraint('id', name='pk_queries'),
    )
    op.create_index('ix_queries_id', 'queries', ['id'], unique=False)
    op.create_index('idx_queries_achievement', 'queries', ['achievement_id'], unique=False)
    op.create_index('idx_queries_student', 'queries', ['student_id'], unique=False)
    op.create_index('idx_queries_status', 'queries', ['status'], unique=False)

    op.create_table(
        'saved_candidates',
        *_timestamps(),
        sa.Column('recruiter_id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('student_id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.ForeignKeyConstraint(
            ['recruiter_id'], ['profiles.id'],
            name='fk_saved_candidates_recruiter_id_profiles', ondelete='CASCADE',
        ),
        sa.ForeignKeyConstraint(
            ['student_id'], ['profiles.id'],
            name='fk_saved_candidates_student_id_profiles', ondelete='CASCADE',
        ),
        sa.PrimaryKeyConstraint('id', name='pk_saved_candidates'),
    )
    op.create_index('ix_saved_candidates_id', 'saved_candidates', ['id'], unique=False)
    op.create_index('idx_saved_candidates_recruiter', 'saved_candidates', ['recruiter_id'], unique=False)
    op.create_index(
        'idx_saved_candidates_recruiter_student', 'saved_candidates',
        ['recruiter_id', 'student_id'], unique=True,
    )


def downgrade() -> None:
    """Drop every table in reverse dependency order."""
    op.drop_table('saved_candidates')
    op.drop_table('queries')
    op.drop_table('achievements')
    op.drop_table('admin_institutions')
    op.drop_table('profiles')
    op.drop_table('institutions')
