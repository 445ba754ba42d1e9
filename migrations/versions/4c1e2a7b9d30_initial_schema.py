"""Initial schema: profiles, roster, catalog, routines, session logs, health, calendar, notifications

Revision ID: 4c1e2a7b9d30
Revises:
Create Date: 2026-10-16 09:12:00.000000

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '4c1e2a7b9d30'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        'profiles',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('role', sa.String(length=10), nullable=False),
        sa.Column('full_name', sa.String(length=150), nullable=False),
        sa.Column('first_name', sa.String(length=100)),
        sa.Column('last_name', sa.String(length=100)),
        sa.Column('email', sa.String(length=120), nullable=False),
        sa.Column('password_hash', sa.String(length=255)),
        sa.Column('motivation_style', sa.String(length=50)),
        sa.Column('training_frequency_goal', sa.SmallInteger()),
        sa.Column('current_streak_weeks', sa.SmallInteger()),
        sa.Column('longest_streak_weeks', sa.SmallInteger()),
        sa.Column('prefers_metric_units', sa.Boolean()),
        sa.Column('created_at', sa.DateTime()),
        sa.Column('updated_at', sa.DateTime()),
        sa.CheckConstraint("role IN ('pt','client')", name='ck_profiles_role'),
        sa.CheckConstraint(
            "training_frequency_goal IS NULL OR (training_frequency_goal > 0 AND training_frequency_goal <= 14)",
            name='ck_profiles_training_goal',
        ),
    )
    op.create_index('ix_profiles_email', 'profiles', ['email'], unique=True)
    op.create_index('ix_profiles_role', 'profiles', ['role'])

    op.create_table(
        'pt_clients',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('pt_id', sa.Integer(), sa.ForeignKey('profiles.id', ondelete='CASCADE'), nullable=False),
        sa.Column('client_id', sa.Integer(), sa.ForeignKey('profiles.id', ondelete='CASCADE'), nullable=False),
        sa.Column('status', sa.String(length=20), nullable=False),
        sa.Column('assigned_at', sa.DateTime()),
        sa.Column('archived_at', sa.DateTime()),
        sa.CheckConstraint("status IN ('active','inactive','archived')", name='ck_pt_clients_status'),
        sa.UniqueConstraint('pt_id', 'client_id', name='uq_pt_clients_pair'),
    )
    op.create_index('ix_pt_clients_pt_id', 'pt_clients', ['pt_id'])
    op.create_index('ix_pt_clients_client_id', 'pt_clients', ['client_id'])
    op.create_index('ix_pt_clients_status', 'pt_clients', ['status'])

    op.create_table(
        'exercises_catalog',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('pt_id', sa.Integer(), sa.ForeignKey('profiles.id', ondelete='CASCADE'), nullable=False),
        sa.Column('name', sa.String(length=150), nullable=False),
        sa.Column('name_key', sa.String(length=150), nullable=False),
        sa.Column('primary_muscle_group', sa.String(length=50)),
        sa.Column('secondary_muscle_group', sa.String(length=50)),
        sa.Column('equipment_required', sa.String(length=100)),
        sa.Column('default_rest_seconds', sa.Integer()),
        sa.Column('instruction_notes', sa.Text()),
        sa.Column('video_link', sa.String(length=255)),
        sa.Column('created_at', sa.DateTime()),
        sa.Column('updated_at', sa.DateTime()),
        sa.CheckConstraint('default_rest_seconds IS NULL OR default_rest_seconds >= 0', name='ck_catalog_rest'),
        # One entry per PT and case-folded name; insert-or-get relies on it.
        sa.UniqueConstraint('pt_id', 'name_key', name='uq_exercises_catalog_pt_name_key'),
    )
    op.create_index('ix_exercises_catalog_pt_id', 'exercises_catalog', ['pt_id'])

    op.create_table(
        'routines',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('pt_id', sa.Integer(), sa.ForeignKey('profiles.id', ondelete='CASCADE'), nullable=False),
        sa.Column('client_id', sa.Integer(), sa.ForeignKey('profiles.id', ondelete='CASCADE'), nullable=False),
        sa.Column('routine_name', sa.String(length=150), nullable=False),
        sa.Column('description', sa.Text()),
        sa.Column('goal_focus', sa.String(length=100)),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('start_date', sa.Date()),
        sa.Column('end_date', sa.Date()),
        sa.Column('created_at', sa.DateTime()),
        sa.Column('updated_at', sa.DateTime()),
    )
    op.create_index('ix_routines_pt_id', 'routines', ['pt_id'])
    op.create_index('idx_routines_client_active', 'routines', ['client_id', 'is_active'])

    op.create_table(
        'routine_exercises',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('routine_id', sa.Integer(), sa.ForeignKey('routines.id', ondelete='CASCADE'), nullable=False),
        sa.Column('exercise_id', sa.Integer(), sa.ForeignKey('exercises_catalog.id', ondelete='RESTRICT'), nullable=False),
        sa.Column('position', sa.Integer(), nullable=False),
        sa.Column('prescribed_sets', sa.SmallInteger()),
        sa.Column('prescribed_reps_min', sa.SmallInteger()),
        sa.Column('prescribed_reps_max', sa.SmallInteger()),
        sa.Column('prescribed_weight', sa.Float()),
        sa.Column('prescribed_rest_seconds', sa.Integer()),
        sa.Column('notes', sa.Text()),
        sa.Column('created_at', sa.DateTime()),
        sa.Column('updated_at', sa.DateTime()),
        sa.CheckConstraint('position >= 0', name='ck_routine_exercises_position'),
    )
    op.create_index('idx_routine_exercises_routine_position', 'routine_exercises', ['routine_id', 'position'])

    op.create_table(
        'routine_exercise_sets',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('routine_exercise_id', sa.Integer(),
                  sa.ForeignKey('routine_exercises.id', ondelete='CASCADE'), nullable=False),
        sa.Column('set_number', sa.SmallInteger(), nullable=False),
        sa.Column('target_reps', sa.SmallInteger()),
        sa.Column('target_rep_range', sa.String(length=20)),
        sa.Column('target_weight', sa.Float()),
        sa.Column('target_rest_seconds', sa.Integer()),
        sa.Column('created_at', sa.DateTime()),
        sa.Column('updated_at', sa.DateTime()),
        sa.CheckConstraint('set_number > 0', name='ck_routine_sets_number'),
        sa.UniqueConstraint('routine_exercise_id', 'set_number', name='uq_routine_sets_number'),
    )

    op.create_table(
        'session_logs',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('routine_id', sa.Integer(), sa.ForeignKey('routines.id', ondelete='SET NULL')),
        sa.Column('pt_id', sa.Integer(), sa.ForeignKey('profiles.id', ondelete='SET NULL')),
        sa.Column('client_id', sa.Integer(), sa.ForeignKey('profiles.id', ondelete='CASCADE'), nullable=False),
        sa.Column('performed_at', sa.DateTime(), nullable=False),
        sa.Column('duration_seconds', sa.Integer()),
        sa.Column('client_notes', sa.Text()),
        sa.Column('perceived_effort', sa.Float()),
        sa.Column('created_at', sa.DateTime()),
    )
    op.create_index('idx_session_logs_client_performed', 'session_logs', ['client_id', 'performed_at'])
    op.create_index('idx_session_logs_routine_performed', 'session_logs', ['routine_id', 'performed_at'])

    op.create_table(
        'session_log_sets',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('session_log_id', sa.Integer(), sa.ForeignKey('session_logs.id', ondelete='CASCADE'), nullable=False),
        sa.Column('exercise_id', sa.Integer(), sa.ForeignKey('exercises_catalog.id', ondelete='RESTRICT'), nullable=False),
        sa.Column('set_number', sa.SmallInteger(), nullable=False),
        sa.Column('logged_weight', sa.Float()),
        sa.Column('logged_reps', sa.SmallInteger()),
        sa.Column('logged_rpe', sa.Float()),
        sa.Column('actual_rest_seconds', sa.Integer()),
        sa.Column('is_personal_best', sa.Boolean()),
        sa.Column('created_at', sa.DateTime()),
        sa.CheckConstraint('set_number > 0', name='ck_session_sets_number'),
    )
    op.create_index('idx_session_log_sets_session', 'session_log_sets', ['session_log_id', 'set_number'])

    op.create_table(
        'client_health_logs',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('client_id', sa.Integer(), sa.ForeignKey('profiles.id', ondelete='CASCADE'), nullable=False),
        sa.Column('logged_at', sa.DateTime(), nullable=False),
        sa.Column('injury_title', sa.String(length=150), nullable=False),
        sa.Column('details', sa.Text()),
        sa.Column('status', sa.String(length=20), nullable=False),
        sa.Column('severity', sa.String(length=20)),
        sa.Column('created_by_pt', sa.Integer(), sa.ForeignKey('profiles.id', ondelete='SET NULL')),
        sa.Column('resolved_at', sa.DateTime()),
        sa.CheckConstraint("status IN ('ACUTE','LINGERING','RESOLVED')", name='ck_health_logs_status'),
    )
    op.create_index('idx_health_logs_client_status_logged', 'client_health_logs',
                    ['client_id', 'status', 'logged_at'])

    op.create_table(
        'pt_calendar_events',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('pt_id', sa.Integer(), sa.ForeignKey('profiles.id', ondelete='CASCADE'), nullable=False),
        sa.Column('client_id', sa.Integer(), sa.ForeignKey('profiles.id', ondelete='SET NULL')),
        sa.Column('title', sa.String(length=150), nullable=False),
        sa.Column('event_type', sa.String(length=20), nullable=False),
        sa.Column('start_at', sa.DateTime(), nullable=False),
        sa.Column('end_at', sa.DateTime(), nullable=False),
        sa.Column('recurrence_rrule', sa.String(length=255)),
        sa.Column('location', sa.String(length=255)),
        sa.Column('notes', sa.Text()),
        sa.Column('is_all_day', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('created_at', sa.DateTime()),
        sa.Column('updated_at', sa.DateTime()),
        sa.CheckConstraint("event_type IN ('session','break','studio')", name='ck_calendar_event_type'),
    )
    op.create_index('idx_calendar_events_pt_start', 'pt_calendar_events', ['pt_id', 'start_at'])

    op.create_table(
        'notifications',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('profiles.id', ondelete='CASCADE'), nullable=False),
        sa.Column('type', sa.String(length=50), nullable=False),
        sa.Column('title', sa.String(length=200)),
        sa.Column('message', sa.Text(), nullable=False),
        sa.Column('client_id', sa.Integer(), sa.ForeignKey('profiles.id', ondelete='SET NULL')),
        sa.Column('calendar_event_id', sa.Integer(), sa.ForeignKey('pt_calendar_events.id', ondelete='SET NULL')),
        sa.Column('extra_data', sa.JSON()),
        sa.Column('is_read', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('created_at', sa.DateTime()),
    )
    op.create_index('idx_notifications_user_read_created', 'notifications', ['user_id', 'is_read', 'created_at'])


def downgrade():
    op.drop_table('notifications')
    op.drop_table('pt_calendar_events')
    op.drop_table('client_health_logs')
    op.drop_table('session_log_sets')
    op.drop_table('session_logs')
    op.drop_table('routine_exercise_sets')
    op.drop_table('routine_exercises')
    op.drop_table('routines')
    op.drop_table('exercises_catalog')
    op.drop_table('pt_clients')
    op.drop_table('profiles')
