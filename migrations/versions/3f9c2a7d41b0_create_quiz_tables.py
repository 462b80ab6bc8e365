"""Create users, quizzes, questions and submissions tables

Revision ID: 3f9c2a7d41b0
Revises:
Create Date: 2026-10-19 10:12:03.118245

"""
from alembic import op
import sqlalchemy as sa
from sqlalchemy import inspect

# revision identifiers, used by Alembic.
revision = '3f9c2a7d41b0'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    inspector = inspect(op.get_bind())
    tables = inspector.get_table_names()

    if 'users' not in tables:
        op.create_table('users',
            sa.Column('id', sa.Integer(), nullable=False),
            sa.Column('username', sa.String(length=255), nullable=False),
            sa.Column('password_hash', sa.String(length=255), nullable=False),
            sa.Column('role', sa.Enum('ADMIN', 'PARTICIPANT', name='user_role'), nullable=False),
            sa.Column('created_at', sa.DateTime(), nullable=True),
            sa.PrimaryKeyConstraint('id')
        )
        op.create_index('ix_users_username', 'users', ['username'], unique=True)

    if 'quizzes' not in tables:
        op.create_table('quizzes',
            sa.Column('id', sa.Integer(), nullable=False),
            sa.Column('title', sa.String(length=255), nullable=False),
            sa.Column('description', sa.Text(), nullable=True),
            sa.Column('created_at', sa.DateTime(), nullable=False),
            sa.PrimaryKeyConstraint('id')
        )
        op.create_index('ix_quizzes_created_at', 'quizzes', ['created_at'], unique=False)

    if 'questions' not in tables:
        op.create_table('questions',
            sa.Column('id', sa.Integer(), nullable=False),
            sa.Column('quiz_id', sa.Integer(), nullable=False),
            sa.Column('question_text', sa.Text(), nullable=False),
            sa.Column('options', sa.JSON(), nullable=False),
            sa.Column('correct_answer', sa.Text(), nullable=True),
            sa.ForeignKeyConstraint(['quiz_id'], ['quizzes.id'], ondelete='CASCADE'),
            sa.PrimaryKeyConstraint('id')
        )
        op.create_index('ix_questions_quiz_id', 'questions', ['quiz_id'], unique=False)

    if 'submissions' not in tables:
        op.create_table('submissions',
            sa.Column('id', sa.Integer(), nullable=False),
            sa.Column('user_id', sa.Integer(), nullable=False),
            sa.Column('quiz_id', sa.Integer(), nullable=False),
            sa.Column('score', sa.Integer(), nullable=False),
            sa.Column('answers', sa.Text(), nullable=True),
            sa.Column('attempt_time', sa.DateTime(), nullable=False),
            sa.PrimaryKeyConstraint('id')
        )
        op.create_index('ix_submissions_user_id', 'submissions', ['user_id'], unique=False)
        op.create_index('ix_submissions_quiz_id', 'submissions', ['quiz_id'], unique=False)
        op.create_index('ix_submissions_attempt_time', 'submissions', ['attempt_time'], unique=False)
        op.create_index('ix_submissions_user_quiz', 'submissions', ['user_id', 'quiz_id'], unique=False)


def downgrade():
    op.drop_index('ix_submissions_user_quiz', table_name='submissions')
    op.drop_index('ix_submissions_attempt_time', table_name='submissions')
    op.drop_index('ix_submissions_quiz_id', table_name='submissions')
    op.drop_index('ix_submissions_user_id', table_name='submissions')
    op.drop_table('submissions')

    op.drop_index('ix_questions_quiz_id', table_name='questions')
    op.drop_table('questions')

    op.drop_index('ix_quizzes_created_at', table_name='quizzes')
    op.drop_table('quizzes')

    op.drop_index('ix_users_username', table_name='users')
    op.drop_table('users')
