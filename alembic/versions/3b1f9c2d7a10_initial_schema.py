"""initial schema

Revision ID: 3b1f9c2d7a10
Revises: 
Create Date: 2026-10-19 10:02:11.418203

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3b1f9c2d7a10'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'users',
        sa.Column('id', sa.String(), nullable=False),
        sa.Column('google_id', sa.String(), nullable=False),
        sa.Column('email', sa.String(), nullable=False),
        sa.Column('display_name', sa.String(), nullable=False),
        sa.Column('profile_picture', sa.String(), nullable=True),
        sa.Column('bio', sa.Text(), nullable=True),
        sa.Column('website_url1', sa.String(), nullable=True),
        sa.Column('website_label1', sa.String(), nullable=True),
        sa.Column('website_url2', sa.String(), nullable=True),
        sa.Column('website_label2', sa.String(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=True),
        sa.Column('last_login', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=True),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_users_google_id'), 'users', ['google_id'], unique=True)
    op.create_index(op.f('ix_users_email'), 'users', ['email'], unique=True)

    op.create_table(
        'photos',
        sa.Column('id', sa.String(), nullable=False),
        sa.Column('user_id', sa.String(), nullable=True),
        sa.Column('original_filename', sa.String(), nullable=False),
        sa.Column('file_path', sa.String(), nullable=False),
        sa.Column('analysis_path', sa.String(), nullable=True),
        sa.Column('url', sa.String(), nullable=False),
        sa.Column('storage_urls', sa.JSON(), nullable=True),
        sa.Column('exif_data', sa.JSON(), nullable=True),
        sa.Column('is_hidden', sa.Boolean(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=True),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_photos_user_id'), 'photos', ['user_id'])
    op.create_index(op.f('ix_photos_created_at'), 'photos', ['created_at'])

    op.create_table(
        'analyses',
        sa.Column('id', sa.String(), nullable=False),
        sa.Column('photo_id', sa.String(), nullable=False),
        sa.Column('user_id', sa.String(), nullable=True),
        sa.Column('persona', sa.String(), nullable=False),
        sa.Column('language', sa.String(), nullable=False),
        sa.Column('detail_level', sa.String(), nullable=True),
        sa.Column('focus_point', sa.String(), nullable=True),
        sa.Column('detected_genre', sa.String(), nullable=True),
        sa.Column('summary', sa.Text(), nullable=False),
        sa.Column('overall_score', sa.Integer(), nullable=False),
        sa.Column('tags', sa.JSON(), nullable=True),
        sa.Column('category_scores', sa.JSON(), nullable=False),
        sa.Column('analysis', sa.JSON(), nullable=False),
        sa.Column('is_not_evaluable', sa.Boolean(), nullable=False),
        sa.Column('camera_model', sa.String(), nullable=True),
        sa.Column('camera_manufacturer', sa.String(), nullable=True),
        sa.Column('is_hidden', sa.Boolean(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=True),
        sa.ForeignKeyConstraint(['photo_id'], ['photos.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_analyses_photo_id'), 'analyses', ['photo_id'])
    op.create_index(op.f('ix_analyses_user_id'), 'analyses', ['user_id'])
    op.create_index(op.f('ix_analyses_camera_model'), 'analyses', ['camera_model'])
    op.create_index(op.f('ix_analyses_created_at'), 'analyses', ['created_at'])

    op.create_table(
        'opinions',
        sa.Column('id', sa.String(), nullable=False),
        sa.Column('analysis_id', sa.String(), nullable=True),
        sa.Column('user_id', sa.String(), nullable=False),
        sa.Column('is_liked', sa.Boolean(), nullable=True),
        sa.Column('comment', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=True),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=True),
        sa.ForeignKeyConstraint(['analysis_id'], ['analyses.id'], ondelete='SET NULL'),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('analysis_id', 'user_id', name='uq_opinion_analysis_user')
    )
    op.create_index(op.f('ix_opinions_analysis_id'), 'opinions', ['analysis_id'])


def downgrade() -> None:
    # 테이블 삭제 (역순)
    op.drop_index(op.f('ix_opinions_analysis_id'), table_name='opinions')
    op.drop_table('opinions')
    op.drop_index(op.f('ix_analyses_created_at'), table_name='analyses')
    op.drop_index(op.f('ix_analyses_camera_model'), table_name='analyses')
    op.drop_index(op.f('ix_analyses_user_id'), table_name='analyses')
    op.drop_index(op.f('ix_analyses_photo_id'), table_name='analyses')
    op.drop_table('analyses')
    op.drop_index(op.f('ix_photos_created_at'), table_name='photos')
    op.drop_index(op.f('ix_photos_user_id'), table_name='photos')
    op.drop_table('photos')
    op.drop_index(op.f('ix_users_email'), table_name='users')
    op.drop_index(op.f('ix_users_google_id'), table_name='users')
    op.drop_table('users')
