"""create cms tables

Revision ID: a1c3e5f70b21
Revises:
Create Date: 2025-12-01 10:12:44.318207

"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = "a1c3e5f70b21"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

JSONType = sa.JSON().with_variant(postgresql.JSONB(), "postgresql")


def _timestamps():
    return [
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
    ]


def _legal_document_table(name: str) -> None:
    op.create_table(
        name,
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("version", sa.String(50), nullable=False),
        sa.Column("language", sa.String(10), nullable=False, server_default="en"),
        sa.Column("status", sa.String(20), nullable=False, server_default="Draft"),
        sa.Column("effective_date", sa.Date(), nullable=True),
        sa.Column("created_by", sa.String(100), nullable=False, server_default="admin"),
        sa.Column("updated_by", sa.String(100), nullable=False, server_default="admin"),
        *_timestamps(),
    )
    op.create_index(f"ix_{name}_id", name, ["id"])
    op.create_index(f"ix_{name}_language", name, ["language"])
    op.create_index(f"ix_{name}_status", name, ["status"])


def _homepage_section(name: str, *columns: sa.Column) -> None:
    op.create_table(
        name,
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column(
            "homepage_id",
            sa.Integer(),
            sa.ForeignKey("homepages.id", ondelete="CASCADE"),
            nullable=False,
            unique=True,
        ),
        *columns,
        *_timestamps(),
    )
    op.create_index(f"ix_{name}_id", name, ["id"])


def upgrade() -> None:
    # Users & OTP
    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("email", sa.String(100), nullable=False),
        sa.Column("name", sa.String(100), nullable=True),
        sa.Column("address", sa.String(100), nullable=True),
        sa.Column("phone", sa.String(20), nullable=True),
        sa.Column("is_verified", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("last_login", sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
    )
    op.create_index("ix_users_id", "users", ["id"])
    op.create_index("ix_users_email", "users", ["email"], unique=True)

    op.create_table(
        "otp_verifications",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column(
            "user_id",
            sa.Integer(),
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("otp_hash", sa.String(255), nullable=False),
        sa.Column("expires_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
    )
    op.create_index("ix_otp_verifications_id", "otp_verifications", ["id"])
    op.create_index("ix_otp_verifications_user_id", "otp_verifications", ["user_id"])
    op.create_index("ix_otp_verifications_expires_at", "otp_verifications", ["expires_at"])

    # Categories
    op.create_table(
        "categories",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("status", sa.String(20), nullable=False, server_default="Active"),
        sa.Column("topics_count", sa.Integer(), nullable=False, server_default="0"),
        *_timestamps(),
        sa.CheckConstraint(
            "status IN ('Active', 'Inactive', 'Draft')", name="ck_categories_status"
        ),
    )
    op.create_index("ix_categories_id", "categories", ["id"])
    op.create_index("ix_categories_name", "categories", ["name"])

    op.create_table(
        "subcategories",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("status", sa.String(20), nullable=False, server_default="Active"),
        sa.Column(
            "category_id", sa.Integer(), sa.ForeignKey("categories.id"), nullable=False
        ),
        sa.Column("topics_count", sa.Integer(), nullable=False, server_default="0"),
        *_timestamps(),
        sa.CheckConstraint(
            "status IN ('Active', 'Inactive', 'Draft')", name="ck_subcategories_status"
        ),
    )
    op.create_index("ix_subcategories_id", "subcategories", ["id"])
    op.create_index("ix_subcategories_name", "subcategories", ["name"])
    op.create_index("ix_subcategories_category_id", "subcategories", ["category_id"])

    # Topics
    op.create_table(
        "topics",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("content", sa.Text(), nullable=True),
        sa.Column("slug", sa.String(255), nullable=False),
        sa.Column("emoji", sa.String(16), nullable=True),
        sa.Column(
            "category_id",
            sa.Integer(),
            sa.ForeignKey("categories.id", ondelete="SET NULL"),
            nullable=True,
        ),
        sa.Column(
            "subcategory_id",
            sa.Integer(),
            sa.ForeignKey("subcategories.id", ondelete="SET NULL"),
            nullable=True,
        ),
        sa.Column("difficulty", sa.String(20), nullable=False, server_default="beginner"),
        sa.Column("status", sa.String(20), nullable=False, server_default="draft"),
        sa.Column("tags", JSONType, nullable=False),
        sa.Column("is_featured", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("is_free", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("price", sa.Numeric(10, 2), nullable=False, server_default="0"),
        sa.Column("duration_minutes", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("thumbnail_url", sa.Text(), nullable=True),
        sa.Column("learning_objectives", sa.Text(), nullable=True),
        sa.Column("target_audience", JSONType, nullable=False),
        sa.Column("prerequisites", sa.Text(), nullable=True),
        sa.Column("meta_title", sa.String(255), nullable=True),
        sa.Column("meta_description", sa.Text(), nullable=True),
        sa.Column("meta_keywords", sa.Text(), nullable=True),
        sa.Column("author_id", sa.Integer(), nullable=True),
        sa.Column("published_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("view_count", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("like_count", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("enrollment_count", sa.Integer(), nullable=False, server_default="0"),
        *_timestamps(),
        sa.CheckConstraint(
            "difficulty IN ('beginner', 'intermediate', 'advanced')",
            name="ck_topics_difficulty",
        ),
        sa.CheckConstraint(
            "status IN ('draft', 'published', 'archived')", name="ck_topics_status"
        ),
    )
    op.create_index("ix_topics_id", "topics", ["id"])
    op.create_index("ix_topics_slug", "topics", ["slug"], unique=True)
    op.create_index("ix_topics_status", "topics", ["status"])
    op.create_index("ix_topics_category_id", "topics", ["category_id"])
    op.create_index("ix_topics_subcategory_id", "topics", ["subcategory_id"])

    op.create_table(
        "topic_modules",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column(
            "topic_id",
            sa.Integer(),
            sa.ForeignKey("topics.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("order_index", sa.Integer(), nullable=False, server_default="1"),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("duration_minutes", sa.Integer(), nullable=False, server_default="0"),
        *_timestamps(),
    )
    op.create_index("ix_topic_modules_id", "topic_modules", ["id"])
    op.create_index("ix_topic_modules_topic_id", "topic_modules", ["topic_id"])

    op.create_table(
        "topic_videos",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column(
            "topic_id",
            sa.Integer(),
            sa.ForeignKey("topics.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column(
            "module_id",
            sa.Integer(),
            sa.ForeignKey("topic_modules.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("video_url", sa.Text(), nullable=True),
        sa.Column("video_type", sa.String(20), nullable=False, server_default="mp4"),
        sa.Column("thumbnail_url", sa.Text(), nullable=True),
        sa.Column("duration_seconds", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("order_index", sa.Integer(), nullable=False, server_default="1"),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("is_preview", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("transcript", sa.Text(), nullable=True),
        sa.Column("resources", JSONType, nullable=False),
        *_timestamps(),
        sa.CheckConstraint(
            "video_type IN ('mp4', 'youtube', 'vimeo', 'stream')",
            name="ck_topic_videos_type",
        ),
    )
    op.create_index("ix_topic_videos_id", "topic_videos", ["id"])
    op.create_index("ix_topic_videos_topic_id", "topic_videos", ["topic_id"])
    op.create_index("ix_topic_videos_module_id", "topic_videos", ["module_id"])

    # Engagement
    op.create_table(
        "topic_enrollments",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column(
            "topic_id",
            sa.Integer(),
            sa.ForeignKey("topics.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column(
            "user_id",
            sa.Integer(),
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("status", sa.String(20), nullable=False, server_default="active"),
        sa.Column(
            "progress_percentage", sa.Numeric(5, 2), nullable=False, server_default="0"
        ),
        sa.Column(
            "enrolled_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.Column("completed_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("last_accessed_at", sa.DateTime(timezone=True), nullable=True),
        sa.UniqueConstraint("topic_id", "user_id", name="uq_topic_enrollments_topic_user"),
        sa.CheckConstraint(
            "status IN ('active', 'completed', 'paused', 'cancelled')",
            name="ck_topic_enrollments_status",
        ),
    )
    op.create_index("ix_topic_enrollments_id", "topic_enrollments", ["id"])
    op.create_index("ix_topic_enrollments_topic_id", "topic_enrollments", ["topic_id"])
    op.create_index("ix_topic_enrollments_user_id", "topic_enrollments", ["user_id"])

    op.create_table(
        "topic_progress",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column(
            "topic_id",
            sa.Integer(),
            sa.ForeignKey("topics.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column(
            "module_id",
            sa.Integer(),
            sa.ForeignKey("topic_modules.id", ondelete="CASCADE"),
            nullable=True,
        ),
        sa.Column(
            "video_id",
            sa.Integer(),
            sa.ForeignKey("topic_videos.id", ondelete="CASCADE"),
            nullable=True,
        ),
        sa.Column(
            "user_id",
            sa.Integer(),
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("is_completed", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("watch_time_seconds", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("completed_at", sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
        sa.UniqueConstraint(
            "topic_id", "module_id", "video_id", "user_id", name="uq_topic_progress"
        ),
    )
    op.create_index("ix_topic_progress_id", "topic_progress", ["id"])
    op.create_index("ix_topic_progress_topic_id", "topic_progress", ["topic_id"])
    op.create_index("ix_topic_progress_user_id", "topic_progress", ["user_id"])

    op.create_table(
        "topic_reviews",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column(
            "topic_id",
            sa.Integer(),
            sa.ForeignKey("topics.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column(
            "user_id",
            sa.Integer(),
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("rating", sa.Integer(), nullable=False),
        sa.Column("review_text", sa.Text(), nullable=True),
        sa.Column("is_approved", sa.Boolean(), nullable=False, server_default=sa.true()),
        *_timestamps(),
        sa.UniqueConstraint("topic_id", "user_id", name="uq_topic_reviews_topic_user"),
        sa.CheckConstraint("rating >= 1 AND rating <= 5", name="ck_topic_reviews_rating"),
    )
    op.create_index("ix_topic_reviews_id", "topic_reviews", ["id"])
    op.create_index("ix_topic_reviews_topic_id", "topic_reviews", ["topic_id"])
    op.create_index("ix_topic_reviews_user_id", "topic_reviews", ["user_id"])

    # Uploads
    op.create_table(
        "uploads",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("filename", sa.String(255), nullable=False),
        sa.Column("original_name", sa.String(255), nullable=False),
        sa.Column("file_path", sa.Text(), nullable=False),
        sa.Column("file_size", sa.BigInteger(), nullable=False),
        sa.Column("mime_type", sa.String(100), nullable=False),
        sa.Column("upload_type", sa.String(20), nullable=False, server_default="general"),
        sa.Column(
            "category", sa.String(100), nullable=False, server_default="uncategorized"
        ),
        sa.Column("metadata", JSONType, nullable=False),
        *_timestamps(),
    )
    op.create_index("ix_uploads_filename", "uploads", ["filename"])
    op.create_index("ix_uploads_upload_type", "uploads", ["upload_type"])

    # Homepage
    op.create_table(
        "homepages",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("language", sa.String(10), nullable=False),
        sa.Column("version", sa.Integer(), nullable=False, server_default="1"),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        *_timestamps(),
    )
    op.create_index("ix_homepages_id", "homepages", ["id"])
    op.create_index("ix_homepages_language", "homepages", ["language"], unique=True)

    _homepage_section(
        "homepage_heroes",
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("subtitle", sa.Text(), nullable=False),
        sa.Column("background_image", sa.Text(), nullable=True),
        sa.Column("cta_text", sa.String(100), nullable=True),
        sa.Column("cta_link", sa.Text(), nullable=True),
    )
    _homepage_section(
        "homepage_abouts",
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("image", sa.Text(), nullable=True),
        sa.Column("features", JSONType, nullable=False),
    )
    _homepage_section(
        "homepage_contacts",
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("phone", sa.String(50), nullable=True),
        sa.Column("address", sa.Text(), nullable=True),
        sa.Column("hours", sa.String(255), nullable=True),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("support_email", sa.String(255), nullable=True),
        sa.Column("sales_email", sa.String(255), nullable=True),
        sa.Column("social_links", JSONType, nullable=False),
    )

    op.create_table(
        "homepage_faqs",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column(
            "homepage_id",
            sa.Integer(),
            sa.ForeignKey("homepages.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("question", sa.Text(), nullable=False),
        sa.Column("answer", sa.Text(), nullable=False),
        sa.Column("order_index", sa.Integer(), nullable=False, server_default="1"),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        *_timestamps(),
    )
    op.create_index("ix_homepage_faqs_id", "homepage_faqs", ["id"])
    op.create_index("ix_homepage_faqs_homepage_id", "homepage_faqs", ["homepage_id"])

    # Legal documents
    _legal_document_table("terms_conditions")
    _legal_document_table("privacy_policies")


def downgrade() -> None:
    for table in (
        "privacy_policies",
        "terms_conditions",
        "homepage_faqs",
        "homepage_contacts",
        "homepage_abouts",
        "homepage_heroes",
        "homepages",
        "uploads",
        "topic_reviews",
        "topic_progress",
        "topic_enrollments",
        "topic_videos",
        "topic_modules",
        "topics",
        "subcategories",
        "categories",
        "otp_verifications",
        "users",
    ):
        op.drop_table(table)
