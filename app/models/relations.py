# app/models/relations.py

from sqlalchemy.orm import relationship

from .category import Category
from .homepage import Homepage, HomepageAbout, HomepageContact, HomepageFaq, HomepageHero
from .otp_verification import OtpVerification
from .subcategory import Subcategory
from .topic import Topic
from .topic_engagement import TopicEnrollment, TopicProgress, TopicReview
from .topic_module import TopicModule
from .topic_video import TopicVideo
from .user import User


def setup_relationships():
    """
    Configure all SQLAlchemy relationships between models.
    """

    # --- Catalogue ---

    # 1. Category to Subcategories (One-to-Many, deletion guarded by the service)
    Category.subcategories = relationship(
        "Subcategory",
        back_populates="category",
        order_by="Subcategory.name",
    )
    Subcategory.category = relationship("Category", back_populates="subcategories")

    # 2. Topic classification (Many-to-One, nulled by the database on delete)
    Topic.category = relationship("Category", lazy="joined")
    Topic.subcategory = relationship("Subcategory", lazy="joined")

    # --- Topic content tree ---

    # 3. Topic to Modules (One-to-Many, owned)
    Topic.modules = relationship(
        "TopicModule",
        back_populates="topic",
        cascade="all, delete-orphan",
        order_by="[TopicModule.order_index, TopicModule.id]",
    )
    TopicModule.topic = relationship("Topic", back_populates="modules")

    # 4. Module to Videos (One-to-Many, owned)
    TopicModule.videos = relationship(
        "TopicVideo",
        back_populates="module",
        cascade="all, delete-orphan",
        order_by="[TopicVideo.order_index, TopicVideo.id]",
    )
    TopicVideo.module = relationship("TopicModule", back_populates="videos")

    # 5. Topic to all of its Videos (read-only shortcut)
    Topic.videos = relationship(
        "TopicVideo",
        viewonly=True,
        order_by="[TopicVideo.module_id, TopicVideo.order_index]",
    )

    # --- Engagement ---

    # 6. Topic to Enrollments / Progress / Reviews (One-to-Many, owned)
    Topic.enrollments = relationship(
        "TopicEnrollment", cascade="all, delete-orphan", passive_deletes=True
    )
    Topic.progress = relationship(
        "TopicProgress", cascade="all, delete-orphan", passive_deletes=True
    )
    Topic.reviews = relationship(
        "TopicReview", cascade="all, delete-orphan", passive_deletes=True
    )
    TopicEnrollment.topic = relationship("Topic", viewonly=True)
    TopicProgress.topic = relationship("Topic", viewonly=True)
    TopicReview.topic = relationship("Topic", viewonly=True)

    # --- Homepage ---

    # 7. Homepage to its single sections (One-to-One)
    Homepage.hero = relationship(
        "HomepageHero", uselist=False, cascade="all, delete-orphan"
    )
    Homepage.about = relationship(
        "HomepageAbout", uselist=False, cascade="all, delete-orphan"
    )
    Homepage.contact = relationship(
        "HomepageContact", uselist=False, cascade="all, delete-orphan"
    )

    # 8. Homepage to FAQs (One-to-Many)
    Homepage.faqs = relationship(
        "HomepageFaq",
        back_populates="homepage",
        cascade="all, delete-orphan",
        order_by="[HomepageFaq.order_index, HomepageFaq.id]",
    )
    HomepageFaq.homepage = relationship("Homepage", back_populates="faqs")

    # --- Auth ---

    # 9. User to OTP codes (One-to-Many)
    User.otp_verifications = relationship(
        "OtpVerification",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    OtpVerification.user = relationship("User", viewonly=True)
