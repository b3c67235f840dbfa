"""
Models package initialization
Import all models and setup relationships
"""

from .category import Category
from .counters import setup_counters
from .homepage import Homepage, HomepageAbout, HomepageContact, HomepageFaq, HomepageHero
from .legal_document import PrivacyPolicy, TermsCondition
from .otp_verification import OtpVerification

# Import and setup relationships
from .relations import setup_relationships
from .subcategory import Subcategory
from .topic import Topic
from .topic_engagement import TopicEnrollment, TopicProgress, TopicReview
from .topic_module import TopicModule
from .topic_video import TopicVideo
from .upload import Upload
from .user import User

# Setup all relationships and counter events after models are imported
setup_relationships()
setup_counters()

# Make models available at package level
__all__ = [
    "Category",
    "Homepage",
    "HomepageAbout",
    "HomepageContact",
    "HomepageFaq",
    "HomepageHero",
    "OtpVerification",
    "PrivacyPolicy",
    "Subcategory",
    "TermsCondition",
    "Topic",
    "TopicEnrollment",
    "TopicModule",
    "TopicProgress",
    "TopicReview",
    "TopicVideo",
    "Upload",
    "User",
]
