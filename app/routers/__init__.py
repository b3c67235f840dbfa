from .auth import router as auth_router
from .category import router as category_router
from .homepage import router as homepage_router
from .legal_document import privacy_router, terms_router
from .subcategory import router as subcategory_router
from .topic import router as topic_router
from .topic_actions import router as topic_actions_router
from .topic_module import router as topic_module_router
from .topic_video import router as topic_video_router
from .upload import router as upload_router

# topic_actions_router must precede topic_router (static /topics/export path)
routes = [
    auth_router,
    category_router,
    subcategory_router,
    topic_actions_router,
    topic_router,
    topic_module_router,
    topic_video_router,
    upload_router,
    homepage_router,
    terms_router,
    privacy_router,
]
