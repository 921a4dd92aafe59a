"""
URL configuration for posts app.

API Documentation Groups (following [App Name] - [Group Name] pattern):

Posts - Records:
    POST   /records/                  - Create record
    GET    /records/map/              - Record images in a bounding box
    GET    /records/{id}/             - Record detail
    PATCH  /records/{id}/             - Edit record and its images
    DELETE /records/{id}/             - Delete record

Posts - Asks:
    POST   /asks/                     - Create ask
    GET    /asks/map/                 - Asks of the last 48 hours in a bounding box
    GET    /asks/{id}/                - Ask detail
    PATCH  /asks/{id}/                - Edit ask and its images
    DELETE /asks/{id}/                - Delete ask

Posts - Replies:
    GET    /replies/?record_id=|ask_id=  - Replies of one target
    POST   /replies/                  - Create reply
    GET    /replies/{id}/             - Reply detail
    PATCH  /replies/{id}/             - Edit reply and its images
    DELETE /replies/{id}/             - Delete reply
"""

from rest_framework.routers import DefaultRouter

from posts.views import AskViewSet, RecordViewSet, ReplyViewSet

app_name = "posts"

router = DefaultRouter()
router.include_root_view = False
router.register("records", RecordViewSet, basename="records")
router.register("asks", AskViewSet, basename="asks")
router.register("replies", ReplyViewSet, basename="replies")

urlpatterns = router.urls
