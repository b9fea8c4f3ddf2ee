"""URL configuration for ShoeStop project."""

from django.conf import settings
from django.conf.urls.static import static
from django.contrib import admin
from django.urls import include, path

from shoestop.core import urls as core_urls
from shoestop.core.views import health_check

urlpatterns = [
    path("admin/", admin.site.urls),
    path("api/health", health_check, name="health"),
    path("api/auth/", include((core_urls.auth_urlpatterns, "auth"))),
    path("api/user/", include((core_urls.user_urlpatterns, "users"))),
    path("api/", include("shoestop.catalog.urls")),
    path("api/", include("shoestop.store.urls")),
]

if settings.DEBUG:
    urlpatterns += static(settings.MEDIA_URL, document_root=settings.MEDIA_ROOT)

handler404 = "shoestop.core.views.not_found"
handler500 = "shoestop.core.views.server_error"
