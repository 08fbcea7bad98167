from django.contrib import admin
from django.urls import include, path

urlpatterns = [
    path("admin/", admin.site.urls),
    path("api/", include("surveyor_app.api.urls")),
]

# JSON error handlers; the project serves no HTML pages
handler404 = "surveyor_app.core.error_handlers.json_page_not_found_view"
handler500 = "surveyor_app.core.error_handlers.json_server_error_view"
