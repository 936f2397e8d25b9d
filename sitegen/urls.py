from django.urls import include, path

urlpatterns = [
    path("", include("sitegen.sitemap_dump.urls")),
    path("", include("sitegen.content.urls")),
]
