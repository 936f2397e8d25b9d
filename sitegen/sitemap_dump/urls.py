from django.urls import path

from sitegen.sitemap_dump.views import sitemap_index

urlpatterns = [
    path("sitemap.xml", sitemap_index, name="sitemap-index"),
]
