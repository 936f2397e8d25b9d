from django.urls import path

from sitegen.content import views

urlpatterns = [
    path("", views.home, name="home"),
    path("about", views.about, name="about"),
    path("contact", views.contact, name="contact"),
    path("blog/<slug:slug>", views.article_show, name="article_show"),
    path("product/<slug:slug>", views.product_show, name="product_show"),
    path("song/<slug:slug>", views.song_show, name="song_show"),
    # CMS pages, by page type
    path("page/<slug:slug>", views.cms_page_show, name="cms_page_show"),
    path(
        "<slug:category>/article/<slug:slug>",
        views.cms_page_show,
        name="cms_article_show",
    ),
    path(
        "landing/<slug:slug>", views.cms_page_show, name="cms_landing_show"
    ),
    path(
        "shop/<slug:slug>", views.cms_page_show, name="cms_product_show"
    ),
]
