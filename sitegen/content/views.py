from django.http import HttpRequest, HttpResponse
from django.shortcuts import get_object_or_404

from sitegen.content.models import Article, CmsPage, Product, Song


def home(request: HttpRequest) -> HttpResponse:
    return HttpResponse("Home")


def about(request: HttpRequest) -> HttpResponse:
    return HttpResponse("About")


def contact(request: HttpRequest) -> HttpResponse:
    return HttpResponse("Contact")


def article_show(request: HttpRequest, slug: str) -> HttpResponse:
    article = get_object_or_404(Article, slug=slug)
    return HttpResponse(article.title)


def product_show(request: HttpRequest, slug: str) -> HttpResponse:
    product = get_object_or_404(Product, slug=slug, published=True)
    return HttpResponse(product.name)


def song_show(request: HttpRequest, slug: str) -> HttpResponse:
    song = get_object_or_404(Song, slug=slug)
    return HttpResponse(str(song))


def cms_page_show(
    request: HttpRequest, slug: str, category: str | None = None
) -> HttpResponse:
    page = get_object_or_404(CmsPage, slug=slug, status=CmsPage.PUBLISHED)
    return HttpResponse(page.title)
