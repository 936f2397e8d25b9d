from django.contrib.sitemaps.views import x_robots_tag
from django.http import HttpRequest, HttpResponse
from django.views.decorators.http import require_GET

from sitegen.sitemap_dump.conf import get_sitemap_generator


@require_GET
@x_robots_tag
def sitemap_index(request: HttpRequest) -> HttpResponse:
    """Generate the sitemap on the fly.

    In index mode this is the <sitemapindex>; the shards it points to are
    expected to be served from files written by `manage.py dump_sitemap`.
    """
    xml = get_sitemap_generator().generate()
    return HttpResponse(xml, content_type="application/xml; charset=UTF-8")
