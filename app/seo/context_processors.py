# medhub/app/seo/context_processors.py
from django.conf import settings


def seo_defaults(request):
    """
    Site-wide fallback SEO values for templates that render
    without a record-specific SeoMeta.
    """
    site_name = getattr(settings, 'SITE_NAME', 'Medical Knowledge Hub')
    base_url = getattr(settings, 'SEO_BASE_URL', 'https://yoursite.com').rstrip('/')
    return {
        'meta_title': site_name,
        'meta_description': 'Find reliable medical information and expert healthcare advice.',
        'meta_canonical': f"{base_url}{request.path}",
        'meta_twitter_site': getattr(settings, 'SEO_TWITTER_SITE', '@yoursite'),
    }
