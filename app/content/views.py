# medhub/app/content/views.py
from django.db.models import F
from django.http import JsonResponse
from django.shortcuts import get_object_or_404

from seo.models import EntityType, SeoMeta
from seo.services import seo_service
from .models import Article, Category, Doctor, Page


def _seo_tags_for(record, entity_type):
    """
    Stored metadata when there is a row for the record,
    otherwise everything is synthesized for this response.
    """
    seo_meta = SeoMeta.objects.filter(entity_type=entity_type, entity_id=record.pk).first()
    return seo_service.build_seo_tags(record, seo_meta, entity_type)


def article_detail(request, slug):
    """
    Public JSON for a single PUBLISHED article, with its SEO tags.
    """
    article = get_object_or_404(
        Article.objects.select_related('author', 'category'),
        slug=slug,
        status=Article.ArticleStatus.PUBLISHED
    )

    # Queryset update keeps the counter bump out of post_save
    Article.objects.filter(pk=article.pk).update(view_count=F('view_count') + 1)

    data = {
        'id': article.pk,
        'title': article.title,
        'slug': article.slug,
        'excerpt': article.excerpt,
        'content': article.content,
        'featured_image': article.featured_image,
        'category': {'name': article.category.name, 'slug': article.category.slug} if article.category else None,
        'author': article.author.name if article.author else None,
        'reading_time': article.reading_time,
        'view_count': article.view_count + 1,
        'published_at': article.published_at.isoformat() if article.published_at else None,
    }
    return JsonResponse({'success': True, 'data': {'article': data, 'seo': _seo_tags_for(article, EntityType.ARTICLE)}})


def category_detail(request, slug):
    category = get_object_or_404(Category, slug=slug)
    articles = category.articles.filter(status=Article.ArticleStatus.PUBLISHED).order_by('-published_at')

    data = {
        'id': category.pk,
        'name': category.name,
        'slug': category.slug,
        'description': category.description,
        'articles': [
            {'title': article.title, 'slug': article.slug, 'url': article.get_absolute_url()}
            for article in articles
        ],
    }
    return JsonResponse({'success': True, 'data': {'category': data, 'seo': _seo_tags_for(category, EntityType.CATEGORY)}})


def doctor_detail(request, slug):
    doctor = get_object_or_404(Doctor, slug=slug, is_active=True)
    data = {
        'id': doctor.pk,
        'name': doctor.name,
        'slug': doctor.slug,
        'specialty': doctor.specialty,
        'description': doctor.description,
        'image': doctor.image,
        'social_links': doctor.social_links,
    }
    return JsonResponse({'success': True, 'data': {'doctor': data, 'seo': _seo_tags_for(doctor, EntityType.DOCTOR)}})


def page_detail(request, slug):
    page = get_object_or_404(Page, slug=slug, is_published=True)
    data = {
        'id': page.pk,
        'title': page.title,
        'slug': page.slug,
        'excerpt': page.excerpt,
        'content': page.content,
    }
    return JsonResponse({'success': True, 'data': {'page': data, 'seo': _seo_tags_for(page, EntityType.PAGE)}})
