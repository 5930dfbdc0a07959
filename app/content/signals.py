# medhub/app/content/signals.py
from django.conf import settings
from django.db.models.signals import post_save, post_delete, pre_delete
from django.dispatch import receiver

from seo.models import EntityType
from seo.services import seo_service
from .models import Article, Category, Doctor, Page

ENTITY_TYPES = {
    Article: EntityType.ARTICLE,
    Category: EntityType.CATEGORY,
    Doctor: EntityType.DOCTOR,
    Page: EntityType.PAGE,
}


@receiver(post_save, sender=Article)
@receiver(post_save, sender=Category)
@receiver(post_save, sender=Doctor)
@receiver(post_save, sender=Page)
def create_or_update_seo_for_record(sender, instance, created, raw=False, **kwargs):
    """
    Automatically create or update the SeoMeta row
    when a content record is created or updated.
    """
    if raw or not getattr(settings, 'SEO_AUTO_GENERATE', True):
        return  # Fixture loading, or switched off in settings

    seo_service.upsert_seo_meta(ENTITY_TYPES[sender], instance.pk, instance)


@receiver(post_save, sender=Category)
def refresh_seo_for_category_articles(sender, instance, created, raw=False, **kwargs):
    """
    Article titles and keywords include the category name,
    so a renamed category refreshes its articles' metadata.
    """
    if raw or created or not getattr(settings, 'SEO_AUTO_GENERATE', True):
        return

    for article in instance.articles.select_related('author', 'category'):
        seo_service.upsert_seo_meta(EntityType.ARTICLE, article.pk, article)


@receiver(post_delete, sender=Article)
@receiver(post_delete, sender=Category)
@receiver(post_delete, sender=Doctor)
@receiver(post_delete, sender=Page)
def delete_seo_for_record(sender, instance, **kwargs):
    """
    Automatically delete the SeoMeta row
    when a content record is deleted.
    """
    seo_service.delete_seo_meta(ENTITY_TYPES[sender], instance.pk)


@receiver(pre_delete, sender=Category)
def remember_category_articles(sender, instance, **kwargs):
    # The SET_NULL update runs before post_delete, so collect the ids now
    instance._article_ids = list(instance.articles.values_list('pk', flat=True))


@receiver(post_delete, sender=Category)
def refresh_seo_for_orphaned_articles(sender, instance, **kwargs):
    """
    Articles of a deleted category lose it through a queryset update,
    which sends no post_save, so their metadata is refreshed here.
    """
    article_ids = getattr(instance, '_article_ids', None)
    if not article_ids or not getattr(settings, 'SEO_AUTO_GENERATE', True):
        return

    for article in Article.objects.filter(pk__in=article_ids).select_related('author', 'category'):
        seo_service.upsert_seo_meta(EntityType.ARTICLE, article.pk, article)
