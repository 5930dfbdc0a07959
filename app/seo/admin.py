# medhub/app/seo/admin.py
from django.contrib import admin
from import_export.admin import ImportExportMixin

from .models import SeoMeta
from .resources import SeoMetaResource


@admin.register(SeoMeta)
class SeoMetaAdmin(ImportExportMixin, admin.ModelAdmin):
    resource_class = SeoMetaResource
    list_display = ('entity_type', 'entity_id', 'seo_title', 'meta_robots', 'updated_at')
    list_filter = ('entity_type', 'meta_robots', 'twitter_card')
    search_fields = ('seo_title', 'seo_description', 'seo_keywords', 'canonical_url')
    readonly_fields = ('custom_fields', 'created_at', 'updated_at')
