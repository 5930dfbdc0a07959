# medhub/app/seo/models.py
from django.db import models


class EntityType(models.TextChoices):
    ARTICLE = 'Article', 'Article'
    CATEGORY = 'Category', 'Category'
    DOCTOR = 'Doctor', 'Doctor'
    PAGE = 'Page', 'Page'


class SeoMeta(models.Model):
    """
    SEO metadata for one content record, addressed by (entity_type, entity_id).
    There is no foreign key to the record itself; the unique constraint on the
    pair is what keeps it to one row per record.
    """
    entity_type = models.CharField(max_length=50, choices=EntityType.choices, db_index=True)
    entity_id = models.PositiveBigIntegerField()

    seo_title = models.CharField(max_length=255, blank=True, help_text="The title tag for the page (60 chars).")
    seo_description = models.TextField(blank=True, help_text="The meta description for the page (160 chars).")
    seo_keywords = models.TextField(blank=True, help_text="Comma-separated keywords.")
    canonical_url = models.URLField(max_length=500, blank=True)
    meta_robots = models.CharField(max_length=100, default='index,follow')
    schema_markup = models.JSONField(default=dict, blank=True, help_text="JSON-LD structured data.")

    open_graph_title = models.CharField(max_length=255, blank=True)
    open_graph_description = models.TextField(blank=True)
    open_graph_image = models.CharField(max_length=500, blank=True)

    twitter_card = models.CharField(max_length=50, default='summary_large_image')
    twitter_title = models.CharField(max_length=255, blank=True)
    twitter_description = models.TextField(blank=True)
    twitter_image = models.CharField(max_length=500, blank=True)

    # Fields set explicitly by an editor; auto-generation never overwrites these.
    custom_fields = models.JSONField(default=list, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['entity_type', 'entity_id']
        verbose_name = "SEO Meta"
        verbose_name_plural = "SEO Meta"
        constraints = [
            models.UniqueConstraint(fields=['entity_type', 'entity_id'], name='unique_seo_meta_per_entity'),
        ]

    def __str__(self):
        return f"{self.entity_type}:{self.entity_id} ({self.seo_title})"

    def custom_overrides(self):
        """The stored values of every field an editor has overridden."""
        return {field: getattr(self, field) for field in self.custom_fields if hasattr(self, field)}
