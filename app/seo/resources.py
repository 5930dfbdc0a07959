# medhub/app/seo/resources.py
from import_export import resources, fields
from import_export.widgets import JSONWidget
from .models import SeoMeta


class SeoMetaResource(resources.ModelResource):
    schema_markup = fields.Field(
        column_name='schema_markup',
        attribute='schema_markup',
        widget=JSONWidget()
    )
    custom_fields = fields.Field(
        column_name='custom_fields',
        attribute='custom_fields',
        widget=JSONWidget()
    )

    class Meta:
        model = SeoMeta
        import_id_fields = ['entity_type', 'entity_id']
        fields = (
            'entity_type', 'entity_id', 'seo_title', 'seo_description', 'seo_keywords',
            'canonical_url', 'meta_robots', 'schema_markup',
            'open_graph_title', 'open_graph_description', 'open_graph_image',
            'twitter_card', 'twitter_title', 'twitter_description', 'twitter_image',
            'custom_fields',
        )
        export_order = fields
        skip_unchanged = True
        report_skipped = True
