from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
    ]

    operations = [
        migrations.CreateModel(
            name='SeoMeta',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('entity_type', models.CharField(choices=[('Article', 'Article'), ('Category', 'Category'), ('Doctor', 'Doctor'), ('Page', 'Page')], db_index=True, max_length=50)),
                ('entity_id', models.PositiveBigIntegerField()),
                ('seo_title', models.CharField(blank=True, help_text='The title tag for the page (60 chars).', max_length=255)),
                ('seo_description', models.TextField(blank=True, help_text='The meta description for the page (160 chars).')),
                ('seo_keywords', models.TextField(blank=True, help_text='Comma-separated keywords.')),
                ('canonical_url', models.URLField(blank=True, max_length=500)),
                ('meta_robots', models.CharField(default='index,follow', max_length=100)),
                ('schema_markup', models.JSONField(blank=True, default=dict, help_text='JSON-LD structured data.')),
                ('open_graph_title', models.CharField(blank=True, max_length=255)),
                ('open_graph_description', models.TextField(blank=True)),
                ('open_graph_image', models.CharField(blank=True, max_length=500)),
                ('twitter_card', models.CharField(default='summary_large_image', max_length=50)),
                ('twitter_title', models.CharField(blank=True, max_length=255)),
                ('twitter_description', models.TextField(blank=True)),
                ('twitter_image', models.CharField(blank=True, max_length=500)),
                ('custom_fields', models.JSONField(blank=True, default=list)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'verbose_name': 'SEO Meta',
                'verbose_name_plural': 'SEO Meta',
                'ordering': ['entity_type', 'entity_id'],
                'constraints': [models.UniqueConstraint(fields=('entity_type', 'entity_id'), name='unique_seo_meta_per_entity')],
            },
        ),
    ]
