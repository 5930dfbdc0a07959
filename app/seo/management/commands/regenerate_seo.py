# medhub/app/seo/management/commands/regenerate_seo.py

from django.core.management.base import BaseCommand, CommandError

from seo.models import EntityType
from seo.services import get_entity_model, seo_service


class Command(BaseCommand):
    help = 'Re-runs SEO metadata generation for content records, keeping editor overrides.'

    def add_arguments(self, parser):
        parser.add_argument(
            '--type',
            action='append',
            dest='entity_types',
            choices=EntityType.values,
            help='Entity type to regenerate (repeatable). Defaults to all types.',
        )

    def handle(self, *args, **options):
        entity_types = options['entity_types'] or EntityType.values
        total = 0

        for entity_type in entity_types:
            model = get_entity_model(entity_type)
            queryset = model.objects.all()
            if entity_type == EntityType.ARTICLE:
                queryset = queryset.select_related('author', 'category')

            count = 0
            for record in queryset.iterator():
                try:
                    seo_service.upsert_seo_meta(entity_type, record.pk, record)
                except Exception as e:
                    raise CommandError(f'Failed on {entity_type}:{record.pk}: {e}') from e
                count += 1

            self.stdout.write(f'{entity_type}: {count} records')
            total += count

        self.stdout.write(self.style.SUCCESS(f'Successfully regenerated SEO metadata for {total} records.'))
