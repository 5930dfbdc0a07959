# medhub/app/seo/services.py
"""
SEO metadata synthesis.

Fills in title, description, keywords, canonical URL, JSON-LD structured data
and the Open Graph / Twitter card mirrors for a content record whenever an
editor has not supplied them, and stores the result as one SeoMeta row per
(entity_type, entity_id).
"""
import logging
import re
from collections import Counter, namedtuple
from collections.abc import Mapping

from django.apps import apps
from django.conf import settings
from django.core.exceptions import ValidationError
from django.core.validators import URLValidator
from django.db import IntegrityError, transaction

from core.utils import count_words, extract_text_from_html, normalize_slug, truncate_text
from .models import EntityType, SeoMeta

logger = logging.getLogger(__name__)

SEO_CONFIG = {
    EntityType.ARTICLE: {
        'title_template': '{title} | {site_name}',
        'title_max_length': 60,
        'description_max_length': 160,
        'keywords_limit': 10,
        'og_type': 'article',
        'structured_data_type': 'Article',
        'path': 'articles',
    },
    EntityType.CATEGORY: {
        'title_template': '{title} Articles | {site_name}',
        'title_max_length': 60,
        'description_max_length': 160,
        'keywords_limit': 8,
        'og_type': 'website',
        'structured_data_type': 'CollectionPage',
        'path': 'categories',
    },
    EntityType.DOCTOR: {
        'title_template': 'Dr. {title} | Medical Professional',
        'title_max_length': 60,
        'description_max_length': 160,
        'keywords_limit': 8,
        'og_type': 'profile',
        'structured_data_type': 'Person',
        'path': 'doctors',
    },
    EntityType.PAGE: {
        'title_template': '{title} | {site_name}',
        'title_max_length': 60,
        'description_max_length': 160,
        'keywords_limit': 8,
        'og_type': 'website',
        'structured_data_type': 'WebPage',
        'path': 'pages',
    },
}

# Used for entity types without an entry above; the path is the lowercased type.
DEFAULT_SEO_CONFIG = {
    'title_template': '{title} | {site_name}',
    'title_max_length': 60,
    'description_max_length': 160,
    'keywords_limit': 8,
    'og_type': 'website',
    'structured_data_type': 'WebPage',
    'path': None,
}

SEO_FIELDS = (
    'seo_title', 'seo_description', 'seo_keywords', 'canonical_url', 'meta_robots',
    'schema_markup', 'open_graph_title', 'open_graph_description', 'open_graph_image',
    'twitter_card', 'twitter_title', 'twitter_description', 'twitter_image',
)

DEFAULT_ROBOTS = 'index,follow'
DEFAULT_TWITTER_CARD = 'summary_large_image'

TITLE_LENGTH_RANGE = (30, 60)
DESCRIPTION_LENGTH_RANGE = (120, 160)

CONTENT_KEYWORD_SAMPLE = 500

# English and Indonesian. Only words longer than three characters matter.
STOP_WORDS = frozenset({
    'about', 'after', 'also', 'because', 'been', 'before', 'being', 'between', 'could',
    'does', 'each', 'from', 'have', 'having', 'into', 'more', 'most', 'only', 'other',
    'over', 'should', 'some', 'such', 'than', 'that', 'their', 'them', 'then', 'there',
    'these', 'they', 'this', 'those', 'through', 'very', 'were', 'what', 'when', 'where',
    'which', 'while', 'will', 'with', 'would', 'your',
    'adalah', 'akan', 'anda', 'atau', 'bahwa', 'bisa', 'dalam', 'dapat', 'dari', 'dengan',
    'hanya', 'juga', 'karena', 'kami', 'kita', 'lebih', 'mereka', 'oleh', 'pada', 'para',
    'saat', 'seperti', 'sudah', 'telah', 'tetapi', 'tidak', 'untuk', 'yang',
})

DOMAIN_KEYWORDS = {
    'cardiology': ['heart', 'cardiac', 'cardiovascular', 'blood pressure'],
    'neurology': ['brain', 'nervous system', 'neurological', 'mental health'],
    'pediatrics': ['children', 'kids', 'pediatric', 'child health'],
    'general': ['health', 'medical', 'healthcare', 'wellness'],
}

_NON_WORD = re.compile(r'[^\w\s]')

CONTENT_APP_LABEL = 'content'

UpsertResult = namedtuple('UpsertResult', ['seo_meta', 'created', 'validation', 'auto_generated'])


def get_value(record, name, default=None):
    """Reads `name` from a model instance, a plain object or a mapping."""
    if record is None:
        return default
    if isinstance(record, Mapping):
        value = record.get(name)
    else:
        value = getattr(record, name, None)
    return default if value is None else value


def get_entity_model(entity_type):
    """The content model an EntityType value refers to; ValueError for unknown types."""
    return apps.get_model(CONTENT_APP_LABEL, EntityType(entity_type).value)


def _iso(value):
    return value.isoformat() if hasattr(value, 'isoformat') else value


def _compact(data):
    """Drops empty values so the JSON-LD only carries what is known."""
    cleaned = {}
    for key, value in data.items():
        if isinstance(value, dict):
            value = _compact(value)
        if value is None or value == '' or value == []:
            continue
        cleaned[key] = value
    return cleaned


class SeoService:

    # --- Settings ---

    @property
    def site_name(self):
        return getattr(settings, 'SITE_NAME', 'Medical Knowledge Hub')

    @property
    def base_url(self):
        return getattr(settings, 'SEO_BASE_URL', 'https://yoursite.com').rstrip('/')

    @property
    def organization_name(self):
        return getattr(settings, 'SEO_ORGANIZATION_NAME', None) or self.site_name

    @property
    def organization_logo(self):
        return getattr(settings, 'SEO_ORGANIZATION_LOGO', None) or f"{self.base_url}/logo.png"

    @property
    def twitter_site(self):
        return getattr(settings, 'SEO_TWITTER_SITE', '@yoursite')

    def get_config(self, entity_type):
        try:
            return SEO_CONFIG[EntityType(entity_type)]
        except (ValueError, KeyError):
            return DEFAULT_SEO_CONFIG

    # --- Synthesis ---

    def synthesize(self, record, entity_type, overrides=None):
        """
        Returns the full set of SeoMeta field values for `record`.

        Any non-empty value in `overrides` wins over the synthesized one.
        Raises ValidationError if the canonical URL override is malformed;
        missing record fields never raise, defaults apply instead.
        """
        overrides = self.clean_seo_data(overrides or {})
        config = self.get_config(entity_type)

        custom_canonical = overrides.get('canonical_url')
        if custom_canonical and not self.is_valid_url(custom_canonical):
            raise ValidationError('Invalid canonical URL format', code='invalid_canonical_url')

        title = self.generate_title(record, config, overrides.get('seo_title'))
        description = self.generate_description(record, config, overrides.get('seo_description'))
        keywords = self.generate_keywords(record, config, overrides.get('seo_keywords'))
        canonical_url = self.generate_canonical_url(record, entity_type, custom_canonical)
        image = self.get_image(record)

        schema_markup = overrides.get('schema_markup')
        if not schema_markup:
            schema_markup = self.generate_structured_data(record, entity_type, canonical_url)

        return {
            'seo_title': title,
            'seo_description': description,
            'seo_keywords': keywords,
            'canonical_url': canonical_url,
            'meta_robots': overrides.get('meta_robots', DEFAULT_ROBOTS),
            'schema_markup': schema_markup,
            'open_graph_title': overrides.get('open_graph_title', title),
            'open_graph_description': overrides.get('open_graph_description', description),
            'open_graph_image': overrides.get('open_graph_image', image),
            'twitter_card': overrides.get('twitter_card', DEFAULT_TWITTER_CARD),
            'twitter_title': overrides.get('twitter_title', title),
            'twitter_description': overrides.get('twitter_description', description),
            'twitter_image': overrides.get('twitter_image', image),
        }

    def generate_title(self, record, config, custom_title=None):
        max_length = config['title_max_length']
        if custom_title:
            return truncate_text(custom_title, max_length)

        base_title = get_value(record, 'title') or get_value(record, 'name') or 'Untitled'

        category_name = self.get_category_name(record)
        if category_name and config['structured_data_type'] == 'Article':
            base_title = f"{base_title} - {category_name}"

        title = config['title_template'].format(title=base_title, site_name=self.site_name)
        return truncate_text(title, max_length)

    def generate_description(self, record, config, custom_description=None):
        max_length = config['description_max_length']
        if custom_description:
            return truncate_text(extract_text_from_html(custom_description), max_length)

        # Priority: excerpt > description > body text > generic sentence
        description = (
            get_value(record, 'excerpt')
            or get_value(record, 'description')
            or get_value(record, 'bio')
            or extract_text_from_html(get_value(record, 'content'))
            or self.get_default_description(record, config['structured_data_type'])
        )
        return truncate_text(extract_text_from_html(description), max_length)

    def generate_keywords(self, record, config, custom_keywords=None):
        limit = config['keywords_limit']
        if custom_keywords:
            return self.optimize_keywords(custom_keywords, limit)

        keywords = []
        keywords.extend(self.extract_keywords(get_value(record, 'title') or get_value(record, 'name')))

        category_name = self.get_category_name(record)
        if category_name:
            keywords.append(category_name.lower())

        content = get_value(record, 'content')
        if content:
            sample = extract_text_from_html(content)[:CONTENT_KEYWORD_SAMPLE]
            keywords.extend(self.extract_keywords(sample)[:5])

        if config['structured_data_type'] == 'Article' and category_name:
            keywords.extend(self.get_domain_keywords(category_name))

        unique_keywords = list(dict.fromkeys(keyword for keyword in keywords if keyword))
        return ', '.join(unique_keywords[:limit])

    def generate_canonical_url(self, record, entity_type, custom_url=None):
        if custom_url:
            return custom_url

        path = self.get_config(entity_type)['path'] or str(entity_type).lower()
        identifier = (
            get_value(record, 'slug')
            or get_value(record, 'id')
            or normalize_slug(get_value(record, 'title') or get_value(record, 'name') or 'untitled')
        )
        return f"{self.base_url}/{path}/{identifier}"

    def generate_structured_data(self, record, entity_type, canonical_url=None):
        config = self.get_config(entity_type)
        if canonical_url is None:
            canonical_url = self.generate_canonical_url(record, entity_type)
        schema_type = config['structured_data_type']

        if schema_type == 'Article':
            data = self._article_schema(record, canonical_url)
        elif schema_type == 'Person':
            data = self._person_schema(record, canonical_url)
        elif schema_type == 'CollectionPage':
            data = self._collection_schema(record, canonical_url)
        else:
            data = {
                '@context': 'https://schema.org',
                '@type': 'WebPage',
                'name': get_value(record, 'title') or get_value(record, 'name'),
                'description': get_value(record, 'excerpt') or get_value(record, 'description'),
                'url': canonical_url,
            }
        return _compact(data)

    def _article_schema(self, record, canonical_url):
        content = get_value(record, 'content')
        author = get_value(record, 'author')
        category_name = self.get_category_name(record)
        reading_time = get_value(record, 'reading_time')
        image = self.get_image(record)

        return {
            '@context': 'https://schema.org',
            '@type': 'Article',
            'headline': get_value(record, 'title'),
            'description': get_value(record, 'excerpt') or extract_text_from_html(content)[:160],
            'image': [image] if image else None,
            'datePublished': _iso(get_value(record, 'published_at')),
            'dateModified': _iso(get_value(record, 'updated_at')),
            'author': {
                '@type': 'Person',
                'name': get_value(author, 'name') or 'Medical Expert',
                'url': get_value(author, 'profile_url'),
            },
            'publisher': {
                '@type': 'Organization',
                'name': self.organization_name,
                'logo': {
                    '@type': 'ImageObject',
                    'url': self.organization_logo,
                },
            },
            'mainEntityOfPage': {
                '@type': 'WebPage',
                '@id': canonical_url,
            },
            'articleSection': category_name,
            'wordCount': count_words(content) if content else None,
            'timeRequired': f"PT{reading_time}M" if reading_time else None,
            'about': {'@type': 'Thing', 'name': category_name} if category_name else None,
        }

    def _person_schema(self, record, canonical_url):
        social_links = get_value(record, 'social_links') or {}
        if isinstance(social_links, Mapping):
            social_links = social_links.values()
        return {
            '@context': 'https://schema.org',
            '@type': 'Person',
            'name': get_value(record, 'name'),
            'description': get_value(record, 'bio') or get_value(record, 'description'),
            'image': self.get_image(record) or None,
            'jobTitle': get_value(record, 'specialization') or get_value(record, 'specialty') or 'Medical Professional',
            'worksFor': {
                '@type': 'Organization',
                'name': self.organization_name,
            },
            'url': canonical_url,
            'sameAs': list(social_links),
        }

    def _collection_schema(self, record, canonical_url):
        name = get_value(record, 'name') or get_value(record, 'title') or 'Untitled'
        return {
            '@context': 'https://schema.org',
            '@type': 'CollectionPage',
            'name': name,
            'description': get_value(record, 'description'),
            'url': canonical_url,
            'mainEntity': {
                '@type': 'ItemList',
                'name': f"{name} Articles",
                'description': f"Collection of articles about {name}",
            },
        }

    # --- Persistence ---

    def upsert_seo_meta(self, entity_type, entity_id, record, custom_data=None):
        """
        Creates or updates the SeoMeta row for (entity_type, entity_id).

        Overrides stored by earlier calls are reapplied, so auto-generation
        never clobbers what an editor set. A concurrent insert of the same key
        surfaces as IntegrityError and is handled as an update.
        """
        custom = self.clean_seo_data(custom_data or {})
        lookup = {'entity_type': entity_type, 'entity_id': entity_id}

        seo_meta = SeoMeta.objects.filter(**lookup).first()
        created = False

        if seo_meta is None:
            overrides = custom
            data = self.synthesize(record, entity_type, overrides)
            try:
                with transaction.atomic():
                    seo_meta = SeoMeta.objects.create(custom_fields=sorted(custom), **lookup, **data)
                created = True
            except IntegrityError:
                logger.info(f"SEO Meta for {entity_type}:{entity_id} was created concurrently, updating instead")
                seo_meta = SeoMeta.objects.get(**lookup)

        if not created:
            overrides = {**seo_meta.custom_overrides(), **custom}
            data = self.synthesize(record, entity_type, overrides)
            for field, value in data.items():
                setattr(seo_meta, field, value)
            seo_meta.custom_fields = sorted(set(seo_meta.custom_fields) | set(custom))
            seo_meta.save()

        validation = self.validate_seo_data(data)
        if validation['warnings'] or validation['errors']:
            logger.warning(
                f"SEO validation warnings for {entity_type}:{entity_id}: "
                f"{validation['warnings'] + validation['errors']}"
            )

        logger.info(f"SEO Meta {'created' if created else 'updated'} for {entity_type}:{entity_id}")
        return UpsertResult(
            seo_meta=seo_meta,
            created=created,
            validation=validation,
            auto_generated=[field for field in data if field not in overrides],
        )

    def delete_seo_meta(self, entity_type, entity_id):
        deleted, _ = SeoMeta.objects.filter(entity_type=entity_type, entity_id=entity_id).delete()
        if deleted:
            logger.info(f"SEO Meta deleted for {entity_type}:{entity_id}")
        return deleted

    def build_seo_tags(self, record, seo_meta, entity_type):
        """
        The tag bundle a page head needs. `seo_meta` may be a SeoMeta row, a
        dict of its fields, or None to synthesize everything on the fly.
        """
        config = self.get_config(entity_type)
        if seo_meta is None:
            seo_meta = self.synthesize(record, entity_type)

        title = get_value(seo_meta, 'seo_title')
        description = get_value(seo_meta, 'seo_description')
        canonical = get_value(seo_meta, 'canonical_url')
        og_image = get_value(seo_meta, 'open_graph_image') or self.get_image(record)

        return {
            'title': title,
            'description': description,
            'keywords': get_value(seo_meta, 'seo_keywords', ''),
            'canonical': canonical,
            'robots': get_value(seo_meta, 'meta_robots') or DEFAULT_ROBOTS,
            'openGraph': {
                'title': get_value(seo_meta, 'open_graph_title') or title,
                'description': get_value(seo_meta, 'open_graph_description') or description,
                'image': og_image,
                'url': canonical,
                'type': config['og_type'],
                'siteName': self.site_name,
            },
            'twitter': {
                'card': get_value(seo_meta, 'twitter_card') or DEFAULT_TWITTER_CARD,
                'title': get_value(seo_meta, 'twitter_title') or title,
                'description': get_value(seo_meta, 'twitter_description') or description,
                'image': get_value(seo_meta, 'twitter_image') or og_image,
                'site': self.twitter_site,
            },
            'structuredData': get_value(seo_meta, 'schema_markup', {}),
        }

    # --- Validation and helpers ---

    def validate_seo_data(self, seo_data):
        """Length advisories go to `warnings`; only a bad canonical URL is an error."""
        errors = []
        warnings = []

        title = seo_data.get('seo_title')
        if title:
            if len(title) > TITLE_LENGTH_RANGE[1]:
                warnings.append(f'SEO title may be truncated in search results (>{TITLE_LENGTH_RANGE[1]} chars)')
            if len(title) < TITLE_LENGTH_RANGE[0]:
                warnings.append(f'SEO title might be too short (<{TITLE_LENGTH_RANGE[0]} chars)')

        description = seo_data.get('seo_description')
        if description:
            if len(description) > DESCRIPTION_LENGTH_RANGE[1]:
                warnings.append(f'SEO description may be truncated in search results (>{DESCRIPTION_LENGTH_RANGE[1]} chars)')
            if len(description) < DESCRIPTION_LENGTH_RANGE[0]:
                warnings.append(f'SEO description might be too short (<{DESCRIPTION_LENGTH_RANGE[0]} chars)')

        canonical_url = seo_data.get('canonical_url')
        if canonical_url and not self.is_valid_url(canonical_url):
            errors.append('Invalid canonical URL format')

        return {
            'is_valid': not errors,
            'errors': errors,
            'warnings': warnings,
        }

    def clean_seo_data(self, seo_data):
        """Keeps known SeoMeta columns that carry a value."""
        cleaned = {}
        for key, value in seo_data.items():
            if key not in SEO_FIELDS or value is None:
                continue
            if isinstance(value, str):
                value = value.strip()
            if isinstance(value, (str, dict, list)) and not value:
                continue
            cleaned[key] = value
        return cleaned

    def is_valid_url(self, value):
        try:
            URLValidator()(value)
        except ValidationError:
            return False
        return True

    def optimize_keywords(self, keywords, limit):
        if isinstance(keywords, (list, tuple)):
            keywords = ','.join(keywords)
        keyword_list = [keyword.strip() for keyword in keywords.split(',')]
        keyword_list = [keyword for keyword in keyword_list if len(keyword) > 2]
        return ', '.join(keyword_list[:limit])

    def extract_keywords(self, text, limit=10):
        """Most frequent words first; ties keep their first-seen order."""
        if not text:
            return []
        words = _NON_WORD.sub(' ', text.lower()).split()
        words = [word for word in words if len(word) > 3 and word not in STOP_WORDS]
        frequency = Counter(words)
        return sorted(frequency, key=frequency.get, reverse=True)[:limit]

    def get_domain_keywords(self, category_name):
        return DOMAIN_KEYWORDS.get(category_name.strip().lower(), DOMAIN_KEYWORDS['general'])

    def get_category_name(self, record):
        return get_value(get_value(record, 'category'), 'name')

    def get_image(self, record):
        return (
            get_value(record, 'featured_image')
            or get_value(record, 'image')
            or get_value(record, 'photo')
            or get_value(record, 'avatar')
            or ''
        )

    def get_default_description(self, record, structured_data_type):
        if structured_data_type == 'Article':
            return (
                f"Read this comprehensive medical article about {get_value(record, 'title', 'this topic')}. "
                "Get expert insights and reliable health information."
            )
        if structured_data_type == 'Person':
            return (
                f"Learn about {get_value(record, 'name', 'our doctor')}, a medical professional specializing in "
                f"{get_value(record, 'specialization') or get_value(record, 'specialty') or 'healthcare'}."
            )
        if structured_data_type == 'CollectionPage':
            return (
                f"Browse articles and resources in the {get_value(record, 'name', '')} category. "
                "Find reliable medical information and expert advice."
            )
        return 'Find reliable medical information and expert healthcare advice.'


seo_service = SeoService()
