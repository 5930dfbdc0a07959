# medhub/app/core/utils.py
import logging
import re

from django.conf import settings
from django.db.models import QuerySet
from django.utils.html import strip_tags
from django.utils.text import slugify

from .exceptions import InvalidInput, SlugGenerationError

logger = logging.getLogger(__name__)

SLUG_FALLBACK = 'slug'
ELLIPSIS = '...'

_SEPARATOR_RUN = re.compile(r'[\s_-]+')
_WHITESPACE = re.compile(r'\s+')


def normalize_slug(name):
    """
    Turns a display name into the base form of a slug: lowercase ASCII,
    single hyphens between words, no leading or trailing hyphen.
    """
    value = slugify(name)
    value = _SEPARATOR_RUN.sub('-', value).strip('-')
    return value or SLUG_FALLBACK


def _fit_slug(base_slug, max_length, suffix=''):
    """Cuts `base_slug` so that base plus suffix fits the column."""
    if max_length:
        base_slug = base_slug[:max_length - len(suffix)].rstrip('-') or SLUG_FALLBACK
    return f'{base_slug}{suffix}'


def generate_slug(name, model, exclude_id=None, slug_field='slug', max_attempts=None):
    """
    Returns a slug for `name` that is not yet used in `model`.

    `model` is either a model class or a queryset; it is only read from.
    When `exclude_id` is given that row is ignored, so a record being updated
    can keep its own slug. Taken slugs get `-1`, `-2`, ... appended until a
    free one is found. The result never exceeds the slug field's max_length.
    """
    if not name or not str(name).strip():
        raise InvalidInput('Name is required for slug generation')

    if max_attempts is None:
        max_attempts = getattr(settings, 'SLUG_MAX_ATTEMPTS', 1000)

    queryset = model if isinstance(model, QuerySet) else model._default_manager.all()
    max_length = queryset.model._meta.get_field(slug_field).max_length
    if exclude_id is not None:
        queryset = queryset.exclude(pk=exclude_id)

    base_slug = normalize_slug(str(name))
    slug = _fit_slug(base_slug, max_length)
    counter = 1
    while queryset.filter(**{slug_field: slug}).exists():
        if counter > max_attempts:
            logger.error(f"Gave up generating a slug for '{name}' after {max_attempts} attempts")
            raise SlugGenerationError(
                f"No free slug for '{base_slug}' within {max_attempts} attempts"
            )
        slug = _fit_slug(base_slug, max_length, suffix=f'-{counter}')
        counter += 1

    return slug


def extract_text_from_html(value):
    """Strips tags, decodes entities and collapses whitespace."""
    if not value:
        return ''
    # Space before each tag keeps words in adjacent elements apart
    text = strip_tags(str(value).replace('<', ' <'))
    return _WHITESPACE.sub(' ', text).strip()


def count_words(value):
    text = extract_text_from_html(value)
    return len(text.split()) if text else 0


def calculate_reading_time(value, words_per_minute=200):
    """Estimated reading time in whole minutes; 0 for empty content."""
    words = count_words(value)
    if not words:
        return 0
    return max(1, -(-words // words_per_minute))


def truncate_text(text, max_length):
    """
    Shortens `text` to at most `max_length` characters, cutting at the last
    whitespace that fits and appending an ellipsis. Text that already fits
    is returned unchanged.
    """
    if text is None:
        return ''
    if len(text) <= max_length:
        return text

    truncated = text[:max_length - len(ELLIPSIS)]
    last_space = truncated.rfind(' ')
    if last_space > 0:
        truncated = truncated[:last_space]
    truncated = truncated.rstrip(' ,;:-|')
    return f'{truncated}{ELLIPSIS}'


def generate_excerpt(content, max_length=160):
    """Plain-text excerpt of HTML content, cut at a word boundary."""
    return truncate_text(extract_text_from_html(content), max_length)
