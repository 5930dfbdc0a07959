# medhub/app/seo/views.py
import json
import logging

from django.core.exceptions import ValidationError
from django.core.paginator import Paginator, EmptyPage, PageNotAnInteger
from django.db import IntegrityError, transaction
from django.forms.models import model_to_dict
from django.http import Http404, JsonResponse
from django.shortcuts import get_object_or_404
from django.urls import reverse
from django.views.decorators.http import require_GET, require_POST, require_http_methods

from core.decorators import staff_required
from .forms import SeoMetaForm
from .models import EntityType, SeoMeta
from .services import SEO_FIELDS, get_entity_model, seo_service

logger = logging.getLogger(__name__)


def _request_data(request):
    """Supports both JSON body and standard form data."""
    if request.content_type == 'application/json':
        return json.loads(request.body or '{}')
    return request.POST.dict()


def _explicit_fields(data):
    return [field for field in SEO_FIELDS if data.get(field) not in (None, '', {}, [])]


def serialize_seo_meta(seo_meta):
    data = {
        'id': seo_meta.pk,
        'entity_type': seo_meta.entity_type,
        'entity_id': seo_meta.entity_id,
        'custom_fields': seo_meta.custom_fields,
        'created_at': seo_meta.created_at.isoformat() if seo_meta.created_at else None,
        'updated_at': seo_meta.updated_at.isoformat() if seo_meta.updated_at else None,
        'update_url': reverse('seo:api_seo_detail', args=[seo_meta.pk]),
    }
    data.update({field: getattr(seo_meta, field) for field in SEO_FIELDS})
    return data


@staff_required
@require_GET
def api_seo_list(request):
    # --- 1. Get Filters ---
    entity_type = request.GET.get('entity_type', '')
    search_query = request.GET.get('search', '')
    page_number = request.GET.get('page', 1)
    try:
        limit = max(1, int(request.GET.get('limit', 50)))
    except ValueError:
        return JsonResponse({'success': False, 'error': 'limit must be a number.'}, status=400)

    # --- 2. Build Queryset ---
    queryset = SeoMeta.objects.all().order_by('entity_type', 'entity_id')
    if entity_type:
        queryset = queryset.filter(entity_type=entity_type)
    if search_query:
        queryset = queryset.filter(seo_title__icontains=search_query)

    # --- 3. Paginate ---
    paginator = Paginator(queryset, limit)
    try:
        page_obj = paginator.page(page_number)
    except PageNotAnInteger:
        return JsonResponse({'success': False, 'error': 'page must be a number.'}, status=400)
    except EmptyPage:
        return JsonResponse({'items': [], 'pagination': {}})

    return JsonResponse({
        'items': [serialize_seo_meta(seo_meta) for seo_meta in page_obj.object_list],
        'pagination': {
            'current_page': page_obj.number,
            'total_pages': paginator.num_pages,
            'has_next': page_obj.has_next(),
            'has_previous': page_obj.has_previous(),
        }
    })


@staff_required
@require_POST
def api_seo_create(request):
    try:
        data = _request_data(request)
    except json.JSONDecodeError:
        return JsonResponse({'success': False, 'error': 'Invalid JSON body.'}, status=400)

    form = SeoMetaForm(data)
    if not form.is_valid():
        return JsonResponse({'success': False, 'message': 'Validation errors', 'errors': form.errors.get_json_data()}, status=400)

    seo_meta = form.save(commit=False)
    seo_meta.custom_fields = _explicit_fields(data)
    try:
        with transaction.atomic():
            seo_meta.save()
    except IntegrityError:
        return JsonResponse(
            {'success': False, 'message': 'SEO Meta already exists for this record', 'errors': {'entity_id': [{'message': 'Already exists.', 'code': 'unique'}]}},
            status=400
        )
    logger.info(f"SEO Meta created: {seo_meta.pk} for {seo_meta.entity_type}:{seo_meta.entity_id}")

    return JsonResponse(
        {'success': True, 'message': 'SEO Meta created successfully', 'data': serialize_seo_meta(seo_meta)},
        status=201
    )


@staff_required
@require_http_methods(['GET', 'POST'])
def api_seo_detail(request, meta_id):
    seo_meta = get_object_or_404(SeoMeta, pk=meta_id)

    if request.method == 'GET':
        return JsonResponse({'success': True, 'data': serialize_seo_meta(seo_meta)})

    try:
        data = _request_data(request)
    except json.JSONDecodeError:
        return JsonResponse({'success': False, 'error': 'Invalid JSON body.'}, status=400)

    # Partial updates: unspecified fields keep their stored values
    current = model_to_dict(seo_meta, fields=SeoMetaForm.Meta.fields)
    form = SeoMetaForm({**current, **data}, instance=seo_meta)
    if not form.is_valid():
        return JsonResponse({'success': False, 'message': 'Validation errors', 'errors': form.errors.get_json_data()}, status=400)

    seo_meta = form.save(commit=False)
    seo_meta.custom_fields = sorted(set(seo_meta.custom_fields) | set(_explicit_fields(data)))
    seo_meta.save()
    logger.info(f"SEO Meta updated: {seo_meta.pk}")

    return JsonResponse({'success': True, 'message': 'SEO Meta updated successfully', 'data': serialize_seo_meta(seo_meta)})


@staff_required
@require_POST
def api_seo_delete(request, meta_id):
    seo_meta = get_object_or_404(SeoMeta, pk=meta_id)
    seo_meta.delete()
    logger.info(f"SEO Meta deleted: {meta_id}")
    return JsonResponse({'success': True, 'message': 'SEO Meta deleted successfully'})


@staff_required
@require_POST
def api_seo_generate(request, entity_type, entity_id):
    """
    Runs the auto-generating upsert for one content record.
    The request body may carry explicit SEO field overrides.
    """
    if entity_type not in EntityType.values:
        raise Http404(f"Unknown entity type '{entity_type}'")

    record = get_object_or_404(get_entity_model(entity_type), pk=entity_id)

    try:
        custom_data = _request_data(request)
    except json.JSONDecodeError:
        return JsonResponse({'success': False, 'error': 'Invalid JSON body.'}, status=400)

    try:
        result = seo_service.upsert_seo_meta(entity_type, record.pk, record, custom_data)
    except ValidationError as e:
        return JsonResponse({'success': False, 'message': 'Validation errors', 'errors': e.messages}, status=400)
    except Exception as e:
        logger.exception(f"Error generating SEO meta for {entity_type}:{entity_id}")
        return JsonResponse({'success': False, 'error': str(e)}, status=500)

    return JsonResponse({
        'success': True,
        'created': result.created,
        'data': serialize_seo_meta(result.seo_meta),
        'validation': result.validation,
        'auto_generated': result.auto_generated,
    }, status=201 if result.created else 200)
