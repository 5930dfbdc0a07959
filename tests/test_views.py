import json

import pytest
from django.test import RequestFactory
from django.urls import reverse

from content.models import Article
from seo.context_processors import seo_defaults
from seo.models import EntityType, SeoMeta

pytestmark = pytest.mark.django_db


def post_json(client, url, payload):
    return client.post(url, data=json.dumps(payload), content_type='application/json')


# --- Public content endpoints ---

def test_article_detail_returns_seo_tags(client, article):
    response = client.get(reverse('content:article_detail', kwargs={'slug': article.slug}))

    assert response.status_code == 200
    body = response.json()
    assert body['data']['article']['title'] == 'Understanding Blood Pressure'
    seo = body['data']['seo']
    assert seo['canonical'] == 'https://medhub.test/articles/understanding-blood-pressure'
    assert seo['openGraph']['type'] == 'article'
    assert seo['structuredData']['@type'] == 'Article'

    article.refresh_from_db()
    assert article.view_count == 1


def test_article_detail_hides_drafts(client, author):
    draft = Article.objects.create(title='Work In Progress', author=author)
    response = client.get(reverse('content:article_detail', kwargs={'slug': draft.slug}))
    assert response.status_code == 404


def test_detail_synthesizes_when_no_row_exists(client, settings, doctor):
    SeoMeta.objects.all().delete()

    response = client.get(reverse('content:doctor_detail', kwargs={'slug': doctor.slug}))

    assert response.status_code == 200
    seo = response.json()['data']['seo']
    assert seo['title'] == 'Dr. Andi Pratama | Medical Professional'
    assert seo['structuredData']['sameAs'] == ['https://linkedin.com/in/andi-pratama']


def test_category_and_page_detail(client, article, category, page):
    response = client.get(reverse('content:category_detail', kwargs={'slug': category.slug}))
    assert response.status_code == 200
    assert response.json()['data']['category']['articles'][0]['slug'] == article.slug
    assert response.json()['data']['seo']['structuredData']['@type'] == 'CollectionPage'

    response = client.get(reverse('content:page_detail', kwargs={'slug': page.slug}))
    assert response.status_code == 200
    assert response.json()['data']['seo']['title'] == 'About Us | Medical Knowledge Hub'


# --- Staff SEO API ---

def test_api_requires_login(client):
    response = client.get(reverse('seo:api_seo_list'))
    assert response.status_code == 302


def test_api_rejects_non_staff(client, django_user_model):
    user = django_user_model.objects.create_user(username='reader', password='secret-pass')
    client.force_login(user)

    response = client.get(reverse('seo:api_seo_list'))
    assert response.status_code == 403
    assert response.json()['success'] is False


def test_api_list_filters_by_type(admin_client, article, doctor):
    response = admin_client.get(reverse('seo:api_seo_list'), {'entity_type': 'Doctor'})

    assert response.status_code == 200
    items = response.json()['items']
    assert len(items) == 1
    assert items[0]['entity_type'] == 'Doctor'
    assert items[0]['entity_id'] == doctor.pk


@pytest.mark.parametrize('params, status', [
    ({'limit': '0'}, 200),
    ({'limit': 'ten'}, 400),
    ({'page': 'abc'}, 400),
    ({'page': '99'}, 200),
])
def test_api_list_handles_odd_paging_params(admin_client, article, params, status):
    response = admin_client.get(reverse('seo:api_seo_list'), params)
    assert response.status_code == status


def test_api_create(admin_client, settings, author):
    settings.SEO_AUTO_GENERATE = False
    article = Article.objects.create(title='Migraine Triggers', author=author)

    response = post_json(admin_client, reverse('seo:api_seo_create'), {
        'entity_type': 'Article',
        'entity_id': article.pk,
        'seo_title': 'Migraine triggers and how to avoid them',
        'canonical_url': 'https://medhub.test/articles/migraine-triggers',
    })

    assert response.status_code == 201
    data = response.json()['data']
    assert data['seo_title'] == 'Migraine triggers and how to avoid them'
    assert data['meta_robots'] == 'index,follow'
    assert data['custom_fields'] == ['seo_title', 'canonical_url']
    assert SeoMeta.objects.filter(entity_type=EntityType.ARTICLE, entity_id=article.pk).count() == 1


@pytest.mark.parametrize('payload, field', [
    ({'canonical_url': 'not-a-url'}, 'canonical_url'),
    ({'seo_title': 'x' * 61}, 'seo_title'),
    ({'seo_description': 'y' * 161}, 'seo_description'),
    ({'entity_id': 999999}, 'entity_id'),
])
def test_api_create_validation_errors(admin_client, settings, author, payload, field):
    settings.SEO_AUTO_GENERATE = False
    article = Article.objects.create(title='Migraine Triggers', author=author)

    response = post_json(admin_client, reverse('seo:api_seo_create'), {
        'entity_type': 'Article',
        'entity_id': article.pk,
        **payload,
    })

    assert response.status_code == 400
    assert field in response.json()['errors']
    assert not SeoMeta.objects.exists()


def test_api_create_rejects_duplicate_key(admin_client, article):
    response = post_json(admin_client, reverse('seo:api_seo_create'), {
        'entity_type': 'Article',
        'entity_id': article.pk,
    })

    assert response.status_code == 400
    assert SeoMeta.objects.filter(entity_type=EntityType.ARTICLE, entity_id=article.pk).count() == 1


def test_api_detail_get_and_partial_update(admin_client, article):
    seo_meta = SeoMeta.objects.get(entity_type=EntityType.ARTICLE, entity_id=article.pk)
    url = reverse('seo:api_seo_detail', args=[seo_meta.pk])

    response = admin_client.get(url)
    assert response.status_code == 200
    assert response.json()['data']['id'] == seo_meta.pk

    response = post_json(admin_client, url, {'meta_robots': 'noindex,follow'})
    assert response.status_code == 200

    seo_meta.refresh_from_db()
    assert seo_meta.meta_robots == 'noindex,follow'
    assert seo_meta.seo_title == 'Understanding Blood Pressure - Cardiology | Medical...'
    assert seo_meta.custom_fields == ['meta_robots']


def test_api_update_is_kept_on_next_save(admin_client, article):
    seo_meta = SeoMeta.objects.get(entity_type=EntityType.ARTICLE, entity_id=article.pk)
    post_json(admin_client, reverse('seo:api_seo_detail', args=[seo_meta.pk]), {'seo_keywords': 'hypertension, blood pressure'})

    article.save()

    seo_meta.refresh_from_db()
    assert seo_meta.seo_keywords == 'hypertension, blood pressure'


def test_api_delete(admin_client, article):
    seo_meta = SeoMeta.objects.get(entity_type=EntityType.ARTICLE, entity_id=article.pk)

    response = admin_client.post(reverse('seo:api_seo_delete', args=[seo_meta.pk]))

    assert response.status_code == 200
    assert not SeoMeta.objects.filter(pk=seo_meta.pk).exists()


def test_api_delete_missing_row(admin_client):
    response = admin_client.post(reverse('seo:api_seo_delete', args=[12345]))
    assert response.status_code == 404


def test_api_generate_with_overrides(admin_client, article):
    url = reverse('seo:api_seo_generate', args=['Article', article.pk])

    response = post_json(admin_client, url, {'seo_description': 'Custom description for sharing.'})

    assert response.status_code == 200
    body = response.json()
    assert body['created'] is False
    assert body['data']['seo_description'] == 'Custom description for sharing.'
    assert body['data']['twitter_description'] == 'Custom description for sharing.'
    assert 'seo_description' not in body['auto_generated']
    assert body['validation']['is_valid'] is True


def test_api_generate_creates_missing_row(admin_client, settings, doctor):
    SeoMeta.objects.all().delete()

    response = admin_client.post(reverse('seo:api_seo_generate', args=['Doctor', doctor.pk]))

    assert response.status_code == 201
    assert response.json()['created'] is True
    assert SeoMeta.objects.filter(entity_type=EntityType.DOCTOR, entity_id=doctor.pk).exists()


def test_api_generate_rejects_bad_canonical(admin_client, article):
    url = reverse('seo:api_seo_generate', args=['Article', article.pk])
    response = post_json(admin_client, url, {'canonical_url': 'broken'})

    assert response.status_code == 400
    assert response.json()['errors'] == ['Invalid canonical URL format']


def test_api_generate_unknown_type_or_record(admin_client, article):
    assert admin_client.post(reverse('seo:api_seo_generate', args=['Event', 1])).status_code == 404
    assert admin_client.post(reverse('seo:api_seo_generate', args=['Article', article.pk + 100])).status_code == 404


def test_seo_defaults_context_processor():
    request = RequestFactory().get('/about/')
    context = seo_defaults(request)

    assert context['meta_title'] == 'Medical Knowledge Hub'
    assert context['meta_canonical'] == 'https://medhub.test/about/'
    assert context['meta_twitter_site'] == '@medhub'
