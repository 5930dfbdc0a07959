from datetime import datetime, timezone

import pytest

from content.models import Article, Author, Category, Doctor, Page


@pytest.fixture(autouse=True)
def site_identity(settings):
    settings.SITE_NAME = 'Medical Knowledge Hub'
    settings.SEO_BASE_URL = 'https://medhub.test'
    settings.SEO_ORGANIZATION_NAME = 'Medical Knowledge Hub'
    settings.SEO_ORGANIZATION_LOGO = 'https://medhub.test/logo.png'
    settings.SEO_TWITTER_SITE = '@medhub'
    settings.SEO_AUTO_GENERATE = True
    return settings


@pytest.fixture
def author(db):
    return Author.objects.create(
        name='Dr. Sari Wulandari',
        email='sari@medhub.test',
        profile_url='https://medhub.test/authors/sari',
    )


@pytest.fixture
def category(db):
    return Category.objects.create(name='Cardiology', description='Heart and blood vessel conditions.')


@pytest.fixture
def article(db, author, category):
    return Article.objects.create(
        title='Understanding Blood Pressure',
        excerpt='What your blood pressure numbers mean and when to see a doctor.',
        content='<p>Blood pressure is the force of blood against artery walls.</p><p>High blood pressure often has no symptoms.</p>',
        featured_image='https://medhub.test/media/bp.jpg',
        category=category,
        author=author,
        status=Article.ArticleStatus.PUBLISHED,
        published_at=datetime(2025, 1, 15, 8, 30, tzinfo=timezone.utc),
    )


@pytest.fixture
def doctor(db):
    return Doctor.objects.create(
        name='Andi Pratama',
        specialty='Cardiologist',
        description='Interventional cardiologist with fifteen years of experience.',
        image='https://medhub.test/media/andi.jpg',
        linkedin_url='https://linkedin.com/in/andi-pratama',
    )


@pytest.fixture
def page(db):
    return Page.objects.create(
        title='About Us',
        excerpt='Who we are and how we review medical content.',
        content='<p>Our editorial team works with practicing physicians.</p>',
        is_published=True,
    )
