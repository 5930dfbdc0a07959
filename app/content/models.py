# medhub/app/content/models.py
from django.db import models
from django.urls import reverse
from django.utils import timezone
from tinymce.models import HTMLField

from core.utils import calculate_reading_time, generate_slug


class Author(models.Model):
    name = models.CharField(max_length=150)
    email = models.EmailField(unique=True)
    avatar = models.URLField(max_length=500, blank=True)
    profile_url = models.URLField(max_length=500, blank=True, help_text="Public profile page, used in structured data.")

    class Meta:
        ordering = ['name']

    def __str__(self):
        return self.name


class Category(models.Model):
    name = models.CharField(max_length=100, unique=True)
    slug = models.SlugField(max_length=120, unique=True, blank=True, help_text="Leave blank to auto-generate from name.")
    description = models.TextField(blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['name']
        verbose_name_plural = "Categories"

    def __str__(self):
        return self.name

    def get_absolute_url(self):
        return reverse('content:category_detail', kwargs={'slug': self.slug})

    def save(self, *args, **kwargs):
        if not self.slug:
            self.slug = generate_slug(self.name, Category, exclude_id=self.pk)
        super().save(*args, **kwargs)


class Article(models.Model):
    class ArticleStatus(models.TextChoices):
        DRAFT = 'draft', 'Draft'
        PUBLISHED = 'published', 'Published'
        ARCHIVED = 'archived', 'Archived'

    title = models.CharField(max_length=500)
    slug = models.SlugField(max_length=500, unique=True, blank=True, help_text="A unique URL-friendly path. Leave blank to auto-generate from title.")
    excerpt = models.TextField(blank=True)
    content = HTMLField(blank=True)
    featured_image = models.URLField(max_length=500, blank=True)
    category = models.ForeignKey(
        Category,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='articles'
    )
    author = models.ForeignKey(
        Author,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='articles'
    )
    status = models.CharField(max_length=20, choices=ArticleStatus.choices, default=ArticleStatus.DRAFT)
    is_featured = models.BooleanField(default=False)
    view_count = models.PositiveIntegerField(default=0)
    reading_time = models.PositiveIntegerField(default=0, help_text="Estimated minutes, recalculated on save.")
    published_at = models.DateTimeField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['-created_at']

    def __str__(self):
        return self.title

    def get_absolute_url(self):
        return reverse('content:article_detail', kwargs={'slug': self.slug})

    def save(self, *args, **kwargs):
        if not self.slug:
            self.slug = generate_slug(self.title, Article, exclude_id=self.pk)

        self.reading_time = calculate_reading_time(self.content)

        if self.status == self.ArticleStatus.PUBLISHED and not self.published_at:
            self.published_at = timezone.now()

        super().save(*args, **kwargs)


class Doctor(models.Model):
    name = models.CharField(max_length=255)
    slug = models.SlugField(max_length=255, unique=True, blank=True)
    specialty = models.CharField(max_length=255, blank=True)
    description = models.TextField(blank=True)
    image = models.URLField(max_length=500, blank=True)
    facebook_url = models.URLField(blank=True)
    instagram_url = models.URLField(blank=True)
    twitter_url = models.URLField(blank=True)
    linkedin_url = models.URLField(blank=True)
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['name']

    def __str__(self):
        return self.name

    def get_absolute_url(self):
        return reverse('content:doctor_detail', kwargs={'slug': self.slug})

    @property
    def social_links(self):
        links = {
            'facebook': self.facebook_url,
            'instagram': self.instagram_url,
            'twitter': self.twitter_url,
            'linkedin': self.linkedin_url,
        }
        return {network: url for network, url in links.items() if url}

    def save(self, *args, **kwargs):
        if not self.slug:
            self.slug = generate_slug(self.name, Doctor, exclude_id=self.pk)
        super().save(*args, **kwargs)


class Page(models.Model):
    title = models.CharField(max_length=255)
    slug = models.SlugField(max_length=255, unique=True, blank=True)
    excerpt = models.TextField(blank=True)
    content = HTMLField(blank=True)
    is_published = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['title']

    def __str__(self):
        return self.title

    def get_absolute_url(self):
        return reverse('content:page_detail', kwargs={'slug': self.slug})

    def save(self, *args, **kwargs):
        if not self.slug:
            self.slug = generate_slug(self.title, Page, exclude_id=self.pk)
        super().save(*args, **kwargs)
