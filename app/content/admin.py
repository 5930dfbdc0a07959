# medhub/app/content/admin.py
from django.contrib import admin
from django.db.models import Count
from .models import Author, Category, Article, Doctor, Page


@admin.register(Author)
class AuthorAdmin(admin.ModelAdmin):
    list_display = ('name', 'email', 'profile_url')
    search_fields = ('name', 'email')


@admin.register(Category)
class CategoryAdmin(admin.ModelAdmin):
    list_display = ('name', 'slug', 'article_count')
    search_fields = ('name', 'description')

    def get_queryset(self, request):
        qs = super().get_queryset(request)
        return qs.annotate(_article_count=Count('articles'))

    @admin.display(ordering='_article_count', description='Articles')
    def article_count(self, obj):
        return obj._article_count


@admin.register(Article)
class ArticleAdmin(admin.ModelAdmin):
    list_display = ('title', 'category', 'author', 'status', 'is_featured', 'reading_time', 'published_at')
    list_editable = ('status', 'is_featured')
    list_filter = ('status', 'is_featured', 'category', 'author')
    search_fields = ('title', 'excerpt', 'content')
    readonly_fields = ('reading_time', 'view_count', 'published_at')


@admin.register(Doctor)
class DoctorAdmin(admin.ModelAdmin):
    list_display = ('name', 'specialty', 'is_active')
    list_filter = ('is_active', 'specialty')
    search_fields = ('name', 'specialty', 'description')


@admin.register(Page)
class PageAdmin(admin.ModelAdmin):
    list_display = ('title', 'slug', 'is_published', 'updated_at')
    list_filter = ('is_published',)
    search_fields = ('title', 'content')
