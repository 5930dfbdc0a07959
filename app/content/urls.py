# medhub/app/content/urls.py
from django.urls import path
from . import views

app_name = 'content'

urlpatterns = [
    path('articles/<slug:slug>/', views.article_detail, name='article_detail'),
    path('categories/<slug:slug>/', views.category_detail, name='category_detail'),
    path('doctors/<slug:slug>/', views.doctor_detail, name='doctor_detail'),
    path('pages/<slug:slug>/', views.page_detail, name='page_detail'),
]
