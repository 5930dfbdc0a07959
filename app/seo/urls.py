# medhub/app/seo/urls.py
from django.urls import path
from . import views

app_name = 'seo'

urlpatterns = [
    path('api/meta/', views.api_seo_list, name='api_seo_list'),
    path('api/meta/create/', views.api_seo_create, name='api_seo_create'),
    path('api/meta/<int:meta_id>/', views.api_seo_detail, name='api_seo_detail'),
    path('api/meta/<int:meta_id>/delete/', views.api_seo_delete, name='api_seo_delete'),
    path('api/generate/<str:entity_type>/<int:entity_id>/', views.api_seo_generate, name='api_seo_generate'),
]
