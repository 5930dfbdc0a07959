# medhub/app/core/urls.py

from django.contrib import admin
from django.urls import path, include

urlpatterns = [
    # Admin URL should be specific and is often placed first
    path('admin/', admin.site.urls),

    path('seo/', include('seo.urls', namespace='seo')),
    path('tinymce/', include('tinymce.urls')),

    # Public content URLs: /articles/<slug>/, /categories/<slug>/, ...
    path('', include('content.urls', namespace='content')),
]
