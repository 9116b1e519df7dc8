from django.urls import path, include

from uploads.views import serve_upload, health_check

urlpatterns = [
    path('api/', include('catalog.api_urls')),
    path('api/', include('uploads.api_urls')),
    # Raw payloads, addressed by File.filename
    path('uploads/<path:path>', serve_upload, name='upload-serve'),
    path('health/', health_check, name='health'),
]
