from django.urls import path
from .views import FileListAPIView, FileUploadAPIView, FileDetailAPIView, FileDownloadAPIView

urlpatterns = [
    path('files/', FileListAPIView.as_view(), name='file-list'),
    path('files/upload/', FileUploadAPIView.as_view(), name='file-upload'),
    path('files/<str:pk>/', FileDetailAPIView.as_view(), name='file-detail'),
    path('files/<str:pk>/download/', FileDownloadAPIView.as_view(), name='file-download'),
]
