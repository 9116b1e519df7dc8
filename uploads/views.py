# uploads/views.py

import logging

from django.core.files.storage import storages
from django.http import FileResponse, JsonResponse
from django.views.decorators.http import require_GET
from django.views.static import serve
from rest_framework import status
from rest_framework.exceptions import APIException
from rest_framework.parsers import FormParser, MultiPartParser
from rest_framework.response import Response
from rest_framework.views import APIView

from catalog.apps import get_repository
from catalog.serializers import FileFilterSerializer, FileSerializer, filters_from
from .serializers import FileUploadSerializer
from .services import UploadService

logger = logging.getLogger(__name__)


class FileListAPIView(APIView):
    """
    Endpoint: GET /api/files/?category=&section=&fileType=&search=

    A non-empty ``search`` narrows the listing to files whose original name,
    storage name or metadata contains it.
    """

    def get(self, request):
        query = FileFilterSerializer(data=request.query_params)
        query.is_valid(raise_exception=True)

        repo = get_repository()
        search = query.validated_data.get('search')
        try:
            if search:
                files = repo.search_files(search, **filters_from(query))
            else:
                files = repo.list_files(**filters_from(query))
            return Response(FileSerializer(files, many=True).data)
        except Exception as e:
            logger.error(f"Error fetching files: {e}", exc_info=True)
            return Response({"error": "Failed to fetch files"}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)


class FileUploadAPIView(APIView):
    """
    Endpoint: POST /api/files/upload/ (multipart/form-data)
    Fields: file, category, section, fileType, metadata (JSON string, optional)
    """
    parser_classes = [MultiPartParser, FormParser]

    def post(self, request):
        serializer = FileUploadSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        service = UploadService()
        try:
            new_file = service.ingest(
                payload=data.get('file'),
                category=data.get('category'),
                section=data.get('section'),
                file_type=data.get('file_type'),
                metadata=data.get('metadata'),
            )
            return Response(FileSerializer(new_file).data, status=status.HTTP_201_CREATED)
        except APIException as e:
            return Response({"error": str(e)}, status=e.status_code)
        except Exception as e:
            logger.error(f"Error uploading file: {e}", exc_info=True)
            return Response({"error": "Failed to upload file"}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)


class FileDetailAPIView(APIView):
    """
    Endpoints:
    - GET    /api/files/{pk}/
    - DELETE /api/files/{pk}/  (removes the stored payload as well)
    """

    def get(self, request, pk):
        file = get_repository().get_file(pk)
        if file is None:
            return Response({"error": "File not found"}, status=status.HTTP_404_NOT_FOUND)
        return Response(FileSerializer(file).data)

    def delete(self, request, pk):
        service = UploadService()
        try:
            if not service.delete_file(pk):
                return Response({"error": "File not found"}, status=status.HTTP_404_NOT_FOUND)
            return Response({"message": "File deleted successfully"}, status=status.HTTP_200_OK)
        except Exception as e:
            logger.error(f"Error deleting file {pk}: {e}", exc_info=True)
            return Response({"error": "Failed to delete file"}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)


class FileDownloadAPIView(APIView):
    """
    Endpoint: GET /api/files/{pk}/download/
    Streams the payload as an attachment named after the original filename.
    """

    def get(self, request, pk):
        file = get_repository().get_file(pk)
        if file is None:
            return Response({"error": "File not found"}, status=status.HTTP_404_NOT_FOUND)

        service = UploadService()
        try:
            handle = service.open_payload(file)
        except APIException as e:
            return Response({"error": str(e)}, status=e.status_code)

        return FileResponse(
            handle,
            as_attachment=True,
            filename=file.original_name,
            content_type=file.mimetype,
        )


@require_GET
def serve_upload(request, path):
    """Serves a stored payload by its storage name, readable from any origin."""
    response = serve(request, path, document_root=storages['uploads'].location)
    response["Access-Control-Allow-Origin"] = "*"
    response["Access-Control-Allow-Headers"] = "Origin, X-Requested-With, Content-Type, Accept"
    return response


@require_GET
def health_check(request):
    """A simple health check endpoint."""
    return JsonResponse({"status": "ok"})
