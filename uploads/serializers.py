from rest_framework import serializers

from catalog.models import Category, Section, FileType


class FileUploadSerializer(serializers.Serializer):
    """
    Shape check for the multipart upload form. Every field is optional here:
    the upload service reports absent ones as MissingField, so a missing
    field and a missing file produce the same kind of error.
    """
    file = serializers.FileField(required=False, allow_empty_file=True, write_only=True)
    category = serializers.ChoiceField(choices=Category.choices, required=False, allow_blank=True)
    section = serializers.ChoiceField(choices=Section.choices, required=False, allow_blank=True)
    fileType = serializers.ChoiceField(
        source='file_type', choices=FileType.choices, required=False, allow_blank=True
    )
    metadata = serializers.CharField(required=False, allow_blank=True, trim_whitespace=False)
