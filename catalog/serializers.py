from rest_framework import serializers

from .models import Category, Section, FileType, ReasonerInput, ScenarioInput


# --- Read serializers: entities -> wire format (camelCase, as the web client expects) ---

class FileSerializer(serializers.Serializer):
    id = serializers.CharField(read_only=True)
    filename = serializers.CharField(read_only=True)
    originalName = serializers.CharField(source='original_name', read_only=True)
    mimetype = serializers.CharField(read_only=True)
    size = serializers.CharField(read_only=True)
    category = serializers.CharField(read_only=True)
    section = serializers.CharField(read_only=True)
    fileType = serializers.CharField(source='file_type', read_only=True)
    uploadedAt = serializers.DateTimeField(source='uploaded_at', read_only=True)
    metadata = serializers.JSONField(read_only=True)


class ReasonerSerializer(serializers.Serializer):
    id = serializers.CharField(read_only=True)
    name = serializers.CharField(read_only=True)
    description = serializers.CharField(read_only=True)
    url = serializers.CharField(read_only=True)
    category = serializers.CharField(read_only=True)


class ScenarioSerializer(serializers.Serializer):
    id = serializers.CharField(read_only=True)
    title = serializers.CharField(read_only=True)
    description = serializers.CharField(read_only=True)
    content = serializers.CharField(read_only=True)
    category = serializers.CharField(read_only=True)
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)


# --- Write serializers: request body -> validated creation input ---

class ReasonerCreateSerializer(serializers.Serializer):
    """
    Validates a new reasoner. Any id the client sends is discarded;
    the repository assigns it.
    """
    name = serializers.CharField(max_length=255)
    description = serializers.CharField()
    url = serializers.URLField()
    category = serializers.ChoiceField(choices=Category.choices)

    def to_input(self) -> ReasonerInput:
        return ReasonerInput(**self.validated_data)


class ScenarioCreateSerializer(serializers.Serializer):
    """
    Validates a new scenario. Any id or createdAt the client sends is discarded.
    """
    title = serializers.CharField(max_length=255)
    description = serializers.CharField()
    content = serializers.CharField()
    category = serializers.ChoiceField(choices=Category.choices)

    def to_input(self) -> ScenarioInput:
        return ScenarioInput(**self.validated_data)


# --- Query string filters ---
# Blank values are accepted and mean "no filter".

class CategoryFilterSerializer(serializers.Serializer):
    category = serializers.ChoiceField(choices=Category.choices, required=False, allow_blank=True)
    search = serializers.CharField(required=False, allow_blank=True, trim_whitespace=False)


class FileFilterSerializer(CategoryFilterSerializer):
    section = serializers.ChoiceField(choices=Section.choices, required=False, allow_blank=True)
    fileType = serializers.ChoiceField(
        source='file_type', choices=FileType.choices, required=False, allow_blank=True
    )


def filters_from(serializer: serializers.Serializer) -> dict:
    """Validated filter values with blanks dropped. ``search`` is not a filter."""
    return {
        key: value for key, value in serializer.validated_data.items()
        if key != 'search' and value not in ('', None)
    }
