"""
Tests for the upload service: ingest, delete and payload access.
"""

import json
import logging

import pytest
from django.core.files.storage import FileSystemStorage
from django.core.files.uploadedfile import SimpleUploadedFile

from catalog.exceptions import (
    InvalidChoice,
    InvalidMetadata,
    MissingField,
    PayloadMissing,
    PayloadTooLarge,
    StorageUnavailable,
)
from uploads.services import UploadService, classify_file_type, parse_metadata

from .helpers import stored_blobs

MiB = 1024 * 1024


class FullDiskStorage(FileSystemStorage):
    def _save(self, name, content):
        raise OSError(28, "No space left on device")


class ReadOnlyStorage(FileSystemStorage):
    def delete(self, name):
        raise PermissionError(13, "Permission denied")


@pytest.fixture
def service(repository, storage):
    return UploadService(repository=repository, storage=storage, max_upload_size=10 * MiB)


def upload(name="scene.json", content=b'{"nodes": []}', content_type="application/json"):
    return SimpleUploadedFile(name, content, content_type=content_type)


def ingest(service, payload=None, **overrides):
    fields = {
        "payload": payload if payload is not None else upload(),
        "category": "scene-graphs",
        "section": "dataset",
        "file_type": "other",
        "metadata": None,
    }
    fields.update(overrides)
    return service.ingest(**fields)


class TestFileTypeClassification:

    @pytest.mark.parametrize("content_type, declared, expected", [
        ("image/png", "text", "image"),
        ("image/svg+xml", "other", "image"),
        ("application/json", "other", "json"),
        ("text/plain", "tptp", "text"),
        ("application/rdf+xml", "ontology", "ontology"),
        ("text/x-tptp", "tptp", "tptp"),
    ])
    def test_content_type_overrides_declared(self, content_type, declared, expected):
        assert classify_file_type(content_type, declared) == expected


class TestMetadataParsing:

    def test_string_is_parsed_as_json(self):
        assert parse_metadata('{"robot": "TIAGo"}') == {"robot": "TIAGo"}

    def test_empty_and_absent_mean_no_metadata(self):
        assert parse_metadata(None) is None
        assert parse_metadata("") is None

    def test_structured_value_passes_through(self):
        assert parse_metadata({"k": 1}) == {"k": 1}

    def test_malformed_string_raises(self):
        with pytest.raises(InvalidMetadata):
            parse_metadata("{not json")

    @pytest.mark.parametrize("text", ["  ", "\n\t"])
    def test_whitespace_only_string_raises(self, text):
        with pytest.raises(InvalidMetadata):
            parse_metadata(text)

    @pytest.mark.parametrize("text", ['{"score": NaN}', '[Infinity]', '{"low": -Infinity}'])
    def test_non_json_number_literals_raise(self, text):
        with pytest.raises(InvalidMetadata, match="not valid JSON"):
            parse_metadata(text)


class TestIngest:
    """Happy-path ingestion."""

    def test_records_file_and_stores_payload(self, service, repository, storage):
        payload = upload(name="kitchen.json", content=b'{"nodes": [1, 2]}')
        file = ingest(service, payload, metadata=json.dumps({"source": "lab"}))

        assert repository.get_file(file.id) == file
        assert file.original_name == "kitchen.json"
        assert file.filename != "kitchen.json"
        assert file.mimetype == "application/json"
        assert file.size == str(len(b'{"nodes": [1, 2]}'))
        assert file.file_type == "json"
        assert file.metadata == {"source": "lab"}
        assert stored_blobs(storage.location) == [file.filename]
        with storage.open(file.filename, "rb") as handle:
            assert handle.read() == b'{"nodes": [1, 2]}'

    def test_png_is_image_even_when_declared_text(self, service):
        file = ingest(service, upload("robot.png", b"\x89PNG\r\n\x1a\n", "image/png"), file_type="text")
        assert file.file_type == "image"

    def test_unrecognised_content_type_keeps_declared_type(self, service):
        file = ingest(service, upload("world.p", b"fof(a, axiom, p).", "text/x-tptp"), file_type="tptp")
        assert file.file_type == "tptp"
        assert file.mimetype == "text/x-tptp"

    def test_storage_names_differ_for_same_original_name(self, service):
        first = ingest(service, upload("same.json"))
        second = ingest(service, upload("same.json"))
        assert first.filename != second.filename

    def test_path_like_original_name_stays_inside_storage(self, service, storage):
        file = ingest(service, upload("../../etc/passwd", b"root", "text/plain"))
        assert "/" not in file.filename
        assert stored_blobs(storage.location) == [file.filename]

    def test_generic_content_type_is_sniffed(self, service, monkeypatch):
        """An octet-stream part is classified by its bytes."""
        magic = pytest.importorskip("magic")
        monkeypatch.setattr(magic, "from_buffer", lambda data, mime: "image/png")

        file = ingest(service, upload("robot.bin", b"\x89PNG\r\n\x1a\n", "application/octet-stream"),
                      file_type="other")

        assert file.mimetype == "image/png"
        assert file.file_type == "image"


class TestIngestRejections:
    """Validation failures leave both the repository and the storage untouched."""

    def test_missing_payload(self, repository, storage):
        service = UploadService(repository=repository, storage=storage)
        with pytest.raises(MissingField, match="No file"):
            service.ingest(payload=None, category="scene-graphs", section="dataset", file_type="json")
        assert repository.list_files() == []

    @pytest.mark.parametrize("field", ["category", "section", "file_type"])
    def test_missing_descriptive_field(self, service, repository, storage, field):
        with pytest.raises(MissingField):
            ingest(service, **{field: None})
        assert repository.list_files() == []
        assert stored_blobs(storage.location) == []

    def test_blank_descriptive_field_counts_as_missing(self, service):
        with pytest.raises(MissingField, match="section"):
            ingest(service, section="")

    def test_unknown_category(self, service, repository):
        with pytest.raises(InvalidChoice, match="category"):
            ingest(service, category="kitchen")
        assert repository.list_files() == []

    def test_invalid_metadata(self, service, repository, storage):
        with pytest.raises(InvalidMetadata):
            ingest(service, metadata="{broken")
        assert repository.list_files() == []
        assert stored_blobs(storage.location) == []

    def test_nan_metadata_is_rejected_before_storage(self, service, repository, storage):
        with pytest.raises(InvalidMetadata):
            ingest(service, metadata='{"score": NaN}')
        assert repository.list_files() == []
        assert stored_blobs(storage.location) == []

    def test_oversized_payload(self, service, repository, storage):
        """11 MiB against a 10 MiB limit is refused before anything is written."""
        big = upload("big.bin", b"\0" * (11 * MiB), "application/octet-stream")

        with pytest.raises(PayloadTooLarge):
            ingest(service, big)
        assert repository.list_files() == []
        assert stored_blobs(storage.location) == []

    def test_payload_at_limit_is_accepted(self, repository, storage):
        service = UploadService(repository=repository, storage=storage, max_upload_size=16)
        file = ingest(service, upload("edge.txt", b"x" * 16, "text/plain"))
        assert file.size == "16"

    def test_storage_failure_creates_no_record(self, repository, tmp_path):
        service = UploadService(repository=repository, storage=FullDiskStorage(location=str(tmp_path)))

        with pytest.raises(StorageUnavailable):
            ingest(service)
        assert repository.list_files() == []


class TestDelete:

    def test_removes_record_and_payload(self, service, repository, storage):
        file = ingest(service)

        assert service.delete_file(file.id) is True
        assert repository.get_file(file.id) is None
        assert stored_blobs(storage.location) == []

    def test_unknown_id_returns_false(self, service):
        assert service.delete_file("00000000-0000-0000-0000-000000000000") is False

    def test_second_delete_returns_false(self, service):
        file = ingest(service)
        service.delete_file(file.id)
        assert service.delete_file(file.id) is False

    def test_missing_payload_still_removes_record(self, service, repository, storage, caplog):
        file = ingest(service)
        storage.delete(file.filename)

        with caplog.at_level(logging.WARNING, logger="uploads.services"):
            assert service.delete_file(file.id) is True

        assert repository.get_file(file.id) is None
        assert file.filename in caplog.text

    def test_storage_error_still_removes_record(self, repository, tmp_path, caplog):
        storage = ReadOnlyStorage(location=str(tmp_path))
        service = UploadService(repository=repository, storage=storage)
        file = ingest(service)

        with caplog.at_level(logging.ERROR, logger="uploads.services"):
            assert service.delete_file(file.id) is True

        assert repository.get_file(file.id) is None
        assert stored_blobs(tmp_path) == [file.filename]
        assert "orphaned" in caplog.text


class TestOpenPayload:

    def test_returns_stored_bytes(self, service):
        file = ingest(service, upload(content=b'{"a": 1}'))
        with service.open_payload(file) as handle:
            assert handle.read() == b'{"a": 1}'

    def test_missing_payload_raises(self, service, storage):
        file = ingest(service)
        storage.delete(file.filename)
        with pytest.raises(PayloadMissing):
            service.open_payload(file)
