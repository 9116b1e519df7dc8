# uploads/services.py
import json
import logging
import uuid
from typing import Any, Optional

from django.conf import settings
from django.core.files.storage import storages
from django.core.files.uploadedfile import UploadedFile

from catalog.apps import get_repository
from catalog.exceptions import (
    InvalidChoice,
    InvalidMetadata,
    MissingField,
    PayloadMissing,
    PayloadTooLarge,
    StorageUnavailable,
)
from catalog.models import Category, File, FileInput, FileType, Section

logger = logging.getLogger(__name__)

# Content types that say nothing about the payload; we sniff the bytes instead.
GENERIC_CONTENT_TYPES = {'', 'application/octet-stream'}
SNIFF_BYTES = 2048


def detect_content_type(payload: UploadedFile) -> str:
    """
    The content type the multipart part declared, or, when it declared
    nothing useful, the one libmagic reads from the first bytes.
    """
    declared = (payload.content_type or '').split(';')[0].strip().lower()
    if declared not in GENERIC_CONTENT_TYPES:
        return declared

    # libmagic is only needed when the client sends no usable content type.
    import magic

    payload.seek(0)
    mimetype = magic.from_buffer(payload.read(SNIFF_BYTES), mime=True)
    payload.seek(0)
    return mimetype


def classify_file_type(content_type: str, declared: str) -> str:
    """Content types we recognise override the declared fileType."""
    if content_type.startswith('image/'):
        return FileType.IMAGE
    if content_type == 'application/json':
        return FileType.JSON
    if content_type == 'text/plain':
        return FileType.TEXT
    return declared


def _reject_constant(name: str):
    # json.loads accepts NaN and Infinity; they are not JSON and cannot be rendered back.
    raise ValueError(f"'{name}' is not a JSON value")


def parse_metadata(metadata: Any) -> Optional[Any]:
    if metadata is None or metadata == '':
        return None
    if isinstance(metadata, str):
        try:
            return json.loads(metadata, parse_constant=_reject_constant)
        except json.JSONDecodeError as e:
            raise InvalidMetadata(f"Metadata is not valid JSON: {e.msg} (line {e.lineno}, column {e.colno}).")
        except ValueError as e:
            raise InvalidMetadata(f"Metadata is not valid JSON: {e}.")
    return metadata


class UploadService:
    """
    Turns an uploaded payload into a stored blob plus a File record, and
    removes both again on delete.
    """

    def __init__(self, repository=None, storage=None, max_upload_size: Optional[int] = None):
        self.repository = repository if repository is not None else get_repository()
        self.storage = storage if storage is not None else storages['uploads']
        self.max_upload_size = (
            settings.CATALOG_MAX_UPLOAD_SIZE if max_upload_size is None else max_upload_size
        )

    def ingest(self, *, payload: Optional[UploadedFile], category: Optional[str], section: Optional[str],
               file_type: Optional[str], metadata: Any = None) -> File:
        # 1. Validate everything BEFORE touching storage.
        if payload is None:
            raise MissingField("No file uploaded.")
        missing = [name for name, value in (('category', category), ('section', section), ('fileType', file_type))
                   if not value]
        if missing:
            raise MissingField(f"Category, section, and fileType are required. Missing: {', '.join(missing)}.")

        for choices, name, value in ((Category, 'category', category),
                                     (Section, 'section', section),
                                     (FileType, 'fileType', file_type)):
            if value not in choices.values:
                raise InvalidChoice(f"Invalid {name} '{value}'. Expected one of: {', '.join(choices.values)}.")

        if payload.size > self.max_upload_size:
            raise PayloadTooLarge(
                f"File is {payload.size} bytes; the limit is {self.max_upload_size} bytes."
            )

        parsed_metadata = parse_metadata(metadata)
        mimetype = detect_content_type(payload)
        effective_type = classify_file_type(mimetype, file_type)

        # 2. Store the payload under a name we generate. The client's filename
        #    is kept only as metadata, so it can never collide or escape the storage area.
        storage_name = uuid.uuid4().hex
        try:
            stored_name = self.storage.save(storage_name, payload)
        except OSError as e:
            logger.error(f"Could not write upload '{payload.name}' to storage: {e}", exc_info=True)
            raise StorageUnavailable(f"Could not save file to storage: {e}")

        # 3. Only now create the record.
        try:
            return self.repository.create_file(FileInput(
                filename=stored_name,
                original_name=payload.name,
                mimetype=mimetype,
                size=str(payload.size),
                category=category,
                section=section,
                file_type=effective_type,
                metadata=parsed_metadata,
            ))
        except Exception:
            self._discard_payload(stored_name)
            raise

    def delete_file(self, file_id) -> bool:
        """
        Removes the stored payload and the File record. Storage problems are
        logged and never keep the record alive. Returns False for unknown ids.
        """
        file = self.repository.get_file(file_id)
        if file is None:
            return False

        self._discard_payload(file.filename)
        return self.repository.delete_file(file.id)

    def open_payload(self, file: File):
        try:
            if not self.storage.exists(file.filename):
                logger.warning(f"Payload '{file.filename}' for file {file.id} is missing from storage.")
                raise PayloadMissing()
            return self.storage.open(file.filename, 'rb')
        except OSError as e:
            logger.error(f"Could not read payload '{file.filename}': {e}", exc_info=True)
            raise StorageUnavailable(f"Could not read file from storage: {e}")

    def _discard_payload(self, name: str) -> None:
        try:
            if self.storage.exists(name):
                self.storage.delete(name)
                logger.info(f"Deleted payload '{name}' from storage.")
            else:
                logger.warning(f"Payload '{name}' not found in storage, but its record exists. Removing the record anyway.")
        except OSError as e:
            logger.error(f"Could not delete payload '{name}' from storage; it is now orphaned: {e}", exc_info=True)
