"""
Document file storage

Files live under MEDIA_ROOT/<DOCUMENT_UPLOAD_DIR>/<user id>/<timestamp>-<random><ext>.
Document.upload_path keeps the part below DOCUMENT_UPLOAD_DIR.
"""
import logging
import os
import time
from pathlib import Path, PurePosixPath

from django.conf import settings
from django.core.files.storage import FileSystemStorage
from django.utils.crypto import get_random_string

from apps.core.exceptions import NotFound, StorageError

logger = logging.getLogger(__name__)


def get_storage():
    # Built per call so MEDIA_ROOT overrides take effect
    return FileSystemStorage(location=Path(settings.MEDIA_ROOT) / settings.DOCUMENT_UPLOAD_DIR)


def build_filename(original_name):
    """'Quote.PDF' -> '1718031234567-k3j9x0a1b2.pdf'"""
    extension = os.path.splitext(original_name or '')[1].lower()
    return f"{int(time.time() * 1000)}-{get_random_string(10).lower()}{extension}"


def save_file(user, uploaded_file):
    """
    Write an upload to disk

    Returns:
        tuple: (stored filename, path relative to the upload dir)
    """
    name = f"{user.pk}/{build_filename(uploaded_file.name)}"
    try:
        upload_path = get_storage().save(name, uploaded_file)
    except OSError as e:
        logger.error(f"Failed to store upload {uploaded_file.name!r} for user {user.pk}: {e}")
        raise StorageError('Failed to store file')

    return PurePosixPath(upload_path).name, upload_path


def open_file(upload_path):
    storage = get_storage()
    if not upload_path or not storage.exists(upload_path):
        raise NotFound('File not found on disk')
    try:
        return storage.open(upload_path, 'rb')
    except OSError as e:
        logger.error(f"Failed to open {upload_path}: {e}")
        raise StorageError('Failed to read file')


def delete_file(upload_path):
    """Remove a stored file; a file that is already gone is fine"""
    if not upload_path:
        return
    try:
        get_storage().delete(upload_path)
    except OSError as e:
        logger.error(f"Failed to delete {upload_path}: {e}")
        raise StorageError('Failed to delete file')
