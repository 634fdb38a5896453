# uploads.py - saves pictures sent with products, employees, orders and order items

import os
import re
import unicodedata
import uuid

from flask import current_app

from errors import UploadError
from logger import Logger

logger = Logger.get_logger(__name__)


# letters and digits from any script survive, so do '.', '-' and '_'
_UNSAFE_CHARS = re.compile(r'[^\w.-]')


def clean_filename(filename):
    """Base name of an uploaded file, safe to join onto the upload folder."""
    name = (filename or '').replace('\\', '/').rsplit('/', 1)[-1]
    name = unicodedata.normalize('NFC', '_'.join(name.split()))
    return _UNSAFE_CHARS.sub('', name).strip('._') or 'upload'


class StoredUpload:
    """A file already written to disk, plus the URL recorded on the entity."""

    def __init__(self, path, url):
        self.path = path
        self.url = url

    def discard(self):
        # the row never got saved, so nothing points at this file
        try:
            os.remove(self.path)
            logger.warning("Removed orphaned upload %s", self.path)
        except OSError as exc:
            logger.error("Could not remove orphaned upload %s: %s", self.path, exc)


def save_upload(file, category):
    """Write ``file`` under UPLOAD_FOLDER/<category> and return a StoredUpload.

    The stored name is ``<uuid4>_<original name>`` so two uploads of the same
    picture never overwrite each other. Any OS error is re-raised as UploadError.
    """
    folder = os.path.join(current_app.config['UPLOAD_FOLDER'], category)
    original_name = clean_filename(file.filename)
    unique_name = f'{uuid.uuid4()}_{original_name}'
    path = os.path.join(folder, unique_name)

    try:
        os.makedirs(folder, exist_ok=True)
        file.save(path)
    except OSError as exc:
        logger.exception("Failed to save upload %s", path)
        raise UploadError(str(exc)) from exc

    url = f"{current_app.config['UPLOAD_URL_PATH']}/{category}/{unique_name}"
    logger.info("Saved upload %s", url)
    return StoredUpload(path, url)
