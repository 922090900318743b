# rentdrive/uploads.py
import os
import random
import re
import time

from flask import current_app
from werkzeug.utils import secure_filename


class UploadRejected(ValueError):
    pass


def _unique_name(original):
    stamp = int(time.time() * 1000)
    suffix = random.randint(0, 10 ** 9 - 1)
    cleaned = secure_filename(re.sub(r'\s+', '-', original)) or 'upload'
    return f"{stamp}-{suffix:09d}-{cleaned}"


def save_license(file):
    """Persist an uploaded driver license and return its static-relative path.

    Returns None when the form carried no file.
    """
    if file is None or not file.filename:
        return None

    ext = file.filename.rsplit('.', 1)[-1].lower() if '.' in file.filename else ''
    if ext not in current_app.config['ALLOWED_LICENSE_EXTENSIONS']:
        raise UploadRejected(f"File type .{ext} is not accepted")

    filename = _unique_name(file.filename)
    file.save(os.path.join(current_app.config['UPLOAD_FOLDER'], filename))
    return f"uploads/{filename}"


def discard_license(path):
    """Remove a license saved by ``save_license`` whose row never made it in."""
    if not path:
        return
    full_path = os.path.join(current_app.config['UPLOAD_FOLDER'], path.split('/', 1)[1])
    if os.path.exists(full_path):
        os.remove(full_path)
