# utils/uploads.py
import os
import time
import uuid
from typing import Iterable, List, Optional, Tuple

from werkzeug.utils import secure_filename

UPLOAD_FIELD = "pdf"


def ensure_directory(path: str) -> str:
    os.makedirs(path, exist_ok=True)
    return path


def save_upload(file_storage, upload_dir: str) -> Tuple[str, Optional[str]]:
    """
    Store a single uploaded file under upload_dir.
    Returns (stored_path, original_filename), or ("", None) when nothing was attached.
    No type/size checks are applied.
    """
    if file_storage is None or not file_storage.filename:
        return "", None

    original_name = file_storage.filename
    safe_name = secure_filename(original_name) or "upload"
    stored_name = f"{int(time.time() * 1000)}-{uuid.uuid4().hex[:8]}-{safe_name}"

    ensure_directory(upload_dir)
    path = os.path.join(upload_dir, stored_name)
    file_storage.save(path)
    return path, original_name


def discard_upload(path: str) -> bool:
    """Delete a stored upload. Returns False if it was already gone."""
    try:
        os.remove(path)
        return True
    except FileNotFoundError:
        return False


def find_orphaned_uploads(upload_dir: str, referenced_paths: Iterable[str]) -> List[str]:
    """Files in upload_dir that no record points at."""
    if not os.path.isdir(upload_dir):
        return []

    referenced = {os.path.abspath(p) for p in referenced_paths if p}
    orphans = []
    for entry in sorted(os.listdir(upload_dir)):
        path = os.path.join(upload_dir, entry)
        if os.path.isfile(path) and os.path.abspath(path) not in referenced:
            orphans.append(path)
    return orphans
