import secrets
import time
from pathlib import Path, PurePath


def ensure_data_dirs(data_dir: Path, upload_dir: Path) -> Path:
    data_dir.mkdir(parents=True, exist_ok=True)
    upload_dir.mkdir(parents=True, exist_ok=True)
    return data_dir


def file_extension(name: str) -> str:
    """Lowercased extension of an uploaded name, kept only if it is plain ASCII."""
    suffix = PurePath(name.replace("\\", "/")).suffix.lower()
    if not suffix or not all(c.isascii() and (c.isalnum() or c == ".") for c in suffix):
        return ""
    return suffix


def generate_stored_name(original_name: str) -> str:
    """Stored blob name: ms timestamp, random token, original extension."""
    return f"{int(time.time() * 1000)}-{secrets.token_hex(8)}{file_extension(original_name)}"


def remove_file(path: Path) -> bool:
    """Remove a blob. Returns False when it was already gone."""
    try:
        path.unlink()
    except FileNotFoundError:
        return False
    return True
