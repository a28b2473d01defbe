"""MIME type lookup by file extension."""

import mimetypes

DEFAULT_CONTENT_TYPE = "application/octet-stream"


def get_content_type(name: str, default: str = DEFAULT_CONTENT_TYPE) -> str:
    """
    Guess the content type of a file name or bare extension.

    Args:
        name: File name (``photo.png``) or extension (``.png``).
        default: Returned when the extension is unknown.
    """
    if name.startswith("."):
        name = f"file{name}"
    content_type, _ = mimetypes.guess_type(name)
    return content_type or default
