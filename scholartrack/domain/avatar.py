from __future__ import annotations

import base64

MAX_AVATAR_BYTES = 5 * 1024 * 1024
ALLOWED_AVATAR_MIME = frozenset({"image/png", "image/jpeg", "image/gif", "image/webp"})


def avatar_data_uri(content: bytes, mime_type: str) -> str:
    """Encode a picked photo as a `data:` URI kept on the in-memory applicant."""
    normalized_mime = (mime_type or "").strip().lower()
    if normalized_mime not in ALLOWED_AVATAR_MIME:
        raise ValueError(f"Unsupported avatar type '{mime_type}'.")
    if not content:
        raise ValueError("Avatar image is empty.")
    if len(content) > MAX_AVATAR_BYTES:
        raise ValueError(
            f"Avatar image is {len(content)} bytes; the limit is {MAX_AVATAR_BYTES} bytes."
        )
    encoded = base64.b64encode(content).decode("ascii")
    return f"data:{normalized_mime};base64,{encoded}"
