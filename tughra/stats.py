"""Text statistics and data-URI helpers for the CLI and worker callers."""
import base64
import binascii
import mimetypes
import re
from pathlib import Path
from typing import Union

from .errors import MalformedInputError

SIZE_UNITS = ["bytes", "KB", "MB", "GB", "TB"]
_LINE_BREAK = re.compile(r"\r\n|\r|\n")
_DATA_URI = re.compile(r"^data:([^;,]*)(;base64)?,(.*)$", re.DOTALL)


def format_size(size: float) -> str:
    unit = 0
    while size >= 1024 and unit < len(SIZE_UNITS) - 1:
        size /= 1024
        unit += 1
    return f"{size:.2f} {SIZE_UNITS[unit]}"


def decode_data_uri(uri: str):
    """Split a data URI into (mime_type, payload_bytes)."""
    match = _DATA_URI.match(uri)
    if not match:
        raise MalformedInputError("Not a data URI.")
    mime, is_b64, payload = match.groups()
    if not is_b64:
        return mime or "text/plain", payload.encode("utf-8")
    try:
        return mime or "text/plain", base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError) as e:
        raise MalformedInputError(f"Invalid Base64 in data URI: {e}") from None


def calculate_stats(text: str) -> dict:
    mime = "text/plain"
    is_data_uri = text.startswith("data:")
    if is_data_uri:
        mime, data = decode_data_uri(text)
        # byte-per-character view of the payload, like a binary string
        text = data.decode("latin-1")
        size = len(data)
    else:
        size = len(text.encode("utf-8", "surrogatepass"))

    return {
        "characters": len(text),
        "words": len(text.split()),
        "lines": len(_LINE_BREAK.split(text)),
        "size": size,
        "type": mime,
        "is_data_uri": is_data_uri,
    }


def file_to_data_uri(path: Union[str, Path]) -> str:
    path = Path(path)
    mime, _ = mimetypes.guess_type(path.name)
    payload = base64.b64encode(path.read_bytes()).decode("ascii")
    return f"data:{mime or 'application/octet-stream'};base64,{payload}"
