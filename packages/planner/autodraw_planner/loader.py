"""Image loading from paths, URLs, data URLs and raw bytes."""

from __future__ import annotations

import base64
import binascii
import urllib.error
import urllib.parse
import urllib.request
from io import BytesIO
from pathlib import Path

from PIL import Image, UnidentifiedImageError


class ImageLoadError(RuntimeError):
    pass


def _decode(data: bytes, origin: str) -> Image.Image:
    try:
        image = Image.open(BytesIO(data))
        image.load()
    except (UnidentifiedImageError, OSError, SyntaxError, ValueError, Image.DecompressionBombError) as exc:
        raise ImageLoadError(f"Could not decode image from {origin}: {exc}") from exc
    return image.convert("RGBA")


def _read_data_url(url: str) -> bytes:
    header, _, payload = url.partition(",")
    try:
        if header.endswith(";base64"):
            return base64.b64decode(payload, validate=True)
        return urllib.parse.unquote_to_bytes(payload)
    except (binascii.Error, ValueError) as exc:
        raise ImageLoadError(f"Malformed data URL: {exc}") from exc


def _fetch(url: str, timeout_s: float) -> bytes:
    req = urllib.request.Request(url, headers={"User-Agent": "autodraw/0.1"})
    try:
        with urllib.request.urlopen(req, timeout=timeout_s) as resp:
            return resp.read()
    except (urllib.error.URLError, TimeoutError, OSError) as exc:
        raise ImageLoadError(f"Could not fetch {url}: {exc}") from exc


def load_image(source: str | Path | bytes | Image.Image, timeout_s: float = 30) -> Image.Image:
    if isinstance(source, Image.Image):
        return source.convert("RGBA")
    if isinstance(source, (bytes, bytearray)):
        return _decode(bytes(source), "bytes")

    text = str(source)
    if text.startswith("data:"):
        return _decode(_read_data_url(text), "data URL")
    if text.startswith(("http://", "https://")):
        return _decode(_fetch(text, timeout_s), text)

    path = Path(text).expanduser()
    try:
        data = path.read_bytes()
    except OSError as exc:
        raise ImageLoadError(f"Could not read {path}: {exc}") from exc
    return _decode(data, str(path))
