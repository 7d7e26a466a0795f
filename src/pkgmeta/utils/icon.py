"""Icon helpers: data URI encoding and Apple CgBI to PNG conversion.

Apple's build tools rewrite PNG resources inside ``.ipa`` bundles into the
CgBI variant: a ``CgBI`` chunk precedes ``IHDR``, ``IDAT`` holds a raw
deflate stream without the zlib wrapper, pixels are stored as BGR(A) and
colour is premultiplied by alpha. Generic decoders reject such files, so the
stream is rewrapped here and Pillow decodes the pixels.
"""

import base64
import io
import mimetypes
import struct
import zlib
from pathlib import PurePosixPath

from PIL import Image

from pkgmeta.exceptions import DecodeError

PNG_SIGNATURE = b"\x89PNG\r\n\x1a\n"

# Media types that older mimetypes tables do not know about.
_EXTRA_MEDIA_TYPES = {".webp": "image/webp"}

# Pillow raw modes reading Apple pixel order; "BGRa" also undoes premultiplied alpha.
_APPLE_RAW_MODES = {"RGBA": "BGRa", "RGB": "BGR"}

# Apple specific chunks that make no sense once the stream is rewritten.
_DROPPED_CHUNKS = {b"CgBI", b"iDOT"}


def media_type_for(filename: str) -> str:
    """Derive a media type from a file name's extension."""
    suffix = PurePosixPath(filename).suffix.lower()
    if suffix in _EXTRA_MEDIA_TYPES:
        return _EXTRA_MEDIA_TYPES[suffix]
    media_type, _ = mimetypes.guess_type(f"icon{suffix}", strict=False)
    return media_type or "application/octet-stream"


def to_data_uri(data: bytes, filename: str) -> str:
    """Encode ``data`` as a base64 data URI typed after ``filename``."""
    encoded = base64.b64encode(data).decode("ascii")
    return f"data:{media_type_for(filename)};base64,{encoded}"


def _iter_chunks(data: bytes):
    offset = len(PNG_SIGNATURE)
    while offset + 8 <= len(data):
        (length,) = struct.unpack(">I", data[offset : offset + 4])
        chunk_type = data[offset + 4 : offset + 8]
        body = data[offset + 8 : offset + 8 + length]
        if len(body) != length:
            raise DecodeError("icon", f"Truncated PNG chunk {chunk_type!r}")
        yield chunk_type, body
        offset += 12 + length
        if chunk_type == b"IEND":
            return
    raise DecodeError("icon", "PNG stream ended before IEND")


def _chunk(chunk_type: bytes, body: bytes) -> bytes:
    crc = zlib.crc32(chunk_type + body) & 0xFFFFFFFF
    return struct.pack(">I", len(body)) + chunk_type + body + struct.pack(">I", crc)


def is_cgbi(data: bytes) -> bool:
    """Return True if ``data`` is a PNG whose first chunk is ``CgBI``."""
    return data.startswith(PNG_SIGNATURE) and data[12:16] == b"CgBI"


def _rewrap(data: bytes) -> bytes:
    """Drop Apple chunks and give IDAT back its zlib wrapper."""
    header = b""
    before_idat: list[tuple[bytes, bytes]] = []
    after_idat: list[tuple[bytes, bytes]] = []
    idat = bytearray()
    for chunk_type, body in _iter_chunks(data):
        if chunk_type in _DROPPED_CHUNKS or chunk_type == b"IEND":
            continue
        if chunk_type == b"IHDR":
            header = body
        elif chunk_type == b"IDAT":
            idat.extend(body)
        elif idat:
            after_idat.append((chunk_type, body))
        else:
            before_idat.append((chunk_type, body))

    if len(header) != 13:
        raise DecodeError("icon", "Missing or malformed IHDR chunk")

    try:
        raw = zlib.decompressobj(-zlib.MAX_WBITS).decompress(bytes(idat))
    except zlib.error as e:
        raise DecodeError("icon", f"Invalid CgBI image data: {e}") from e

    parts = [PNG_SIGNATURE, _chunk(b"IHDR", header)]
    parts.extend(_chunk(t, b) for t, b in before_idat)
    parts.append(_chunk(b"IDAT", zlib.compress(raw)))
    parts.extend(_chunk(t, b) for t, b in after_idat)
    parts.append(_chunk(b"IEND", b""))
    return b"".join(parts)


def cgbi_to_png(data: bytes) -> bytes:
    """Convert an Apple CgBI PNG into a standard PNG.

    Standard PNG input (no ``CgBI`` chunk) is returned unchanged.

    Raises:
        DecodeError: If the data is not a PNG or cannot be decoded.
    """
    if not data.startswith(PNG_SIGNATURE):
        raise DecodeError("icon", "Icon is not a PNG image")
    if not is_cgbi(data):
        return data

    try:
        with Image.open(io.BytesIO(_rewrap(data))) as decoded:
            raw_mode = _APPLE_RAW_MODES.get(decoded.mode)
            if raw_mode:
                img = Image.frombytes(
                    decoded.mode, decoded.size, decoded.tobytes(), "raw", raw_mode
                )
            else:
                img = decoded.copy()
        buf = io.BytesIO()
        img.save(buf, "PNG")
    except (OSError, SyntaxError, ValueError) as e:
        raise DecodeError("icon", f"Cannot decode CgBI icon: {e}") from e
    return buf.getvalue()
