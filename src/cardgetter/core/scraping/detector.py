"""Detect the effective content type of a response.

Declared `Content-Type` headers are only trusted when they say HTML (or say
nothing). Anything else is sniffed from the first bytes of the body, after
the WHATWG MIME sniffing algorithm, restricted to the signatures that matter
for picking a card.
"""

from __future__ import annotations

from typing import Optional

SNIFF_LENGTH = 512

TEXT_PLAIN = "text/plain; charset=utf-8"
OCTET_STREAM = "application/octet-stream"

# Case-insensitive tags that mark an HTML document; each must be followed by
# a space or ">".
_HTML_SIGNATURES = (
    b"<!DOCTYPE HTML",
    b"<HTML",
    b"<HEAD",
    b"<SCRIPT",
    b"<IFRAME",
    b"<H1",
    b"<DIV",
    b"<FONT",
    b"<TABLE",
    b"<A",
    b"<STYLE",
    b"<TITLE",
    b"<B",
    b"<BODY",
    b"<BR",
    b"<P",
    b"<!--",
)

# (prefix, content type) pairs checked in order
_EXACT_SIGNATURES = (
    (b"%PDF-", "application/pdf"),
    (b"%!PS-Adobe-", "application/postscript"),
    (b"\xfe\xff", "text/plain; charset=utf-16be"),
    (b"\xff\xfe", "text/plain; charset=utf-16le"),
    (b"\xef\xbb\xbf", "text/plain; charset=utf-8"),
    (b"\x00\x00\x01\x00", "image/x-icon"),
    (b"\x00\x00\x02\x00", "image/x-icon"),
    (b"BM", "image/bmp"),
    (b"GIF87a", "image/gif"),
    (b"GIF89a", "image/gif"),
    (b"\x89PNG\r\n\x1a\n", "image/png"),
    (b"\xff\xd8\xff", "image/jpeg"),
    (b"\x1a\x45\xdf\xa3", "video/webm"),
    (b"OggS\x00", "application/ogg"),
    (b"ID3", "audio/mpeg"),
    (b"fLaC", "audio/flac"),
    (b"PK\x03\x04", "application/zip"),
    (b"\x1f\x8b\x08", "application/x-gzip"),
)

# RIFF containers carry their subtype at offset 8
_RIFF_SIGNATURES = (
    (b"WEBPVP", "image/webp"),
    (b"AVI ", "video/avi"),
    (b"WAVE", "audio/wave"),
)

_WHITESPACE = b"\t\n\x0c\r "


def is_html(content_type: Optional[str]) -> bool:
    return "text/html" in (content_type or "").lower()


def should_trust_declared(content_type: Optional[str]) -> bool:
    """True when the declared header alone decides the type (empty or HTML)."""
    return not content_type or is_html(content_type)


def is_generic(content_type: str) -> bool:
    """True for the fallbacks `sniff_content_type` returns without a signature."""
    return content_type in (TEXT_PLAIN, OCTET_STREAM)


def _html_signature(data: bytes) -> bool:
    upper = data.upper()
    for sig in _HTML_SIGNATURES:
        if upper.startswith(sig):
            rest = data[len(sig) : len(sig) + 1]
            if rest in (b" ", b">"):
                return True
    return False


def _is_mp4(data: bytes) -> bool:
    if len(data) < 12 or data[4:8] != b"ftyp":
        return False
    box_size = int.from_bytes(data[:4], "big")
    if box_size % 4 != 0 or len(data) < box_size:
        return False
    # major brand then compatible brands, skipping the minor version
    for start in range(8, box_size, 4):
        if start == 12:
            continue
        if data[start : start + 3] == b"mp4":
            return True
    return False


def _looks_binary(data: bytes) -> bool:
    return any(b <= 0x08 or b == 0x0B or 0x0E <= b <= 0x1A or 0x1C <= b <= 0x1F for b in data)


def sniff_content_type(data: bytes) -> str:
    """Return the content type inferred from the first bytes of a body.

    Always returns a valid type; falls back to `text/plain; charset=utf-8`
    for text-looking data and `application/octet-stream` otherwise.
    """
    data = data[:SNIFF_LENGTH]

    stripped = data.lstrip(_WHITESPACE)
    if _html_signature(stripped):
        return "text/html; charset=utf-8"
    if stripped.startswith(b"<?xml"):
        return "text/xml; charset=utf-8"

    for prefix, content_type in _EXACT_SIGNATURES:
        if data.startswith(prefix):
            return content_type

    if data.startswith(b"RIFF") and len(data) >= 12:
        for marker, content_type in _RIFF_SIGNATURES:
            if data[8 : 8 + len(marker)] == marker:
                return content_type

    if _is_mp4(data):
        return "video/mp4"

    if _looks_binary(data):
        return OCTET_STREAM
    return TEXT_PLAIN


def detect_content_type(declared: Optional[str], head: bytes) -> str:
    """Pick the effective content type for a non-HTML response.

    Sniffing wins when it recognises a signature; when it only finds
    generic text or binary data the declared header is kept.
    """
    sniffed = sniff_content_type(head)
    if is_generic(sniffed) and declared:
        return declared
    return sniffed
