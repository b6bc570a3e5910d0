"""Compare rendered plot images while ignoring format-specific noise.

Vector formats are compared textually. Timestamps that change on every
render are ignored. Raster formats are decoded and compared pixel by pixel.
"""

from __future__ import annotations

import io
import re

from PIL import Image

__all__ = ["equal", "diff", "golden_path"]

_RASTER_TYPES = frozenset({"jpeg", "jpg", "png", "tiff"})
_PDF_DATES = re.compile(rb"/(CreationDate|ModDate)\s*\([^)]*\)")
_MAX16 = 0xFFFF
_MASK32 = 0xFFFFFFFF


def golden_path(path: str) -> str:
    """Return the reference-file path for ``path``: ``name.ext`` becomes ``name_golden.ext``."""
    sep = max(path.rfind("/"), path.rfind("\\"))
    dot = path.rfind(".")
    if dot <= sep:
        return path + "_golden"
    return path[:dot] + "_golden" + path[dot:]


def _decode(raw: bytes) -> Image.Image:
    try:
        img = Image.open(io.BytesIO(raw))
        img.load()
    except Exception as exc:  # Pillow raises a variety of decoder errors
        raise ValueError(f"cmpimg: cannot decode image: {exc}") from exc
    return img


def _normalize_pdf(raw: bytes) -> bytes:
    if not raw.startswith(b"%PDF-"):
        raise ValueError("cmpimg: not a PDF file")
    if b"%%EOF" not in raw[-1024:]:
        raise ValueError("cmpimg: malformed PDF file: missing end-of-file marker")
    return _PDF_DATES.sub(rb"/\1()", raw)


def _equal_eps(raw1: bytes, raw2: bytes) -> bool:
    lines1 = raw1.decode("latin-1").split("\n")
    lines2 = raw2.decode("latin-1").split("\n")
    if len(lines1) != len(lines2):
        return False
    return all(
        "CreationDate" in line1 or line1 == line2
        for line1, line2 in zip(lines1, lines2)
    )


def equal(typ: str, raw1: bytes, raw2: bytes) -> bool:
    """Return whether two encoded images of type ``typ`` are equal.

    Supported types are "eps", "jpeg", "jpg", "pdf", "png", "svg", "tex"
    and "tiff". Raises ValueError for an unknown type or undecodable data.
    """
    if typ in ("svg", "tex"):
        return raw1 == raw2
    if typ == "eps":
        return _equal_eps(raw1, raw2)
    if typ == "pdf":
        return _normalize_pdf(raw1) == _normalize_pdf(raw2)
    if typ in _RASTER_TYPES:
        img1, img2 = _decode(raw1), _decode(raw2)
        return (
            img1.mode == img2.mode
            and img1.size == img2.size
            and img1.tobytes() == img2.tobytes()
        )
    raise ValueError(f"cmpimg: unknown image type {typ!r}")


def _rgba16(img: Image.Image):
    """Yield alpha-premultiplied 16-bit (r, g, b) triples, row by row."""
    for r, g, b, a in img.convert("RGBA").getdata():
        a16 = a * 0x101
        yield (
            r * 0x101 * a16 // _MAX16,
            g * 0x101 * a16 // _MAX16,
            b * 0x101 * a16 // _MAX16,
        )


def _gray16(r: int, g: int, b: int) -> int:
    return (19595 * r + 38470 * g + 7471 * b + (1 << 15)) >> 16


def _pixels(img: Image.Image, width: int, height: int) -> list[tuple[int, int, int]]:
    cropped = img.crop((0, 0, width, height))
    return list(_rgba16(cropped))


def diff(a: Image.Image, b: Image.Image) -> tuple[Image.Image, tuple[int, int, int, int]]:
    """Render an intensity-scaled difference between images ``a`` and ``b``.

    Returns an RGBA image covering the union of both images and the
    ``(left, top, right, bottom)`` box of their intersection, which is the
    only area written. Alpha of the inputs is not considered. The result is
    meant to highlight differences, not to measure them.
    """
    union = (max(a.width, b.width), max(a.height, b.height))
    width, height = min(a.width, b.width), min(a.height, b.height)
    box = (0, 0, width, height)
    dst = Image.new("RGBA", union, (0, 0, 0, 0))
    if width == 0 or height == 0:
        return dst, box

    deltas = [
        (abs(r1 - r2), abs(g1 - g2), abs(b1 - b2))
        for (r1, g1, b1), (r2, g2, b2) in zip(
            _pixels(a, width, height), _pixels(b, width, height)
        )
    ]
    grays = [_gray16(*d) for d in deltas]
    lo, hi = min(grays), max(grays)

    if hi == lo:
        scaled = [(0, 0, 0, 0)] * len(deltas)
    else:
        factor = _MAX16 // (hi - lo)

        def scale(v: int) -> int:
            return ((((v - lo) & _MASK32) * factor & _MASK32) & _MAX16) >> 8

        scaled = [(scale(r), scale(g), scale(bl), 255) for r, g, bl in deltas]

    region = Image.new("RGBA", (width, height))
    region.putdata(scaled)
    dst.paste(region, (0, 0))
    return dst, box