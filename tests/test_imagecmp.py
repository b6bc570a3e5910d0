import io

import pytest
from PIL import Image

from tickplot.imagecmp import diff, equal, golden_path


def _png(img: Image.Image, **kwargs) -> bytes:
    buf = io.BytesIO()
    img.save(buf, format="PNG", **kwargs)
    return buf.getvalue()


def _black(size=(4, 4)) -> Image.Image:
    return Image.new("RGB", size, (0, 0, 0))


def test_golden_path_inserts_suffix_before_extension():
    assert golden_path("testdata/align.png") == "testdata/align_golden.png"


def test_golden_path_keeps_directory_dots():
    assert golden_path("a.b/plot") == "a.b/plot_golden"


@pytest.mark.parametrize("typ", ["svg", "tex"])
def test_text_formats_compare_bytes(typ):
    assert equal(typ, b"<svg>1</svg>", b"<svg>1</svg>")
    assert not equal(typ, b"<svg>1</svg>", b"<svg>2</svg>")


def test_eps_ignores_creation_date():
    a = b"%!PS\n%%CreationDate: Mon\nstroke\n"
    b = b"%!PS\n%%CreationDate: Tue\nstroke\n"
    assert equal("eps", a, b)


def test_eps_detects_other_differences():
    a = b"%!PS\n%%CreationDate: Mon\nstroke\n"
    b = b"%!PS\n%%CreationDate: Mon\nfill\n"
    assert not equal("eps", a, b)


def test_eps_different_line_counts():
    assert not equal("eps", b"a\nb", b"a\nb\nc")


def test_pdf_ignores_dates():
    a = b"%PDF-1.4\n<< /CreationDate (D:2019) >>\nstream\n%%EOF\n"
    b = b"%PDF-1.4\n<< /CreationDate (D:2020) >>\nstream\n%%EOF\n"
    assert equal("pdf", a, b)


def test_pdf_content_difference():
    a = b"%PDF-1.4\n<< /A 1 >>\n%%EOF\n"
    b = b"%PDF-1.4\n<< /A 2 >>\n%%EOF\n"
    assert not equal("pdf", a, b)


def test_pdf_invalid_raises():
    with pytest.raises(ValueError):
        equal("pdf", b"not a pdf", b"%PDF-1.4\n%%EOF\n")


def test_unknown_type_raises():
    with pytest.raises(ValueError, match="unknown image type"):
        equal("bmpx", b"", b"")


def test_png_equal_despite_encoding():
    img = _black()
    img.putpixel((1, 2), (10, 20, 30))
    assert equal("png", _png(img, compress_level=0), _png(img, compress_level=9))


def test_png_pixel_difference():
    a = _black()
    b = _black()
    b.putpixel((0, 0), (255, 255, 255))
    assert not equal("png", _png(a), _png(b))


def test_png_size_difference():
    assert not equal("png", _png(_black((4, 4))), _png(_black((4, 5))))


def test_png_undecodable_raises():
    with pytest.raises(ValueError):
        equal("png", b"garbage", _png(_black()))


def test_diff_identical_images_is_transparent():
    img = _black()
    out, box = diff(img, img.copy())
    assert box == (0, 0, 4, 4)
    assert all(px == (0, 0, 0, 0) for px in out.getdata())


def test_diff_highlights_changed_pixel():
    a = _black()
    b = _black()
    b.putpixel((2, 1), (255, 255, 255))
    out, _ = diff(a, b)
    changed = out.getpixel((2, 1))
    others = [out.getpixel((x, y)) for x in range(4) for y in range(4) if (x, y) != (2, 1)]
    assert changed[3] == 255
    assert all(p[3] == 255 for p in others)
    assert all(sum(changed[:3]) > sum(p[:3]) for p in others)


def test_diff_covers_union_and_reports_intersection():
    a = _black((3, 5))
    b = _black((6, 2))
    b.putpixel((0, 0), (255, 0, 0))
    out, box = diff(a, b)
    assert out.size == (6, 5)
    assert box == (0, 0, 3, 2)
    assert out.getpixel((5, 4)) == (0, 0, 0, 0)


def test_diff_is_symmetric():
    a = _black()
    b = _black()
    b.putpixel((3, 3), (200, 100, 50))
    out_ab, _ = diff(a, b)
    out_ba, _ = diff(b, a)
    assert list(out_ab.getdata()) == list(out_ba.getdata())