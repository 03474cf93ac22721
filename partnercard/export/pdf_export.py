"""
PDF generation using WeasyPrint.

The page layout produces absolutely positioned draw operations; they are
rendered to HTML and WeasyPrint turns that HTML into PDF bytes. A logo is
applied in a second pass over the finished layout. If that pass fails for any
reason the text-only document from the first pass is returned instead.
"""
from __future__ import annotations

import base64
import binascii
import html
import io
import logging
import re
from dataclasses import dataclass
from typing import List, Tuple, Union

from PIL import Image, UnidentifiedImageError

from partnercard.core.config import DEFAULT_BASE_FILENAME, DEFAULT_ORGANISATION
from partnercard.core.errors import UnsupportedLogoError
from partnercard.core.models import PartnerRecord
from partnercard.export.pdf_layout import (
    HEADER_HEIGHT,
    HEADER_TOP,
    MARGIN,
    PAGE_HEIGHT,
    PAGE_WIDTH,
    TITLE_SIZE,
    CheckboxOp,
    ImageOp,
    LineOp,
    Page,
    RectOp,
    TextOp,
    layout_partner_card,
)

logger = logging.getLogger(__name__)

LOGO_MAX_WIDTH = 140.0
LOGO_TITLE_GAP = 12.0
SUPPORTED_LOGO_FORMATS = {"PNG": "image/png", "JPEG": "image/jpeg"}

LogoSource = Union[str, bytes]

_DATA_URI = re.compile(r"^data:[^;,]*;base64,", re.IGNORECASE)

STYLESHEET = f"""
@page {{ size: {PAGE_WIDTH}pt {PAGE_HEIGHT}pt; margin: 0; }}
html, body {{ margin: 0; padding: 0; }}
body {{ font-family: Helvetica, Arial, sans-serif; color: #000; }}
.page {{ position: relative; width: {PAGE_WIDTH}pt; height: {PAGE_HEIGHT}pt;
         overflow: hidden; page-break-after: always; }}
.page:last-child {{ page-break-after: auto; }}
.op {{ position: absolute; box-sizing: border-box; }}
.text {{ white-space: pre; line-height: 1.2; }}
.check {{ border: 0.75pt solid #000; text-align: center; font-weight: bold; }}
"""


def _get_weasyprint_html():
    """Lazy import of WeasyPrint to avoid an import-time crash when its system libraries are missing."""
    try:
        from weasyprint import HTML
        return HTML
    except (ImportError, OSError) as e:
        raise RuntimeError(
            "WeasyPrint is not available. Install it together with the Pango "
            "libraries (https://doc.courtbouillon.org/weasyprint/stable/first_steps.html). "
            f"Original error: {e}"
        )


@dataclass(frozen=True)
class Logo:
    data: bytes
    mime_type: str
    width: int
    height: int

    @property
    def data_uri(self) -> str:
        return f"data:{self.mime_type};base64,{base64.b64encode(self.data).decode('ascii')}"

    def fit(self, max_width: float, max_height: float) -> Tuple[float, float]:
        """Scale to fit the box while keeping the aspect ratio."""

        scale = min(max_width / self.width, max_height / self.height)
        return self.width * scale, self.height * scale


def load_logo(source: LogoSource) -> Logo:
    """Decode a base64 string (optionally a ``data:`` URI) or raw bytes into a PNG/JPEG logo."""

    if isinstance(source, str):
        encoded = "".join(_DATA_URI.sub("", source.strip()).split())
        try:
            data = base64.b64decode(encoded, validate=True)
        except (binascii.Error, ValueError) as exc:
            raise UnsupportedLogoError("Logo is not valid base64 data") from exc
    else:
        data = bytes(source)

    try:
        with Image.open(io.BytesIO(data)) as image:
            image_format = image.format
            width, height = image.size
            image.verify()
    except (UnidentifiedImageError, OSError, SyntaxError) as exc:
        raise UnsupportedLogoError("Logo could not be decoded as an image") from exc

    if image_format not in SUPPORTED_LOGO_FORMATS:
        raise UnsupportedLogoError(f"Unsupported logo format {image_format}; use PNG or JPEG")
    if not width or not height:
        raise UnsupportedLogoError("Logo has no pixels")
    return Logo(data=data, mime_type=SUPPORTED_LOGO_FORMATS[image_format], width=width, height=height)


def overlay_logo(pages: List[Page], logo: Logo, title: str) -> List[Page]:
    """Return new pages with the centered title swapped for the logo and a title beside it.

    The title is vertically centered on the logo's rendered height.
    """

    width, height = logo.fit(LOGO_MAX_WIDTH, HEADER_HEIGHT)
    first = Page(ops=[op for op in pages[0].ops if not (isinstance(op, TextOp) and op.key == "title")])
    first.ops.append(ImageOp(MARGIN, HEADER_TOP, width, height, logo.data_uri))
    first.ops.append(
        TextOp(
            MARGIN + width + LOGO_TITLE_GAP,
            HEADER_TOP + (height - TITLE_SIZE * 1.2) / 2,
            title,
            size=TITLE_SIZE,
            bold=True,
            key="title",
        )
    )
    return [first, *(Page(ops=list(page.ops)) for page in pages[1:])]


def _pt(value: float) -> str:
    return f"{value:.2f}pt"


def _render_op(op) -> str:
    if isinstance(op, TextOp):
        weight = "bold" if op.bold else "normal"
        if op.align == "center":
            position = f"left:{_pt(op.x - PAGE_WIDTH / 2)};width:{_pt(PAGE_WIDTH)};text-align:center"
        else:
            position = f"left:{_pt(op.x)}"
        return (
            f'<div class="op text" style="{position};top:{_pt(op.y)};'
            f'font-size:{_pt(op.size)};font-weight:{weight}">{html.escape(op.text)}</div>'
        )
    if isinstance(op, RectOp):
        background = f"background:{op.fill};" if op.fill else ""
        border = f"border:0.75pt solid {op.stroke};" if op.stroke else ""
        return (
            f'<div class="op" style="left:{_pt(op.x)};top:{_pt(op.y)};'
            f'width:{_pt(op.width)};height:{_pt(op.height)};{background}{border}"></div>'
        )
    if isinstance(op, LineOp):
        return (
            f'<div class="op" style="left:{_pt(op.x1)};top:{_pt(op.y)};'
            f'width:{_pt(op.x2 - op.x1)};height:0;border-top:1pt solid #000"></div>'
        )
    if isinstance(op, CheckboxOp):
        mark = "X" if op.checked else ""
        return (
            f'<div class="op check" style="left:{_pt(op.x)};top:{_pt(op.y)};'
            f'width:{_pt(op.size)};height:{_pt(op.size)};font-size:{_pt(op.size * 0.8)};'
            f'line-height:{_pt(op.size - 1.5)}">{mark}</div>'
        )
    if isinstance(op, ImageOp):
        return (
            f'<img class="op" src="{op.src}" style="left:{_pt(op.x)};top:{_pt(op.y)};'
            f'width:{_pt(op.width)};height:{_pt(op.height)}">'
        )
    raise TypeError(f"Unknown draw operation {op!r}")


def render_html(pages: List[Page]) -> str:
    """Render pages of draw operations as a standalone HTML document."""

    body = "\n".join(
        '<section class="page">\n' + "\n".join(_render_op(op) for op in page.ops) + "\n</section>"
        for page in pages
    )
    return (
        '<!DOCTYPE html>\n<html><head><meta charset="utf-8">'
        f"<style>{STYLESHEET}</style></head>\n<body>\n{body}\n</body></html>\n"
    )


def render_html_to_pdf(html_string: str) -> bytes:
    """Convert an HTML string to PDF bytes with WeasyPrint."""
    HTML = _get_weasyprint_html()
    pdf_buffer = io.BytesIO()
    HTML(string=html_string).write_pdf(target=pdf_buffer)
    return pdf_buffer.getvalue()


def to_pdf(
    record: PartnerRecord,
    logo: LogoSource | None = None,
    organisation: str = DEFAULT_ORGANISATION,
    title: str | None = None,
) -> bytes:
    """Return the partner card as PDF bytes, with ``logo`` in the header when it can be used."""

    title = title or f"{organisation} {DEFAULT_BASE_FILENAME}"
    pages = layout_partner_card(record, organisation=organisation, title=title)
    text_only = render_html_to_pdf(render_html(pages))
    if logo is None:
        return text_only

    try:
        decoded = load_logo(logo)
        return render_html_to_pdf(render_html(overlay_logo(pages, decoded, title)))
    except Exception as exc:
        logger.warning("Logo overlay failed, exporting PDF without logo: %s", exc)
        return text_only
