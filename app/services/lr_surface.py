"""
Drawing surfaces for Lorry Receipt layouts

Layouts position everything in millimetres from the top-left corner of an A4
page. A surface turns those calls into output:
- ReportLabSurface draws onto a reportlab canvas and returns PDF bytes
- RecordingSurface records every call as an op tuple (tests, previews of geometry)

Both share the same font metrics so text measurement and splitting agree.
"""

import io
import os
import base64
import binascii
import logging
from abc import ABC, abstractmethod
from typing import Any, List, Optional, Tuple, Union

from PIL import Image
from reportlab.pdfgen import canvas
from reportlab.pdfbase import pdfmetrics
from reportlab.lib.pagesizes import A4, landscape
from reportlab.lib.units import mm
from reportlab.lib.utils import ImageReader, simpleSplit

logger = logging.getLogger(__name__)

PORTRAIT = "portrait"
LANDSCAPE = "landscape"

ImageSource = Union[str, bytes]

# family -> (normal, bold, italic, bolditalic)
FONT_FAMILIES = {
    "helvetica": ("Helvetica", "Helvetica-Bold", "Helvetica-Oblique", "Helvetica-BoldOblique"),
    "times": ("Times-Roman", "Times-Bold", "Times-Italic", "Times-BoldItalic"),
    "courier": ("Courier", "Courier-Bold", "Courier-Oblique", "Courier-BoldOblique"),
}
FONT_ALIASES = {
    "arial": "helvetica",
    "sans-serif": "helvetica",
    "times new roman": "times",
    "serif": "times",
    "monospace": "courier",
}
FONT_STYLES = {"normal": 0, "bold": 1, "italic": 2, "bolditalic": 3}


def resolve_font(family: Optional[str], style: Optional[str] = "normal") -> str:
    """Map a CSS-ish family name and style onto a standard PDF font"""
    key = (family or "helvetica").strip().lower()
    key = FONT_ALIASES.get(key, key)
    faces = FONT_FAMILIES.get(key, FONT_FAMILIES["helvetica"])
    return faces[FONT_STYLES.get((style or "normal").strip().lower(), 0)]


def decode_image(source: ImageSource) -> Image.Image:
    """
    Decode a logo source into an RGB PIL image.

    Accepts raw bytes, data URIs, raw base64 strings and local file paths.
    Remote URLs are rejected; they must be fetched before rendering.
    Raises ValueError or OSError on anything undecodable.
    """
    if isinstance(source, (bytes, bytearray)):
        image_bytes = bytes(source)
    elif isinstance(source, str):
        text = source.strip()
        if text.startswith(("http://", "https://")):
            raise ValueError("remote logo URLs must be fetched before rendering")
        if text.startswith("data:") and "," in text:
            image_bytes = base64.b64decode(text.split(",", 1)[1])
        elif os.path.isfile(text):
            with open(text, "rb") as f:
                image_bytes = f.read()
        else:
            try:
                image_bytes = base64.b64decode(text, validate=True)
            except binascii.Error as e:
                raise ValueError(f"logo is neither a file nor base64 data: {e}") from e
    else:
        raise ValueError(f"unsupported logo source type: {type(source).__name__}")

    image = Image.open(io.BytesIO(image_bytes))
    image.load()
    if image.mode != "RGB":
        # Flatten transparency onto white paper
        rgba = image.convert("RGBA")
        background = Image.new("RGB", rgba.size, (255, 255, 255))
        background.paste(rgba, mask=rgba.split()[3])
        image = background
    return image


class DrawingSurface(ABC):
    """Abstract page in millimetres with a top-left origin"""

    def __init__(self, orientation: str = PORTRAIT):
        self.orientation = orientation
        size = landscape(A4) if orientation == LANDSCAPE else A4
        self._page_size_pt = size
        self.page_width = round(size[0] / mm, 3)
        self.page_height = round(size[1] / mm, 3)
        self.font_name = resolve_font("helvetica")
        self.font_size = 10.0

    # Font state and metrics shared by every surface

    def set_font(self, family: Optional[str], style: str = "normal", size: Optional[float] = None):
        self.font_name = resolve_font(family, style)
        if size is not None:
            self.font_size = float(size)
        self._apply_font()

    def set_font_size(self, size: float):
        self.font_size = float(size)
        self._apply_font()

    def measure_text_width(self, text: str, font: Optional[str] = None, size: Optional[float] = None) -> float:
        """Width of text in mm for the current (or given) font"""
        return pdfmetrics.stringWidth(text or "", font or self.font_name, size or self.font_size) / mm

    def split_text(self, text: str, max_width: float) -> List[str]:
        """Break text into lines no wider than max_width mm"""
        if not text:
            return [""]
        lines = simpleSplit(str(text), self.font_name, self.font_size, max_width * mm)
        return lines or [""]

    def _gray_or_rgb(self, r: int, g: Optional[int], b: Optional[int]) -> Tuple[int, int, int]:
        if g is None or b is None:
            return (r, r, r)
        return (r, g, b)

    # Drawing primitives

    @abstractmethod
    def _apply_font(self):
        ...

    @abstractmethod
    def set_draw_color(self, r: int, g: Optional[int] = None, b: Optional[int] = None):
        ...

    @abstractmethod
    def set_fill_color(self, r: int, g: Optional[int] = None, b: Optional[int] = None):
        ...

    @abstractmethod
    def set_text_color(self, r: int, g: Optional[int] = None, b: Optional[int] = None):
        ...

    @abstractmethod
    def set_line_width(self, width: float):
        ...

    @abstractmethod
    def draw_rect(self, x: float, y: float, w: float, h: float, style: str = "S"):
        ...

    @abstractmethod
    def draw_line(self, x1: float, y1: float, x2: float, y2: float):
        ...

    @abstractmethod
    def draw_text(self, x: float, y: float, text: str, align: str = "left"):
        ...

    @abstractmethod
    def embed_image(self, source: ImageSource, x: float, y: float, w: float, h: float) -> bool:
        """Place an image; False (never an exception) when it cannot be decoded"""

    @abstractmethod
    def finish(self) -> bytes:
        ...


class ReportLabSurface(DrawingSurface):
    """DrawingSurface backed by a single-page reportlab canvas"""

    def __init__(self, orientation: str = PORTRAIT, author: Optional[str] = None,
                 creator: Optional[str] = None, title: str = "Lorry Receipt"):
        super().__init__(orientation)
        self._buffer = io.BytesIO()
        # invariant=1 keeps timestamps and document ids out of the output
        self._canvas = canvas.Canvas(self._buffer, pagesize=self._page_size_pt, invariant=1)
        self._canvas.setTitle(title)
        if author:
            self._canvas.setAuthor(author)
        if creator:
            self._canvas.setCreator(creator)
        # reportlab paints text with the fill color, so both are tracked
        self._fill_rgb = (0, 0, 0)
        self._text_rgb = (0, 0, 0)
        self._apply_font()

    def _y(self, y: float) -> float:
        return self._page_size_pt[1] - y * mm

    def _apply_font(self):
        self._canvas.setFont(self.font_name, self.font_size)

    @staticmethod
    def _unit(rgb: Tuple[int, int, int]) -> Tuple[float, float, float]:
        return tuple(max(0, min(255, c)) / 255.0 for c in rgb)

    def set_draw_color(self, r, g=None, b=None):
        self._canvas.setStrokeColorRGB(*self._unit(self._gray_or_rgb(r, g, b)))

    def set_fill_color(self, r, g=None, b=None):
        self._fill_rgb = self._gray_or_rgb(r, g, b)

    def set_text_color(self, r, g=None, b=None):
        self._text_rgb = self._gray_or_rgb(r, g, b)

    def set_line_width(self, width):
        self._canvas.setLineWidth(width * mm)

    def draw_rect(self, x, y, w, h, style="S"):
        style = (style or "S").upper()
        fill = 1 if "F" in style else 0
        stroke = 1 if ("D" in style or style == "S") else 0
        if fill:
            self._canvas.setFillColorRGB(*self._unit(self._fill_rgb))
        self._canvas.rect(x * mm, self._y(y + h), w * mm, h * mm, stroke=stroke, fill=fill)

    def draw_line(self, x1, y1, x2, y2):
        self._canvas.line(x1 * mm, self._y(y1), x2 * mm, self._y(y2))

    def draw_text(self, x, y, text, align="left"):
        if text is None or text == "":
            return
        self._canvas.setFillColorRGB(*self._unit(self._text_rgb))
        text = str(text)
        if align == "center":
            self._canvas.drawCentredString(x * mm, self._y(y), text)
        elif align == "right":
            self._canvas.drawRightString(x * mm, self._y(y), text)
        else:
            self._canvas.drawString(x * mm, self._y(y), text)

    def embed_image(self, source, x, y, w, h) -> bool:
        try:
            image = decode_image(source)
            self._canvas.drawImage(ImageReader(image), x * mm, self._y(y + h), w * mm, h * mm)
        except Exception as e:
            logger.warning(f"⚠️ Logo could not be embedded, leaving region blank: {e}")
            return False
        return True

    def finish(self) -> bytes:
        self._canvas.showPage()
        self._canvas.save()
        return self._buffer.getvalue()


Op = Tuple[Any, ...]


class RecordingSurface(DrawingSurface):
    """
    Records drawing calls instead of producing a PDF.

    embed_result forces the outcome of embed_image; None decodes the source
    with Pillow like the real surface does.
    """

    def __init__(self, orientation: str = PORTRAIT, embed_result: Optional[bool] = None):
        super().__init__(orientation)
        self.embed_result = embed_result
        self.ops: List[Op] = []

    def _apply_font(self):
        self.ops.append(("font", self.font_name, self.font_size))

    def set_draw_color(self, r, g=None, b=None):
        self.ops.append(("draw_color",) + self._gray_or_rgb(r, g, b))

    def set_fill_color(self, r, g=None, b=None):
        self.ops.append(("fill_color",) + self._gray_or_rgb(r, g, b))

    def set_text_color(self, r, g=None, b=None):
        self.ops.append(("text_color",) + self._gray_or_rgb(r, g, b))

    def set_line_width(self, width):
        self.ops.append(("line_width", width))

    def draw_rect(self, x, y, w, h, style="S"):
        self.ops.append(("rect", x, y, w, h, style))

    def draw_line(self, x1, y1, x2, y2):
        self.ops.append(("line", x1, y1, x2, y2))

    def draw_text(self, x, y, text, align="left"):
        if text is None or text == "":
            return
        self.ops.append(("text", x, y, str(text), align))

    def embed_image(self, source, x, y, w, h) -> bool:
        if self.embed_result is None:
            try:
                decode_image(source)
                ok = True
            except Exception as e:
                logger.warning(f"⚠️ Logo could not be embedded, leaving region blank: {e}")
                ok = False
        else:
            ok = self.embed_result
        self.ops.append(("image", x, y, w, h, ok))
        return ok

    def texts(self) -> List[str]:
        """All drawn strings in drawing order"""
        return [op[3] for op in self.ops if op[0] == "text"]

    def finish(self) -> bytes:
        return "\n".join(repr(op) for op in self.ops).encode("utf-8")
