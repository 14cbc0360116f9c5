"""
Shared section interface for Lorry Receipt layouts

Every layout draws the same eight sections in the same order; subclasses
supply the geometry, the literal fallback text and the charge arithmetic.
"""

import logging
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from app.schemas.lr import BookingRecord, Party
from app.services.lr_context import RenderContext
from app.services.lr_format import apply_text_color, format_date, or_default, reset_text_color
from app.services.lr_goods import DEFAULT_ROW_CAPACITY, CargoRow, build_cargo_rows, fit_cargo_rows
from app.services.lr_surface import DrawingSurface, LANDSCAPE

logger = logging.getLogger(__name__)

LogoBox = Tuple[float, float, float, float]
PartyEntry = Tuple[str, Optional[str]]

ELLIPSIS = "..."


class LRLayout:
    """Base class for the four LR layouts"""

    CODE = "standard"
    NAME = "Standard Format"
    ORIENTATION = LANDSCAPE
    GOODS_ROW_CAPACITY = DEFAULT_ROW_CAPACITY

    # Literal text used when the corresponding field is absent
    SAMPLE: Dict[str, str] = {}

    def __init__(self, surface: DrawingSurface, booking: BookingRecord, context: RenderContext):
        self.surface = surface
        self.booking = booking
        self.context = context
        self.page_width = surface.page_width
        self.page_height = surface.page_height
        self.font_family = context.style.font_family
        self.primary_color = context.style.primary_color
        self.rows: List[CargoRow] = fit_cargo_rows(build_cargo_rows(booking), self.GOODS_ROW_CAPACITY)

    def render(self) -> None:
        """Draw the whole page; sections never depend on each other's results"""
        self.draw_border()
        self.draw_header()
        self.draw_key_facts()
        self.draw_parties()
        self.draw_route()
        self.draw_goods()
        self.draw_charges()
        self.draw_footer()

    # Sections

    def draw_border(self) -> None:
        raise NotImplementedError

    def draw_header(self) -> None:
        raise NotImplementedError

    def draw_key_facts(self) -> None:
        raise NotImplementedError

    def draw_parties(self) -> None:
        raise NotImplementedError

    def draw_route(self) -> None:
        raise NotImplementedError

    def draw_goods(self) -> None:
        raise NotImplementedError

    def draw_charges(self) -> None:
        raise NotImplementedError

    def draw_footer(self) -> None:
        raise NotImplementedError

    # Text helpers

    def font(self, style: str = "normal", size: Optional[float] = None) -> None:
        self.surface.set_font(self.font_family, style, size)

    def text(self, x: float, y: float, value: Optional[str], align: str = "left") -> None:
        if value:
            self.surface.draw_text(x, y, value, align)

    def use_primary(self) -> None:
        apply_text_color(self.surface, self.primary_color)

    def reset_color(self) -> None:
        reset_text_color(self.surface)

    def sample(self, key: str) -> str:
        return self.SAMPLE.get(key, "")

    def value_or_sample(self, value, key: str) -> str:
        return or_default(value, self.sample(key))

    def company_value(self, field_name: str, key: str) -> str:
        return or_default(getattr(self.context.company, field_name), self.sample(key))

    def shown(self, field_name: str, value: str) -> str:
        return value if self.context.is_visible(field_name) else ""

    def fit_line(self, value: Optional[str], max_width: float) -> str:
        """First line of value once wrapped to max_width mm"""
        if not value:
            return ""
        line = self.surface.split_text(str(value), max_width)[0]
        # a single unbroken word is never split, so cut it to the width
        while line and self.surface.measure_text_width(line) > max_width:
            line = line[:-1]
        return line

    def clip_text(self, value: Optional[str], max_width: float) -> str:
        """Shorten value with a trailing ellipsis until it fits max_width mm"""
        if not value:
            return ""
        value = str(value)
        if self.surface.measure_text_width(value) <= max_width:
            return value
        while value and self.surface.measure_text_width(value + ELLIPSIS) > max_width:
            value = value[:-1]
        return value.rstrip() + ELLIPSIS

    @property
    def lr_date(self) -> str:
        return format_date(self.booking.lr_date)

    # Logo

    def logo_box(self, position: str) -> LogoBox:
        """(x, y, w, h) of the logo for a position"""
        raise NotImplementedError

    def logo_occupies(self, side: str) -> bool:
        """True when a logo is planned on side, whether or not it later embeds"""
        return self.context.has_logo and self.context.header.logo_position == side

    def draw_logo(self) -> bool:
        if not self.context.has_logo:
            return False
        x, y, w, h = self.logo_box(self.context.header.logo_position)
        scale = self.context.logo_scale
        if scale != 1.0:
            # Grow or shrink around the box centre
            x, y = x + w * (1 - scale) / 2, y + h * (1 - scale) / 2
            w, h = w * scale, h * scale
        embedded = self.surface.embed_image(self.context.header.logo_url, x, y, w, h)
        if not embedded:
            logger.debug(f"Logo region left blank on {self.CODE} LR {self.document_number}")
        return embedded

    # Document identifier

    @property
    def document_number(self) -> str:
        return self.value_or_sample(self.booking.lr_number, "document_number")

    def document_id_flanks(self, left_x: float, right_x: float) -> List[float]:
        """Flank x positions not taken by the logo"""
        flanks = []
        if not self.logo_occupies("left"):
            flanks.append(left_x)
        if not self.logo_occupies("right"):
            flanks.append(right_x)
        return flanks

    # Parties

    def party(self, role: str) -> Party:
        return getattr(self.booking, role) or Party()

    def party_name(self, role: str, sample_key: str) -> str:
        flat_name = getattr(self.booking, f"{role}_name")
        return or_default(self.party(role).name or flat_name, self.sample(sample_key))

    def address_line(self, party: Party, max_width: float) -> Optional[str]:
        """First line of the party's address, or None when it has none"""
        if not party.address or not party.address.strip():
            return None
        return self.fit_line(party.address, max_width)

    def draw_party_block(self, x: float, y: float, max_width: float,
                         entries: Iterable[PartyEntry], step: float = 3.0) -> float:
        """Draw (style, text) lines downward; None entries take no space"""
        for style, value in entries:
            if value is None:
                continue
            self.font(style)
            self.text(x, y, self.fit_line(value, max_width))
            y += step
        return y

    # Signatures

    def draw_signatures(self, y: float, inset: float, size: float,
                        label_offset: float, style: str = "normal") -> None:
        labels: Sequence[str] = self.context.footer.signature_labels
        if not labels:
            return
        slot = (self.page_width - 20) / len(labels)
        self.surface.set_draw_color(100, 100, 100)
        self.surface.set_line_width(0.3)
        self.font(style, size)
        for index, label in enumerate(labels):
            x = 10 + index * slot
            self.surface.draw_line(x + inset, y, x + slot - inset, y)
            self.text(x + slot / 2, y + label_offset, self.fit_line(label, slot - 4), align="center")
