"""
Minimal Format LR - portrait transport receipt with only the essential fields
"""

from decimal import Decimal, ROUND_HALF_UP

from app.services.lr_format import TWO_PLACES, first_segment, format_currency, format_date, to_amount
from app.services.lr_surface import PORTRAIT
from app.services.lr_templates.base import LRLayout


class MinimalLayout(LRLayout):
    CODE = "minimal"
    NAME = "Minimal Format"
    ORIENTATION = PORTRAIT

    SAMPLE = {
        "company_name": "BHARAT LOGISTICS",
        "company_address": "Station Road, Transport Nagar, Delhi-110 042",
        "company_phone": "+91-11-2345678",
        "company_email": "info@bharatlogistics.com",
        "company_gst": "07AAAAA0000A1Z5",
        "document_number": "LR1002",
        "service_type": "Surface Transport",
        "booking_id": "BK2024001",
        "invoice_number": "INV2024001",
        "bilti_number": "BT2024001",
        "consignor_name": "N/A",
        "consignee_name": "N/A",
        "party_detail": "N/A",
        "status": "DRAFT",
        "payment_mode": "TO PAY",
        "terms": ("I/We hereby declare that the said consignment does not contain any hazardous "
                  "or prohibited goods. Goods booked at owner's risk."),
        "bottom_note": "Subject to Delhi Jurisdiction | This is computer generated receipt",
    }

    SAMPLE_FREIGHT = 15000
    LOADING_CHARGES = Decimal("500")
    GST_RATE = Decimal("0.05")
    TERMS_MAX_LINES = 3

    HEADER_Y = 18
    DETAILS_Y = 35
    PARTIES_Y = 46
    PARTY_HEIGHT = 28
    TABLE_Y = 77
    TABLE_HEIGHT = 50
    ROW_STEP = 4
    COLUMNS = (12, 60, 150, 180)

    @property
    def half_width(self) -> float:
        return (self.page_width - 25) / 2

    def draw_border(self):
        self.surface.set_line_width(0.3)
        self.surface.set_draw_color(150, 150, 150)
        self.surface.draw_rect(10, 10, self.page_width - 20, self.page_height - 20)

    def logo_box(self, position):
        if position == "center":
            return (self.page_width / 2 - 9, 12, 18, 14)
        if position == "right":
            return (self.page_width - 30, 14, 18, 14)
        return (12, 14, 18, 14)

    def _draw_lr_number(self, x: float):
        y = self.HEADER_Y
        self.font("normal", 7)
        self.text(x, y, "LR Number")
        self.font("bold", 10)
        self.use_primary()
        self.text(x, y + 4, self.fit_line(self.document_number, 34))
        self.reset_color()
        self.font("normal", 7)
        self.text(x, y + 8, f"Date: {self.lr_date}")

    def draw_header(self):
        w = self.page_width
        header = self.context.header
        self.draw_logo()

        for x in self.document_id_flanks(15, w - 50):
            self._draw_lr_number(x)

        center_y = 28 if self.logo_occupies("center") else self.HEADER_Y
        name_width = w - 110

        self.font("bold", 12)
        self.use_primary()
        self.text(w / 2, center_y, self.fit_line(self.company_value("name", "company_name"), name_width),
                  align="center")

        self.font("normal", 8)
        self.reset_color()
        self.text(w / 2, center_y + 4, "TRANSPORT RECEIPT", align="center")

        self.font("normal", 7)
        if header.show_address:
            address = self.company_value("address", "company_address")
            self.text(w / 2, center_y + 8, self.fit_line(address, name_width), align="center")

        contact = f"{self.company_value('phone', 'company_phone')} | {self.company_value('email', 'company_email')}"
        self.text(w / 2, center_y + 12, self.fit_line(contact, name_width), align="center")

        if header.show_gst:
            self.text(w / 2, center_y + 16, f"GSTIN: {self.company_value('gst_number', 'company_gst')}",
                      align="center")

        self.surface.set_line_width(0.5)
        self.surface.set_draw_color(0, 0, 0)
        self.surface.draw_line(10, 32, w - 10, 32)

    def draw_key_facts(self):
        y = self.DETAILS_Y
        spacing = (self.page_width - 20) / 4
        self.surface.set_fill_color(250, 250, 250)
        self.surface.draw_rect(10, y, self.page_width - 20, 8, "F")

        booking = self.booking
        details = [
            ("Service Type:", self.value_or_sample(booking.service_type, "service_type")),
            ("Booking ID:", self.value_or_sample(booking.booking_id, "booking_id")),
            ("Invoice No:", self.value_or_sample(booking.invoice_number, "invoice_number")),
            ("Bilti No:", self.value_or_sample(booking.bilti_number, "bilti_number")),
        ]
        for index, (label, value) in enumerate(details):
            x = 12 + index * spacing
            self.font("bold", 7)
            self.text(x, y + 3, label)
            self.font("normal")
            self.text(x, y + 6, self.fit_line(value, spacing - 3))

    def _party_details(self, x: float, role: str, label: str):
        y = self.PARTIES_Y
        party = self.party(role)
        width = self.half_width - 5
        na = self.sample("party_detail")

        self.font("bold", 7)
        self.text(x, y + 13, label)
        self.font("normal")
        self.text(x, y + 17, self.fit_line(self.party_name(role, f"{role}_name"), width))
        self.text(x, y + 20, self.address_line(party, width))
        self.text(x, y + 23, self.fit_line(f"GST: {party.gst_number or na}", width))
        self.text(x, y + 26, self.fit_line(f"Ph: {party.phone or na}", width))

    def draw_parties(self):
        y = self.PARTIES_Y
        half = self.half_width
        self.surface.set_draw_color(100, 100, 100)
        self.surface.set_line_width(0.3)

        self.surface.draw_rect(10, y, half, self.PARTY_HEIGHT)
        self.font("bold", 8)
        self.text(12, y + 4, "FROM (Origin)")
        if self.context.is_visible("consignor"):
            self._party_details(12, "consignor", "Consignor:")

        self.surface.draw_rect(15 + half, y, half, self.PARTY_HEIGHT)
        self.font("bold", 8)
        self.text(17 + half, y + 4, "TO (Destination)")
        if self.context.is_visible("consignee"):
            self._party_details(17 + half, "consignee", "Consignee:")

    def draw_route(self):
        # Origin and destination sit inside the FROM / TO boxes
        y = self.PARTIES_Y + 8
        width = self.half_width - 5
        self.font("normal", 7)
        if self.context.is_visible("from_location"):
            self.text(12, y, self.fit_line(first_segment(self.booking.from_location), width))
        if self.context.is_visible("to_location"):
            self.text(17 + self.half_width, y, self.fit_line(first_segment(self.booking.to_location), width))

    def draw_goods(self):
        y = self.TABLE_Y
        w = self.page_width
        col1, col2, col3, col4 = self.COLUMNS

        self.surface.set_draw_color(100, 100, 100)
        self.surface.set_line_width(0.3)
        self.surface.draw_rect(10, y, w - 20, self.TABLE_HEIGHT)
        self.surface.set_fill_color(240, 240, 240)
        self.surface.draw_rect(10, y, w - 20, 6, "F")

        self.font("bold", 7)
        self.text(col1, y + 4, "No. of Packages")
        self.text(col2, y + 4, "Description of Goods")
        self.text(col3, y + 4, "Rate/Unit")
        self.text(col4, y + 4, "Amount (Rs.)")

        self.font("normal")
        row_y = y + 10
        for row in self.rows:
            self.text(col1, row_y, self.fit_line(row.quantity, col2 - col1 - 2))
            self.text(col2, row_y, self.fit_line(row.description, col3 - col2 - 2))
            self.text(col4, row_y, self.fit_line(row.value, w - 10 - col4 - 2))
            row_y += self.ROW_STEP

    def draw_charges(self):
        w = self.page_width
        booking = self.booking
        table_y = self.TABLE_Y

        self.surface.set_draw_color(100, 100, 100)
        self.surface.draw_line(10, table_y + 30, w - 10, table_y + 30)

        charge_y = table_y + 35
        self.font("normal", 7)
        self.text(12, charge_y, "Pickup Date:")
        self.text(50, charge_y, format_date(booking.pickup_date) if booking.pickup_date else "-")

        self.text(12, charge_y + 4, "Status:")
        self.font("bold")
        self.text(50, charge_y + 4, self.value_or_sample(booking.status, "status"))
        self.font("normal")

        self.text(12, charge_y + 8, "Payment Mode:")
        payment_mode = self.value_or_sample(booking.payment_mode, "payment_mode")
        self.text(50, charge_y + 8, self.shown("payment_mode", payment_mode))

        freight = to_amount(booking.freight_charges, self.SAMPLE_FREIGHT)
        gst = ((freight + self.LOADING_CHARGES) * self.GST_RATE).quantize(TWO_PLACES, rounding=ROUND_HALF_UP)
        total = freight + self.LOADING_CHARGES + gst

        right_x = w / 2 + 10
        self.text(right_x, charge_y, "Basic Freight:")
        self.text(right_x + 40, charge_y, self.shown("freight_charges", format_currency(freight)))
        self.text(right_x, charge_y + 4, "Loading/Unloading:")
        self.text(right_x + 40, charge_y + 4, format_currency(self.LOADING_CHARGES))
        self.text(right_x, charge_y + 8, "GST @ 5%:")
        self.text(right_x + 40, charge_y + 8, format_currency(gst, fraction_digits=2))

        self.surface.draw_line(right_x, charge_y + 10, right_x + 60, charge_y + 10)

        self.font("bold")
        self.text(right_x, charge_y + 14, "Total Freight:")
        self.text(right_x + 40, charge_y + 14, format_currency(total, fraction_digits=2))

    def draw_footer(self):
        w = self.page_width
        footer = self.context.footer
        y = self.TABLE_Y + 53

        if footer.show_terms:
            self.font("bold", 7)
            self.text(12, y, "Declaration:")
            self.font("normal")
            terms = self.value_or_sample(footer.terms_text, "terms")
            lines = self.surface.split_text(terms, w - 25)[:self.TERMS_MAX_LINES]
            for index, line in enumerate(lines):
                self.text(12, y + 4 + index * 3, line)
            y += 4 + len(lines) * 3

        if footer.show_signature:
            self.surface.set_draw_color(100, 100, 100)
            self.surface.set_line_width(0.3)
            self.surface.draw_line(10, y + 2, w - 10, y + 2)
            self.draw_signatures(y + 10, inset=5, size=6, label_offset=3)

        self.font("normal", 6)
        self.surface.set_text_color(100, 100, 100)
        self.text(w / 2, self.page_height - 12, self.sample("bottom_note"), align="center")
        self.reset_color()
