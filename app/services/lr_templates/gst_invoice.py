"""
GST Invoice Style LR - portrait, laid out like a tax invoice with a CGST/SGST breakdown
"""

from app.services.lr_format import compute_gst, first_segment, format_currency, or_default
from app.services.lr_surface import PORTRAIT
from app.services.lr_templates.base import LRLayout

BLUE = (59, 130, 246)
GREEN = (34, 197, 94)


class GstInvoiceLayout(LRLayout):
    CODE = "gst_invoice"
    NAME = "GST Invoice Style"
    ORIENTATION = PORTRAIT

    SAMPLE = {
        "company_name": "CARGO SOLUTIONS",
        "company_address": "Company Address",
        "company_phone": "0000-0000000",
        "company_email": "info@company.com",
        "company_gst": "00AAAAA0000A1Z5",
        "company_pan": "AAAAA0000A",
        "document_number": "AUTO-GEN",
        "consignor_name": "Consignor Name",
        "consignee_name": "Consignee Name",
        "party_detail": "N/A",
        "missing": "-",
        "weight": "0",
        "from_location": "Origin",
        "to_location": "Destination",
        "payment_mode": "TO PAY",
        "terms": "Goods booked at owner's risk. Subject to terms and conditions.",
        "footer_company": "Company Name",
    }

    HEADER_Y = 18
    CENTER_LOGO_SHIFT = 17
    PARTY_HEIGHT = 28
    TABLE_HEIGHT = 55
    ROW_STEP = 6
    DESCRIPTION_SHARE = 0.65
    TERMS_MAX_LINES = 2

    def __init__(self, surface, booking, context):
        super().__init__(surface, booking, context)
        # A centred logo pushes the whole document down
        self.top = self.HEADER_Y + (self.CENTER_LOGO_SHIFT if self.logo_occupies("center") else 0)

    @property
    def half_width(self) -> float:
        return (self.page_width - 25) / 2

    def draw_border(self):
        self.surface.set_line_width(0.5)
        self.surface.set_draw_color(100, 100, 100)
        self.surface.draw_rect(10, 10, self.page_width - 20, self.page_height - 20)

    def logo_box(self, position):
        if position == "center":
            return (self.page_width / 2 - 10, self.HEADER_Y - 5, 20, 15)
        if position == "right":
            return (self.page_width - 35, self.HEADER_Y - 3, 20, 15)
        return (15, self.HEADER_Y - 3, 20, 15)

    def _draw_lr_number(self, x: float):
        y = self.HEADER_Y
        self.font("bold", 7)
        self.surface.set_text_color(100, 100, 100)
        self.text(x, y, "LR Number")
        self.font("bold", 11)
        self.use_primary()
        self.text(x, y + 5, self.fit_line(self.document_number, 34))
        self.reset_color()
        self.font("normal", 7)
        self.text(x, y + 9, f"Date: {self.lr_date}")

    def draw_header(self):
        w = self.page_width
        header = self.context.header
        top = self.top
        center_x = w / 2
        name_width = w - 110
        self.draw_logo()

        for x in self.document_id_flanks(15, w - 50):
            self._draw_lr_number(x)

        self.font("bold", 14)
        self.use_primary()
        self.text(center_x, top + 3, self.fit_line(self.company_value("name", "company_name"), name_width),
                  align="center")

        self.surface.set_fill_color(240, 240, 240)
        self.surface.draw_rect(center_x - 25, top + 5, 50, 6, "F")
        self.surface.set_draw_color(150, 150, 150)
        self.surface.set_line_width(0.3)
        self.surface.draw_rect(center_x - 25, top + 5, 50, 6)

        self.font("bold", 9)
        self.reset_color()
        self.text(center_x, top + 9, "LORRY RECEIPT", align="center")

        self.font("normal", 7)
        if header.show_address:
            address = self.company_value("address", "company_address")
            self.text(center_x, top + 14, self.fit_line(address, name_width), align="center")

        contact = (f"Ph: {self.company_value('phone', 'company_phone')} | "
                   f"Email: {self.company_value('email', 'company_email')}")
        self.text(center_x, top + 18, self.fit_line(contact, name_width), align="center")

        tax_ids = []
        if header.show_gst:
            tax_ids.append(f"GSTIN: {self.company_value('gst_number', 'company_gst')}")
        if header.show_pan:
            tax_ids.append(f"PAN: {self.company_value('pan_number', 'company_pan')}")
        if tax_ids:
            self.font("bold")
            self.text(center_x, top + 22, self.fit_line(" | ".join(tax_ids), name_width), align="center")

        self.surface.set_line_width(0.5)
        self.surface.set_draw_color(100, 100, 100)
        self.surface.draw_line(10, top + 26, w - 10, top + 26)

    def _draw_strip(self, y: float, fill, border, cells):
        """Four-column label/value strip"""
        w = self.page_width
        spacing = (w - 20) / 4
        self.surface.set_fill_color(*fill)
        self.surface.draw_rect(10, y, w - 20, 8, "F")
        self.surface.set_draw_color(*border)
        self.surface.set_line_width(0.3)
        self.surface.draw_rect(10, y, w - 20, 8)

        for index, (label, value) in enumerate(cells):
            x = 12 + index * spacing
            self.font("bold", 7)
            self.text(x, y + 3, label)
            self.font("normal")
            self.text(x, y + 6, self.fit_line(value, spacing - 3))

    def draw_key_facts(self):
        booking = self.booking
        missing = self.sample("missing")
        weight = self.value_or_sample(booking.weight, "weight")
        vehicle = or_default(booking.vehicle_number, missing)
        self._draw_strip(self.top + 29, (219, 234, 254), BLUE, [
            ("Vehicle:", self.shown("vehicle_number", vehicle)),
            ("E-Way Bill:", or_default(booking.eway_bill, missing)),
            ("Weight:", self.shown("weight", f"{weight} Kg")),
            ("Invoice No:", or_default(booking.invoice_number, missing)),
        ])

    def _party_box(self, x: float, role: str, title: str, color):
        y = self.top + 40
        width = self.half_width
        party = self.party(role)
        na = self.sample("party_detail")

        self.surface.set_draw_color(*color)
        self.surface.set_line_width(0.5)
        self.surface.draw_rect(x, y, width, self.PARTY_HEIGHT)
        self.surface.set_fill_color(*color)
        self.surface.draw_rect(x, y, width, 5, "F")

        self.surface.set_text_color(255, 255, 255)
        self.font("bold", 7)
        self.text(x + 2, y + 3.5, title)
        self.reset_color()

        self.draw_party_block(x + 2, y + 8, width - 5, [
            ("bold", self.party_name(role, f"{role}_name")),
            ("normal", self.address_line(party, width - 5)),
            ("normal", f"GSTIN: {party.gst_number or na}"),
            ("normal", f"Mobile: {party.phone or na}"),
        ])

    def draw_parties(self):
        if self.context.is_visible("consignor"):
            self._party_box(10, "consignor", "CONSIGNOR", BLUE)
        if self.context.is_visible("consignee"):
            self._party_box(15 + self.half_width, "consignee", "CONSIGNEE", GREEN)

    def draw_route(self):
        booking = self.booking
        origin = first_segment(booking.from_location) or self.sample("from_location")
        destination = first_segment(booking.to_location) or self.sample("to_location")
        self._draw_strip(self.top + 71, (254, 249, 195), (252, 211, 77), [
            ("From:", origin if self.context.is_visible("from_location") else ""),
            ("To:", destination if self.context.is_visible("to_location") else ""),
            ("Driver:", or_default(booking.driver_name, self.sample("missing"))),
            ("Payment:", self.shown("payment_mode", self.value_or_sample(booking.payment_mode, "payment_mode"))),
        ])

    def draw_goods(self):
        y = self.top + 82
        half = self.half_width
        description_width = half * self.DESCRIPTION_SHARE

        self.surface.set_draw_color(0, 0, 0)
        self.surface.set_line_width(0.3)
        self.surface.draw_rect(10, y, half, self.TABLE_HEIGHT)
        self.surface.set_fill_color(245, 245, 245)
        self.surface.draw_rect(10, y, half, 5, "F")
        self.font("bold", 8)
        self.text(10 + half / 2, y + 3.5, "GOODS DESCRIPTION", align="center")

        self.surface.set_draw_color(200, 200, 200)
        self.surface.set_line_width(0.2)
        self.surface.draw_line(10, y + 5, 10 + half, y + 5)
        self.surface.draw_line(10 + description_width, y + 5, 10 + description_width, y + self.TABLE_HEIGHT)
        self.surface.set_fill_color(250, 250, 250)
        self.surface.draw_rect(10, y + 5, half, 5, "F")
        self.surface.draw_line(10, y + 10, 10 + half, y + 10)

        self.font("bold", 7)
        self.text(12, y + 8.5, "Description")
        self.text(12 + description_width, y + 8.5, "Quantity")

        self.font("normal", 7)
        self.surface.set_draw_color(230, 230, 230)
        row_y = y + 14
        last = len(self.rows) - 1
        for index, row in enumerate(self.rows):
            self.text(12, row_y, self.clip_text(row.description, description_width - 4))
            self.text(12 + description_width, row_y, self.clip_text(row.quantity, half - description_width - 4))
            if index < last:
                self.surface.draw_line(10, row_y + 2, 10 + half, row_y + 2)
            row_y += self.ROW_STEP

        if self.booking.weight and self.context.is_visible("weight"):
            self.surface.set_draw_color(200, 200, 200)
            self.surface.draw_line(10, y + 50, 10 + half, y + 50)
            self.surface.set_fill_color(250, 250, 250)
            self.surface.draw_rect(10, y + 50, half, 5, "F")
            self.font("bold", 7)
            self.text(12, y + 53.5, self.fit_line(f"Total Weight: {self.booking.weight} kg", half - 4))

    def draw_charges(self):
        y = self.top + 82
        half = self.half_width
        left = 15 + half
        bill_x = 17 + half
        end_x = self.page_width - 17
        booking = self.booking
        missing = self.sample("missing")

        self.surface.set_draw_color(0, 0, 0)
        self.surface.set_line_width(0.3)
        self.surface.draw_rect(left, y, half, self.TABLE_HEIGHT)
        self.surface.set_fill_color(245, 245, 245)
        self.surface.draw_rect(left, y, half, 5, "F")
        self.font("bold", 8)
        self.text(left + half / 2, y + 3.5, "BILLING DETAILS", align="center")

        # Freight is the taxable amount; no sample freight is assumed here
        gst = compute_gst(booking.freight_charges)

        self.font("normal", 7)
        for offset, label, value in (
            (10, "DATE:", self.lr_date),
            (15, "Invoice No:", or_default(booking.invoice_number, missing)),
            (20, "Invoice Value:", format_currency(booking.invoice_value)),
            (25, "E-way Bill:", or_default(booking.eway_bill, missing)),
        ):
            self.text(bill_x, y + offset, label)
            self.text(end_x, y + offset, self.fit_line(value, half / 2), align="right")

        self.surface.set_draw_color(200, 200, 200)
        self.surface.draw_line(bill_x - 2, y + 28, end_x, y + 28)

        for offset, label, value in (
            (32, "Freight:", self.shown("freight_charges", format_currency(gst.taxable))),
            (36, "CGST @ 2.5%:", format_currency(gst.cgst, fraction_digits=2)),
            (40, "SGST @ 2.5%:", format_currency(gst.sgst, fraction_digits=2)),
        ):
            self.text(bill_x, y + offset, label)
            self.text(end_x, y + offset, value, align="right")

        self.text(bill_x, y + 44, "Payment Mode:")
        self.font("bold")
        payment_mode = self.value_or_sample(booking.payment_mode, "payment_mode")
        self.text(end_x, y + 44, self.shown("payment_mode", payment_mode), align="right")

        self.surface.set_draw_color(150, 150, 150)
        self.surface.draw_line(bill_x - 2, y + 47, end_x, y + 47)

        self.font("bold", 8)
        self.text(bill_x, y + 51, "TOTAL:")
        self.text(end_x, y + 51, format_currency(gst.total, fraction_digits=2), align="right")

    def draw_footer(self):
        w = self.page_width
        footer = self.context.footer
        y = self.top + 140

        if footer.show_terms:
            self.surface.set_draw_color(150, 150, 150)
            self.surface.set_line_width(0.3)
            self.surface.draw_rect(10, y, w - 20, 10)
            self.font("bold", 7)
            self.text(12, y + 4, "DECLARATION:")
            self.font("normal", 6)
            terms = self.value_or_sample(footer.terms_text, "terms")
            for index, line in enumerate(self.surface.split_text(terms, w - 25)[:self.TERMS_MAX_LINES]):
                self.text(12, y + 7 + index * 2.5, line)
            y += 13

        if footer.show_signature:
            self.draw_signatures(y + 8, inset=10, size=7, label_offset=4, style="bold")

        self.font("normal", 6)
        self.surface.set_text_color(100, 100, 100)
        company = self.company_value("name", "footer_company")
        self.text(w / 2, self.page_height - 14, self.fit_line(f"Computer generated document | {company}", w - 30),
                  align="center")
        self.reset_color()
