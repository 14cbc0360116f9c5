"""
Standard Format LR - landscape, the most commonly used consignment note
"""

from decimal import Decimal

from app.services.lr_format import format_currency, to_amount
from app.services.lr_surface import LANDSCAPE
from app.services.lr_templates.base import LRLayout


class StandardLayout(LRLayout):
    CODE = "standard"
    NAME = "Standard Format"
    ORIENTATION = LANDSCAPE

    SAMPLE = {
        "company_name": "VRL LOGISTICS LTD.",
        "company_address": "Varur, Hubballi-580 030",
        "company_email": "info@vrllogistics.com",
        "company_phone": "1800-123-4567",
        "company_gst": "29AABCV1234M1Z5",
        "document_number": "LR2024123456",
        "vehicle_number": "KA-25-AB-1234",
        "consignor_name": "ABC Electronics Pvt Ltd",
        "consignor_gst": "27AAAAA0000A1Z5",
        "consignor_phone": "9876543210",
        "consignee_name": "XYZ Trading Company",
        "consignee_gst": "06BBBBB1111B1Z5",
        "consignee_phone": "9876543211",
        "from_location": "Mumbai, Maharashtra",
        "to_location": "Gurgaon, Haryana",
        "billing_station": "Mumbai",
        "transport_bill_no": "TB2024001",
        "terms": "Goods once sent will not be taken back.",
    }

    SAMPLE_FREIGHT = 15000
    OTHER_CHARGES = Decimal("500")
    SAMPLE_VALUE = 50000

    HEADER_Y = 20
    KEY_FACTS_Y = 37
    PARTIES_Y = 50
    PARTY_HEIGHT = 22
    ROUTE_Y = 75
    TABLE_Y = 86
    TABLE_HEIGHT = 55
    ROW_STEP = 5

    @property
    def half_width(self) -> float:
        return (self.page_width - 25) / 2

    def draw_border(self):
        self.surface.set_line_width(0.5)
        self.surface.set_draw_color(200, 200, 200)
        self.surface.draw_rect(10, 10, self.page_width - 20, self.page_height - 20)

    def logo_box(self, position):
        if position == "center":
            return (self.page_width / 2 - 10, 12, 20, 15)
        if position == "right":
            return (self.page_width - 35, 15, 20, 15)
        return (15, 15, 20, 15)

    def draw_header(self):
        w = self.page_width
        header = self.context.header
        self.draw_logo()

        center_y = 30 if self.logo_occupies("center") else self.HEADER_Y
        name_width = w - 130

        self.font("bold", 14)
        self.use_primary()
        self.text(w / 2, center_y, self.fit_line(self.company_value("name", "company_name"), name_width),
                  align="center")

        self.font("normal", 8)
        self.reset_color()
        if header.show_address:
            address = self.company_value("address", "company_address")
            self.text(w / 2, center_y + 5, self.fit_line(f"Office: {address}", name_width), align="center")

        contact = (f"Email: {self.company_value('email', 'company_email')} | "
                   f"Mobile: {self.company_value('phone', 'company_phone')}")
        self.text(w / 2, center_y + 9, self.fit_line(contact, name_width), align="center")

        for x in self.document_id_flanks(15, w - 60):
            self.font("bold", 8)
            self.text(x, self.HEADER_Y, "Consignment No.")
            self.font("bold", 11)
            self.use_primary()
            self.text(x, self.HEADER_Y + 5, self.fit_line(self.consignment_number, 44))
            self.font("bold", 7)
            self.reset_color()
            self.text(x, self.HEADER_Y + 9, self.lr_date)

        self.surface.set_line_width(0.5)
        self.surface.set_draw_color(0, 0, 0)
        self.surface.draw_line(10, 33, w - 10, 33)

    @property
    def consignment_number(self) -> str:
        return self.value_or_sample(self.booking.lr_number or self.booking.booking_id, "document_number")

    def draw_key_facts(self):
        y = self.KEY_FACTS_Y
        col = (self.page_width - 20) / 3
        self.surface.set_line_width(0.3)
        self.surface.set_draw_color(150, 150, 150)

        self.surface.draw_rect(10, y, col, 10)
        self.font("bold", 8)
        self.text(12, y + 4, "At OWNER'S risk")
        self.font("normal", 7)
        self.text(12, y + 8, "Subject to Vapi Jurisdiction")

        vehicle = self.value_or_sample(self.booking.vehicle_number, "vehicle_number")
        cells = [
            ("Vehicle No.", self.shown("vehicle_number", vehicle)),
            ("GSTIN", self.company_value("gst_number", "company_gst")),
        ]
        for index, (label, value) in enumerate(cells, start=1):
            x = 10 + index * col
            self.surface.draw_rect(x, y, col, 10)
            self.font("bold", 8)
            self.text(x + col / 2, y + 4, label, align="center")
            self.font("normal")
            self.text(x + col / 2, y + 8, self.fit_line(value, col - 4), align="center")

    def _party_box(self, x: float, role: str, title: str):
        y = self.PARTIES_Y
        width = self.half_width
        party = self.party(role)

        self.surface.set_line_width(0.3)
        self.surface.set_draw_color(150, 150, 150)
        self.surface.draw_rect(x, y, width, self.PARTY_HEIGHT)
        self.surface.set_fill_color(245, 245, 245)
        self.surface.draw_rect(x, y, width, 5, "F")

        self.font("bold", 8)
        self.text(x + 2, y + 3.5, title)
        self.font("normal", 7)
        self.draw_party_block(x + 2, y + 7, width - 5, [
            ("normal", self.party_name(role, f"{role}_name")),
            ("normal", self.address_line(party, width - 5)),
            ("normal", f"GST: {self.value_or_sample(party.gst_number, f'{role}_gst')}"),
            ("normal", f"Mobile: {self.value_or_sample(party.phone, f'{role}_phone')}"),
        ])

    def draw_parties(self):
        if self.context.is_visible("consignor"):
            self._party_box(10, "consignor", "CONSIGNOR")
        if self.context.is_visible("consignee"):
            self._party_box(15 + self.half_width, "consignee", "CONSIGNEE")

    def draw_route(self):
        y = self.ROUTE_Y
        half = self.half_width
        self.surface.set_line_width(0.3)
        self.surface.set_draw_color(150, 150, 150)
        self.surface.draw_rect(10, y, half, 8)
        self.surface.draw_rect(15 + half, y, half, 8)

        self.font("bold", 8)
        self.text(12, y + 5, "FROM: ")
        self.font("normal")
        if self.context.is_visible("from_location"):
            origin = self.value_or_sample(self.booking.from_location, "from_location")
            self.text(26, y + 5, self.fit_line(origin, half - 18))

        self.font("bold")
        self.text(17 + half, y + 5, "TO: ")
        self.font("normal")
        if self.context.is_visible("to_location"):
            destination = self.value_or_sample(self.booking.to_location, "to_location")
            self.text(27 + half, y + 5, self.fit_line(destination, half - 18))

    def draw_goods(self):
        y = self.TABLE_Y
        half = self.half_width
        column = half / 2

        self.surface.draw_rect(10, y, half, self.TABLE_HEIGHT)
        self.surface.set_fill_color(245, 245, 245)
        self.surface.draw_rect(10, y, half, 5, "F")
        self.font("bold", 8)
        self.text(10 + column, y + 3.5, "GOODS DESCRIPTION", align="center")

        self.surface.set_draw_color(200, 200, 200)
        self.surface.set_line_width(0.2)
        self.surface.draw_line(10, y + 5, 10 + half, y + 5)
        self.surface.draw_line(10 + column, y + 5, 10 + column, y + self.TABLE_HEIGHT)

        self.font("bold", 7)
        self.text(12, y + 8, "Packages")
        self.text(12 + column, y + 8, "Item Description")

        self.font("normal")
        row_y = y + 11
        for row in self.rows:
            self.text(12, row_y, self.fit_line(row.quantity, column - 4))
            self.text(12 + column, row_y, self.fit_line(row.description, column - 4))
            row_y += self.ROW_STEP

    def draw_charges(self):
        y = self.TABLE_Y
        half = self.half_width
        left = 15 + half
        bill_x = 17 + half
        end_x = self.page_width - 15

        self.surface.set_draw_color(150, 150, 150)
        self.surface.set_line_width(0.3)
        self.surface.draw_rect(left, y, half, self.TABLE_HEIGHT)
        self.surface.set_fill_color(245, 245, 245)
        self.surface.draw_rect(left, y, half, 5, "F")
        self.font("bold", 8)
        self.text(left + half / 2, y + 3.5, "BILLING DETAILS", align="center")

        freight = to_amount(self.booking.freight_charges, self.SAMPLE_FREIGHT)
        total = freight + self.OTHER_CHARGES
        value = to_amount(self.booking.invoice_value, self.SAMPLE_VALUE)
        grand_total = value + total

        self.font("normal", 7)
        bill_y = y + 9
        for label, amount in (
            ("DATE:", self.lr_date),
            ("VALUE:", format_currency(value)),
            ("BILLING STATION:", self.sample("billing_station")),
            ("Tpt. Bill No:", self.sample("transport_bill_no")),
            ("Others:", format_currency(self.OTHER_CHARGES)),
        ):
            self.text(bill_x, bill_y, label)
            self.text(end_x, bill_y, amount, align="right")
            bill_y += 5

        self.surface.set_draw_color(200, 200, 200)
        self.surface.draw_line(bill_x, bill_y, end_x, bill_y)
        bill_y += 3

        for label, amount in (("Freight:", self.shown("freight_charges", format_currency(freight))),
                              ("Total Rs:", format_currency(total))):
            self.text(bill_x, bill_y, label)
            self.text(end_x, bill_y, amount, align="right")
            bill_y += 5

        self.surface.set_draw_color(150, 150, 150)
        self.surface.draw_line(bill_x, bill_y, end_x, bill_y)
        bill_y += 3

        self.font("bold", 8)
        self.text(bill_x, bill_y, "Grand Total:")
        self.text(end_x, bill_y, format_currency(grand_total), align="right")

    def draw_footer(self):
        footer = self.context.footer
        footer_y = self.page_height - 32
        self.surface.set_draw_color(150, 150, 150)
        self.surface.set_line_width(0.3)
        self.surface.draw_line(10, footer_y, self.page_width - 10, footer_y)

        if footer.show_terms:
            self.font("normal", 7)
            terms = self.value_or_sample(footer.terms_text, "terms")
            self.text(12, footer_y + 4, self.fit_line(terms, self.page_width - 24))

        if footer.show_signature:
            self.draw_signatures(footer_y + 10, inset=10, size=7, label_offset=4)
