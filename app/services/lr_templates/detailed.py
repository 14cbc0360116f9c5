"""
Detailed Format LR - landscape consignment note with every section

Vertical bands (mm from the top edge):
    header 11-30, contact bar 30-36, title bar 37-43, key facts 44-54,
    parties 55-81, route 82-94, goods 95-130, charges 132-160,
    payment 161-169, terms 170-181, signatures 189, footer lines 194.5/197.5
"""

from decimal import Decimal

from app.services.lr_format import compute_gst, first_segment, format_currency, format_date, to_amount
from app.services.lr_surface import LANDSCAPE
from app.services.lr_templates.base import LRLayout


class DetailedLayout(LRLayout):
    CODE = "detailed"
    NAME = "Detailed Format"
    ORIENTATION = LANDSCAPE

    SAMPLE = {
        "company_name": "NATIONAL CARGO MOVERS",
        "company_tagline": "LOGISTICS & SUPPLY CHAIN SOLUTIONS",
        "company_address": "45, Transport Hub, Indore - 452001",
        "company_phone": "0731-4567890",
        "company_email": "info@nationalcargo.com",
        "company_gst": "23AAAAA0000A1Z5",
        "company_pan": "AAAAA0000A",
        "company_cin": "U63090MP2020PTC123456",
        "document_number": "NCM/LR/2024/1002",
        "booking_id": "BKG-20250924-3953",
        "invoice_number": "INV123456",
        "bilti_number": "BLT123456",
        "eway_bill": "231000987654",
        "consignor_name": "ABC Electronics Pvt Ltd",
        "consignor_address": "Shop No. 15, Electronic Market\nMumbai - 400007, Maharashtra",
        "consignor_gst": "27AAAAA0000A1Z5",
        "consignor_phone": "9876543210",
        "consignor_email": "abc@electronics.com",
        "consignee_name": "XYZ Trading Company",
        "consignee_address": "Plot No. 25, Industrial Area\nGurgaon - 122015, Haryana",
        "consignee_gst": "06BBBBB1111B1Z5",
        "consignee_phone": "9876543211",
        "consignee_email": "xyz@trading.com",
        "from_location": "Mumbai",
        "to_location": "Gurgaon",
        "distance": "1,400 KM",
        "transit": "3-4 Days",
        "vehicle_number": "MH-12-AB-1234",
        "vehicle_type": "32 FT",
        "driver_name": "Ramesh",
        "driver_phone": "9998887776",
        "total_weight": "750",
        "total_value": "75,000",
        "service_type": "FTL",
        "payment_mode": "TO PAY",
        "status": "CONFIRMED",
        "remarks": "Handle with Care",
        "terms": "Goods once booked will not be cancelled.",
        "second_term": "Delivery subject to force majeure conditions.",
        "footer_validity": "This is a system generated document valid for 3 days from the date of generation",
        "footer_contact": "For tracking visit: www.nationalcargo.com | Customer Care: 1800-123-4567",
    }

    SAMPLE_FREIGHT = 15000
    OTHER_CHARGES = Decimal("1000")

    HEADER_Y = 14
    CENTER_LOGO_SHIFT = 3
    CONTACT_Y = 30
    TITLE_Y = 37
    KEY_FACTS_Y = 44
    PARTIES_Y = 55
    PARTY_HEIGHT = 26
    ROUTE_Y = 82
    TABLE_Y = 95
    TABLE_HEIGHT = 35
    ROW_STEP = 4
    CHARGES_Y = 132
    CHARGES_HEIGHT = 28
    PAYMENT_Y = 161
    TERMS_Y = 170
    SIGNATURE_Y = 189
    COLUMNS = (12, 25, 70, 180, 215, 250)

    @property
    def half_width(self) -> float:
        return (self.page_width - 25) / 2

    def draw_border(self):
        self.surface.set_line_width(0.5)
        self.surface.set_draw_color(100, 100, 100)
        self.surface.draw_rect(10, 10, self.page_width - 20, self.page_height - 20)

    def logo_box(self, position):
        if position == "center":
            return (self.page_width / 2 - 6, 11, 12, 8)
        if position == "right":
            return (self.page_width - 30, self.HEADER_Y, 18, 14)
        return (12, self.HEADER_Y, 18, 14)

    def draw_header(self):
        w = self.page_width
        header = self.context.header
        company = self.context.company
        self.draw_logo()

        shift = self.CENTER_LOGO_SHIFT if self.logo_occupies("center") else 0
        name_width = w - 140
        name = company.name.upper() if company.name else self.sample("company_name")

        self.font("bold", 13)
        self.use_primary()
        self.text(w / 2, self.HEADER_Y + 5 + shift, self.fit_line(name, name_width), align="center")

        self.font("normal", 8)
        self.reset_color()
        self.text(w / 2, self.HEADER_Y + 9 + shift, self.sample("company_tagline"), align="center")

        if header.show_address:
            self.font("normal", 7)
            address = self.company_value("address", "company_address")
            self.text(w / 2, self.HEADER_Y + 13 + shift, self.fit_line(address, name_width), align="center")

        for x in self.document_id_flanks(34, w - 64):
            self.font("bold", 6)
            self.surface.set_text_color(100, 100, 100)
            self.text(x, self.HEADER_Y + 3, "LR NO.")
            self.font("bold", 9)
            self.use_primary()
            self.text(x, self.HEADER_Y + 7.5, self.fit_line(self.document_number, 30))
            self.reset_color()
            self.font("normal", 7)
            self.text(x, self.HEADER_Y + 11.5, self.lr_date)

        self._draw_contact_bar()
        self._draw_title_bar()

    def _draw_contact_bar(self):
        w = self.page_width
        header = self.context.header
        y = self.CONTACT_Y

        self.surface.set_fill_color(240, 240, 240)
        self.surface.draw_rect(10, y, w - 20, 6, "F")
        self.font("normal", 7)
        contact = (f"Phone: {self.company_value('phone', 'company_phone')} | "
                   f"Email: {self.company_value('email', 'company_email')}")
        self.text(12, y + 4, self.fit_line(contact, w / 2 - 29))

        if header.show_gst:
            self.text(w / 2 - 15, y + 4, f"GSTIN: {self.company_value('gst_number', 'company_gst')}")
        if header.show_pan:
            self.text(w / 2 + 20, y + 4, f"PAN: {self.company_value('pan_number', 'company_pan')}")
        self.text(w - 55, y + 4, f"CIN: {self.sample('company_cin')}")

    def _draw_title_bar(self):
        w = self.page_width
        y = self.TITLE_Y
        self.surface.set_fill_color(0, 0, 0)
        self.surface.draw_rect(10, y, w - 20, 6, "F")
        self.surface.set_text_color(255, 255, 255)
        self.font("bold", 10)
        self.text(w / 2, y + 4, "CONSIGNMENT NOTE / LORRY RECEIPT", align="center")
        self.reset_color()

    def draw_key_facts(self):
        y = self.KEY_FACTS_Y
        col = (self.page_width - 20) / 6
        booking = self.booking
        facts = [
            ("LR NO.", self.document_number),
            ("DATE", self.lr_date),
            ("BOOKING ID", self.value_or_sample(booking.booking_id, "booking_id")),
            ("INVOICE NO.", self.value_or_sample(booking.invoice_number, "invoice_number")),
            ("BILTI NO.", self.value_or_sample(booking.bilti_number, "bilti_number")),
            ("E-WAY BILL", self.value_or_sample(booking.eway_bill, "eway_bill")),
        ]

        self.surface.set_draw_color(150, 150, 150)
        self.surface.set_line_width(0.3)
        for index, (label, value) in enumerate(facts):
            x = 10 + index * col
            self.surface.draw_rect(x, y, col, 10)

            self.font("bold", 6)
            self.surface.set_text_color(100, 100, 100)
            self.text(x + 1, y + 3, label)
            self.reset_color()

            self.font("bold" if index == 0 else "normal", 7)
            if index == 0:
                self.use_primary()
            self.text(x + 1, y + 7, self.fit_line(value, col - 2))
            if index == 0:
                self.reset_color()

    def _party_box(self, x: float, role: str, title: str):
        y = self.PARTIES_Y
        width = self.half_width
        party = self.party(role)

        self.surface.set_draw_color(100, 100, 100)
        self.surface.set_line_width(0.3)
        self.surface.draw_rect(x, y, width, self.PARTY_HEIGHT)
        self.surface.set_fill_color(220, 220, 220)
        self.surface.draw_rect(x, y, width, 5, "F")

        self.font("bold", 8)
        self.text(x + 2, y + 3.5, title)
        self.font("normal", 7)

        address = self.address_line(party, width - 5)
        if address is None:
            address_lines = self.sample(f"{role}_address").split("\n")
        else:
            address_lines = [address]

        self.draw_party_block(x + 2, y + 7, width - 5, [
            ("bold", party.name or self.sample(f"{role}_name")),
            *[("normal", line) for line in address_lines],
            ("normal", f"GSTIN: {self.value_or_sample(party.gst_number, f'{role}_gst')}"),
            ("normal", f"Contact: {self.value_or_sample(party.phone, f'{role}_phone')}"),
            ("normal", f"Email: {self.value_or_sample(party.email, f'{role}_email')}"),
        ])

    def draw_parties(self):
        if self.context.is_visible("consignor"):
            self._party_box(10, "consignor", "CONSIGNOR (SENDER)")
        if self.context.is_visible("consignee"):
            self._party_box(15 + self.half_width, "consignee", "CONSIGNEE (RECEIVER)")

    def draw_route(self):
        w = self.page_width
        y = self.ROUTE_Y
        booking = self.booking
        col = (w - 20) / 4

        self.surface.set_fill_color(219, 234, 254)
        self.surface.draw_rect(10, y, w - 20, 12, "F")
        self.surface.set_draw_color(59, 130, 246)
        self.surface.set_line_width(0.3)
        self.surface.draw_rect(10, y, w - 20, 12)

        origin = first_segment(booking.from_location) or self.sample("from_location")
        destination = first_segment(booking.to_location) or self.sample("to_location")
        vehicle = self.value_or_sample(booking.vehicle_number, "vehicle_number")
        rows = [
            [
                ("From:", 10, origin if self.context.is_visible("from_location") else ""),
                ("To:", 6, destination if self.context.is_visible("to_location") else ""),
                ("Distance:", 16, self.sample("distance")),
                ("Transit:", 14, self.sample("transit")),
            ],
            [
                ("Vehicle:", 14, self.shown("vehicle_number", vehicle)),
                ("Type:", 10, self.sample("vehicle_type")),
                ("Driver:", 14, self.value_or_sample(booking.driver_name, "driver_name")),
                ("Mobile:", 15, self.value_or_sample(booking.driver_phone, "driver_phone")),
            ],
        ]
        for row_index, row in enumerate(rows):
            line_y = y + 4 + row_index * 4
            for index, (label, value_offset, value) in enumerate(row):
                x = 12 + index * col
                self.font("bold", 7)
                self.text(x, line_y, label)
                self.font("normal")
                self.text(x + value_offset, line_y, self.fit_line(value, col - value_offset - 3))

    def draw_goods(self):
        w = self.page_width
        y = self.TABLE_Y
        col1, col2, col3, col4, col5, col6 = self.COLUMNS

        self.surface.set_draw_color(100, 100, 100)
        self.surface.set_line_width(0.3)
        self.surface.draw_rect(10, y, w - 20, self.TABLE_HEIGHT)

        self.surface.set_fill_color(210, 210, 210)
        self.surface.draw_rect(10, y, w - 20, 5, "F")
        self.font("bold", 8)
        self.text(w / 2, y + 3.5, "GOODS DESCRIPTION", align="center")

        self.surface.set_fill_color(240, 240, 240)
        self.surface.draw_rect(10, y + 5, w - 20, 5, "F")
        self.font("bold", 7)
        for x, label in zip(self.COLUMNS, ("S.No", "Packages", "Description", "Weight", "Volume", "Value")):
            self.text(x, y + 8.5, label)

        self.font("normal", 7)
        row_y = y + 13
        for index, row in enumerate(self.rows):
            if not row.is_empty:
                self.text(col1, row_y, str(index + 1))
            self.text(col2, row_y, self.fit_line(row.quantity, col3 - col2 - 2))
            self.text(col3, row_y, self.fit_line(row.description, col4 - col3 - 4))
            self.text(col4 + 3, row_y, self.fit_line(row.weight, col5 - col4 - 5))
            self.text(col6 + 3, row_y, self.fit_line(row.value, w - 10 - col6 - 5))
            row_y += self.ROW_STEP

        total_y = y + self.TABLE_HEIGHT - 5
        self.surface.draw_line(10, total_y, w - 10, total_y)
        self.surface.set_fill_color(250, 250, 250)
        self.surface.draw_rect(10, total_y, w - 20, 5, "F")
        self.font("bold")
        self.text(col3 - 5, total_y + 3.5, "TOTAL:")
        total_weight = self.value_or_sample(self.booking.weight, "total_weight")
        self.text(col4 + 3, total_y + 3.5, self.shown("weight", total_weight))
        self.text(col6 + 3, total_y + 3.5, self.value_or_sample(self.booking.cargo_value, "total_value"))

    def draw_charges(self):
        y = self.CHARGES_Y
        width = self.half_width
        booking = self.booking

        self.surface.set_draw_color(100, 100, 100)
        self.surface.set_line_width(0.3)
        self.surface.draw_rect(10, y, width, self.CHARGES_HEIGHT)
        self.font("bold", 8)
        self.text(12, y + 4, "SERVICE DETAILS")

        self.font("normal", 7)
        service_y = y + 8
        for label, value in (
            ("Service Type:", self.value_or_sample(booking.service_type, "service_type")),
            ("Pickup Date:", format_date(booking.pickup_date) if booking.pickup_date else "-"),
            ("Delivery Type:", "Door to Door"),
            ("Insurance:", "Carrier Risk"),
            ("POD Required:", "Yes"),
        ):
            self.text(12, service_y, label)
            self.text(45, service_y, self.fit_line(value, width - 37))
            service_y += 4

        left = 15 + width
        right_edge = left + width - 10
        self.surface.draw_rect(left, y, width, self.CHARGES_HEIGHT)
        self.font("bold", 8)
        self.text(left + 2, y + 4, "FREIGHT CHARGES")

        freight = to_amount(booking.freight_charges, self.SAMPLE_FREIGHT)
        gst = compute_gst(freight + self.OTHER_CHARGES)

        self.font("normal", 7)
        charge_y = y + 8
        for label, amount in (("Basic Freight:", self.shown("freight_charges", format_currency(freight))),
                              ("Other Charges:", format_currency(self.OTHER_CHARGES))):
            self.text(left + 2, charge_y, label)
            self.text(right_edge, charge_y, amount, align="right")
            charge_y += 3

        self.surface.draw_line(left + 2, charge_y, right_edge, charge_y)
        charge_y += 2

        for label, value in (
            ("Sub Total:", format_currency(gst.taxable)),
            ("CGST @ 2.5%:", format_currency(gst.cgst, fraction_digits=2)),
            ("SGST @ 2.5%:", format_currency(gst.sgst, fraction_digits=2)),
        ):
            self.text(left + 2, charge_y, label)
            self.text(right_edge, charge_y, value, align="right")
            charge_y += 3

        self.surface.draw_line(left + 2, charge_y, right_edge, charge_y)
        charge_y += 2

        self.font("bold")
        self.text(left + 2, charge_y, "GRAND TOTAL:")
        self.text(right_edge, charge_y, format_currency(gst.total, fraction_digits=2), align="right")

    def _draw_payment_strip(self):
        w = self.page_width
        y = self.PAYMENT_Y
        booking = self.booking
        col = (w - 20) / 4

        self.surface.set_fill_color(254, 249, 195)
        self.surface.draw_rect(10, y, w - 20, 8, "F")
        self.surface.set_draw_color(252, 211, 77)
        self.surface.set_line_width(0.3)
        self.surface.draw_rect(10, y, w - 20, 8)

        cells = [
            ("Payment:", self.shown("payment_mode", self.value_or_sample(booking.payment_mode, "payment_mode"))),
            ("Status:", self.value_or_sample(booking.status, "status")),
            ("Remarks:", self.shown("remarks", self.value_or_sample(booking.remarks, "remarks"))),
            ("Delivery OTP:", ""),
        ]
        for index, (label, value) in enumerate(cells):
            x = 12 + index * col
            self.font("bold", 7)
            self.text(x, y + 3, label)
            self.font("normal")
            self.text(x, y + 6, self.fit_line(value, col - 4))

        # Left blank for the receiver to fill in at delivery
        otp_x = 12 + 3 * col
        self.surface.set_draw_color(150, 150, 150)
        self.surface.draw_line(otp_x, y + 6.5, otp_x + 25, y + 6.5)

    def draw_footer(self):
        w = self.page_width
        footer = self.context.footer
        self._draw_payment_strip()

        if footer.show_terms:
            y = self.TERMS_Y
            self.surface.set_draw_color(150, 150, 150)
            self.surface.set_line_width(0.3)
            self.surface.draw_rect(10, y, w - 20, 11)
            self.font("bold", 8)
            self.text(12, y + 3.5, "TERMS & CONDITIONS:")
            self.font("normal", 6)
            terms = [
                f"1. {self.value_or_sample(footer.terms_text, 'terms')}",
                f"2. {self.sample('second_term')}",
            ]
            for index, term in enumerate(terms):
                self.text(12, y + 6.5 + index * 3, self.fit_line(term, w - 25))

        if footer.show_signature:
            self.draw_signatures(self.SIGNATURE_Y, inset=5, size=6, label_offset=3)

        self.font("normal", 6)
        self.surface.set_text_color(100, 100, 100)
        self.text(w / 2, self.page_height - 15.5, self.sample("footer_validity"), align="center")
        self.text(w / 2, self.page_height - 12.5, self.sample("footer_contact"), align="center")
        self.reset_color()
