#!/usr/bin/env python3
"""
Test LR Layouts
Draws every template onto a RecordingSurface and checks what ended up on the page
"""

import io
import os
import sys
import base64

import pytest
from PIL import Image

# Add the project root to sys.path
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from app.schemas.lr import BookingRecord, CompanyProfile, FooterConfig, HeaderConfig, Party, StyleConfig, TemplateConfig
from app.services.lr_context import build_context, builtin_defaults_for
from app.services.lr_surface import LANDSCAPE, PORTRAIT, RecordingSurface
from app.services.lr_templates import TEMPLATES, resolve

TEMPLATE_CODES = sorted(TEMPLATES)

CONSIGNOR = "Kaveri Agro Foods"
CONSIGNEE = "Narmada Steel Traders"


def png_data_uri(color="red", mode="RGB"):
    buffer = io.BytesIO()
    Image.new(mode, (40, 30), color).save(buffer, format="PNG")
    return "data:image/png;base64," + base64.b64encode(buffer.getvalue()).decode("ascii")


def make_booking(**overrides):
    values = dict(
        booking_id="BKG-20250101-0007",
        lr_number="LR-7788",
        lr_date="2025-01-15",
        from_location="Nashik, Maharashtra",
        to_location="Raipur, Chhattisgarh",
        consignor=Party(name=CONSIGNOR, address="Gate 4, APMC Yard, Nashik", gst_number="27AAACK1111K1Z2",
                        phone="9822001122"),
        consignee=Party(name=CONSIGNEE, address="Siltara Industrial Area, Raipur", phone="9425003344"),
        cargo_units="20 BAGS, 4 DRUM",
        material_description="Onion, Edible Oil",
        vehicle_number="MH-15-GV-4410",
        driver_name="Suresh",
        freight_charges=18500,
        invoice_value=50000,
        weight="1200",
        payment_mode="PAID",
    )
    values.update(overrides)
    return BookingRecord(**values)


def render(code, booking=None, config=None, company=None, embed_result=None):
    template = resolve(code)
    context = build_context(
        config or TemplateConfig(),
        company or CompanyProfile(name="Shree Roadways"),
        builtin_defaults_for(template.code),
        template.code,
    )
    surface = RecordingSurface(template.orientation, embed_result=embed_result)
    template.layout_class(surface, booking or make_booking(), context).render()
    return surface


def test_orientation_per_template():
    assert resolve("standard").orientation == LANDSCAPE
    assert resolve("detailed").orientation == LANDSCAPE
    assert resolve("minimal").orientation == PORTRAIT
    assert resolve("gst_invoice").orientation == PORTRAIT
    assert render("standard").page_width > render("minimal").page_width


@pytest.mark.parametrize("code", TEMPLATE_CODES)
def test_same_input_gives_same_drawing(code):
    company = CompanyProfile(name="Shree Roadways", logo_url=png_data_uri())
    first = render(code, company=company)
    second = render(code, company=company)
    assert first.ops == second.ops
    assert first.finish() == second.finish()


@pytest.mark.parametrize("code", TEMPLATE_CODES)
def test_empty_visible_fields_draws_both_parties(code):
    texts = render(code, config=TemplateConfig(visible_fields={})).texts()
    assert CONSIGNOR in texts
    assert CONSIGNEE in texts


@pytest.mark.parametrize("code", TEMPLATE_CODES)
def test_hidden_consignee_is_skipped(code):
    texts = render(code, config=TemplateConfig(visible_fields={"consignee": False})).texts()
    assert CONSIGNOR in texts
    assert CONSIGNEE not in texts


@pytest.mark.parametrize("code", TEMPLATE_CODES)
def test_goods_table_keeps_first_five_items(code):
    items = [{"description": f"Item {i}", "quantity": f"{i} BOX"} for i in range(1, 8)]
    texts = render(code, booking=make_booking(goods_items=items)).texts()
    for i in range(1, 6):
        assert f"Item {i}" in texts
    assert "Item 6" not in texts
    assert "Item 7" not in texts
    # legacy lists are ignored once goods_items is present
    assert "Onion" not in texts


@pytest.mark.parametrize("code", TEMPLATE_CODES)
@pytest.mark.parametrize("position", ["left", "center", "right"])
def test_failed_logo_leaves_the_rest_of_the_page_unchanged(code, position):
    company = CompanyProfile(name="Shree Roadways", logo_url=png_data_uri())
    config = TemplateConfig(header_config=HeaderConfig(logo_position=position))

    embedded = render(code, config=config, company=company, embed_result=True)
    failed = render(code, config=config, company=company, embed_result=False)

    assert [op for op in embedded.ops if op[0] != "image"] == [op for op in failed.ops if op[0] != "image"]
    assert [op[1:5] for op in embedded.ops if op[0] == "image"] == [op[1:5] for op in failed.ops if op[0] == "image"]
    assert [op[-1] for op in failed.ops if op[0] == "image"] == [False]


@pytest.mark.parametrize("code", TEMPLATE_CODES)
def test_undecodable_logo_does_not_abort(code):
    company = CompanyProfile(name="Shree Roadways", logo_url="data:image/png;base64,bm90IGFuIGltYWdl")
    surface = render(code, company=company)
    assert [op[-1] for op in surface.ops if op[0] == "image"] == [False]
    assert CONSIGNOR in surface.texts()


def test_transparent_logo_decodes():
    company = CompanyProfile(name="Shree Roadways", logo_url=png_data_uri((0, 0, 255, 128), mode="RGBA"))
    surface = render("standard", company=company)
    assert [op[-1] for op in surface.ops if op[0] == "image"] == [True]


def test_logo_size_scales_around_the_box_centre():
    company = CompanyProfile(logo_url=png_data_uri())
    medium = render("standard", company=company, embed_result=True)
    large = render("standard", company=company, embed_result=True,
                   config=TemplateConfig(header_config=HeaderConfig(logo_size="large")))

    _, x, y, w, h, _ = next(op for op in medium.ops if op[0] == "image")
    _, lx, ly, lw, lh, _ = next(op for op in large.ops if op[0] == "image")
    assert (lw, lh) == pytest.approx((w * 1.2, h * 1.2))
    assert (lx + lw / 2, ly + lh / 2) == pytest.approx((x + w / 2, y + h / 2))


# Detailed also repeats the LR number in its key-facts row
EXTRA_NUMBER_DRAWS = {"detailed": 1}


@pytest.mark.parametrize("code", TEMPLATE_CODES)
@pytest.mark.parametrize("position, embed_result, flanks", [
    (None, None, 2),
    ("left", True, 1),
    ("right", True, 1),
    ("center", True, 2),
    ("left", False, 1),
])
def test_document_number_flanks_every_free_side(code, position, embed_result, flanks):
    if position is None:
        company = CompanyProfile(name="Shree Roadways")
        config = TemplateConfig()
    else:
        company = CompanyProfile(name="Shree Roadways", logo_url=png_data_uri())
        config = TemplateConfig(header_config=HeaderConfig(logo_position=position))

    texts = render(code, config=config, company=company, embed_result=embed_result).texts()
    assert texts.count("LR-7788") == flanks + EXTRA_NUMBER_DRAWS.get(code, 0)


@pytest.mark.parametrize("code, expected", [
    ("standard", ["Rs. 18,500", "Rs. 19,000", "Rs. 69,000"]),
    ("minimal", ["Rs. 18,500", "Rs. 950.00", "Rs. 19,950.00"]),
    ("detailed", ["Rs. 19,500", "Rs. 487.50", "Rs. 20,475.00"]),
    ("gst_invoice", ["Rs. 18,500", "Rs. 462.50", "Rs. 19,425.00"]),
])
def test_charge_totals(code, expected):
    texts = render(code).texts()
    for amount in expected:
        assert amount in texts


def test_gst_invoice_without_freight_shows_dashes():
    texts = render("gst_invoice", booking=make_booking(freight_charges=None)).texts()
    assert "Rs. 462.50" not in texts
    assert texts[texts.index("CGST @ 2.5%:") + 1] == "-"
    assert texts[texts.index("TOTAL:") + 1] == "-"


@pytest.mark.parametrize("code", TEMPLATE_CODES)
def test_empty_booking_renders_with_fallback_text(code):
    surface = render(code, booking=BookingRecord(), company=CompanyProfile())
    texts = surface.texts()
    assert resolve(code).layout_class.SAMPLE["company_name"] in texts
    assert "None" not in " ".join(texts)


@pytest.mark.parametrize("code", TEMPLATE_CODES)
def test_custom_signature_labels(code):
    config = TemplateConfig(footer_config=FooterConfig(signature_labels=["Loader", "Owner"]))
    texts = render(code, config=config).texts()
    assert "Loader" in texts
    assert "Owner" in texts

    hidden = TemplateConfig(footer_config=FooterConfig(signature_labels=["Loader"], show_signature=False))
    assert "Loader" not in render(code, config=hidden).texts()


@pytest.mark.parametrize("code", TEMPLATE_CODES)
def test_terms_text_and_toggle(code):
    config = TemplateConfig(footer_config=FooterConfig(terms_text="No claims after 7 days"))
    assert any("No claims after 7 days" in text for text in render(code, config=config).texts())

    hidden = TemplateConfig(footer_config=FooterConfig(terms_text="No claims after 7 days", show_terms=False))
    assert not any("No claims after 7 days" in text for text in render(code, config=hidden).texts())


@pytest.mark.parametrize("code", TEMPLATE_CODES)
def test_style_colors_and_font_family(code):
    config = TemplateConfig(style_config=StyleConfig(primary_color="#1e40af", font_family="Times New Roman"))
    surface = render(code, config=config)
    assert ("text_color", 30, 64, 175) in surface.ops
    fonts = {op[1] for op in surface.ops if op[0] == "font"}
    assert "Times-Bold" in fonts
    assert all(font.startswith("Times") for font in fonts)


def test_long_values_are_cut_to_their_cell():
    long_name = "Maharashtra State Agricultural Produce Cooperative Marketing Federation Limited " * 3
    booking = make_booking(consignor=Party(name=long_name))
    surface = render("standard", booking=booking)
    drawn = next(text for text in surface.texts() if text.startswith("Maharashtra State"))
    assert drawn != long_name
    assert surface.measure_text_width(drawn, "Helvetica", 7) <= 131.5


def test_gst_invoice_moves_down_for_centred_logo():
    company = CompanyProfile(name="Shree Roadways", logo_url=png_data_uri())
    plain = render("gst_invoice", company=company)
    centred = render("gst_invoice", company=company,
                     config=TemplateConfig(header_config=HeaderConfig(logo_position="center")))

    def y_of(surface, value):
        return next(op[2] for op in surface.ops if op[0] == "text" and op[3] == value)

    assert y_of(centred, "LORRY RECEIPT") - y_of(plain, "LORRY RECEIPT") == pytest.approx(17)
    assert y_of(centred, CONSIGNOR) - y_of(plain, CONSIGNOR) == pytest.approx(17)


def test_unbroken_address_is_cut_to_the_party_box():
    booking = make_booking(consignor=Party(name=CONSIGNOR, address="Plot-" + "A" * 150))
    surface = render("standard", booking=booking)
    drawn = next(text for text in surface.texts() if text.startswith("Plot-"))
    assert len(drawn) < 155
    assert surface.measure_text_width(drawn, "Helvetica", 7) <= 131


@pytest.mark.parametrize("code", ["standard", "detailed", "gst_invoice"])
def test_hidden_vehicle_number_is_blank(code):
    assert "MH-15-GV-4410" in render(code).texts()
    hidden = TemplateConfig(visible_fields={"vehicle_number": False})
    assert "MH-15-GV-4410" not in render(code, config=hidden).texts()


@pytest.mark.parametrize("code", ["minimal", "detailed", "gst_invoice"])
def test_hidden_payment_mode_is_blank(code):
    assert "PAID" in render(code).texts()
    hidden = TemplateConfig(visible_fields={"payment_mode": False})
    assert "PAID" not in render(code, config=hidden).texts()


@pytest.mark.parametrize("code, grand_total", [
    ("standard", "Rs. 69,000"),
    ("minimal", "Rs. 19,950.00"),
    ("detailed", "Rs. 20,475.00"),
    ("gst_invoice", "Rs. 19,425.00"),
])
def test_hidden_freight_keeps_the_totals(code, grand_total):
    texts = render(code, config=TemplateConfig(visible_fields={"freight_charges": False})).texts()
    assert "Rs. 18,500" not in texts
    assert grand_total in texts


def test_hidden_weight_on_gst_invoice():
    booking = make_booking(weight="4321")
    assert "4321 Kg" in render("gst_invoice", booking=booking).texts()

    texts = render("gst_invoice", booking=booking, config=TemplateConfig(visible_fields={"weight": False})).texts()
    assert not any("4321" in text for text in texts)


def test_hidden_weight_and_remarks_on_detailed():
    booking = make_booking(weight="4321", remarks="Keep dry")
    texts = render("detailed", booking=booking).texts()
    assert "4321" in texts
    assert "Keep dry" in texts

    config = TemplateConfig(visible_fields={"weight": False, "remarks": False})
    texts = render("detailed", booking=booking, config=config).texts()
    assert "4321" not in texts
    assert "Keep dry" not in texts
