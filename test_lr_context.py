#!/usr/bin/env python3
"""
Test LR Render Context
Layered builtin -> company -> template merge, visibility and provenance
"""

import os
import sys

import pytest

# Add the project root to sys.path
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from app.schemas.lr import CompanyProfile, FooterConfig, HeaderConfig, StyleConfig, TemplateConfig
from app.services.lr_context import (
    LAYER_BUILTIN, LAYER_COMPANY, LAYER_TEMPLATE, build_context, builtin_defaults_for
)


def make_context(template_config=None, company=None, code="standard"):
    return build_context(
        template_config or TemplateConfig(),
        company or CompanyProfile(),
        builtin_defaults_for(code),
        code,
    )


def test_builtin_defaults_apply_when_nothing_is_customized():
    context = make_context()
    assert context.header.show_logo is True
    assert context.header.logo_position == "left"
    assert context.header.show_pan is False
    assert context.footer.signature_labels == ("Consignor", "Driver", "Consignee")
    assert context.style.primary_color == "#000000"
    assert context.provenance["header_config.show_gst"] == LAYER_BUILTIN


def test_signature_labels_differ_per_template():
    assert len(make_context(code="minimal").footer.signature_labels) == 4
    assert make_context(code="detailed").footer.signature_labels[0] == "Prepared By"


def test_template_layer_overrides_field_by_field():
    config = TemplateConfig(
        header_config=HeaderConfig(logo_position="right", show_pan=True),
        style_config=StyleConfig(primary_color="#1e40af"),
        footer_config=FooterConfig(terms_text="Carrier not responsible for leakage."),
    )
    context = make_context(config)

    assert context.header.logo_position == "right"
    assert context.header.show_pan is True
    # untouched keys inherit
    assert context.header.show_address is True
    assert context.style.secondary_color == "#666666"
    assert context.footer.show_terms is True
    assert context.footer.terms_text == "Carrier not responsible for leakage."

    assert context.provenance["header_config.logo_position"] == LAYER_TEMPLATE
    assert context.provenance["header_config.show_address"] == LAYER_BUILTIN
    assert context.provenance["style_config.primary_color"] == LAYER_TEMPLATE


def test_company_logo_feeds_header_unless_template_sets_one():
    company = CompanyProfile(name="Shree Roadways", logo_url="data:image/png;base64,AAAA")
    context = make_context(company=company)
    assert context.header.logo_url == "data:image/png;base64,AAAA"
    assert context.provenance["header_config.logo_url"] == LAYER_COMPANY
    assert context.company.name == "Shree Roadways"
    assert context.provenance["company.name"] == LAYER_COMPANY
    assert "company.gst_number" not in context.provenance

    override = TemplateConfig(header_config=HeaderConfig(logo_url="/srv/logos/alt.png"))
    context = make_context(override, company)
    assert context.header.logo_url == "/srv/logos/alt.png"
    assert context.provenance["header_config.logo_url"] == LAYER_TEMPLATE


def test_has_logo_needs_both_flag_and_source():
    assert make_context().has_logo is False

    company = CompanyProfile(logo_url="data:image/png;base64,AAAA")
    assert make_context(company=company).has_logo is True

    hidden = TemplateConfig(header_config=HeaderConfig(show_logo=False))
    assert make_context(hidden, company).has_logo is False


def test_visibility_missing_key_means_visible():
    context = make_context(TemplateConfig(visible_fields={"consignee": False, "remarks": None}))
    assert context.is_visible("consignor") is True
    assert context.is_visible("something_new") is True
    assert context.is_visible("remarks") is True
    assert context.is_visible("consignee") is False
    assert context.provenance["visible_fields.consignee"] == LAYER_TEMPLATE


@pytest.mark.parametrize("code", ["standard", "minimal", "detailed", "gst_invoice"])
def test_builtin_visibility_shows_every_toggled_row(code):
    context = make_context(code=code)
    for key in ("vehicle_number", "weight", "freight_charges", "payment_mode", "remarks"):
        assert context.is_visible(key) is True
        assert context.provenance[f"visible_fields.{key}"] == LAYER_BUILTIN

    hidden = make_context(TemplateConfig(visible_fields={"payment_mode": False}), code=code)
    assert hidden.is_visible("payment_mode") is False


def test_context_is_read_only():
    context = make_context()
    with pytest.raises(TypeError):
        context.visible_fields["consignor"] = False
    with pytest.raises(Exception):
        context.template_code = "minimal"


@pytest.mark.parametrize("size, scale", [("small", 0.8), ("Large", 1.2), ("medium", 1.0), (None, 1.0), (42, 1.0)])
def test_logo_scale(size, scale):
    context = make_context(TemplateConfig(header_config=HeaderConfig(logo_size=size)))
    assert context.logo_scale == scale


def test_unknown_logo_position_inherits_default():
    context = make_context(TemplateConfig(header_config=HeaderConfig(logo_position="top")))
    assert context.header.logo_position == "left"
    assert context.provenance["header_config.logo_position"] == LAYER_BUILTIN
