"""
Render context builder for Lorry Receipts

Merges three layers into one read-only configuration per render call:

    builtin   per-template defaults (onboarding defaults of the LR templates)
    company   values derived from the company profile (logo, display fields)
    template  the company's saved template customization

Later layers win field by field. None in a layer means "inherit". The layer
that supplied each merged field is kept in RenderContext.provenance.
"""

import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field

from app.schemas.lr import CompanyProfile, FooterConfig, HeaderConfig, StyleConfig, TemplateConfig

logger = logging.getLogger(__name__)

LAYER_BUILTIN = "builtin"
LAYER_COMPANY = "company"
LAYER_TEMPLATE = "template"

LOGO_SCALES = {"small": 0.8, "medium": 1.0, "large": 1.2}

# Signature slots each template ships with
SIGNATURE_LABELS = {
    "standard": ("Consignor", "Driver", "Consignee"),
    "minimal": ("Booking Clerk", "Driver Sign", "Consignor Sign", "Consignee Sign"),
    "detailed": ("Prepared By", "Checked By", "Driver Sign", "Consignor", "Consignee"),
    "gst_invoice": ("Consignor", "Driver", "Consignee"),
}


class BuiltinDefaults(BaseModel):
    """Bottom layer of the merge"""
    model_config = ConfigDict(frozen=True)

    header_config: HeaderConfig
    footer_config: FooterConfig
    style_config: StyleConfig
    visible_fields: Dict[str, Optional[bool]] = Field(default_factory=dict)


class HeaderSettings(BaseModel):
    model_config = ConfigDict(frozen=True)

    show_logo: bool = False
    logo_url: Optional[Union[str, bytes]] = None
    logo_position: str = "left"
    logo_size: Optional[Union[str, int, float]] = None
    show_gst: bool = False
    show_pan: bool = False
    show_address: bool = False


class FooterSettings(BaseModel):
    model_config = ConfigDict(frozen=True)

    show_terms: bool = False
    terms_text: Optional[str] = None
    show_signature: bool = False
    signature_labels: Tuple[str, ...] = ()


class StyleSettings(BaseModel):
    model_config = ConfigDict(frozen=True)

    primary_color: str = "#000000"
    secondary_color: str = "#666666"
    font_family: str = "helvetica"
    font_size: Optional[Union[str, int, float]] = None


class CompanyDisplay(BaseModel):
    """Company fields shown in the header; None falls back to the layout's sample text"""
    model_config = ConfigDict(frozen=True)

    name: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    gst_number: Optional[str] = None
    pan_number: Optional[str] = None


@dataclass(frozen=True)
class RenderContext:
    """Fully merged configuration consumed read-only by a layout"""

    template_code: str
    header: HeaderSettings
    footer: FooterSettings
    style: StyleSettings
    company: CompanyDisplay
    visible_fields: Mapping[str, Optional[bool]]
    provenance: Mapping[str, str]

    def is_visible(self, field_name: str) -> bool:
        """A missing key means visible; only an explicit False hides"""
        return self.visible_fields.get(field_name) is not False

    @property
    def has_logo(self) -> bool:
        return bool(self.header.show_logo and self.header.logo_url)

    @property
    def logo_scale(self) -> float:
        """Scale factor for the logo box only; surrounding geometry never moves"""
        size = self.header.logo_size
        if isinstance(size, str):
            return LOGO_SCALES.get(size.strip().lower(), 1.0)
        return 1.0


def builtin_defaults_for(template_code: str) -> BuiltinDefaults:
    """Defaults a company gets when it first picks a template"""
    labels = SIGNATURE_LABELS.get(template_code, SIGNATURE_LABELS["standard"])
    return BuiltinDefaults(
        header_config=HeaderConfig(
            show_logo=True,
            logo_position="left",
            show_gst=True,
            show_pan=False,
            show_address=True,
        ),
        footer_config=FooterConfig(
            show_terms=True,
            show_signature=True,
            signature_labels=list(labels),
        ),
        style_config=StyleConfig(
            primary_color="#000000",
            secondary_color="#666666",
            font_family="helvetica",
            font_size="12px",
        ),
        visible_fields={
            "lr_number": True,
            "booking_id": True,
            "date": True,
            "consignor": True,
            "consignee": True,
            "from_location": True,
            "to_location": True,
            "material_description": True,
            "vehicle_number": True,
            "driver_details": True,
            "weight": True,
            "quantity": True,
            "freight_charges": True,
            "payment_mode": True,
            "remarks": True,
        },
    )


def _merge_section(
    section: str,
    layers: List[Tuple[str, Optional[BaseModel]]],
    provenance: Dict[str, str],
) -> Dict[str, Any]:
    merged: Dict[str, Any] = {}
    for layer_name, values in layers:
        if values is None:
            continue
        for field_name in type(values).model_fields:
            value = getattr(values, field_name)
            if value is None:
                continue
            merged[field_name] = value
            provenance[f"{section}.{field_name}"] = layer_name
    return merged


def _merge_visible_fields(
    layers: List[Tuple[str, Mapping[str, Optional[bool]]]],
    provenance: Dict[str, str],
) -> Dict[str, Optional[bool]]:
    merged: Dict[str, Optional[bool]] = {}
    for layer_name, values in layers:
        for key, value in (values or {}).items():
            if value is None:
                continue
            merged[key] = value
            provenance[f"visible_fields.{key}"] = layer_name
    return merged


def _company_layers(company: CompanyProfile) -> Tuple[HeaderConfig, CompanyDisplay]:
    header = HeaderConfig(logo_url=company.logo_url or None)
    display = CompanyDisplay(
        name=company.name,
        address=company.address,
        city=company.city,
        state=company.state,
        phone=company.phone,
        email=company.email,
        gst_number=company.gst_number,
        pan_number=company.pan_number,
    )
    return header, display


def build_context(
    template_config: TemplateConfig,
    company: CompanyProfile,
    builtin: BuiltinDefaults,
    template_code: str = "standard",
) -> RenderContext:
    """Merge builtin -> company -> template into a RenderContext"""
    provenance: Dict[str, str] = {}
    company_header, company_display = _company_layers(company)

    header = _merge_section("header_config", [
        (LAYER_BUILTIN, builtin.header_config),
        (LAYER_COMPANY, company_header),
        (LAYER_TEMPLATE, template_config.header_config),
    ], provenance)
    footer = _merge_section("footer_config", [
        (LAYER_BUILTIN, builtin.footer_config),
        (LAYER_TEMPLATE, template_config.footer_config),
    ], provenance)
    style = _merge_section("style_config", [
        (LAYER_BUILTIN, builtin.style_config),
        (LAYER_TEMPLATE, template_config.style_config),
    ], provenance)
    visible_fields = _merge_visible_fields([
        (LAYER_BUILTIN, builtin.visible_fields),
        (LAYER_TEMPLATE, template_config.visible_fields),
    ], provenance)

    for field_name in CompanyDisplay.model_fields:
        if getattr(company_display, field_name) is not None:
            provenance[f"company.{field_name}"] = LAYER_COMPANY

    if "signature_labels" in footer:
        footer["signature_labels"] = tuple(footer["signature_labels"])

    context = RenderContext(
        template_code=template_code,
        header=HeaderSettings(**header),
        footer=FooterSettings(**footer),
        style=StyleSettings(**style),
        company=company_display,
        visible_fields=MappingProxyType(visible_fields),
        provenance=MappingProxyType(provenance),
    )
    logger.debug(f"Built render context for {template_code}: logo={context.has_logo}, "
                 f"hidden={[k for k, v in visible_fields.items() if v is False]}")
    return context
