"""
Lorry Receipt Schemas for the Freight LR Document Service
Pydantic models for booking, company profile and template customization input
"""

from pydantic import BaseModel, ConfigDict, Field, validator
from typing import Optional, List, Dict, Any, Union
from datetime import datetime, date
import json
import logging

logger = logging.getLogger(__name__)

Amount = Union[int, float, str]
DateInput = Union[datetime, date, str]

LOGO_POSITIONS = ("left", "center", "right")


def _as_text(value: Any) -> Any:
    """Coerce numeric display values to text; leave None and strings alone"""
    if value is None or isinstance(value, str):
        return value
    if isinstance(value, bool):
        return str(value).lower()
    if isinstance(value, (int, float)):
        return str(value)
    return value


# Party and cargo schemas
class Party(BaseModel):
    """Consignor or consignee details as stored on the booking"""
    model_config = ConfigDict(extra="ignore")

    name: Optional[str] = Field(None, description="Party name")
    address: Optional[str] = Field(None, description="Street address")
    city: Optional[str] = Field(None, description="City")
    state: Optional[str] = Field(None, description="State")
    pincode: Optional[str] = Field(None, description="Postal PIN code")
    gst_number: Optional[str] = Field(None, description="GSTIN")
    phone: Optional[str] = Field(None, description="Contact phone")
    email: Optional[str] = Field(None, description="Contact email")

    @validator('pincode', 'phone', 'gst_number', pre=True)
    def coerce_text(cls, v):
        return _as_text(v)


class GoodsItem(BaseModel):
    """Structured goods line; every value is a display string"""
    model_config = ConfigDict(extra="ignore")

    description: Optional[str] = Field(None, description="Goods description")
    quantity: Optional[str] = Field(None, description="Quantity / packages, e.g. '10 BOX'")
    weight: Optional[str] = Field(None, description="Weight as displayed")
    value: Optional[str] = Field(None, description="Declared value as displayed")

    @validator('description', 'quantity', 'weight', 'value', pre=True)
    def coerce_text(cls, v):
        return _as_text(v)


def decode_goods_items(value: Any) -> Any:
    """Decode goods_items given as a JSON string (possibly double-encoded)"""
    if value is None or isinstance(value, list):
        return value
    if isinstance(value, str):
        try:
            parsed = json.loads(value)
            if isinstance(parsed, str):
                parsed = json.loads(parsed)
        except ValueError as e:
            logger.warning(f"Could not decode goods_items JSON: {e}")
            return []
        return parsed if isinstance(parsed, list) else []
    return []


class BookingRecord(BaseModel):
    """Shipment record rendered on a Lorry Receipt"""
    model_config = ConfigDict(extra="ignore")

    # Identifiers
    booking_id: Optional[str] = Field(None, description="Booking reference")
    lr_number: Optional[str] = Field(None, description="Lorry Receipt number")
    lr_date: Optional[DateInput] = Field(None, description="Lorry Receipt date")
    invoice_number: Optional[str] = Field(None, description="Consignor invoice number")
    eway_bill: Optional[str] = Field(None, description="E-way bill number")
    bilti_number: Optional[str] = Field(None, description="Bilti number")

    # Route
    from_location: Optional[str] = Field(None, description="Origin, e.g. 'Mumbai, Maharashtra'")
    to_location: Optional[str] = Field(None, description="Destination")

    # Parties
    consignor: Optional[Party] = Field(None, description="Sender")
    consignee: Optional[Party] = Field(None, description="Receiver")
    consignor_name: Optional[str] = Field(None, description="Flat consignor name fallback")
    consignee_name: Optional[str] = Field(None, description="Flat consignee name fallback")

    # Cargo: structured form takes precedence over the legacy comma lists
    goods_items: Optional[List[GoodsItem]] = Field(None, description="Structured goods lines")
    cargo_units: Optional[str] = Field(None, description="Legacy comma-separated quantities")
    material_description: Optional[str] = Field(None, description="Legacy comma-separated descriptions")
    weight: Optional[Amount] = Field(None, description="Total weight in kg")
    cargo_value: Optional[str] = Field(None, description="Declared cargo value as displayed")

    # Vehicle and driver
    vehicle_number: Optional[str] = Field(None, description="Vehicle registration number")
    driver_name: Optional[str] = Field(None, description="Driver name")
    driver_phone: Optional[str] = Field(None, description="Driver phone")

    # Financials
    freight_charges: Optional[Amount] = Field(None, description="Freight amount")
    invoice_value: Optional[Amount] = Field(None, description="Invoice value")
    payment_mode: Optional[str] = Field(None, description="PAID, TO_PAY or TO_BE_BILLED")

    # Misc
    service_type: Optional[str] = Field(None, description="FTL / PTL / surface")
    pickup_date: Optional[DateInput] = Field(None, description="Pickup date")
    status: Optional[str] = Field(None, description="Booking status")
    remarks: Optional[str] = Field(None, description="Free-text remarks")

    @validator('goods_items', pre=True)
    def parse_goods_items(cls, v):
        """Accept a list, a JSON string or a double-encoded JSON string"""
        return decode_goods_items(v)

    @validator('booking_id', 'lr_number', 'invoice_number', 'eway_bill', 'bilti_number',
               'cargo_units', 'cargo_value', 'driver_phone', pre=True)
    def coerce_text(cls, v):
        return _as_text(v)


class CompanyProfile(BaseModel):
    """Transport company printing the Lorry Receipt"""
    model_config = ConfigDict(extra="ignore")

    name: Optional[str] = Field(None, description="Company name")
    address: Optional[str] = Field(None, description="Office address")
    city: Optional[str] = Field(None, description="City")
    state: Optional[str] = Field(None, description="State")
    phone: Optional[str] = Field(None, description="Phone")
    email: Optional[str] = Field(None, description="Email")
    gst_number: Optional[str] = Field(None, description="Company GSTIN")
    pan_number: Optional[str] = Field(None, description="Company PAN")
    logo_url: Optional[Union[str, bytes]] = Field(
        None, description="Logo source: data URI, base64, file path or raw bytes"
    )


# Template customization schemas. Every field is optional: None means "inherit".
class HeaderConfig(BaseModel):
    """Header customization"""
    model_config = ConfigDict(extra="ignore")

    show_logo: Optional[bool] = None
    logo_url: Optional[Union[str, bytes]] = None
    logo_position: Optional[str] = None
    logo_size: Optional[Union[str, int, float]] = None
    show_gst: Optional[bool] = None
    show_pan: Optional[bool] = None
    show_address: Optional[bool] = None

    @validator('logo_position', pre=True)
    def normalize_logo_position(cls, v):
        """Unknown positions inherit the default instead of failing the request"""
        if v is None:
            return None
        v = str(v).strip().lower()
        return v if v in LOGO_POSITIONS else None


class FooterConfig(BaseModel):
    """Footer customization"""
    model_config = ConfigDict(extra="ignore")

    show_terms: Optional[bool] = None
    terms_text: Optional[str] = None
    show_signature: Optional[bool] = None
    signature_labels: Optional[List[str]] = None


class StyleConfig(BaseModel):
    """Colors and fonts"""
    model_config = ConfigDict(extra="ignore")

    primary_color: Optional[str] = None
    secondary_color: Optional[str] = None
    font_family: Optional[str] = None
    font_size: Optional[Union[str, int, float]] = None


class TemplateConfig(BaseModel):
    """User customization stored for a company's LR template"""
    model_config = ConfigDict(extra="ignore")

    template_name: Optional[str] = Field(None, description="Display name of the template")
    header_config: HeaderConfig = Field(default_factory=HeaderConfig)
    footer_config: FooterConfig = Field(default_factory=FooterConfig)
    style_config: StyleConfig = Field(default_factory=StyleConfig)
    visible_fields: Dict[str, Optional[bool]] = Field(
        default_factory=dict,
        description="Field toggles; a missing key means visible, only false hides"
    )

    @validator('header_config', 'footer_config', 'style_config', 'visible_fields', pre=True)
    def none_to_empty(cls, v):
        return {} if v is None else v


# Standalone LR (not backed by a booking)
class StandaloneLRDocument(BaseModel):
    """Lorry Receipt created directly, without a booking"""
    model_config = ConfigDict(extra="ignore")

    standalone_lr_number: Optional[str] = None
    lr_date: Optional[DateInput] = None

    company_name: Optional[str] = None
    company_address: Optional[str] = None
    company_city: Optional[str] = None
    company_state: Optional[str] = None
    company_phone: Optional[str] = None
    company_email: Optional[str] = None
    company_gst: Optional[str] = None
    company_pan: Optional[str] = None
    company_logo_url: Optional[Union[str, bytes]] = None

    consignor_name: Optional[str] = None
    consignor_address: Optional[str] = None
    consignor_city: Optional[str] = None
    consignor_state: Optional[str] = None
    consignor_pincode: Optional[str] = None
    consignor_phone: Optional[str] = None
    consignor_gst: Optional[str] = None
    consignor_email: Optional[str] = None

    consignee_name: Optional[str] = None
    consignee_address: Optional[str] = None
    consignee_city: Optional[str] = None
    consignee_state: Optional[str] = None
    consignee_pincode: Optional[str] = None
    consignee_phone: Optional[str] = None
    consignee_gst: Optional[str] = None
    consignee_email: Optional[str] = None

    from_location: Optional[str] = None
    to_location: Optional[str] = None

    goods_items: Optional[List[GoodsItem]] = None
    material_description: Optional[str] = None
    packages_qty: Optional[str] = None

    weight: Optional[Amount] = None
    invoice_number: Optional[str] = None
    invoice_value: Optional[Amount] = None
    eway_bill_number: Optional[str] = None

    vehicle_number: Optional[str] = None
    driver_name: Optional[str] = None
    driver_phone: Optional[str] = None

    freight_amount: Optional[Amount] = None
    payment_mode: Optional[str] = None

    remarks: Optional[str] = None
    template_code: Optional[str] = None

    @validator('goods_items', pre=True)
    def parse_goods_items(cls, v):
        return decode_goods_items(v)

    @validator('standalone_lr_number', 'packages_qty', 'consignor_pincode', 'consignee_pincode',
               'consignor_phone', 'consignee_phone', 'driver_phone', pre=True)
    def coerce_text(cls, v):
        return _as_text(v)


# Request / response schemas
class LRGenerateRequest(BaseModel):
    """Body for rendering a booking LR; missing parts are rejected by the generator"""
    booking: Optional[BookingRecord] = Field(None, description="Booking to render")
    company: Optional[CompanyProfile] = Field(None, description="Company profile")
    template_config: Optional[TemplateConfig] = Field(None, description="Saved template customization")


class StandaloneLRGenerateRequest(BaseModel):
    """Body for rendering a standalone LR"""
    lr: Optional[StandaloneLRDocument] = Field(None, description="Standalone LR document")
    company: Optional[CompanyProfile] = Field(None, description="Fallback company profile")
    template_code: Optional[str] = Field(None, description="Template code; defaults to the LR's own")


class TemplateInfo(BaseModel):
    """Template catalogue entry"""
    code: str
    name: str
    orientation: str
    description: str
    features: List[str]
