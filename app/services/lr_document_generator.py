"""
Lorry Receipt Document Generator Service
Resolves the template, builds the render context and drives one layout onto a drawing surface
"""

import time
import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional

from app.core.config import settings
from app.schemas.lr import (
    BookingRecord, CompanyProfile, FooterConfig, GoodsItem, HeaderConfig, Party,
    StandaloneLRDocument, StyleConfig, TemplateConfig
)
from app.services.lr_context import RenderContext, build_context, builtin_defaults_for
from app.services.lr_surface import DrawingSurface, ReportLabSurface
from app.services.lr_templates import TemplateDefinition, available_templates, resolve

logger = logging.getLogger(__name__)

PDF_MEDIA_TYPE = "application/pdf"
STANDALONE_BOOKING_ID = "STANDALONE"

SurfaceFactory = Callable[[str], DrawingSurface]


class LRDocumentError(Exception):
    """Base exception for LR document errors"""
    pass


class MissingRequiredInputError(LRDocumentError):
    """Raised before any drawing when booking, company or template data is absent"""
    pass


class LRRenderError(LRDocumentError):
    """Raised when a layout fails part way; no document is produced"""
    pass


@dataclass(frozen=True)
class LRDocument:
    """Finished, named LR handed back to the caller"""
    filename: str
    content: bytes
    template_code: str
    orientation: str
    media_type: str = PDF_MEDIA_TYPE

    @property
    def size(self) -> int:
        return len(self.content)


def _epoch_millis() -> int:
    return int(time.time() * 1000)


def _pdf_surface(orientation: str) -> DrawingSurface:
    return ReportLabSurface(orientation, author=settings.PDF_AUTHOR, creator=settings.PDF_CREATOR)


# Standalone LR conversion

STANDALONE_COMPANY_PLACEHOLDERS = {
    "name": "Your Company Name",
    "address": "Company Address",
    "city": "City",
    "state": "State",
    "gst_number": "22AAAAA0000A1Z5",
    "pan_number": "AAAAA0000A",
    "phone": "+91 9999999999",
    "email": "info@company.com",
}

STANDALONE_SAMPLE_GOODS = GoodsItem(description="Sample goods", quantity="10 boxes")


def booking_from_standalone(lr: StandaloneLRDocument) -> BookingRecord:
    """Shape a standalone LR like a booking so every layout can draw it"""
    return BookingRecord(
        lr_number=lr.standalone_lr_number,
        lr_date=lr.lr_date,
        booking_id=STANDALONE_BOOKING_ID,
        consignor=Party(
            name=lr.consignor_name,
            address=lr.consignor_address,
            city=lr.consignor_city,
            state=lr.consignor_state,
            pincode=lr.consignor_pincode,
            phone=lr.consignor_phone,
            gst_number=lr.consignor_gst,
            email=lr.consignor_email,
        ),
        consignee=Party(
            name=lr.consignee_name,
            address=lr.consignee_address,
            city=lr.consignee_city,
            state=lr.consignee_state,
            pincode=lr.consignee_pincode,
            phone=lr.consignee_phone,
            gst_number=lr.consignee_gst,
            email=lr.consignee_email,
        ),
        from_location=lr.from_location,
        to_location=lr.to_location,
        goods_items=lr.goods_items or [STANDALONE_SAMPLE_GOODS],
        material_description=lr.material_description,
        cargo_units=lr.packages_qty,
        weight=lr.weight,
        invoice_number=lr.invoice_number,
        invoice_value=lr.invoice_value,
        eway_bill=lr.eway_bill_number,
        vehicle_number=lr.vehicle_number,
        driver_name=lr.driver_name,
        driver_phone=lr.driver_phone,
        freight_charges=lr.freight_amount,
        payment_mode=lr.payment_mode,
        remarks=lr.remarks,
    )


def company_from_standalone(lr: StandaloneLRDocument, company: Optional[CompanyProfile] = None) -> CompanyProfile:
    """LR's own company fields win, then the stored profile, then placeholders"""
    company = company or CompanyProfile()

    def pick(lr_value, field_name):
        return lr_value or getattr(company, field_name) or STANDALONE_COMPANY_PLACEHOLDERS[field_name]

    return CompanyProfile(
        name=pick(lr.company_name, "name"),
        address=pick(lr.company_address, "address"),
        city=pick(lr.company_city, "city"),
        state=pick(lr.company_state, "state"),
        gst_number=pick(lr.company_gst, "gst_number"),
        pan_number=pick(lr.company_pan, "pan_number"),
        phone=pick(lr.company_phone, "phone"),
        email=pick(lr.company_email, "email"),
        logo_url=lr.company_logo_url or company.logo_url or None,
    )


def standalone_template_config(lr: StandaloneLRDocument, company: CompanyProfile,
                               template: TemplateDefinition) -> TemplateConfig:
    """Template customization for a standalone LR, derived from which values it carries"""
    return TemplateConfig(
        template_name=template.name,
        header_config=HeaderConfig(
            show_logo=bool(company.logo_url),
            logo_url=company.logo_url,
            logo_position="left",
            show_gst=True,
            show_pan=False,
            show_address=True,
        ),
        visible_fields={
            "lr_number": True,
            "booking_id": False,
            "date": True,
            "consignor": True,
            "consignee": True,
            "from_location": True,
            "to_location": True,
            "material_description": True,
            "goods_items": True,
            "vehicle_number": True,
            "driver_details": True,
            "weight": bool(lr.weight),
            "quantity": True,
            "freight_charges": bool(lr.freight_amount),
            "payment_mode": bool(lr.payment_mode),
            "remarks": bool(lr.remarks),
        },
        style_config=StyleConfig(
            primary_color="#000000",
            secondary_color="#666666",
            font_family="Helvetica",
            font_size="12px",
        ),
        footer_config=FooterConfig(
            show_terms=True,
            terms_text=lr.remarks or "Goods once sent will not be taken back",
            show_signature=True,
            signature_labels=["Consignor", "Driver", "Consignee"],
        ),
    )


class LRDocumentGenerator:
    """Main Lorry Receipt generator service"""

    def __init__(self, surface_factory: Optional[SurfaceFactory] = None):
        self.version = "1.0.0"
        self.surface_factory = surface_factory or _pdf_surface
        logger.info("LR Document Generator Service initialized")

    def _render(self, template: TemplateDefinition, booking: BookingRecord, context: RenderContext,
                filename: str) -> LRDocument:
        logger.info(f"📄 Rendering {template.code} LR {filename} ({template.orientation})")
        surface = self.surface_factory(template.orientation)
        try:
            template.layout_class(surface, booking, context).render()
            content = surface.finish()
        except Exception as e:
            logger.error(f"❌ Error rendering {template.code} LR {filename}: {e}")
            raise LRRenderError(f"LR generation failed: {str(e)}") from e

        logger.info(f"✅ Rendered {filename}: {len(content)} bytes")
        return LRDocument(
            filename=filename,
            content=content,
            template_code=template.code,
            orientation=template.orientation,
        )

    def generate_lr(self, booking: Optional[BookingRecord], template_config: Optional[TemplateConfig],
                    company: Optional[CompanyProfile], template_code: Optional[str] = None) -> LRDocument:
        """Render a booking LR with the company's saved template customization"""
        if booking is None:
            raise MissingRequiredInputError("Booking data is required")
        if company is None:
            raise MissingRequiredInputError("Company data is required")
        if template_config is None:
            raise MissingRequiredInputError("Template data is required")

        template = resolve(template_code or settings.DEFAULT_TEMPLATE_CODE)
        context = build_context(template_config, company, builtin_defaults_for(template.code), template.code)
        filename = f"LR_{booking.lr_number or booking.booking_id or _epoch_millis()}.pdf"
        return self._render(template, booking, context, filename)

    def generate_standalone_lr(self, lr: Optional[StandaloneLRDocument],
                               company: Optional[CompanyProfile] = None,
                               template_code: Optional[str] = None) -> LRDocument:
        """Render an LR that is not backed by a booking"""
        if lr is None:
            raise MissingRequiredInputError("LR data is required")

        template = resolve(template_code or lr.template_code or settings.DEFAULT_TEMPLATE_CODE)
        pdf_company = company_from_standalone(lr, company)
        template_config = standalone_template_config(lr, pdf_company, template)
        context = build_context(template_config, pdf_company, builtin_defaults_for(template.code), template.code)
        filename = f"Standalone_LR_{lr.standalone_lr_number or _epoch_millis()}.pdf"
        return self._render(template, booking_from_standalone(lr), context, filename)

    def get_supported_templates(self) -> List[Dict[str, Any]]:
        """Get list of supported template types"""
        return available_templates()

    def get_sample_booking(self) -> BookingRecord:
        """Sample booking for template previews"""
        return BookingRecord(
            booking_id="BKG-20250924-3953",
            lr_number="LR2024001",
            lr_date="2024-09-24",
            invoice_number="INV2024001",
            eway_bill="231000987654",
            bilti_number="BT2024001",
            from_location="Mumbai, Maharashtra",
            to_location="Gurgaon, Haryana",
            consignor=Party(
                name="ABC Electronics Pvt Ltd",
                address="Shop No. 15, Electronic Market, Mumbai - 400007",
                city="Mumbai",
                state="Maharashtra",
                gst_number="27AAAAA0000A1Z5",
                phone="9876543210",
                email="abc@electronics.com",
            ),
            consignee=Party(
                name="XYZ Trading Company",
                address="Plot No. 25, Industrial Area, Gurgaon - 122015",
                city="Gurgaon",
                state="Haryana",
                gst_number="06BBBBB1111B1Z5",
                phone="9876543211",
                email="xyz@trading.com",
            ),
            cargo_units="10 BOX, 5 CARTON, 20 BAGS",
            material_description="Rice Bags, Water Bottle, Electronic Gadget",
            weight="750",
            cargo_value="75,000",
            vehicle_number="MH-12-AB-1234",
            driver_name="Ramesh",
            driver_phone="9998887776",
            freight_charges=18500,
            invoice_value=50000,
            payment_mode="TO_PAY",
            service_type="FTL",
            pickup_date="2024-09-23",
            status="CONFIRMED",
        )

    def get_sample_company(self) -> CompanyProfile:
        """Sample company profile for template previews"""
        return CompanyProfile(
            name="Sample Transport Co.",
            address="45, Transport Hub, Indore - 452001",
            city="Indore",
            state="Madhya Pradesh",
            phone="0731-4567890",
            email="info@sampletransport.com",
            gst_number="23AAAAA0000A1Z5",
            pan_number="AAAAA0000A",
        )

    def generate_sample(self, template_code: Optional[str] = None) -> LRDocument:
        """Render the sample booking with built-in defaults only"""
        return self.generate_lr(self.get_sample_booking(), TemplateConfig(), self.get_sample_company(),
                                template_code)


# Service instance
lr_document_generator = LRDocumentGenerator()
