"""
Lorry Receipt template registry

Maps a template code to its page orientation and layout class. Unknown
codes fall back to the Standard template.
"""

import logging
from typing import Dict, List, NamedTuple, Optional, Tuple, Type

from app.services.lr_templates.base import LRLayout
from app.services.lr_templates.standard import StandardLayout
from app.services.lr_templates.minimal import MinimalLayout
from app.services.lr_templates.detailed import DetailedLayout
from app.services.lr_templates.gst_invoice import GstInvoiceLayout

logger = logging.getLogger(__name__)

DEFAULT_TEMPLATE_CODE = "standard"


class TemplateDefinition(NamedTuple):
    code: str
    name: str
    orientation: str
    layout_class: Type[LRLayout]
    description: str
    features: Tuple[str, ...]


def _definition(layout_class: Type[LRLayout], description: str, features: Tuple[str, ...]) -> TemplateDefinition:
    return TemplateDefinition(
        code=layout_class.CODE,
        name=layout_class.NAME,
        orientation=layout_class.ORIENTATION,
        layout_class=layout_class,
        description=description,
        features=features,
    )


TEMPLATES: Dict[str, TemplateDefinition] = {
    template.code: template
    for template in (
        _definition(StandardLayout, "Most commonly used LR format with all essential details",
              ("Complete Details", "GST Ready", "Professional Look")),
        _definition(MinimalLayout, "Simple and clean format with only essential fields",
              ("Quick Print", "Essential Fields Only", "Space Efficient")),
        _definition(DetailedLayout, "Comprehensive format with all possible fields and sections",
              ("All Fields", "Extra Notes", "Multiple Sections")),
        _definition(GstInvoiceLayout, "GST compliant format designed like a tax invoice",
              ("GST Compliant", "Tax Breakdown", "Invoice Style")),
    )
}


def resolve(code: Optional[str]) -> TemplateDefinition:
    """Template for code; unknown or missing codes give the Standard template"""
    template = TEMPLATES.get((code or "").strip().lower())
    if template is None:
        logger.warning(f"⚠️ Unknown LR template code {code!r}, falling back to {DEFAULT_TEMPLATE_CODE}")
        return TEMPLATES[DEFAULT_TEMPLATE_CODE]
    return template


def available_templates() -> List[Dict[str, object]]:
    """Template catalogue for API clients"""
    return [
        {
            "code": template.code,
            "name": template.name,
            "orientation": template.orientation,
            "description": template.description,
            "features": list(template.features),
        }
        for template in TEMPLATES.values()
    ]


__all__ = [
    "LRLayout",
    "StandardLayout",
    "MinimalLayout",
    "DetailedLayout",
    "GstInvoiceLayout",
    "TemplateDefinition",
    "TEMPLATES",
    "DEFAULT_TEMPLATE_CODE",
    "resolve",
    "available_templates",
]
