"""
Lorry Receipt API Endpoints
Render booking and standalone LRs as PDFs for preview and printing
"""

from typing import Dict, Any
import logging
from datetime import datetime
from urllib.parse import quote

from fastapi import APIRouter, HTTPException, status, Response, Path

from app.schemas.lr import LRGenerateRequest, StandaloneLRGenerateRequest, TemplateInfo
from app.services.logo_loader import prefetch_logos, prefetch_standalone_logo
from app.services.lr_document_generator import (
    LRDocument, LRRenderError, MissingRequiredInputError, lr_document_generator
)

logger = logging.getLogger(__name__)
router = APIRouter()


def _content_disposition(filename: str) -> str:
    # Header values are latin-1; non-ASCII names go in filename* (RFC 5987)
    fallback = filename.encode("ascii", "replace").decode("ascii")
    for unsafe in "?\"\\\r\n":
        fallback = fallback.replace(unsafe, "_")
    return f"inline; filename=\"{fallback}\"; filename*=UTF-8''{quote(filename)}"


def _pdf_response(document: LRDocument) -> Response:
    return Response(
        content=document.content,
        media_type=document.media_type,
        headers={
            "Content-Disposition": _content_disposition(document.filename),
            "Content-Length": str(document.size),
            "Cache-Control": "no-cache, no-store, must-revalidate",
            "Pragma": "no-cache",
            "Expires": "0"
        }
    )


@router.get("/generator-info", summary="Get LR Generator Information")
def get_generator_info() -> Dict[str, Any]:
    """
    Get information about the LR generator service
    """
    return {
        "service": "LR Document Generator",
        "version": lr_document_generator.version,
        "status": "active",
        "supported_formats": ["pdf"],
        "supported_templates": [t["code"] for t in lr_document_generator.get_supported_templates()],
        "timestamp": datetime.now().isoformat()
    }


@router.get("/templates", summary="Get Available LR Templates")
def get_available_templates() -> Dict[str, Any]:
    """
    Get list of available LR templates
    """
    return {
        "templates": [TemplateInfo(**t) for t in lr_document_generator.get_supported_templates()],
        "generator_version": lr_document_generator.version,
        "timestamp": datetime.now().isoformat()
    }


@router.post("/generate-pdf/{template_code}", summary="Generate Booking LR PDF")
def generate_lr_pdf(
    request: LRGenerateRequest,
    template_code: str = Path(..., description="Template code (standard, minimal, detailed, gst_invoice)")
):
    """
    Generate an LR PDF for a booking using the company's saved template customization.

    Unknown template codes render with the Standard template.
    """
    try:
        logger.info(f"Generating {template_code} LR PDF")
        company, template_config = prefetch_logos(request.company, request.template_config)
        document = lr_document_generator.generate_lr(request.booking, template_config, company, template_code)
        return _pdf_response(document)

    except MissingRequiredInputError as e:
        logger.warning(f"LR request rejected: {e}")
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except LRRenderError as e:
        logger.error(f"Error generating {template_code} LR PDF: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to generate LR: {str(e)}"
        )


@router.post("/standalone/generate-pdf", summary="Generate Standalone LR PDF")
def generate_standalone_lr_pdf(request: StandaloneLRGenerateRequest):
    """
    Generate a PDF for an LR that is not backed by a booking
    """
    try:
        logger.info("Generating standalone LR PDF")
        company, _ = prefetch_logos(request.company, None)
        lr = prefetch_standalone_logo(request.lr)
        document = lr_document_generator.generate_standalone_lr(lr, company, request.template_code)
        return _pdf_response(document)

    except MissingRequiredInputError as e:
        logger.warning(f"Standalone LR request rejected: {e}")
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except LRRenderError as e:
        logger.error(f"Error generating standalone LR PDF: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to generate standalone LR: {str(e)}"
        )


@router.get("/sample-pdf/{template_code}", summary="Generate Sample LR PDF")
def generate_sample_pdf(
    template_code: str = Path(..., description="Template code (standard, minimal, detailed, gst_invoice)")
):
    """
    Generate a sample LR PDF from built-in sample data

    Useful for previewing a template before customizing it.
    """
    try:
        logger.info(f"Generating sample {template_code} LR PDF")
        document = lr_document_generator.generate_sample(template_code)
        return _pdf_response(document)

    except LRRenderError as e:
        logger.error(f"Error generating sample {template_code} LR PDF: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to generate sample {template_code}: {str(e)}"
        )
