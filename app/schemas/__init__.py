"""
Pydantic schemas for request/response validation
"""

# LR schemas
from app.schemas.lr import (
    Party, GoodsItem, BookingRecord, CompanyProfile,
    HeaderConfig, FooterConfig, StyleConfig, TemplateConfig,
    StandaloneLRDocument, LRGenerateRequest, StandaloneLRGenerateRequest, TemplateInfo
)
