"""
Main API Router for the Freight LR Document Service v1
Includes all endpoint routers
"""

from fastapi import APIRouter

from app.api.v1.endpoints import lr_documents

api_router = APIRouter()

# Include all endpoint routers
api_router.include_router(lr_documents.router, prefix="/lr", tags=["LR Documents"])
