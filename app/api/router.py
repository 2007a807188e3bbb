"""Top-level Router"""

from fastapi import APIRouter

from app.api.endpoints import auth, invoices

api_router = APIRouter()

api_router.include_router(auth.router, tags=["Authentication"])
api_router.include_router(invoices.router, prefix="/dashboard", tags=["Invoices"])
