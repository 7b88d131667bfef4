# backend/modules/payroll/routes/__init__.py

"""Salon payroll API routes."""

from .payroll_routes import router as payroll_router

__all__ = ["payroll_router"]
