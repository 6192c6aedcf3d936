"""API routes."""

from employee_editor.api.routes.employees import router as employees_router
from employee_editor.api.routes.form_sessions import router as form_sessions_router
from employee_editor.api.routes.health import router as health_router

__all__ = ["employees_router", "form_sessions_router", "health_router"]
