"""FastAPI dependencies for dependency injection."""

from typing import Annotated

from fastapi import Depends, Request

from employee_editor.api.sessions import FormSessionRegistry
from employee_editor.store.base import RecordStoreGateway


def get_gateway(request: Request) -> RecordStoreGateway:
    """Get the record store gateway configured for the app."""
    return request.app.state.gateway


def get_sessions(request: Request) -> FormSessionRegistry:
    """Get the form session registry."""
    return request.app.state.sessions


# Type aliases for cleaner dependency injection
Gateway = Annotated[RecordStoreGateway, Depends(get_gateway)]
Sessions = Annotated[FormSessionRegistry, Depends(get_sessions)]
