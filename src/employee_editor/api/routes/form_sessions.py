"""Edit-screen endpoints.

Each form session is one visit to the change-employee screen. The client
opens a session (optionally with the employee id from its navigation
context), edits the draft, and submits. Notifications are returned once and
then cleared.
"""

from typing import Any

from fastapi import APIRouter, Body, HTTPException, Path, Response, status

from employee_editor.api.dependencies import Sessions
from employee_editor.api.schemas import (
    EmployeeFields,
    ErrorResponse,
    FormSessionCreate,
    FormSessionResponse,
    NotificationResponse,
    SelectionUpdate,
    SelectOptionResponse,
)
from employee_editor.api.sessions import FormSession
from employee_editor.form import FormState

router = APIRouter(prefix="/form-sessions", tags=["form-sessions"])


def _view(session: FormSession, saved: bool | None = None) -> FormSessionResponse:
    flow = session.flow
    return FormSessionResponse(
        session_id=session.session_id,
        state=flow.state.value,
        busy=flow.busy,
        selected_id=flow.selected_id,
        draft=EmployeeFields.from_draft(flow.draft),
        options=[SelectOptionResponse(id=o.id, name=o.name) for o in flow.options],
        notifications=[
            NotificationResponse(**n.to_dict()) for n in session.collector.drain()
        ],
        redirect_to=session.navigator.current,
        saved=saved,
    )


@router.post(
    "",
    response_model=FormSessionResponse,
    response_model_exclude_none=True,
    status_code=status.HTTP_201_CREATED,
)
async def open_form_session(
    sessions: Sessions,
    payload: FormSessionCreate | None = None,
) -> FormSessionResponse:
    """Open the edit screen and load the employee list."""
    employee_id = payload.employee_id if payload else None
    session = await sessions.open(employee_id)
    return _view(session)


@router.get(
    "/{session_id}",
    response_model=FormSessionResponse,
    response_model_exclude_none=True,
    responses={404: {"model": ErrorResponse}},
)
async def get_form_session(
    sessions: Sessions,
    session_id: str = Path(),
) -> FormSessionResponse:
    """Get the current draft, selector and pending notifications."""
    return _view(sessions.get(session_id))


@router.put(
    "/{session_id}/selection",
    response_model=FormSessionResponse,
    response_model_exclude_none=True,
    responses={404: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
)
async def select_employee(
    sessions: Sessions,
    payload: SelectionUpdate,
    session_id: str = Path(),
) -> FormSessionResponse:
    """Load another employee into the draft, discarding unsaved edits."""
    session = sessions.get(session_id)
    if not session.flow.select(payload.employee_id):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Employee {payload.employee_id} not in loaded list",
        )
    return _view(session)


@router.patch(
    "/{session_id}/draft",
    response_model=FormSessionResponse,
    response_model_exclude_none=True,
    responses={404: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
)
async def edit_draft(
    sessions: Sessions,
    changes: dict[str, Any] = Body(),
    session_id: str = Path(),
) -> FormSessionResponse:
    """Edit draft fields; keys are wire names such as ``hourlyWage``."""
    session = sessions.get(session_id)
    session.flow.change_many(changes)
    return _view(session)


@router.post(
    "/{session_id}/submit",
    response_model=FormSessionResponse,
    response_model_exclude_none=True,
    responses={404: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
)
async def submit_form(
    sessions: Sessions,
    session_id: str = Path(),
) -> FormSessionResponse:
    """Validate and save the draft over the selected employee.

    A saved form ends the screen visit, so the session is closed.
    """
    session = sessions.get(session_id)
    saved = await session.flow.submit()
    view = _view(session, saved=saved)
    if session.flow.state == FormState.DONE:
        sessions.close(session_id)
    return view


@router.delete(
    "/{session_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={404: {"model": ErrorResponse}},
)
async def close_form_session(
    sessions: Sessions,
    session_id: str = Path(),
) -> Response:
    """Leave the edit screen."""
    sessions.close(session_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
