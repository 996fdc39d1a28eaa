"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException, Request, status

from healthy_track.api.models import Credentials, FieldUpdate
from healthy_track.app_logging import configure_logging
from healthy_track.containers import AppContainer
from healthy_track.domain.charts import ChartData, TableRow
from healthy_track.domain.errors import (
    AuthError,
    HealthTrackError,
    NotFound,
    StoreUnavailable,
    StoreWriteError,
    SubmissionInProgress,
    ValidationError,
)
from healthy_track.domain.forms import FormState
from healthy_track.domain.records import HealthRecord
from healthy_track.services.charts import project_chart, table_rows

_STATUS_CODES: tuple[tuple[type[HealthTrackError], int], ...] = (
    (ValidationError, 422),
    (AuthError, status.HTTP_401_UNAUTHORIZED),
    (SubmissionInProgress, status.HTTP_409_CONFLICT),
    (NotFound, status.HTTP_404_NOT_FOUND),
    (StoreWriteError, status.HTTP_502_BAD_GATEWAY),
    (StoreUnavailable, status.HTTP_503_SERVICE_UNAVAILABLE),
)


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        try:
            app.state.container.session_gate.start()
        except AuthError:
            logger.exception("Failed to restore the previous session")
        yield
        app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.get("/session")
    def current_session(request: Request) -> dict[str, object]:
        """Return the signed-in identity, if any."""
        session = _container(request).session_gate.current_session()
        if session is None:
            return {"session": None}
        return {"session": {"user_id": session.user_id, "email": session.email}}

    @app.post("/auth/sign-in")
    def sign_in(credentials: Credentials, request: Request) -> dict[str, object]:
        """Sign in and load the user's records."""
        state_container = _container(request)
        try:
            session = state_container.session_gate.sign_in(
                credentials.email, credentials.password
            )
        except AuthError as exc:
            raise _http_error(exc) from exc
        return {"user_id": session.user_id, "email": session.email}

    @app.post("/auth/sign-up")
    def sign_up(credentials: Credentials, request: Request) -> dict[str, object]:
        """Create an account and sign in with it."""
        state_container = _container(request)
        try:
            session = state_container.session_gate.sign_up(
                credentials.email, credentials.password
            )
        except AuthError as exc:
            raise _http_error(exc) from exc
        return {"user_id": session.user_id, "email": session.email}

    @app.post("/auth/sign-out")
    def sign_out(request: Request) -> dict[str, str]:
        """Sign out and drop the in-memory records."""
        try:
            _container(request).session_gate.sign_out()
        except AuthError as exc:
            raise _http_error(exc) from exc
        return {"status": "ok"}

    @app.get("/records")
    def list_records(request: Request) -> dict[str, object]:
        """Return the current collection and any load warning."""
        manager = _require_signed_in(request).record_manager
        return {"records": manager.records, "warning": manager.warning}

    @app.post("/records/reload")
    def reload_records(request: Request) -> dict[str, object]:
        """Re-read the collection from the store."""
        manager = _require_signed_in(request).record_manager
        return {"records": manager.load(), "warning": manager.warning}

    @app.get("/records/table")
    def records_table(request: Request) -> dict[str, list[TableRow]]:
        """Return the records formatted for the table view."""
        manager = _require_signed_in(request).record_manager
        return {"rows": table_rows(manager.records)}

    @app.get("/chart")
    def chart(request: Request) -> ChartData:
        """Return the per-metric chart dataset."""
        manager = _require_signed_in(request).record_manager
        return project_chart(manager.records)

    @app.post("/records")
    def submit_record(request: Request) -> HealthRecord:
        """Save the current form as a new record or as an edit."""
        state_container = _require_signed_in(request)
        try:
            return state_container.record_manager.submit()
        except HealthTrackError as exc:
            raise _http_error(exc) from exc

    @app.post("/records/{record_id}/edit")
    def edit_record(record_id: str, request: Request) -> FormState:
        """Load a record into the form for editing."""
        state_container = _require_signed_in(request)
        state_container.record_manager.edit(record_id)
        return state_container.form_manager.state

    @app.delete("/records/{record_id}")
    def delete_record(record_id: str, request: Request) -> dict[str, str]:
        """Delete a record."""
        state_container = _require_signed_in(request)
        try:
            state_container.record_manager.remove(record_id)
        except HealthTrackError as exc:
            raise _http_error(exc) from exc
        return {"status": "ok"}

    @app.get("/form")
    def get_form(request: Request) -> FormState:
        """Return the current draft."""
        return _require_signed_in(request).form_manager.state

    @app.patch("/form")
    def update_form(update: FieldUpdate, request: Request) -> FormState:
        """Change one field of the draft."""
        form_manager = _require_signed_in(request).form_manager
        try:
            return form_manager.set_field(update.name, update.value)
        except ValidationError as exc:
            raise _http_error(exc) from exc

    @app.post("/form/reset")
    def reset_form(request: Request) -> FormState:
        """Discard the draft and stop editing."""
        return _require_signed_in(request).form_manager.reset()

    return app


def _container(request: Request) -> AppContainer:
    return request.app.state.container


def _require_signed_in(request: Request) -> AppContainer:
    """Return the container, rejecting requests without a session."""
    state_container = _container(request)
    if state_container.session_gate.current_session() is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail={"message": "Please sign in first."},
        )
    return state_container


def _http_error(exc: HealthTrackError) -> HTTPException:
    """Translate an application error into a user-visible response."""
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    for error_type, code in _STATUS_CODES:
        if isinstance(exc, error_type):
            status_code = code
            break
    detail: dict[str, object] = {"message": str(exc)}
    if isinstance(exc, ValidationError):
        detail["fields"] = list(exc.fields)
    if isinstance(exc, AuthError) and exc.stage:
        detail["stage"] = exc.stage
    return HTTPException(status_code=status_code, detail=detail)
