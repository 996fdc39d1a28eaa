"""Dependency container wiring for the application."""

from collections.abc import Callable
from dataclasses import dataclass

from supabase import Client, ClientOptions, create_client

from healthy_track.adapters.local_record_store import LocalRecordStore
from healthy_track.adapters.supabase_auth_client import SupabaseAuthClient
from healthy_track.adapters.supabase_record_store import SupabaseRecordStore
from healthy_track.config import Settings
from healthy_track.services.auth import SessionGate
from healthy_track.services.forms import FormStateManager
from healthy_track.services.records import RecordCollectionManager
from healthy_track.services.store import RecordStore


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    supabase_client: Client
    record_store: RecordStore
    form_manager: FormStateManager
    record_manager: RecordCollectionManager
    session_gate: SessionGate
    close_resources: Callable[[], None]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url,
        resolved_settings.supabase_anon_key,
        options=ClientOptions(
            postgrest_client_timeout=resolved_settings.store_timeout_seconds
        ),
    )
    record_store: RecordStore
    if resolved_settings.record_store == "local":
        record_store = LocalRecordStore(
            path=resolved_settings.local_store_path,
            key=resolved_settings.local_store_key,
        )
    else:
        record_store = SupabaseRecordStore(supabase_client)
    form_manager = FormStateManager()
    record_manager = RecordCollectionManager(store=record_store, form=form_manager)
    session_gate = SessionGate(SupabaseAuthClient(supabase_client))
    subscription = session_gate.subscribe(record_manager.handle_session_change)

    def close_resources() -> None:
        subscription.unsubscribe()
        session_gate.stop()

    return AppContainer(
        settings=resolved_settings,
        supabase_client=supabase_client,
        record_store=record_store,
        form_manager=form_manager,
        record_manager=record_manager,
        session_gate=session_gate,
        close_resources=close_resources,
    )
