"""Services - event-driven synchronization of locale variants."""

from localesync.services.base import Service
from localesync.services.context_cache import ContextCache
from localesync.services.reconciler import (
    Moved,
    NodeReconciler,
    ReconcileResult,
    Skipped,
)
from localesync.services.node_translation import (
    NodeTranslationService,
    SyncGuard,
    SyncOutcome,
)

__all__ = [
    "Service",
    "ContextCache",
    "Moved",
    "NodeReconciler",
    "ReconcileResult",
    "Skipped",
    "NodeTranslationService",
    "SyncGuard",
    "SyncOutcome",
]
