"""Controller layer: mediates between the UI widgets and the gateway/model.

This package contains:
- list_controller: ResourceListController (fetch, filter, paginate, render)
- modal_controller: ResourceModalController (populate, confirm, submit, recover)
- messages: typed messages exchanged between lists and modals
- pacing / modal_stack: scheduling latencies and the modal lock
- routing: app-level mixin that delivers messages (import it directly;
  it depends on ui)
"""

from controller.list_controller import ListView, PageInfo, ResourceListController
from controller.messages import (
    NavigateTo,
    RecordDeleted,
    RecordSaved,
    RecordUpdated,
    RefreshTable,
)
from controller.modal_controller import (
    ConfirmationGate,
    ModalView,
    Preview,
    PreviewCache,
    ResourceModalController,
    TransientOverlay,
)
from controller.modal_stack import ModalStack
from controller.pacing import Debouncer, Pacing
from controller.validators import ValidationError

__all__ = [
    # List
    "ListView",
    "PageInfo",
    "ResourceListController",
    # Modal
    "ConfirmationGate",
    "ModalView",
    "Preview",
    "PreviewCache",
    "ResourceModalController",
    "TransientOverlay",
    # Messages
    "NavigateTo",
    "RecordDeleted",
    "RecordSaved",
    "RecordUpdated",
    "RefreshTable",
    # Scheduling
    "Debouncer",
    "ModalStack",
    "Pacing",
    "ValidationError",
]
