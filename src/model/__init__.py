"""Model classes for civic-console."""

from model.schema import (
    AUTO_TODAY,
    Actions,
    FileField,
    FormField,
    ModalMode,
    Record,
    ResourceSchema,
)
from model.list_state import ListState
from model.modal_state import (
    FileRef,
    InvalidTransition,
    ModalPhase,
    ModalState,
    ReadOnlyField,
    RecoverySnapshot,
)

# Re-export resources module for easy access
from model import resources

__all__ = [
    "AUTO_TODAY",
    "Actions",
    "FileField",
    "FormField",
    "ModalMode",
    "Record",
    "ResourceSchema",
    "ListState",
    "FileRef",
    "InvalidTransition",
    "ModalPhase",
    "ModalState",
    "ReadOnlyField",
    "RecoverySnapshot",
    "resources",
]
