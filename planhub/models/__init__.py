"""Persisted record models for the JSON document."""

from planhub.models.approval import APPROVAL_STATUSES, Approval, ApprovalStatus, ApprovalType
from planhub.models.base import Record
from planhub.models.document import Document
from planhub.models.user import Purchase, Role, User, normalize_email

__all__ = [
    "APPROVAL_STATUSES",
    "Approval",
    "ApprovalStatus",
    "ApprovalType",
    "Document",
    "Purchase",
    "Record",
    "Role",
    "User",
    "normalize_email",
]
