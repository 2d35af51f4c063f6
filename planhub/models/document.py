"""Top-level JSON document: the single persistence unit."""

from pydantic import Field

from planhub.models.approval import Approval
from planhub.models.base import Record
from planhub.models.user import User


class Document(Record):
    """users keyed by normalized email; approvals in creation order."""

    users: dict[str, User] = Field(default_factory=dict)
    approvals: list[Approval] = Field(default_factory=list)

    def get_user(self, email: str) -> User | None:
        return self.users.get(email.strip().lower())

    def get_approval(self, approval_id: str) -> Approval | None:
        for approval in self.approvals:
            if approval.id == approval_id:
                return approval
        return None
