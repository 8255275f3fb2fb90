from sqlmodel import Session, select

from src.identity_gateway.core.models.identity import InternalRecord
from src.identity_gateway.entities.core.contact.table import ContactTable


class ContactRepository:
    """Data-access layer for internal contacts."""

    def __init__(self, session: Session) -> None:
        self._session = session

    def lookup_by_external_union_id(self, external_union_id: str) -> InternalRecord | None:
        """Exact, case-sensitive match on the join key."""
        statement = select(ContactTable).where(
            ContactTable.external_union_id == external_union_id
        )
        row = self._session.exec(statement).first()
        if row is None:
            return None
        return InternalRecord.model_validate(row, from_attributes=True)

    def create(self, row: ContactTable) -> InternalRecord:
        self._session.add(row)
        self._session.flush()
        self._session.refresh(row)
        return InternalRecord.model_validate(row, from_attributes=True)
