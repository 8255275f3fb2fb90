"""Contact database table model."""

from sqlalchemy import Boolean, Column, String, true
from sqlmodel import Field

from src.identity_gateway.entities.core._base import EntityTable


class ContactTable(EntityTable, table=True):
    """Internal student or teacher record, keyed for lookup by the platform join key.

    ``external_union_id`` is unique so that a join key can match at most one
    record at any time.
    """

    __tablename__ = "contact"

    external_union_id: str = Field(
        sa_column=Column(String(64), nullable=False, unique=True, index=True)
    )
    display_name: str = Field(sa_column=Column(String(128), nullable=False))
    role: str = Field(sa_column=Column(String(32), nullable=False))
    external_number: str = Field(sa_column=Column(String(64), nullable=False))
    org_unit_name: str | None = Field(default=None, sa_column=Column(String(128)))
    major_name: str | None = Field(default=None, sa_column=Column(String(128)))
    class_name: str | None = Field(default=None, sa_column=Column(String(128)))
    is_active: bool = Field(
        default=True,
        sa_column=Column(Boolean, nullable=False, server_default=true()),
    )
