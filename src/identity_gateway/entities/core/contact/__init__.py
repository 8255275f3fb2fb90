"""Contact entity module.

- ContactTable: Database persistence model
- ContactRepository: Data access layer implementing the identity lookup contract
"""

from .repository import ContactRepository
from .table import ContactTable

__all__ = ["ContactTable", "ContactRepository"]
