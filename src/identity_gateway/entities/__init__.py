"""Entities organised by business concept.

Each entity has its own package containing its table and repository.
"""

from .core.contact import ContactRepository, ContactTable

__all__ = ["ContactRepository", "ContactTable"]
