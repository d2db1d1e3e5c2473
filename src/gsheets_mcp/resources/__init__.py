"""URI-addressed, read-only views of spreadsheet state."""

from .registry import Resource, ResourceRegistry
from .sheets import SheetsResources

__all__ = ["Resource", "ResourceRegistry", "SheetsResources"]
