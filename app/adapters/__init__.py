"""Platform and catalog adapters."""

from app.adapters.base import BasePlatformAdapter
from app.adapters.whatsapp import WhatsAppAdapter

__all__ = ["BasePlatformAdapter", "WhatsAppAdapter"]
