"""
WhatsApp webhook envelope schema.

Only the fields the authorizer checks are modeled. Entry ids, change
fields, message content, contacts and metadata are left to the
downstream handler and never validated here.
"""

from pydantic import BaseModel
from typing import List, Optional


class WebhookValue(BaseModel):
    messaging_product: Optional[str] = None


class WebhookChange(BaseModel):
    value: Optional[WebhookValue] = None


class WebhookEntry(BaseModel):
    changes: Optional[List[WebhookChange]] = None


class WebhookEnvelope(BaseModel):
    """
    Top-level webhook payload.

    Example:
        {"object": "whatsapp_business_account",
         "entry": [{"changes": [{"value": {"messaging_product": "whatsapp"}}]}]}

    Missing (or null) fields default to None so the validator can report
    which one is missing instead of a generic parse failure.
    """
    object: Optional[str] = None
    entry: Optional[List[WebhookEntry]] = None
