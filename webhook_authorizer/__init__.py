"""
Webhook request authorizer.

Verifies the X-Hub-Signature-256 HMAC and the envelope shape of incoming
WhatsApp webhooks and returns an Allow/Deny decision for the front door.
"""

__version__ = "1.0.0"
