"""
Service-level exceptions, converted to HTTP responses at the router boundary
"""


class BillingError(Exception):
    """The payment processor rejected or failed a request."""


class WebhookVerificationError(Exception):
    """A webhook payload could not be authenticated or parsed."""
