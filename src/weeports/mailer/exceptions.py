"""Custom exceptions for mail delivery."""


class DeliveryError(Exception):
    """The report could not be handed to the SMTP server."""
