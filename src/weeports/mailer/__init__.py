"""Mailer - SMTP delivery of the rendered report."""

from weeports.mailer.exceptions import DeliveryError
from weeports.mailer.mailer import Mailer, subject_for

__all__ = [
    "DeliveryError",
    "Mailer",
    "subject_for",
]
