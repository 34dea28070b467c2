"""Adapter layer errors."""


class AdapterError(Exception):
    """Base adapter error."""

    pass


class NotificationDeliveryError(AdapterError):
    """A notification could not be delivered downstream."""

    pass
