class EcoCartError(Exception):
    """Base error; ``status_code`` is what the HTTP layer answers with."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class UpstreamUnavailable(EcoCartError):
    status_code = 503


class MalformedUpstreamRecord(EcoCartError):
    status_code = 502


class InvalidQuantity(EcoCartError):
    status_code = 400


class ProductNotFound(EcoCartError):
    status_code = 404


class OrderNotFound(EcoCartError):
    status_code = 404
