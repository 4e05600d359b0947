# grocery/domain/errors.py


class NotFoundError(LookupError):
    """Zasob nie istnieje albo nalezy do innego uzytkownika."""


class AuthenticationError(Exception):
    pass


class ConflictError(Exception):
    pass


class PaymentGatewayError(Exception):
    """Blad po stronie bramki platniczej."""


class PaymentSignatureError(ValueError):
    """Niepoprawny podpis webhooka."""
