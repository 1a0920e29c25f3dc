from decimal import Decimal, InvalidOperation

from rest_framework.response import Response


def respond(payload: dict, message: str, http_status: int = 200):
    """
    Uniform response envelope for the workflow endpoints.
    The frontend shows `message` to the user and renders `data`.
    """
    return Response({"message": message, "data": payload}, status=http_status)


def to_decimal(value):
    """Parse user input ("2,5", 3, "4") into a Decimal; None when it is not a number."""
    if value is None or isinstance(value, bool):
        return None
    try:
        d = value if isinstance(value, Decimal) else Decimal(str(value).strip().replace(",", "."))
    except (InvalidOperation, ValueError):
        return None
    return d if d.is_finite() else None


def format_quantity(value) -> str:
    d = to_decimal(value)
    if d is None:
        return str(value)
    if d == d.to_integral_value():
        return str(d.quantize(Decimal(1)))
    return f"{d.normalize():f}"
