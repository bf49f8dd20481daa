from ecocart.errors import InvalidQuantity


def require_int_quantity(v, name: str = "quantity") -> int:
    if isinstance(v, bool) or not isinstance(v, int):
        raise InvalidQuantity(f"{name} must be an integer")
    return v


def require_positive_quantity(v, name: str = "quantity") -> int:
    v = require_int_quantity(v, name)
    if v <= 0:
        raise InvalidQuantity(f"{name} must be > 0")
    return v
