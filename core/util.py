from datetime import date
from decimal import Decimal, ROUND_HALF_UP


def current_season():
    today = date.today()
    return today.year


def round_half_up(value, decimals=2):
    """
    Round a Decimal (or anything Decimal accepts) half up to ``decimals`` places.
    """
    if value is None:
        return None
    if not isinstance(value, Decimal):
        value = Decimal(str(value))
    exponent = Decimal(1).scaleb(-decimals)
    return value.quantize(exponent, rounding=ROUND_HALF_UP)
