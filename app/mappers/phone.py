import re

_NON_DIGIT_RE = re.compile(r"\D")


def digits_only(phone: str | None) -> str:
    return _NON_DIGIT_RE.sub("", phone or "")


def normalize_phone(phone: str | None) -> str | None:
    """Canonicalize a phone number to ``+<country><number>``.

    Every non-digit is dropped. A bare 10-digit number is assumed to be
    North American and gets a leading ``1``. No other length checks are
    made, so 7- or 15-digit input is passed through with just a ``+``.

    "(415) 555-0100" → "+14155550100"
    "+1 415 555 0100" → "+14155550100"
    "" → None
    """
    digits = digits_only(phone)
    if not digits:
        return None
    if len(digits) == 10:
        digits = "1" + digits
    return f"+{digits}"
