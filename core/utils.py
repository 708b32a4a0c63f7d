import logging

logger = logging.getLogger(__name__)


def format_count(n: int) -> str:
    """Compact display form of a count: 950 -> "950", 1234 -> "1.2k", 3400000 -> "3.4M".

    Trailing ".0" is dropped ("2k", not "2.0k").
    """
    if n >= 1_000_000:
        return f"{_trim(n / 1_000_000)}M"
    if n >= 1_000:
        return f"{_trim(n / 1_000)}k"
    return str(n)


def _trim(value: float) -> str:
    text = f"{value:.1f}"
    return text[:-2] if text.endswith(".0") else text
