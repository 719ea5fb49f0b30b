"""Deterministic symbol normalization per market.

Raw symbols that normalize to the same code share one cache entry.
"""

from networth.domain.models import normalize_symbol

HK_CODE_WIDTH = 5

_CN_SUFFIXES = {
    ".SS": "sh",
    ".SH": "sh",
    ".SZ": "sz",
}


def normalize_cn_symbol(raw: str) -> str:
    """
    Return the exchange-qualified A-share code, e.g. "600519.SS" -> "sh600519".

    Without a suffix the exchange comes from the leading digit:
    6 -> Shanghai, 0 or 3 -> Shenzhen, anything else defaults to Shanghai.
    """
    symbol = normalize_symbol(raw)
    for suffix, prefix in _CN_SUFFIXES.items():
        if symbol.endswith(suffix):
            return prefix + symbol[: -len(suffix)]
    if symbol.startswith(("0", "3")):
        return "sz" + symbol
    return "sh" + symbol


def normalize_hk_symbol(raw: str) -> str:
    """Return the 5-digit HK code, e.g. "700.HK" -> "00700"."""
    symbol = normalize_symbol(raw)
    if symbol.endswith(".HK"):
        symbol = symbol[: -len(".HK")]
    return symbol.rjust(HK_CODE_WIDTH, "0")


def normalize_us_symbol(raw: str) -> str:
    return normalize_symbol(raw)
