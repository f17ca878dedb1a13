"""
GS1-128 Element String Builder

Assembles the GS1 data string for a shipping label from its GTIN-14,
optional batch/lot and optional expiry date:

    AI (01) GTIN-14       fixed length, always first
    AI (17) Expiry date   YYMMDD, emitted only for ISO expiry values
    AI (10) Batch/Lot     variable length, always last

No FNC1 / GS (ASCII 29) separator is inserted. AI (10) is variable length,
so it must remain the final element of the string.
"""

from __future__ import annotations

import re
from typing import NamedTuple, Optional


AI_GTIN = "01"
AI_EXPIRY = "17"
AI_BATCH_LOT = "10"

_ISO_DATE = re.compile(r'^(\d{4})-(\d{2})-(\d{2})$', re.ASCII)


class GS1Strings(NamedTuple):
    """Barcode payload and its human-readable interpretation."""
    value_for_encoding: str
    human_readable: str


def to_yymmdd(iso: Optional[str]) -> Optional[str]:
    """
    Convert an ISO YYYY-MM-DD date to the GS1 YYMMDD encoding.

    Any other shape (including YYYYMMDD and DD/MM/YYYY) returns None.

    Example: "2026-03-31" -> "260331"
    """
    if not iso:
        return None
    match = _ISO_DATE.fullmatch(iso)
    if not match:
        return None
    year, month, day = match.groups()
    return f"{year[2:]}{month}{day}"


def build_gs1_strings(
    gtin14: str,
    lot: Optional[str] = None,
    expiry: Optional[str] = None,
) -> GS1Strings:
    """
    Build the GS1-128 strings for a label.

    Args:
        gtin14: 14 digit GTIN
        lot: Optional batch/lot (AI 10)
        expiry: Optional ISO expiry date (AI 17)

    Returns:
        GS1Strings(value_for_encoding, human_readable)

    Example:
        >>> build_gs1_strings("27898971826272", lot="L2409-A", expiry="2026-03-31")
        GS1Strings(value_for_encoding='01278989718262721726033110L2409-A', human_readable='(01)27898971826272(17)260331(10)L2409-A')
    """
    segments = [(AI_GTIN, gtin14)]

    yymmdd = to_yymmdd(expiry)
    if yymmdd:
        segments.append((AI_EXPIRY, yymmdd))

    if lot:
        segments.append((AI_BATCH_LOT, lot))

    encoded = ''.join(f"{ai}{data}" for ai, data in segments)
    readable = ''.join(f"({ai}){data}" for ai, data in segments)

    return GS1Strings(value_for_encoding=encoded, human_readable=readable)
