"""
Code segmentation
Splits one scanner burst into product codes when a scanner fires several
labels back to back with only the shared prefix between them
"""
import re
from typing import List

DEFAULT_MARKER = "FZ-"


def segment_codes(raw: str, marker: str = DEFAULT_MARKER, min_length: int = 3) -> List[str]:
    """
    Split a raw scanned string into product codes

    "FZ-AAA-FZ-BBB" -> ["FZ-AAA", "FZ-BBB"]
    "XYZ123"        -> ["XYZ123"]

    Args:
        raw: scanned string
        marker: product-code prefix used as split point
        min_length: shortest piece kept

    Returns:
        Ordered codes to resolve one by one
    """
    trimmed = raw.strip()
    if not trimmed:
        return []

    if marker and marker in trimmed:
        pieces = re.split(f"(?={re.escape(marker)})", trimmed)
        codes: List[str] = []
        for piece in pieces:
            # Concatenated labels leave the joining hyphen on the previous piece
            code = piece.strip().rstrip("-").strip()
            if len(code) >= min_length and code not in codes:
                codes.append(code)
        if len(codes) > 1:
            return codes

    return [trimmed]
