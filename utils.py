"""
Common utility functions
"""
import sys
import time
from datetime import datetime
from pathlib import Path


def get_timestamp() -> str:
    """Current timestamp string"""
    return datetime.now().strftime("%Y-%m-%d %H:%M:%S")


def now_ms() -> float:
    """Monotonic clock in milliseconds"""
    return time.monotonic() * 1000


def get_base_path() -> Path:
    """Directory of the executable (PyInstaller compatible)"""
    if getattr(sys, 'frozen', False):
        # Built with PyInstaller
        return Path(sys.executable).parent
    else:
        # Development checkout
        return Path(__file__).parent


def sanitize_barcode(barcode: str) -> str:
    """Clean up a scanned string"""
    # Strip surrounding whitespace and stray line breaks from the scanner
    return barcode.strip().replace('\r', '').replace('\n', '')


def truncate_code(code: str, length: int = 15) -> str:
    """Shorten a code for display in a notification"""
    return f"{code[:length]}..."


def format_price(amount: float) -> str:
    """Rupiah formatting without decimals, e.g. Rp 150.000"""
    return "Rp " + f"{int(round(amount)):,}".replace(",", ".")
