"""
POS Scan Station - entry point
=====================================

Counter sales screen for the shop:
1) a barcode/QR scanner (keyboard wedge) or the search field adds products
2) concatenated scans are split per product code, double reads ignored
3) cart quantities never exceed stock / pre-order quota
4) QRIS payments are confirmed automatically by polling the order

Usage:
    python main.py

Build:
    pyinstaller -F -w main.py
"""

import logging
import sys

from utils import get_base_path


def main():
    """Entry point"""
    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[
            logging.StreamHandler(),
            logging.FileHandler(get_base_path() / "pos_scan_station.log", encoding='utf-8'),
        ]
    )

    from pos_window import run_app
    return run_app()


if __name__ == "__main__":
    sys.exit(main())
