# main.py
"""
Appels unitaires à l'API Kraken.

Usage:
  python main.py balance [--asset USDC]
  python main.py addOrder sell USDCUSD 100.00 --validate
  python main.py withdraw USD <key> 50.0000
  python main.py withdrawMethods --asset USD
  python main.py serverTime | systemStatus
  (flag global --debug)
"""

import logging
import sys

from krakenbot.api.cli_parser import dispatch

logging.basicConfig(level=logging.WARNING, format="%(asctime)s [%(levelname)s] %(message)s")


if __name__ == "__main__":
    sys.exit(dispatch())
