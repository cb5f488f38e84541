"""
Banking UI suites.

The package stays importable so that:
  - page objects and the ledger reconciler can be reused outside pytest
  - IDE navigation and CI imports work

Nothing here talks to a browser at import time.
"""

__version__ = "1.0.0"
