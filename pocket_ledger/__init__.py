"""
Pocket Ledger - Source Package

A personal finance ledger for individuals tracking personal or
small-business cash flow from a terminal.

DESIGN PRINCIPLES:
1. The flat file is the only source of truth
2. Append only, never rewrite a recorded entry
3. Bad lines and bad filters are reported, never fatal
4. The menu shell holds no business logic
"""

__version__ = "1.0.0"
__author__ = "Pocket Ledger Team"
