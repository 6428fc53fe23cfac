"""
Ledger Package

The authoritative, append/edit/delete-able collection of transactions.
"""

from .ledger import Ledger

__all__ = ["Ledger"]
