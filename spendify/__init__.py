"""
Spendify - Source Package

A single-user personal expense tracker: add, edit, delete, filter and
search expenses, watch monthly category totals against budgets, and
export everything as CSV.

DESIGN PRINCIPLES:
1. One explicit state container, updated through actions only
2. Every mutation persists the whole affected collection
3. Bad input or bad stored data never crashes the UI
4. Storage and notification backends are swappable
"""

__version__ = "1.0.0"
__author__ = "Spendify Team"
