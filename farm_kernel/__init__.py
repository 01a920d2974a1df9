"""
Farm Kernel

Computational core of the farm administration backend:
- Role-based access with static rules and per-role dynamic overrides
- Double-entry ledger balances with accounting sign conventions
- Structured JSON logging and typed errors shared by every layer
"""

__version__ = "0.1.0"
