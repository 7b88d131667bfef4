# backend/modules/payroll/__init__.py

"""
Payroll Module - monthly salon payroll engine.

- Hourly base pay from booked service time
- Tiered service commission and product commission
- Individual, retention, team and skill bonuses
- Idempotent monthly records with a calculated -> approved -> paid lifecycle
"""

__version__ = "1.0.0"
