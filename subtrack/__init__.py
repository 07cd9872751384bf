"""
Subscription Tracker - Source Package

Tracks recurring subscriptions for a single user: when each one is
next charged, and what they cost together per month and per year.

DESIGN PRINCIPLES:
1. The in-memory collection is the source of truth
2. Fail early, fail visibly (no silent corrections of user input)
3. Every change is auditable
4. Storage layer is swappable
"""

__version__ = "1.0.0"
__author__ = "Subscription Tracker Team"
