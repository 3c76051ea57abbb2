"""
Nova Spend - Source Package

The data layer of a local-first personal expense tracker.
Track smarter. Spend better.

DESIGN PRINCIPLES:
1. Every piece of state lives in the key-value store
2. Services never cache - readers always go back to the store
3. Missing or damaged records fall back to documented defaults
4. Every state change that other views care about is broadcast
5. Storage backend is swappable
"""

__version__ = "1.0.0"
__author__ = "Nova Spend Team"
