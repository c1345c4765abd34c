"""
Rating engine version.

Bump when quoting logic or reference data handling changes.
"""

VERSION = "2026.10.1"
