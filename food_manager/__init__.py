"""
                Food Manager

Command-line client for a restaurant menu API: browse and filter food
items, add and edit items, order from today's menu and review the
transaction history.

Version: 1.0.0
License: MIT
"""

__version__ = "1.0.0"
