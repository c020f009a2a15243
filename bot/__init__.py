"""
Discord utility bot: gateway client, configuration and health server.
"""

__version__ = "1.0.0"
