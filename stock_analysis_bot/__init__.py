"""
WhatsApp stock analysis assistant.
"""

__version__ = "2.0.0"
