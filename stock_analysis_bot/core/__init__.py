"""
Core domain types for the stock analysis bot.
"""
