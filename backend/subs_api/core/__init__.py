"""
Core Module
Configuration, domain exceptions, month handling and shared constants.
"""
