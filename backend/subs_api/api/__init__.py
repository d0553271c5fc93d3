"""
API Module
Versioned HTTP endpoints.
"""
