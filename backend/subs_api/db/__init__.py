"""
Database Module
Declarative base and the Database handle owning the connection pool.
"""
