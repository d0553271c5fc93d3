"""
Services Module
Business logic layer for the application.

Services validate input, run the database operations and keep the
endpoints thin.
"""
