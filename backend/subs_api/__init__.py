"""
Subscriptions API
REST service recording users' recurring online subscriptions.
"""
