"""
Shared error handling package.

Centralizes error-to-response mapping so that every failure
reaches the client as a JSON body with an ``error`` key.
"""
