"""
Application layer for the portfolio bounded context.

Orchestrates provider ports into API results. No framework
or infrastructure imports allowed.
"""
