"""
Infrastructure adapters for the portfolio bounded context.

Each adapter implements a domain port and reads the shared
SQL store the internal portfolio engines write to.
"""
