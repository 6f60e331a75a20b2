"""
Application layer package.

Contains the aggregation service that orchestrates provider ports.
This layer depends on domain ports, never on infrastructure.
"""
