"""
Domain layer package.

Contains entities, provider port interfaces and domain errors.
This layer has ZERO external dependencies.
No framework imports, no IO, no side effects.
"""
