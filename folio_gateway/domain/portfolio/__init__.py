"""
Portfolio bounded context: domain layer.

Entities produced by the internal portfolio services, the ports
through which the gateway reads them, and the errors they raise.
"""
