"""
Folio Gateway: read-only external API over portfolio domain services.

Application package root. This is a small service using
hexagonal architecture (ports & adapters).

Bounded contexts:
    - portfolio: Accounts, holdings, FX rates, market data,
      performance and activities, re-projected as stable JSON.

Layers:
    - domain: Entities, provider ports (ABCs), errors.
    - application: Aggregation service, collection policy, DTOs.
    - infrastructure: SQL adapters implementing provider ports.
    - interfaces: FastAPI routers, Pydantic schemas, JSON projection.
    - shared: Cross-cutting concerns (errors, headers, logging).
"""
