"""
CoinPulse: real-time crypto quotes, moving-average signals and
prediction accuracy tracking.

Application package root. The service is a small modular monolith
laid out as ports & adapters.

Bounded contexts:
    - market: Quote cache, moving-average signals, prediction ledger,
      portfolio valuation and live broadcast.

Layers:
    - domain: Pure business logic, entities, ports (ABCs), errors.
    - application: Use cases, DTOs, orchestration.
    - infrastructure: Adapters (CoinGecko, in-memory ledger) implementing domain ports.
    - interfaces: FastAPI routers, Pydantic schemas, WebSocket endpoint.
    - realtime: Per-subscriber broadcast loop and its scheduler.
    - shared: Cross-cutting concerns (errors, security, logging).
"""
