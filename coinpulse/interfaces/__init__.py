"""
Interfaces layer package.

Contains FastAPI routers, Pydantic request/response schemas,
and the WebSocket push endpoint. No business logic belongs here.
Routes call use cases and return responses.
"""
