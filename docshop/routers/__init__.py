"""
FastAPI routers grouped by domain (auth, catalog, orders, notifications, admin).

Each file inside this package exposes an APIRouter included by docshop.app.
Routers resolve services from app.state and let ServiceError propagate to the
application-level handler.
"""
