from fastapi import APIRouter
from vacay.routers import auth, vacation_requests, admin

# Centralized API router hub
# Routers are aggregated here, and main.py only imports this single hub.
api_router = APIRouter()

api_router.include_router(auth.router, tags=["Authentication"])
api_router.include_router(vacation_requests.router, tags=["Vacation Requests"])
api_router.include_router(admin.router, tags=["Administration"])
