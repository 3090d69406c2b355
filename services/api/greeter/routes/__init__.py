"""HTTP routes."""

from fastapi import APIRouter

from greeter.routes import pages

api_router = APIRouter()

# Greeting page and reset
api_router.include_router(pages.router, tags=["pages"])
