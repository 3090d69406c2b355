"""HTML pages.

GET /        - greeting plus visit count
GET /init-db - recreate the greeting table and reset the visit count

Ordering on GET /: the counter is incremented first, then the greeting is
read. A failed read still leaves the increment in place, so the count is
at-least-once relative to successfully rendered pages. A failed increment
means the database is never queried for that request.

Store failures propagate as StoreError and become a generic 500 in the app's
exception handler.
"""

from html import escape

from fastapi import APIRouter
from fastapi.responses import HTMLResponse

from greeter.dependencies import StoreHandlesDep
from greeter.services.greetings import fetch_greeting, reset_greetings
from greeter.stores.redis import incr_visits, reset_visits

router = APIRouter()


@router.get("/", response_class=HTMLResponse)
async def greeting_view(handles: StoreHandlesDep) -> HTMLResponse:
    """Render the greeting and the number of visits so far."""
    visits = await incr_visits(handles.redis)
    message = await fetch_greeting(handles.engine)

    return HTMLResponse(
        f"<h1>{escape(message)}</h1>"
        f"<p>This page has been visited <strong>{visits}</strong> times.</p>"
    )


@router.get("/init-db", response_class=HTMLResponse)
async def reset_state(handles: StoreHandlesDep) -> HTMLResponse:
    """Recreate and seed the greeting table, then zero the visit counter.

    A database failure skips the counter reset. A Redis failure does not undo
    the database reset.
    """
    await reset_greetings(handles.engine)
    await reset_visits(handles.redis)

    return HTMLResponse(
        "<p>Table 'greetings' recreated and seeded, visit counter reset to 0. "
        "Go back to <a href='/'>/</a>.</p>"
    )
