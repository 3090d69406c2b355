"""Request dependencies.

Store handles are published on app.state by the lifespan once bootstrap
succeeded; handlers receive them through get_store_handles.
"""

from typing import Annotated

from fastapi import Depends, Request

from greeter.stores import StoreHandles


def get_store_handles(request: Request) -> StoreHandles:
    """Dependency injection for StoreHandles from app.state.

    Raises:
        RuntimeError: If bootstrap has not published handles.
    """
    handles = getattr(request.app.state, "store_handles", None)
    if handles is None:
        raise RuntimeError("Store handles not initialized. Check lifespan setup.")
    return handles


StoreHandlesDep = Annotated[StoreHandles, Depends(get_store_handles)]
