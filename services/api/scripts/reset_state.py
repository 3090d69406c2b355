#!/usr/bin/env python3
"""Reset the greeting table and the visit counter without the web server.

Runs the same startup bootstrap as the API (Postgres with retry, then Redis
once), then the same reset as GET /init-db. Handy as a container init step.

Exit codes:
    0 - reset done
    1 - a store failed its bootstrap check
    2 - a store failed during the reset

Usage:
    cd services/api
    python -m scripts.reset_state
"""

import asyncio
import logging
import os
import sys

# Add parent to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from dotenv import load_dotenv

from greeter.services.bootstrap import BootstrapFailure, bootstrap
from greeter.services.greetings import reset_greetings
from greeter.settings import Settings
from greeter.stores import StoreError
from greeter.stores.redis import reset_visits

load_dotenv()

logger = logging.getLogger("uvicorn.error")


async def main() -> int:
    settings = Settings()
    result = await bootstrap(settings)
    if isinstance(result, BootstrapFailure):
        logger.critical(f"{result.store} unavailable kind={result.kind} attempts={result.attempts}")
        return 1

    try:
        await reset_greetings(result.engine)
        await reset_visits(result.redis)
    except StoreError as e:
        logger.error(f"Reset failed: {e.store} kind={e.kind}")
        return 2
    finally:
        await result.aclose()

    print("Greeting table seeded, visit counter reset to 0.")
    return 0


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(message)s")
    sys.exit(asyncio.run(main()))
