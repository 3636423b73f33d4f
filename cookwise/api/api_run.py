from pathlib import Path
from typing import Optional
import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from cookwise.api.routes import pantry, planner, recipes, shopping
from cookwise.domain.errors import InputViolation, NotFound, StoreError, UnitMismatch
from cookwise.events.web_observers import start as start_event_observers
from cookwise.infra.paths import STORE_FILE
from cookwise.infra.store import JsonStore

# Logging
logger = logging.getLogger("cookwise_app")


def create_app(data_dir: Optional[str] = None) -> FastAPI:
    """Build the API around one JSON store; ``data_dir`` overrides the configured data folder."""
    app = FastAPI(title="CookWise Kitchen API")
    store_path = Path(data_dir) / 'kitchen.json' if data_dir else STORE_FILE
    app.state.store = JsonStore(store_path)

    app.include_router(recipes.router)
    app.include_router(pantry.router)
    app.include_router(planner.router)
    app.include_router(shopping.router)

    @app.exception_handler(InputViolation)
    def _input_violation(request: Request, exc: InputViolation):
        logger.warning("Rejected input on %s: %s", request.url.path, exc)
        return JSONResponse(status_code=400, content={"error": str(exc)})

    @app.exception_handler(UnitMismatch)
    def _unit_mismatch(request: Request, exc: UnitMismatch):
        logger.warning("Unit mismatch on %s: %s", request.url.path, exc)
        return JSONResponse(status_code=409, content={"error": exc.to_dict()})

    @app.exception_handler(NotFound)
    def _not_found(request: Request, exc: NotFound):
        return JSONResponse(status_code=404, content={"error": str(exc)})

    @app.exception_handler(StoreError)
    def _store_error(request: Request, exc: StoreError):
        logger.error("Store failure on %s: %s", request.url.path, exc)
        return JSONResponse(status_code=500, content={"error": "Kitchen data could not be read or written"})

    start_event_observers()
    logger.info("CookWise API ready (store=%s)", store_path)
    return app


app = create_app()
