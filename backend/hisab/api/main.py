import logging

from fastapi import FastAPI

from hisab.api.deps import get_tx_store
from hisab.settings import get_settings

from hisab.api.routes.health import router as health_router
from hisab.api.routes.transactions import router as transactions_router
from hisab.api.routes.summary import router as summary_router
from hisab.api.routes.export_csv import router as export_router
from hisab.api.routes.dates import router as dates_router


logger = logging.getLogger(__name__)

app = FastAPI(title="HISAB API", version="0.1.0")

@app.on_event("startup")
def _startup_load_transactions() -> None:
    logging.basicConfig(
        level=get_settings().log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    # lecture unique du stockage au démarrage
    store = get_tx_store()
    if store.load_error:
        logger.warning("Stored transactions could not be loaded: %s", store.load_error)

app.include_router(health_router)
app.include_router(transactions_router)
app.include_router(summary_router)
app.include_router(export_router)
app.include_router(dates_router)
