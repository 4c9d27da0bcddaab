from fastapi import APIRouter

from hisab.api.deps import get_tx_store

router = APIRouter(tags=["health"])


@router.get("/health")
def health() -> dict:
    store = get_tx_store()
    return {"status": "ok", "transactions": len(store), "load_error": store.load_error}
