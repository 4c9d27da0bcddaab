from __future__ import annotations

import sys
from pathlib import Path

from hisab.api.deps import get_kv_store
from hisab.repositories.in_memory_key_value_store import InMemoryKeyValueStore
from hisab.repositories.transaction_store import TransactionStore
from hisab.settings import get_settings


def main(argv: list[str]) -> int:
    """
    Importe le contenu de la clé localStorage 'billing-transactions' de l'ancienne
    application web (copiée dans un fichier JSON) vers le stockage configuré.

    usage: python scripts/import_browser_storage.py export.json [--force]
    """
    args = [a for a in argv if a != "--force"]
    force = "--force" in argv
    if len(args) != 1:
        raise SystemExit("usage: import_browser_storage.py <export.json> [--force]")

    src_path = Path(args[0])
    if not src_path.exists():
        raise SystemExit(f"File not found: {src_path.resolve()}")

    settings = get_settings()

    # 1) validation complète avant toute écriture
    staging_kv = InMemoryKeyValueStore()
    staging_kv.set(settings.storage_key, src_path.read_text(encoding="utf-8-sig"))
    staging = TransactionStore(kv=staging_kv, key=settings.storage_key)
    if staging.load_error:
        raise SystemExit(f"Invalid export: {staging.load_error}")

    # 2) pas d'écrasement silencieux
    dst_kv = get_kv_store()
    if dst_kv.get(settings.storage_key) is not None and not force:
        raise SystemExit("Storage already holds transactions (use --force to overwrite).")

    dst_kv.set(settings.storage_key, staging_kv.get(settings.storage_key))
    dst = TransactionStore(kv=dst_kv, key=settings.storage_key)
    dst.save()  # normalise ids / montants / dates

    print({"imported": len(dst), "from": str(src_path), "key": settings.storage_key})
    return 0


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
