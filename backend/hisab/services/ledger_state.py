from __future__ import annotations

import datetime as dt
import logging
from uuid import UUID

from hisab.domain.errors import TransactionNotFound
from hisab.domain.transaction import Transaction
from hisab.engine.totals import Totals
from hisab.repositories.transaction_store import RECENT_LIMIT, TransactionStore
from hisab.services.csv_export_service import CsvExport, export_transactions
from hisab.services.form_validator import TransactionForm, from_transaction, to_draft, validate
from hisab.services.transaction_filter_service import (
    FilterCriteria,
    active_criteria_count,
    apply_filters,
)

logger = logging.getLogger(__name__)


class LedgerState:
    """
    État applicatif explicite : la collection (via le store), les filtres
    courants et la transaction en cours d'édition. Toutes les mutations
    passent par le store.
    """

    def __init__(self, store: TransactionStore) -> None:
        self.store = store
        self.filters = FilterCriteria()
        self.editing_id: UUID | None = None

    # ---------- formulaire ----------
    def submit(self, form: TransactionForm) -> dict[str, str]:
        """Retourne les erreurs par champ; vide => transaction ajoutée ou mise à jour."""
        errors = validate(form)
        if errors:
            logger.debug("Form rejected: %s", sorted(errors))
            return errors

        draft = to_draft(form)
        if self.editing_id is None:
            self.store.add(draft)
        else:
            self.store.update(self.editing_id, draft)
            self.editing_id = None
        return {}

    def start_edit(self, tx_id: UUID) -> TransactionForm:
        tx = self.store.get(tx_id)
        if tx is None:
            raise TransactionNotFound(tx_id)
        self.editing_id = tx_id
        return from_transaction(tx)

    def cancel_edit(self) -> None:
        self.editing_id = None

    def delete(self, tx_id: UUID) -> None:
        self.store.delete(tx_id)
        if self.editing_id == tx_id:
            self.editing_id = None

    # ---------- filtres ----------
    def set_filters(self, criteria: FilterCriteria) -> None:
        self.filters = criteria

    def reset_filters(self) -> None:
        self.filters = FilterCriteria()

    def filtered(self) -> list[Transaction]:
        return apply_filters(self.store.list(), self.filters)

    def active_filter_count(self) -> int:
        return active_criteria_count(self.filters)

    # ---------- lecture ----------
    def summary(self) -> Totals:
        return self.store.totals()

    def recent(self, limit: int = RECENT_LIMIT) -> list[Transaction]:
        return self.store.recent(limit)

    # ---------- export ----------
    def export_all(self, today: dt.date | None = None) -> CsvExport:
        return export_transactions(self.store.list(), today=today)

    def export_filtered(self, today: dt.date | None = None) -> CsvExport:
        return export_transactions(self.filtered(), filtered=True, today=today)
