"""
Связь входящего документа (PO change / EDI 860) с заказом продажи.

Ищем заказы клиента по номеру PO (externalid или otherrefnum),
выбираем первый совпавший и записываем его id в поле документа.
"""
import logging
from typing import Any

from edichecks.config import settings
from edichecks.models.database import get_supabase_client
from edichecks.models.schemas import Candidate, MatchRequest, MatchResult
from edichecks.services.reference_matcher import ReferenceMatcher
from edichecks.utils.normalizers import coerce_key

logger = logging.getLogger(__name__)


def _quote(value: str) -> str:
    """Значение для PostgREST or=(...) фильтра."""
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


class RelatedOrderService:
    def __init__(self, db=None, matcher: ReferenceMatcher | None = None):
        self._db = db
        self.matcher = matcher or ReferenceMatcher()

    @property
    def db(self):
        if self._db is None:
            self._db = get_supabase_client()
        return self._db

    def build_request(self, document: dict[str, Any]) -> MatchRequest:
        return MatchRequest(
            target_key=coerce_key(document.get(settings.po_number_field)),
            owner_id=coerce_key(document.get(settings.customer_id_field)),
        )

    def fetch_candidates(self, request: MatchRequest) -> list[Candidate]:
        """Заказы клиента с совпадающим ключом. Ошибка выборки = пустой список."""
        key = _quote(request.target_key)
        columns = f"id, {settings.primary_key_field}, {settings.secondary_key_field}"
        try:
            response = self.db.table(settings.sales_order_table)\
                .select(columns)\
                .eq(settings.owner_field, request.owner_id)\
                .or_(f"{settings.primary_key_field}.eq.{key},{settings.secondary_key_field}.eq.{key}")\
                .range(0, settings.candidate_page_size - 1)\
                .execute()
        except Exception as e:
            logger.error(f"Sales order search failed for PO {request.target_key}: {e}")
            return []

        rows = response.data or []
        logger.debug(f"Found {len(rows)} sales order(s)")
        return [
            Candidate(
                id=str(row["id"]),
                primary_key=coerce_key(row.get(settings.primary_key_field)),
                secondary_key=coerce_key(row.get(settings.secondary_key_field)),
            )
            for row in rows
        ]

    def apply(self, document_id: str | None, result: MatchResult) -> bool:
        """Частичное обновление: трогаем только поле связанной транзакции."""
        if not result.matched:
            return False
        if document_id is None:
            logger.debug(f"Document has no id, sales order {result.candidate_id} not written")
            return False
        response = self.db.table(settings.document_table)\
            .update({settings.related_trxn_field: result.candidate_id})\
            .eq("id", document_id)\
            .execute()
        if not response.data:
            logger.warning(f"Document {document_id} not found, related transaction not set")
            return False
        logger.info(f"Related transaction set: sales order {result.candidate_id} on document {document_id}")
        return True

    def process(self, document: dict[str, Any]) -> MatchResult:
        document_id = document.get("id")
        logger.debug(f"Processing document: {document_id}")
        try:
            request = self.build_request(document)
            if not request.is_complete:
                logger.debug(
                    f"Skipping document {document_id}: "
                    f"PO number={request.target_key}, customer={request.owner_id}"
                )
                return MatchResult.skipped()

            candidates = self.fetch_candidates(request)
            result = self.matcher.match(request, candidates)
            if result.matched:
                self.apply(None if document_id is None else str(document_id), result)
            else:
                logger.info(
                    f"No matching sales order for PO {request.target_key} "
                    f"and customer {request.owner_id}. Field left blank."
                )
            return result
        except Exception:
            logger.exception(f"Failed to set related sales order on document {document_id}")
            return MatchResult.not_found()


def set_related_sales_order(document: dict[str, Any]) -> MatchResult:
    return RelatedOrderService().process(document)
