"""
Тесты для edichecks/services/related_order.py
Supabase мокается через MagicMock, как цепочка вызовов запроса.
"""
from unittest.mock import MagicMock, patch

import pytest

from edichecks.config import settings
from edichecks.models.schemas import MatchRequest, MatchResult, MatchType
from edichecks.services.related_order import RelatedOrderService, set_related_sales_order


def _search_chain(db):
    return db.table.return_value.select.return_value.eq.return_value.or_.return_value.range.return_value


@pytest.fixture
def service(mock_db):
    return RelatedOrderService(db=mock_db)


class TestBuildRequest:
    def test_reads_configured_fields(self, service, po_change_document):
        request = service.build_request(po_change_document)
        assert request == MatchRequest(target_key="PO-200", owner_id="77")

    def test_numeric_customer_id(self, service):
        request = service.build_request({"custbody_sps_cx_ponumber": "PO-1", "custbody_po_change_customer_id": 77})
        assert request.owner_id == "77"

    def test_missing_fields(self, service):
        request = service.build_request({"id": "1", "custbody_sps_cx_ponumber": ""})
        assert request.is_complete is False


class TestFetchCandidates:
    def test_query_is_owner_scoped_and_bounded(self, service, mock_db):
        service.fetch_candidates(MatchRequest(target_key="PO-200", owner_id="77"))

        mock_db.table.assert_called_with(settings.sales_order_table)
        mock_db.table.return_value.select.assert_called_with("id, externalid, otherrefnum")
        mock_db.table.return_value.select.return_value.eq.assert_called_with("entity", "77")
        mock_db.table.return_value.select.return_value.eq.return_value.or_.assert_called_with(
            'externalid.eq."PO-200",otherrefnum.eq."PO-200"'
        )
        mock_db.table.return_value.select.return_value.eq.return_value.or_.return_value.range.assert_called_with(0, 999)

    def test_rows_become_candidates(self, service, mock_db):
        _search_chain(mock_db).execute.return_value = MagicMock(data=[
            {"id": 5, "externalid": "", "otherrefnum": "PO-200"},
            {"id": 6, "externalid": "PO-200", "otherrefnum": None},
        ])
        candidates = service.fetch_candidates(MatchRequest(target_key="PO-200", owner_id="77"))

        assert [c.id for c in candidates] == ["5", "6"]
        assert candidates[0].primary_key is None
        assert candidates[0].secondary_key == "PO-200"

    def test_fetch_failure_returns_empty(self, service, mock_db):
        _search_chain(mock_db).execute.side_effect = RuntimeError("connection refused")
        assert service.fetch_candidates(MatchRequest(target_key="PO-200", owner_id="77")) == []

    def test_quotes_special_characters(self, service, mock_db):
        service.fetch_candidates(MatchRequest(target_key='PO,1"x', owner_id="77"))
        mock_db.table.return_value.select.return_value.eq.return_value.or_.assert_called_with(
            'externalid.eq."PO,1\\"x",otherrefnum.eq."PO,1\\"x"'
        )


class TestApply:
    def test_partial_update(self, service, mock_db):
        result = MatchResult(candidate_id="102", match_type=MatchType.SECONDARY_KEY)
        assert service.apply("9001", result) is True

        mock_db.table.assert_called_with(settings.document_table)
        mock_db.table.return_value.update.assert_called_once_with(
            {"custbody_sps_cx_related_trxn": "102"}
        )
        mock_db.table.return_value.update.return_value.eq.assert_called_once_with("id", "9001")

    def test_no_write_without_match(self, service, mock_db):
        assert service.apply("9001", MatchResult.not_found()) is False
        mock_db.table.return_value.update.assert_not_called()

    def test_no_write_without_document_id(self, service, mock_db):
        result = MatchResult(candidate_id="102", match_type=MatchType.PRIMARY_KEY)
        assert service.apply(None, result) is False
        mock_db.table.return_value.update.assert_not_called()

    def test_missing_document_row(self, service, mock_db):
        mock_db.table.return_value.update.return_value.eq.return_value.execute.return_value = MagicMock(data=[])
        result = MatchResult(candidate_id="102", match_type=MatchType.PRIMARY_KEY)
        assert service.apply("9001", result) is False


class TestProcess:
    def test_links_first_matching_order(self, service, mock_db, po_change_document):
        _search_chain(mock_db).execute.return_value = MagicMock(data=[
            {"id": "501", "externalid": "OTHER", "otherrefnum": "PO-999"},
            {"id": "502", "externalid": "X", "otherrefnum": "PO-200"},
            {"id": "503", "externalid": "PO-200", "otherrefnum": None},
        ])
        result = service.process(po_change_document)

        assert result.candidate_id == "502"
        mock_db.table.return_value.update.assert_called_once_with(
            {"custbody_sps_cx_related_trxn": "502"}
        )

    def test_skips_without_po_number(self, service, mock_db, po_change_document):
        po_change_document["custbody_sps_cx_ponumber"] = None
        result = service.process(po_change_document)

        assert result.match_type == MatchType.SKIPPED
        mock_db.table.assert_not_called()

    def test_skips_without_customer(self, service, mock_db, po_change_document):
        del po_change_document["custbody_po_change_customer_id"]
        assert service.process(po_change_document).match_type == MatchType.SKIPPED
        mock_db.table.assert_not_called()

    def test_no_match_leaves_field_blank(self, service, mock_db, po_change_document):
        result = service.process(po_change_document)
        assert result.match_type == MatchType.NOT_FOUND
        mock_db.table.return_value.update.assert_not_called()

    def test_document_without_id_is_not_written(self, service, mock_db, po_change_document):
        del po_change_document["id"]
        _search_chain(mock_db).execute.return_value = MagicMock(data=[
            {"id": "502", "externalid": "PO-200", "otherrefnum": None},
        ])
        result = service.process(po_change_document)

        assert result.candidate_id == "502"
        mock_db.table.return_value.update.assert_not_called()

    def test_update_failure_is_contained(self, service, mock_db, po_change_document):
        _search_chain(mock_db).execute.return_value = MagicMock(data=[
            {"id": "502", "externalid": "PO-200", "otherrefnum": None},
        ])
        mock_db.table.return_value.update.side_effect = RuntimeError("write failed")

        result = service.process(po_change_document)
        assert result.matched is False

    def test_module_helper_uses_shared_client(self, mock_db, po_change_document):
        with patch("edichecks.services.related_order.get_supabase_client", return_value=mock_db):
            result = set_related_sales_order(po_change_document)
        assert result.match_type == MatchType.NOT_FOUND
        mock_db.table.assert_called_with(settings.sales_order_table)
