"""
Общие фикстуры для тестов edichecks.
"""
import json
from unittest.mock import MagicMock

import pytest

from edichecks.models.schemas import Candidate


@pytest.fixture
def valid_pallet_document() -> dict:
    """Одна паллета, одна позиция, все поля заполнены."""
    return {
        "totalPallets": 1,
        "pallets": [
            {
                "palletNumber": 1,
                "sscc": "S1",
                "items": [
                    {"qty": 5, "vpn": "V1", "ediUom": "EA", "poLineNumber": "1"}
                ],
            }
        ],
    }


@pytest.fixture
def valid_pallet_json(valid_pallet_document) -> str:
    return json.dumps(valid_pallet_document)


@pytest.fixture
def sales_order_candidates() -> list[Candidate]:
    return [
        Candidate(id="101", primary_key="PO-100", secondary_key=None),
        Candidate(id="102", primary_key=None, secondary_key="PO-200"),
        Candidate(id="103", primary_key="PO-300", secondary_key="PO-300"),
    ]


@pytest.fixture
def po_change_document() -> dict:
    return {
        "id": "9001",
        "custbody_sps_cx_ponumber": "PO-200",
        "custbody_po_change_customer_id": "77",
    }


@pytest.fixture
def mock_db():
    """Supabase клиент с цепочкой select/eq/or_/range/execute."""
    client = MagicMock()
    query = client.table.return_value.select.return_value.eq.return_value.or_.return_value.range.return_value
    query.execute.return_value = MagicMock(data=[])
    return client
