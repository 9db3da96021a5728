"""
Валидация JSON с паллетами (ASN / EDI 856).

Документ: totalPallets, pallets[] -> palletNumber, sscc, items[] ->
qty, vpn, ediUom, poLineNumber. Собираем все ошибки за один проход,
исключения наружу не выходят.
"""
import json
import logging
from typing import Any

from edichecks.config import settings
from edichecks.constants import (
    ITEM_MISSING_FIELD,
    ITEM_TEXT_FIELDS,
    MALFORMED_INPUT_PREFIX,
    MISSING_INPUT_MESSAGE,
    MISSING_PALLETS_ARRAY,
    MISSING_TOTAL_PALLETS,
    PALLET_MISSING_FIELD,
    PALLET_MISSING_ITEMS,
    PALLET_MISSING_NUMBER,
)
from edichecks.models.schemas import OutcomeKind, ValidationOutcome
from edichecks.utils.normalizers import is_absent, is_falsy

logger = logging.getLogger(__name__)


def _reject_constant(name: str):
    """NaN и Infinity не являются JSON."""
    raise ValueError(f"Unexpected token {name}")


def _fields(value: Any) -> dict:
    """Не-объект (число, строка, массив) ведёт себя как объект без полей."""
    return value if isinstance(value, dict) else {}


def _non_empty_list(value: Any) -> bool:
    return isinstance(value, list) and len(value) > 0


class PalletValidator:
    def __init__(self, sentinels: tuple[str, ...] | None = None, delimiter: str | None = None):
        self.sentinels = tuple(sentinels if sentinels is not None else settings.missing_sentinels)
        self.delimiter = delimiter if delimiter is not None else settings.error_delimiter

    def validate(self, raw: str | None) -> ValidationOutcome:
        logger.info(f"Validating pallet JSON, length: {len(raw) if raw is not None else 'null'}")

        if raw is None or raw in self.sentinels:
            logger.warning(MISSING_INPUT_MESSAGE)
            return ValidationOutcome(
                kind=OutcomeKind.MISSING_INPUT,
                diagnostic=MISSING_INPUT_MESSAGE,
            )

        try:
            document = json.loads(raw, parse_constant=_reject_constant)
        except (ValueError, TypeError, RecursionError) as e:
            diagnostic = MALFORMED_INPUT_PREFIX + str(e)
            logger.warning(diagnostic)
            return ValidationOutcome(kind=OutcomeKind.MALFORMED_INPUT, diagnostic=diagnostic)
        logger.debug("JSON parsed successfully")

        errors = self.collect_errors(document)
        if errors:
            diagnostic = self.delimiter.join(errors)
            logger.warning(f"Validation errors: {diagnostic}")
            return ValidationOutcome(
                kind=OutcomeKind.INVALID,
                errors=tuple(errors),
                diagnostic=diagnostic,
            )

        logger.info("Pallet JSON validation passed - all required fields present")
        return ValidationOutcome(kind=OutcomeKind.VALID)

    def collect_errors(self, document: Any) -> list[str]:
        """Обход документа сверху вниз, ошибки в порядке обхода."""
        header = _fields(document)
        errors: list[str] = []

        if is_absent(header.get("totalPallets")):
            errors.append(MISSING_TOTAL_PALLETS)

        pallets = header.get("pallets")
        if not _non_empty_list(pallets):
            errors.append(MISSING_PALLETS_ARRAY)
            return errors

        for pallet_num, pallet in enumerate(pallets, start=1):
            errors.extend(self._pallet_errors(pallet_num, _fields(pallet)))
        return errors

    def _pallet_errors(self, pallet_num: int, pallet: dict) -> list[str]:
        errors: list[str] = []

        # palletNumber: только null/отсутствие, пустая строка проходит
        if pallet.get("palletNumber") is None:
            errors.append(PALLET_MISSING_NUMBER.format(pallet=pallet_num))

        if is_falsy(pallet.get("sscc")):
            errors.append(PALLET_MISSING_FIELD.format(pallet=pallet_num, field="sscc"))

        items = pallet.get("items")
        if not _non_empty_list(items):
            errors.append(PALLET_MISSING_ITEMS.format(pallet=pallet_num))
            return errors

        for item_num, item in enumerate(items, start=1):
            item = _fields(item)
            # qty: 0 - допустимое количество
            if is_absent(item.get("qty")):
                errors.append(ITEM_MISSING_FIELD.format(pallet=pallet_num, item=item_num, field="qty"))
            for field in ITEM_TEXT_FIELDS:
                if is_falsy(item.get(field)):
                    errors.append(ITEM_MISSING_FIELD.format(pallet=pallet_num, item=item_num, field=field))
        return errors


_validator: PalletValidator | None = None


def get_pallet_validator() -> PalletValidator:
    global _validator
    if _validator is None:
        _validator = PalletValidator()
    return _validator


def validate_pallet_json(raw: str | None) -> ValidationOutcome:
    return get_pallet_validator().validate(raw)
