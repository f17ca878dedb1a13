"""
Label record validation.

``validate_label`` checks a single record and returns descriptive messages
for form feedback. ``validate_label_list`` partitions an imported batch into
valid and invalid records, keeping input order in both outputs.
"""

from __future__ import annotations

from datetime import date
from typing import Callable, Iterable, List, Optional, Tuple

from ..models import InvalidLabel, LabelListValidation, LabelRecord
from ..validators.validators import (
    ValidationResult,
    validate_expiry_date,
    validate_gtin14,
    validate_product,
    validate_quantity,
    validate_sku,
)


# (short batch message, descriptive form message), in reporting order
GTIN_MESSAGES = ("GTIN-14 inválido", "GTIN-14 deve conter 14 dígitos válidos")
SKU_MESSAGES = ("SKU inválido", "SKU deve ter pelo menos 3 caracteres")
PRODUCT_MESSAGES = ("Produto inválido", "Nome do produto deve ter pelo menos 2 caracteres")
QUANTITY_MESSAGES = ("Quantidade inválida", "Quantidade deve ser um número inteiro positivo")
EXPIRY_MESSAGES = (
    "Data de validade inválida",
    "Data de validade deve ser válida e futura (YYYYMMDD, YYYY-MM-DD ou DD/MM/YYYY)",
)


def _field_checks(
    today: Optional[date],
) -> List[Tuple[Callable[[LabelRecord], bool], Tuple[str, str]]]:
    return [
        (lambda r: validate_gtin14(r.gtin14), GTIN_MESSAGES),
        (lambda r: validate_sku(r.sku), SKU_MESSAGES),
        (lambda r: validate_product(r.product), PRODUCT_MESSAGES),
        (lambda r: validate_quantity(r.qty_per_box), QUANTITY_MESSAGES),
        (lambda r: validate_expiry_date(r.expiry, today=today), EXPIRY_MESSAGES),
    ]


def label_errors(
    record: LabelRecord,
    today: Optional[date] = None,
    descriptive: bool = False,
) -> List[str]:
    """Return one message per failing field validator, in fixed order."""
    index = 1 if descriptive else 0
    return [
        messages[index]
        for check, messages in _field_checks(today)
        if not check(record)
    ]


def validate_label(record: LabelRecord, today: Optional[date] = None) -> ValidationResult:
    """
    Validate a single record for live form feedback.

    Recomputed from the current field values on every call.
    """
    errors = label_errors(record, today=today, descriptive=True)
    return ValidationResult(valid=not errors, errors=errors)


def validate_label_list(
    records: Iterable[LabelRecord],
    today: Optional[date] = None,
) -> LabelListValidation:
    """
    Partition records into valid and invalid labels.

    Every record lands in exactly one output list. Invalid records carry
    the short message of each failing validator in the order GTIN-14, SKU,
    Produto, Quantidade, Data de validade.
    """
    result = LabelListValidation()
    for record in records:
        errors = label_errors(record, today=today)
        if errors:
            result.invalid_labels.append(InvalidLabel(label=record, errors=errors))
        else:
            result.valid_labels.append(record)
    return result
