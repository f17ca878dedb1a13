"""
Tests for record validation and batch partitioning.
"""

from dataclasses import asdict, replace

from dun_labels import LabelRecord, validate_label, validate_label_list
from dun_labels.models import InvalidLabel


class TestValidateLabel:
    """Single-record validation used for form feedback."""

    def test_valid_record(self, sample_label, today):
        result = validate_label(sample_label, today=today)

        assert result.valid
        assert result.errors == []

    def test_result_carries_only_verdict_and_errors(self, sample_label, today):
        record = replace(sample_label, gtin14="27898971826273")

        assert asdict(validate_label(record, today=today)) == {
            "valid": False,
            "errors": ["GTIN-14 deve conter 14 dígitos válidos"],
        }

    def test_descriptive_messages(self, sample_label, today):
        record = replace(sample_label, sku="AB", product="")
        result = validate_label(record, today=today)

        assert not result.valid
        assert result.errors == [
            "SKU deve ter pelo menos 3 caracteres",
            "Nome do produto deve ter pelo menos 2 caracteres",
        ]

    def test_result_follows_field_values(self, sample_label, today):
        bad = replace(sample_label, gtin14="27898971826273")
        fixed = replace(bad, gtin14="27898971826272")

        assert not validate_label(bad, today=today).valid
        assert validate_label(fixed, today=today).valid


class TestValidateLabelList:
    """Batch partition into valid and invalid labels."""

    def test_bad_gtin_and_zero_quantity(self, sample_label, today):
        record = replace(sample_label, gtin14="27898971826273", qty_per_box=0)

        result = validate_label_list([record], today=today)

        assert result.valid_labels == []
        assert len(result.invalid_labels) == 1
        invalid = result.invalid_labels[0]
        assert invalid.label is record
        assert invalid.errors == ["GTIN-14 inválido", "Quantidade inválida"]

    def test_all_messages_in_order(self, today):
        record = LabelRecord(sku="", gtin14="1234", product="", qty_per_box=-1, expiry="2020-01-01")

        result = validate_label_list([record], today=today)

        assert result.invalid_labels[0].errors == [
            "GTIN-14 inválido",
            "SKU inválido",
            "Produto inválido",
            "Quantidade inválida",
            "Data de validade inválida",
        ]

    def test_valid_records_pass_unchanged(self, sample_label, today):
        result = validate_label_list([sample_label], today=today)

        assert result.valid_labels == [sample_label]
        assert result.valid_labels[0] is sample_label
        assert result.invalid_labels == []

    def test_stable_total_partition(self, sample_label, today):
        records = [
            replace(sample_label, sku="SKU-1"),
            replace(sample_label, sku="X"),
            replace(sample_label, sku="SKU-3"),
            replace(sample_label, gtin14="00000000000001"),
            replace(sample_label, sku="SKU-5", expiry=None, lot=None),
        ]

        result = validate_label_list(records, today=today)

        assert result.valid_count + result.invalid_count == len(records)
        assert [r.sku for r in result.valid_labels] == ["SKU-1", "SKU-3", "SKU-5"]
        assert [i.label.sku for i in result.invalid_labels] == ["X", sample_label.sku]

    def test_empty_batch(self):
        result = validate_label_list([])

        assert result.valid_count == 0
        assert result.invalid_count == 0

    def test_accepts_generator(self, sample_label, today):
        result = validate_label_list((sample_label for _ in range(3)), today=today)

        assert result.valid_count == 3

    def test_invalid_label_to_dict(self, sample_label, today):
        record = replace(sample_label, qty_per_box=0)
        item = validate_label_list([record], today=today).invalid_labels[0]

        assert isinstance(item, InvalidLabel)
        data = item.to_dict()
        assert data["qtyPerBox"] == 0
        assert data["errors"] == ["Quantidade inválida"]
