"""
Tests for CSV import with header aliases.
"""

import io

import pytest

from dun_labels.exceptions import LabelImportError
from dun_labels.importers import (
    FIELD_ALIASES,
    LABEL_CSV_TEMPLATE,
    import_labels_csv,
    import_qr_csv,
    parse_quantity,
    resolve_field,
    row_to_label,
)


def _csv(text: str) -> io.StringIO:
    return io.StringIO(text)


class TestResolveField:
    """Alias lookup order."""

    def test_first_non_empty_alias_wins(self):
        row = {"sku": "", "SKU": "ABC-1"}
        assert resolve_field(row, "sku") == "ABC-1"

    def test_priority_order(self):
        row = {"Produto": "Second", "product": "First"}
        assert resolve_field(row, "product") == "First"

    def test_missing_field(self):
        assert resolve_field({}, "lot") == ""

    def test_values_are_trimmed(self):
        assert resolve_field({"GTIN-14": " 27898971826272 "}, "gtin14") == "27898971826272"

    def test_every_canonical_field_has_aliases(self):
        assert set(FIELD_ALIASES) == {
            "sku", "gtin14", "product", "qtyPerBox", "boxSize", "weightKg", "lot", "expiry",
        }


class TestParseQuantity:

    @pytest.mark.parametrize("raw, expected", [
        ("24", 24),
        ("24,0", 24),
        ("12.0", 12),
        ("2,5", 2.5),
        ("", 0),
        ("abc", 0),
        (None, 0),
        ("inf", 0),
    ])
    def test_values(self, raw, expected):
        assert parse_quantity(raw) == expected

    def test_integral_becomes_int(self):
        assert isinstance(parse_quantity("24,0"), int)


class TestRowToLabel:

    def test_portuguese_headers(self):
        row = {
            "SKU": "D24-ALV26278",
            "GTIN14": "27898971826272",
            "produto": "Pasta de Dente",
            "QUANTIDADE POR CAIXA": "24",
            "TAMANHO CAIXA": "32X25X16",
            "PESO KG": "3,095",
            "Lote": "L2409-A",
            "Validade": "31/03/2026",
        }

        label = row_to_label(row)

        assert label.sku == "D24-ALV26278"
        assert label.gtin14 == "27898971826272"
        assert label.product == "Pasta de Dente"
        assert label.qty_per_box == 24
        assert label.box_size == "32X25X16"
        assert label.weight_kg == "3,095"
        assert label.lot == "L2409-A"
        assert label.expiry == "2026-03-31"

    def test_empty_optional_fields_are_none(self):
        label = row_to_label({"sku": "ABC", "lot": "", "expiry": "  "})

        assert label.lot is None
        assert label.expiry is None


class TestImportLabelsCsv:
    """End-to-end CSV import."""

    def test_template_imports_cleanly(self, today):
        result = import_labels_csv(_csv(LABEL_CSV_TEMPLATE), today=today)

        assert result.valid_count == 1
        assert result.invalid_count == 0
        assert result.valid_labels[0].weight_kg == "3,095"

    def test_partition_of_mixed_rows(self, today):
        text = (
            "sku,gtin14,product,qtd,lote,validade\n"
            "SKU-1,27898971826272,Produto A,24,L1,20261231\n"
            "SKU-2,27898971826273,Produto B,0,L2,\n"
            "SKU-3,06285096000842,Produto C,\"12,0\",,31/12/2026\n"
        )

        result = import_labels_csv(_csv(text), today=today)

        assert [l.sku for l in result.valid_labels] == ["SKU-1", "SKU-3"]
        assert result.valid_labels[0].expiry == "2026-12-31"
        assert result.valid_labels[1].expiry == "2026-12-31"
        assert result.valid_labels[1].qty_per_box == 12
        assert result.invalid_labels[0].label.sku == "SKU-2"
        assert result.invalid_labels[0].errors == ["GTIN-14 inválido", "Quantidade inválida"]

    def test_gtin_keeps_leading_zeros(self, today):
        text = "sku,gtin14,product,qtyPerBox\nSKU-1,06285096000842,Produto,6\n"

        result = import_labels_csv(_csv(text), today=today)

        assert result.valid_labels[0].gtin14 == "06285096000842"

    def test_blank_rows_skipped(self, today):
        text = "sku,gtin14,product,qtyPerBox\n\nSKU-1,27898971826272,Produto,6\n,,,\n"

        result = import_labels_csv(_csv(text), today=today)

        assert result.valid_count == 1
        assert result.invalid_count == 0

    def test_bad_expiry_reported(self, today):
        text = "sku,gtin14,product,qtyPerBox,expiry\nSKU-1,27898971826272,Produto,6,31-12-2026\n"

        result = import_labels_csv(_csv(text), today=today)

        assert result.invalid_labels[0].errors == ["Data de validade inválida"]

    def test_empty_file(self):
        result = import_labels_csv(_csv(""))

        assert result.valid_count == 0
        assert result.invalid_count == 0

    def test_malformed_csv(self):
        with pytest.raises(LabelImportError):
            import_labels_csv(_csv("sku,gtin14\nA,1\nB,2,3,4\n"))

    def test_reads_from_path(self, tmp_path, today):
        path = tmp_path / "labels.csv"
        path.write_text(LABEL_CSV_TEMPLATE, encoding="utf-8")

        result = import_labels_csv(path, today=today)

        assert result.valid_count == 1


class TestImportQrCsv:

    def test_rows_without_value_dropped(self):
        text = "label,value\nSite,https://example.com\n,SKU-1\nVazio,\n"

        entries = import_qr_csv(_csv(text))

        assert [e.value for e in entries] == ["https://example.com", "SKU-1"]
        assert entries[0].label == "Site"
        assert entries[1].label is None

    def test_quoted_values(self):
        text = 'label,value\n"Produto A","7891234567890"\n'

        entries = import_qr_csv(_csv(text))

        assert entries[0].value == "7891234567890"
