import datetime

import fitz
import pytest

from pdf_parser import PDFParser
from transaction import DEFAULT_CATEGORY


@pytest.fixture
def parser():
    return PDFParser()


class TestParseLines:

    def test_numeric_date(self, parser):
        [t] = parser.parse_lines(["15/03 SUPERMERCADO DIA 1.234,56"], year=2024)
        assert t.date == datetime.date(2024, 3, 15)
        assert t.store_name == "SUPERMERCADO DIA"
        assert t.amount == pytest.approx(1234.56)
        assert t.category == DEFAULT_CATEGORY

    def test_dash_date(self, parser):
        [t] = parser.parse_lines(["02-11 FARMACIA 980,00"], year=2023)
        assert t.date == datetime.date(2023, 11, 2)

    def test_month_name_date_with_instalment_and_prefix(self, parser):
        [t] = parser.parse_lines(["03 mar MERPAGO*TIENDA C.02/06 5.000,00"], year=2024)
        assert t.date == datetime.date(2024, 3, 3)
        assert t.store_name == "TIENDA"
        assert t.amount == pytest.approx(5000.0)

    def test_uses_last_amount_on_line(self, parser):
        [t] = parser.parse_lines(["10/01 NETFLIX USD 9,99 8.500,00"], year=2024)
        assert t.amount == pytest.approx(8500.0)

    @pytest.mark.parametrize("line", [
        "",
        "   ",
        "SALDO ANTERIOR 1.000,00",
        "31/02 FECHA INVALIDA 10,00",
        "15/03 SIN MONTO",
        "15/03 DEVOLUCION 500,00-",
        "15/03 PAGO -500,00",
    ])
    def test_skipped_lines(self, parser, line):
        assert parser.parse_lines([line], year=2024) == []

    def test_year_defaults_to_current(self, parser):
        [t] = parser.parse_lines(["01/01 X 1,00"])
        assert t.date.year == datetime.date.today().year

    def test_custom_category(self):
        [t] = PDFParser(category="tarjeta").parse_lines(["01/01 X 1,00"], year=2024)
        assert t.category == "tarjeta"


def test_parse_pdf_reads_every_page(tmp_path, parser):
    path = tmp_path / "resumen.pdf"
    doc = fitz.open()
    for line in ("05/04 CAFE 350,00", "06/04 LIBRERIA 1.200,50"):
        page = doc.new_page()
        page.insert_text((72, 72), line)
    doc.save(str(path))
    doc.close()

    txs = parser.parse_pdf(str(path), year=2024)

    assert [t.store_name for t in txs] == ["CAFE", "LIBRERIA"]
    assert [t.amount for t in txs] == pytest.approx([350.0, 1200.5])
