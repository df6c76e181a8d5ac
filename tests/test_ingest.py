"""
Unit tests for logspec/ingest.py
Run: pytest tests/test_ingest.py -v
"""
import io
import zipfile

import pandas as pd
import pytest

from logspec.ingest import IngestError, find_column_index, parse_excel_file, records_from_rows


def _write_xlsx(path, rows):
    pd.DataFrame(rows[1:], columns=rows[0]).to_excel(path, index=False)
    return path


def _write_fake_xlsx(path):
    """A zip archive that is not a workbook"""
    with zipfile.ZipFile(path, "w") as zf:
        zf.writestr("hello.txt", "not a workbook")
    return path


class TestFindColumnIndex:
    """Header lookup"""

    def test_case_insensitive(self):
        assert find_column_index(["delivery", " SHIP METHOD "], ["Ship Method"]) == 1

    def test_aliases(self):
        assert find_column_index(["Delivery Number"], ["Delivery", "Delivery Number"]) == 0

    def test_missing(self):
        assert find_column_index(["A", "B"], ["Country"]) == -1


class TestRecordsFromRows:
    """Header + rows -> Records"""

    def test_mapping(self):
        headers = ["Delivery", "Ship Method", "Country", "Customer", "Outbound Pending", "Plant"]
        rows = [["80001", " FEDEX_GROUND ", "FR", "ACME", "4", "P01"]]
        rec = records_from_rows(headers, rows)[0]
        assert rec.delivery == "80001"
        assert rec.ship_method == "FEDEX_GROUND"
        assert rec.country == "FR"
        assert rec.customer == "ACME"
        assert rec.outbound_pending_lines == "4"
        assert rec.fields["Plant"] == "P01"

    def test_optional_defaults(self):
        rec = records_from_rows(["Delivery", "Ship Method", "Country"], [["1", "M", "FR"]])[0]
        assert rec.customer == ""
        assert rec.outbound_pending_lines == "0"

    def test_short_row(self):
        rec = records_from_rows(["Delivery", "Ship Method", "Country"], [["1", "M"]])[0]
        assert rec.country == ""

    def test_empty_rows_skipped(self):
        rows = [["", "", ""], [], ["1", "M", "FR"]]
        assert len(records_from_rows(["Delivery", "Ship Method", "Country"], rows)) == 1

    def test_required_columns(self):
        with pytest.raises(IngestError, match="Required columns not found"):
            records_from_rows(["Delivery", "Country"], [["1", "FR"]])


class TestParseExcelFile:
    """Workbook and CSV reading"""

    def test_xlsx(self, tmp_path):
        path = _write_xlsx(tmp_path / "rows.xlsx", [
            ["Delivery", "Ship Method", "Country", "Customer"],
            ["80001", "FEDEX_GROUND", "FR", "ACME"],
            ["80002", "FEDEX_GROUND", "US", ""],
        ])
        records = parse_excel_file(path)
        assert [r.country for r in records] == ["FR", "US"]
        assert records[0].customer == "ACME"
        assert records[1].customer == ""

    def test_xlsx_file_object(self, tmp_path):
        path = _write_xlsx(tmp_path / "rows.xlsx", [
            ["Delivery", "Ship Method", "Country"],
            ["80001", "FEDEX_GROUND", "FR"],
        ])
        with open(path, "rb") as f:
            records = parse_excel_file(f)
        assert records[0].ship_method == "FEDEX_GROUND"

    def test_csv(self, tmp_path):
        path = tmp_path / "rows.csv"
        path.write_text("Delivery,Ship Method,Country\n80001,FEDEX_GROUND,DE\n", encoding="utf-8")
        assert parse_excel_file(path)[0].country == "DE"

    def test_csv_upload_like(self):
        buf = io.BytesIO(b"Delivery,Ship Method,Country\n1,M,FR\n")
        buf.name = "upload.csv"
        assert parse_excel_file(buf)[0].delivery == "1"

    def test_empty_csv(self, tmp_path):
        path = tmp_path / "empty.csv"
        path.write_text("", encoding="utf-8")
        with pytest.raises(IngestError, match="File is empty"):
            parse_excel_file(path)

    def test_missing_file(self, tmp_path):
        with pytest.raises(IngestError):
            parse_excel_file(tmp_path / "missing.xlsx")

    def test_missing_columns(self, tmp_path):
        path = _write_xlsx(tmp_path / "rows.xlsx", [["Order", "Country"], ["1", "FR"]])
        with pytest.raises(IngestError, match="Expected: Delivery, Ship Method, Country"):
            parse_excel_file(path)

    def test_zip_that_is_not_a_workbook(self, tmp_path):
        """A corrupt workbook is reported as IngestError"""
        path = _write_fake_xlsx(tmp_path / "deliveries.xlsx")
        with pytest.raises(IngestError, match="Failed to parse data file"):
            parse_excel_file(path)

    def test_garbage_bytes_as_xlsx(self):
        buf = io.BytesIO(b"definitely not a spreadsheet")
        buf.name = "deliveries.xlsx"
        with pytest.raises(IngestError):
            parse_excel_file(buf)
