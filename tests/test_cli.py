"""Tests for the command-line entry point."""

import pytest

import extractor


@pytest.fixture(autouse=True)
def no_formula_computation(monkeypatch):
    monkeypatch.setattr("settings.COMPUTE_FORMULAS", False)


class TestMain:
    """Test the column-extractor CLI."""

    def test_lists_columns_without_column_option(self, write_xlsx, people_rows, capsys):
        path = write_xlsx("people.xlsx", people_rows)

        with pytest.raises(SystemExit) as exc_info:
            extractor.main([str(path)])

        assert exc_info.value.code == 0
        out = capsys.readouterr().out
        assert "Name" in out
        assert "Age" in out

    def test_prints_values_and_exports(self, write_xlsx, people_rows, tmp_path, capsys):
        path = write_xlsx("people.xlsx", people_rows)
        out_dir = tmp_path / "exports"

        with pytest.raises(SystemExit) as exc_info:
            extractor.main([str(path), "-c", "Age", "-f", "both", "-o", str(out_dir)])

        assert exc_info.value.code == 0
        assert capsys.readouterr().out.splitlines() == ["30", "25"]
        assert (out_dir / "extracted_data.txt").read_text() == "30\n25"
        assert (out_dir / "extracted_data.pdf").read_bytes().startswith(b"%PDF")

    def test_unknown_column_fails(self, write_xlsx, people_rows, capsys):
        path = write_xlsx("people.xlsx", people_rows)

        with pytest.raises(SystemExit) as exc_info:
            extractor.main([str(path), "--column", "Email"])

        assert exc_info.value.code == 1
        assert "Column 'Email' was not found." in capsys.readouterr().err

    def test_unknown_column_is_not_extracted(self, write_xlsx, people_rows, monkeypatch, capsys):
        path = write_xlsx("people.xlsx", people_rows)

        def _fail(self):
            raise AssertionError("extract called for an unresolved column")

        monkeypatch.setattr("controller.ExtractionSession.extract", _fail)

        with pytest.raises(SystemExit) as exc_info:
            extractor.main([str(path), "--column", " Email "])

        assert exc_info.value.code == 1
        assert capsys.readouterr().err.splitlines() == ["Column 'Email' was not found."]

    def test_blank_column_fails(self, write_xlsx, people_rows, capsys):
        path = write_xlsx("people.xlsx", people_rows)

        with pytest.raises(SystemExit) as exc_info:
            extractor.main([str(path), "--column", "  "])

        assert exc_info.value.code == 1
        assert "Please select a file and a column." in capsys.readouterr().err

    def test_export_of_empty_column_fails(self, write_xlsx, tmp_path, capsys):
        path = write_xlsx("sparse.xlsx", [["A", "B"], ["x"]])

        with pytest.raises(SystemExit) as exc_info:
            extractor.main([str(path), "-c", "B", "-f", "txt", "-o", str(tmp_path)])

        assert exc_info.value.code == 1
        captured = capsys.readouterr()
        assert captured.out.splitlines() == ["No data found in this column."]
        assert "No data to download." in captured.err

    def test_missing_file_exits(self, tmp_path):
        with pytest.raises(SystemExit) as exc_info:
            extractor.main([str(tmp_path / "nope.xlsx")])

        assert exc_info.value.code == 1
