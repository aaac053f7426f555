import csv
import io

from timebill.export import CSV_HEADER, csv_filename, render_csv
from tests.conftest import make_entry


class TestRenderCSV:
    def test_header(self):
        assert render_csv([]).splitlines()[0] == "Date,Day of Week,Hours,Description,Notes"

    def test_rows(self, march_entries):
        lines = render_csv(march_entries).splitlines()
        assert lines[1] == "3/1/2024,Friday,4,Kickoff,"
        assert lines[2] == "3/4/2024,Monday,8,API design,"
        assert lines[3] == '3/5/2024,Tuesday,7.5,"API design, continued",'

    def test_sorted_by_date(self, march_entries):
        rows = list(csv.reader(io.StringIO(render_csv(list(reversed(march_entries))))))
        assert [row[0] for row in rows[1:]] == ["3/1/2024", "3/4/2024", "3/5/2024", "3/12/2024", "3/29/2024"]

    def test_quotes_and_newlines_survive(self):
        entry = make_entry("2024-03-04", description='Said "ship it"', notes="line one\nline two")
        rows = list(csv.reader(io.StringIO(render_csv([entry]))))
        assert rows[0] == CSV_HEADER
        assert rows[1][3] == 'Said "ship it"'
        assert rows[1][4] == "line one\nline two"

    def test_no_trailing_newline(self, march_entries):
        output = render_csv(march_entries)
        assert not output.endswith("\n")
        assert output.split("\n")[-1] == "3/29/2024,Friday,3.25,Wrap-up,"
        assert render_csv([]) == "Date,Day of Week,Hours,Description,Notes"

    def test_notes_included(self):
        entry = make_entry("2024-03-04", notes="remote")
        assert render_csv([entry]).splitlines()[1].endswith(",remote")

    def test_filename(self):
        assert csv_filename("2024-03") == "time-tracking-2024-03.csv"
