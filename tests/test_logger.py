import csv

import pytest

from autobackup import logger as report_logger
from autobackup.errors import ReportCommitError
from autobackup.logger import CsvReportWriter, tmp_path_for


def read_rows(path):
    with path.open(newline="", encoding="utf-8") as f:
        return list(csv.reader(f))


def test_header_and_rows(tmp_path):
    target = tmp_path / "report.log"
    with CsvReportWriter(target, ["name", "size"]) as report:
        report.write_row(["a.txt", "3"])
        report.write_row(["b.txt", "4"])
    assert target.read_text(encoding="utf-8") == "name,size\na.txt,3\nb.txt,4\n"
    assert not tmp_path_for(target).exists()


@pytest.mark.parametrize("name", [
    "plain.txt",
    "with,comma.txt",
    'with "quotes".txt',
    "line\nbreak.txt",
    "ação.txt",
])
def test_escaping_round_trips(tmp_path, name):
    target = tmp_path / "report.log"
    with CsvReportWriter(target, ["name"]) as report:
        report.write_row([name])
    assert read_rows(target) == [["name"], [name]]


def test_quoting_rule(tmp_path):
    target = tmp_path / "report.log"
    with CsvReportWriter(target, ["name"]) as report:
        report.write_row(['a,"b"'])
    assert target.read_text(encoding="utf-8").splitlines()[1] == '"a,""b"""'


def test_uncommitted_report_leaves_previous(tmp_path):
    target = tmp_path / "report.log"
    target.write_text("previous\n", encoding="utf-8")

    writer = CsvReportWriter(target, ["name"]).open()
    writer.write_row(["half"])
    # process "dies" here: no commit
    assert target.read_text(encoding="utf-8") == "previous\n"
    writer.abandon()
    assert target.read_text(encoding="utf-8") == "previous\n"


def test_exception_inside_context_does_not_commit(tmp_path):
    target = tmp_path / "report.log"
    with pytest.raises(RuntimeError):
        with CsvReportWriter(target, ["name"]) as report:
            report.write_row(["x"])
            raise RuntimeError("boom")
    assert not target.exists()


def test_commit_failure_is_fatal(tmp_path, monkeypatch):
    target = tmp_path / "report.log"

    def no_rename(src, dst):
        raise OSError(18, "Invalid cross-device link")

    monkeypatch.setattr(report_logger.os, "replace", no_rename)
    writer = CsvReportWriter(target, ["name"]).open()
    with pytest.raises(ReportCommitError):
        writer.commit()
    assert not target.exists()


def test_stale_tmp_is_overwritten(tmp_path):
    target = tmp_path / "report.log"
    tmp_path_for(target).write_text("garbage from a crashed run", encoding="utf-8")
    with CsvReportWriter(target, ["name"]) as report:
        report.write_row(["ok"])
    assert read_rows(target) == [["name"], ["ok"]]


def test_write_before_open(tmp_path):
    with pytest.raises(RuntimeError):
        CsvReportWriter(tmp_path / "x.log", ["name"]).write_row(["a"])


def test_unwritable_tmp_is_commit_error(tmp_path):
    target = tmp_path / "report.log"
    tmp_path_for(target).mkdir()
    with pytest.raises(ReportCommitError):
        with CsvReportWriter(target, ["name"]) as report:
            report.write_row(["a"])
    assert not target.exists()


def test_fsync_failure_is_commit_error(tmp_path, monkeypatch):
    target = tmp_path / "report.log"
    target.write_text("previous\n", encoding="utf-8")

    def no_fsync(fd):
        raise OSError(5, "Input/output error")

    writer = CsvReportWriter(target, ["name"]).open()
    writer.write_row(["a"])
    monkeypatch.setattr(report_logger.os, "fsync", no_fsync)
    with pytest.raises(ReportCommitError):
        writer.commit()
    assert target.read_text(encoding="utf-8") == "previous\n"
