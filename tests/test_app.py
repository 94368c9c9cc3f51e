"""
Tests for the jobly CLI.
"""

import json

import pytest

from jobly import __version__
from jobly.app import main


class TestCli:

    def test_version(self, capsys):
        main(["--version"])
        assert capsys.readouterr().out.strip() == __version__

    def test_no_command_prints_help(self, capsys):
        main([], executor=object())
        assert "usage: jobly" in capsys.readouterr().out

    def test_create(self, executor, job_row, capsys):
        executor.queue([job_row])

        main(["create", "--title", "J1", "--salary", "10000",
              "--equity", "0.1", "--company", "c1"], executor=executor)

        assert json.loads(capsys.readouterr().out) == job_row
        assert executor.last_params == ["J1", 10000, "0.1", "c1"]

    def test_list_with_filters(self, executor, joined_job_row, capsys):
        executor.queue([joined_job_row])

        main(["list", "--title", "j", "--min-salary", "0", "--has-equity"], executor=executor)

        assert json.loads(capsys.readouterr().out) == [joined_job_row]
        assert "j.equity > 0" in executor.last_sql
        assert executor.last_params == ["%j%", 0]

    def test_list_without_has_equity_omits_predicate(self, executor, capsys):
        main(["list"], executor=executor)

        assert "WHERE" not in executor.last_sql
        assert json.loads(capsys.readouterr().out) == []

    def test_get(self, executor, joined_job_row, capsys):
        executor.queue([joined_job_row])

        main(["get", "1"], executor=executor)

        assert json.loads(capsys.readouterr().out)["companyName"] == "C1"
        assert executor.last_params == [1]

    def test_update_only_passed_fields(self, executor, job_row, capsys):
        executor.queue([{**job_row, "salary": 5}])

        main(["update", "1", "--salary", "5"], executor=executor)

        assert json.loads(capsys.readouterr().out)["salary"] == 5
        assert 'SET "salary"=$1 WHERE id = $2' in executor.last_sql
        assert executor.last_params == [5, 1]

    def test_update_without_fields_exits_2(self, executor, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main(["update", "1"], executor=executor)

        assert exc_info.value.code == 2
        assert "No data supplied" in capsys.readouterr().err
        assert executor.calls == []

    def test_remove(self, executor, capsys):
        executor.queue([{"id": 4}])

        main(["remove", "4"], executor=executor)

        assert json.loads(capsys.readouterr().out) == {"deleted": 4}

    def test_missing_job_exits_1(self, executor, capsys):
        executor.queue([])

        with pytest.raises(SystemExit) as exc_info:
            main(["get", "0"], executor=executor)

        assert exc_info.value.code == 1
        assert "No job: 0" in capsys.readouterr().err

    def test_init_db(self, tmp_path, capsys):
        url = f"sqlite:///{tmp_path / 'cli.db'}"

        main(["--database-url", url, "init-db"])

        assert "Tables ready" in capsys.readouterr().out
        assert (tmp_path / "cli.db").exists()
