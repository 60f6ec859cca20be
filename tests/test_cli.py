"""Tests for the operational CLI against a file-backed SQLite database."""

import pytest

from employee_mgmt.cli import EmployeeCli
from employee_mgmt.config import Settings

from tests.conftest import TEST_PASSWORD


@pytest.fixture
def cli(tmp_path) -> EmployeeCli:
    settings = Settings(
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'ems.db'}",
        pool_size=1,
        max_overflow=0,
        pool_timeout=5,
        pool_recycle=600,
        echo_sql=False,
        host="127.0.0.1",
        port=8000,
        debug=False,
        log_level="WARNING",
    )
    return EmployeeCli(settings)


@pytest.fixture
def ready_cli(cli) -> EmployeeCli:
    """CLI whose database has schema, sample data and default logins."""
    assert cli.run(["create-schema"]) == 0
    assert cli.run(["load-sample-data"]) == 0
    assert cli.run(["bootstrap-users", "--password", TEST_PASSWORD]) == 0
    return cli


class TestEmployeeCli:
    """Test command dispatch and the database-backed commands."""

    def test_no_command_prints_help(self, cli, capsys):
        assert cli.run([]) == 1
        assert "usage:" in capsys.readouterr().out

    def test_health(self, cli, capsys):
        assert cli.run(["health"]) == 0
        assert "db: OK" in capsys.readouterr().out

    def test_setup_commands_are_idempotent(self, ready_cli, capsys):
        capsys.readouterr()

        assert ready_cli.run(["load-sample-data"]) == 0
        assert ready_cli.run(["bootstrap-users"]) == 0

        out = capsys.readouterr().out
        assert "Sample data already present" in out
        assert "hradmin: exists, skipped" in out

    def test_salary_adjust(self, ready_cli, capsys):
        capsys.readouterr()

        code = ready_cli.run(
            [
                "salary-adjust",
                "--min", "80000",
                "--max", "90000",
                "--percent", "5",
                "--username", "hradmin",
                "--password", TEST_PASSWORD,
            ]
        )

        assert code == 0
        out = capsys.readouterr().out
        assert "Employees updated: 1" in out
        assert "$4,250.00" in out
        assert "$89,250.00" in out

    def test_salary_adjust_dry_run_changes_nothing(self, ready_cli, capsys):
        args = [
            "salary-adjust",
            "--min", "80000",
            "--max", "90000",
            "--percent", "5",
            "--username", "hradmin",
            "--password", TEST_PASSWORD,
        ]

        assert ready_cli.run(args + ["--dry-run"]) == 0
        capsys.readouterr()
        assert ready_cli.run(args) == 0

        # The real run still sees the original 85000 salary
        assert "$85,000.00" in capsys.readouterr().out

    def test_salary_adjust_bad_login(self, ready_cli, capsys):
        code = ready_cli.run(
            [
                "salary-adjust",
                "--min", "80000",
                "--max", "90000",
                "--percent", "5",
                "--username", "hradmin",
                "--password", "wrong",
            ]
        )

        assert code == 1
        assert "Invalid username or password" in capsys.readouterr().err

    def test_salary_adjust_employee_denied(self, ready_cli, capsys):
        code = ready_cli.run(
            [
                "salary-adjust",
                "--min", "80000",
                "--max", "90000",
                "--percent", "5",
                "--username", "alice",
                "--password", TEST_PASSWORD,
            ]
        )

        assert code == 1
        assert "Access denied" in capsys.readouterr().err
