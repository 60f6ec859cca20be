"""Employee Management command line interface.

Provides operational tools for:
- Schema creation
- Sample data and default logins
- Salary band adjustments
- Database health checks
- Running the API server

Usage:
    python -m employee_mgmt.cli create-schema
    python -m employee_mgmt.cli load-sample-data
    python -m employee_mgmt.cli bootstrap-users --password 'Password123!'
    python -m employee_mgmt.cli salary-adjust --min 80000 --max 90000 --percent 5 \\
        --username hradmin --password 'Password123!'
    python -m employee_mgmt.cli health
    python -m employee_mgmt.cli serve
"""

from __future__ import annotations

import argparse
import asyncio
import getpass
import sys
from typing import Awaitable, Callable

from employee_mgmt.config import Settings, get_settings
from employee_mgmt.database import Database
from employee_mgmt.logging_config import configure_logging
from employee_mgmt.models import UserRole
from employee_mgmt.money import format_currency
from employee_mgmt.repositories import EmployeeRepository
from employee_mgmt.sample_data import load_sample_data
from employee_mgmt.services import AuthService, SalaryAdjustmentService

DEFAULT_PASSWORD = "Password123!"

# (username, role, emp_number)
DEFAULT_USERS = (
    ("hradmin", UserRole.HR_ADMIN, None),
    ("alice", UserRole.EMPLOYEE, "E1001"),
    ("emma", UserRole.EMPLOYEE, "E1005"),
)


class EmployeeCli:
    """Employee Management command line interface."""

    def __init__(self, settings: Settings | None = None) -> None:
        self.settings = settings
        self.parser = self._build_parser()

    def _build_parser(self) -> argparse.ArgumentParser:
        """Build argument parser."""
        parser = argparse.ArgumentParser(
            prog="python -m employee_mgmt.cli",
            description="Employee Management operational tools",
        )
        parser.add_argument(
            "--log-level",
            type=str,
            default=None,
            help="Override LOG_LEVEL for this run",
        )
        subparsers = parser.add_subparsers(dest="command", help="Commands")

        subparsers.add_parser(
            "create-schema",
            help="Create all tables that do not exist yet",
        )

        subparsers.add_parser(
            "load-sample-data",
            help="Insert the classroom sample dataset (states, employees, payroll)",
        )

        bootstrap = subparsers.add_parser(
            "bootstrap-users",
            help="Create the default hradmin, alice and emma logins",
        )
        bootstrap.add_argument(
            "--password",
            type=str,
            default=DEFAULT_PASSWORD,
            help="Password for every created login",
        )

        adjust = subparsers.add_parser(
            "salary-adjust",
            help="Apply a percentage raise to active employees in a salary band",
        )
        adjust.add_argument("--min", dest="min_salary", type=str, required=True, help="Lower salary bound")
        adjust.add_argument("--max", dest="max_salary", type=str, required=True, help="Upper salary bound")
        adjust.add_argument("--percent", dest="percentage", type=str, required=True, help="Percentage to apply")
        adjust.add_argument("--username", type=str, required=True, help="HR admin username")
        adjust.add_argument(
            "--password",
            type=str,
            help="HR admin password (prompted for when omitted)",
        )
        adjust.add_argument(
            "--dry-run",
            action="store_true",
            help="Show the changes without writing them",
        )

        subparsers.add_parser(
            "health",
            help="Check database connectivity",
        )

        subparsers.add_parser(
            "serve",
            help="Run the HTTP API with uvicorn",
        )

        return parser

    def run(self, args: list[str] | None = None) -> int:
        """Run the CLI with given arguments."""
        parsed = self.parser.parse_args(args)

        if not parsed.command:
            self.parser.print_help()
            return 1

        settings = self.settings or get_settings()
        configure_logging(parsed.log_level or settings.log_level)

        if parsed.command == "serve":
            return self._cmd_serve(parsed)

        # Dispatch to command handler
        handlers: dict[str, Callable[[Database, argparse.Namespace], Awaitable[int]]] = {
            "create-schema": self._cmd_create_schema,
            "load-sample-data": self._cmd_load_sample_data,
            "bootstrap-users": self._cmd_bootstrap_users,
            "salary-adjust": self._cmd_salary_adjust,
            "health": self._cmd_health,
        }

        handler = handlers.get(parsed.command)
        if handler is None:
            print(f"Unknown command: {parsed.command}", file=sys.stderr)
            return 1
        return asyncio.run(self._with_database(settings, handler, parsed))

    async def _with_database(
        self,
        settings: Settings,
        handler: Callable[[Database, argparse.Namespace], Awaitable[int]],
        parsed: argparse.Namespace,
    ) -> int:
        database = Database(settings)
        try:
            return await handler(database, parsed)
        finally:
            await database.dispose()

    async def _cmd_create_schema(self, database: Database, args: argparse.Namespace) -> int:
        """Create tables."""
        await database.create_all()
        print("Schema created.")
        return 0

    async def _cmd_load_sample_data(self, database: Database, args: argparse.Namespace) -> int:
        """Seed the sample dataset in one transaction."""
        async with database.session() as session:
            if await EmployeeRepository(session).get_by_number("E1001") is not None:
                print("Sample data already present; nothing to do.")
                return 0
            ids = await load_sample_data(session)
        print(f"Loaded {len(ids)} employees.")
        return 0

    async def _cmd_bootstrap_users(self, database: Database, args: argparse.Namespace) -> int:
        """Create default logins, skipping any that already exist."""
        failures = 0
        async with database.session() as session:
            auth = AuthService(session)
            employees = EmployeeRepository(session)
            for username, role, emp_number in DEFAULT_USERS:
                if await auth.users.username_exists(username):
                    print(f"  {username}: exists, skipped")
                    continue
                empid = None
                if emp_number is not None:
                    employee = await employees.get_by_number(emp_number)
                    if employee is None:
                        print(f"  {username}: employee {emp_number} not found, skipped")
                        failures += 1
                        continue
                    empid = employee.empid
                result = await auth.create_user(username, args.password, role, empid=empid)
                if result.success:
                    print(f"  {username}: created ({role.display_name})")
                else:
                    print(f"  {username}: {result.message}", file=sys.stderr)
                    failures += 1
        return 1 if failures else 0

    async def _cmd_salary_adjust(self, database: Database, args: argparse.Namespace) -> int:
        """Log in as an HR admin and apply the adjustment."""
        password = args.password if args.password is not None else getpass.getpass("Password: ")
        async with database.session() as session:
            login = await AuthService(session).login(args.username, password)
            if not login.success:
                print(f"Login failed: {login.message}", file=sys.stderr)
                return 1

            service = SalaryAdjustmentService(session)
            operation = service.preview if args.dry_run else service.adjust_salaries
            result = await operation(login.data, args.min_salary, args.max_salary, args.percentage)

        if not result.success:
            print(f"Error: {result.message}", file=sys.stderr)
            return 1

        summary = result.data
        if args.dry_run:
            print("[DRY RUN] No salaries were changed.")
        print(result.message)
        for change in summary.changes:
            print(
                f"  {change.emp_number}  {change.full_name:<24} "
                f"{format_currency(change.old_salary):>14} -> {format_currency(change.new_salary):>14}"
            )
        print(f"Employees updated: {summary.employees_updated}")
        print(f"Total increase:    {format_currency(summary.total_increase)}")
        return 0

    async def _cmd_health(self, database: Database, args: argparse.Namespace) -> int:
        """Check database health."""
        print("Database Health Check")
        print("=" * 40)
        url = database.display_url
        try:
            await database.ping()
        except Exception as exc:
            print(f"db: FAIL\n  url: {url}\n  error: {exc}")
            return 1
        print(f"db: OK\n  url: {url}")
        return 0

    def _cmd_serve(self, args: argparse.Namespace) -> int:
        """Run the API server."""
        from employee_mgmt.__main__ import main as serve

        serve()
        return 0


def main() -> int:
    """CLI entry point."""
    cli = EmployeeCli()
    return cli.run()


if __name__ == "__main__":
    sys.exit(main())
