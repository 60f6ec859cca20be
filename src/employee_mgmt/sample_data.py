"""Classroom sample dataset, loadable through the ORM.

Mirrors ``sql/sample_data.sql`` so development databases (and the test
suite) can be seeded without a MySQL client.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from decimal import Decimal

from sqlalchemy.ext.asyncio import AsyncSession

from employee_mgmt.models import (
    Address,
    City,
    Division,
    Employee,
    EmployeeDivision,
    EmployeeJobTitle,
    EmploymentStatus,
    Gender,
    JobTitle,
    PayrollRecord,
    State,
)

logger = logging.getLogger(__name__)

STATES = (
    ("GA", "Georgia"),
    ("FL", "Florida"),
    ("AL", "Alabama"),
    ("TN", "Tennessee"),
)

CITIES = (
    ("Atlanta", "GA"),
    ("Savannah", "GA"),
    ("Miami", "FL"),
    ("Orlando", "FL"),
    ("Birmingham", "AL"),
    ("Nashville", "TN"),
)

DIVISIONS = (
    ("Information Technology", "IT"),
    ("Human Resources", "HR"),
    ("Finance", "FIN"),
    ("Marketing", "MKT"),
    ("Operations", "OPS"),
)

JOB_TITLES = (
    ("Software Developer", "85000.00"),
    ("Senior Software Developer", "105000.00"),
    ("HR Manager", "90000.00"),
    ("HR Generalist", "65000.00"),
    ("Financial Analyst", "78000.00"),
    ("Senior Financial Analyst", "95000.00"),
    ("Marketing Specialist", "68000.00"),
    ("Marketing Manager", "88000.00"),
    ("Operations Manager", "92000.00"),
    ("Customer Support Representative", "45000.00"),
)


@dataclass(frozen=True)
class SampleEmployee:
    emp_number: str
    first_name: str
    last_name: str
    email: str
    ssn: str
    hire_date: date
    salary: str
    status: EmploymentStatus
    street: str
    city: str
    state: str
    zip: str
    gender: Gender
    race: str
    date_of_birth: date
    phone: str
    division: str
    job_title: str
    assignment_end: date | None = None


EMPLOYEES = (
    SampleEmployee(
        "E1001", "Alice", "Johnson", "alice.johnson@example.com", "111-11-1111",
        date(2020, 3, 15), "85000.00", EmploymentStatus.ACTIVE,
        "123 Peachtree St NE", "Atlanta", "GA", "30303", Gender.F, "White",
        date(1990, 4, 10), "404-555-0101", "IT", "Software Developer",
    ),
    SampleEmployee(
        "E1002", "Bob", "Smith", "bob.smith@example.com", "222-22-2222",
        date(2019, 7, 1), "92000.00", EmploymentStatus.ACTIVE,
        "200 Biscayne Blvd", "Miami", "FL", "33101", Gender.M, "Black or African American",
        date(1985, 9, 22), "305-555-0102", "HR", "HR Manager",
    ),
    SampleEmployee(
        "E1003", "Carol", "Davis", "carol.davis@example.com", "333-33-3333",
        date(2021, 11, 20), "78000.00", EmploymentStatus.ACTIVE,
        "10 Bay St", "Savannah", "GA", "31401", Gender.F, "Asian",
        date(1992, 2, 18), "912-555-0103", "FIN", "Financial Analyst",
    ),
    SampleEmployee(
        "E1004", "David", "Lee", "david.lee@example.com", "444-44-4444",
        date(2018, 1, 8), "68000.00", EmploymentStatus.TERMINATED,
        "500 3rd Ave N", "Nashville", "TN", "37201", Gender.M, "White",
        date(1980, 12, 5), "615-555-0104", "MKT", "Marketing Specialist",
        assignment_end=date(2023, 1, 15),
    ),
    SampleEmployee(
        "E1005", "Emma", "Wilson", "emma.wilson@example.com", "555-55-5555",
        date(2022, 6, 10), "45000.00", EmploymentStatus.ACTIVE,
        "700 20th St S", "Birmingham", "AL", "35233", Gender.F, "Hispanic or Latino",
        date(1995, 7, 30), "205-555-0105", "OPS", "Customer Support Representative",
    ),
)

# (emp_number, pay_date, period_start, period_end, gross, net, federal, state, other)
PAYROLL = (
    ("E1001", date(2024, 1, 31), date(2024, 1, 1), date(2024, 1, 31), "7083.33", "5400.00", "1100.00", "400.00", "583.33"),
    ("E1002", date(2024, 1, 31), date(2024, 1, 1), date(2024, 1, 31), "7666.67", "5800.00", "1200.00", "420.00", "246.67"),
    ("E1003", date(2024, 1, 31), date(2024, 1, 1), date(2024, 1, 31), "6500.00", "5000.00", "900.00", "350.00", "250.00"),
    ("E1005", date(2024, 1, 31), date(2024, 1, 1), date(2024, 1, 31), "3750.00", "2900.00", "500.00", "200.00", "150.00"),
    ("E1001", date(2024, 2, 29), date(2024, 2, 1), date(2024, 2, 29), "7083.33", "5450.00", "1080.00", "400.00", "553.33"),
    ("E1002", date(2024, 2, 29), date(2024, 2, 1), date(2024, 2, 29), "7666.67", "5850.00", "1180.00", "420.00", "216.67"),
    ("E1003", date(2024, 2, 29), date(2024, 2, 1), date(2024, 2, 29), "6500.00", "5050.00", "880.00", "350.00", "220.00"),
    ("E1005", date(2024, 2, 29), date(2024, 2, 1), date(2024, 2, 29), "3750.00", "2950.00", "480.00", "200.00", "120.00"),
    ("E1001", date(2024, 3, 31), date(2024, 3, 1), date(2024, 3, 31), "7083.33", "5500.00", "1060.00", "400.00", "523.33"),
    ("E1002", date(2024, 3, 31), date(2024, 3, 1), date(2024, 3, 31), "7666.67", "5900.00", "1160.00", "420.00", "186.67"),
    ("E1003", date(2024, 3, 31), date(2024, 3, 1), date(2024, 3, 31), "6500.00", "5100.00", "860.00", "350.00", "190.00"),
    ("E1005", date(2024, 3, 31), date(2024, 3, 1), date(2024, 3, 31), "3750.00", "3000.00", "460.00", "200.00", "90.00"),
)


async def load_sample_data(session: AsyncSession) -> dict[str, int]:
    """Insert the sample dataset; returns emp_number → empid.

    The caller owns the transaction; nothing here commits.
    """
    states = {code: State(state_code=code, state_name=name) for code, name in STATES}
    session.add_all(states.values())
    cities = {name: City(city_name=name, state=states[code]) for name, code in CITIES}
    session.add_all(cities.values())
    divisions = {code: Division(division_name=name, division_code=code) for name, code in DIVISIONS}
    session.add_all(divisions.values())
    titles = {name: JobTitle(job_title=name, base_salary=Decimal(salary)) for name, salary in JOB_TITLES}
    session.add_all(titles.values())
    await session.flush()

    employees: dict[str, Employee] = {}
    for sample in EMPLOYEES:
        employee = Employee(
            emp_number=sample.emp_number,
            first_name=sample.first_name,
            last_name=sample.last_name,
            email=sample.email,
            ssn=sample.ssn,
            hire_date=sample.hire_date,
            current_salary=Decimal(sample.salary),
            employment_status=sample.status,
        )
        employee.address = Address(
            street=sample.street,
            city_id=cities[sample.city].city_id,
            state_id=states[sample.state].state_id,
            zip=sample.zip,
            gender=sample.gender,
            race=sample.race,
            date_of_birth=sample.date_of_birth,
            phone=sample.phone,
        )
        session.add(employee)
        employees[sample.emp_number] = employee
    await session.flush()

    for sample in EMPLOYEES:
        empid = employees[sample.emp_number].empid
        current = sample.assignment_end is None
        session.add(
            EmployeeDivision(
                empid=empid,
                div_id=divisions[sample.division].div_id,
                start_date=sample.hire_date,
                end_date=sample.assignment_end,
                is_current=current,
            )
        )
        session.add(
            EmployeeJobTitle(
                empid=empid,
                job_title_id=titles[sample.job_title].job_title_id,
                start_date=sample.hire_date,
                end_date=sample.assignment_end,
                is_current=current,
            )
        )

    for emp_number, pay_date, start, end, gross, net, federal, state, other in PAYROLL:
        session.add(
            PayrollRecord(
                empid=employees[emp_number].empid,
                pay_date=pay_date,
                pay_period_start=start,
                pay_period_end=end,
                gross_pay=Decimal(gross),
                net_pay=Decimal(net),
                federal_tax=Decimal(federal),
                state_tax=Decimal(state),
                other_deductions=Decimal(other),
            )
        )
    await session.flush()
    logger.info("Loaded sample data: %d employees, %d payroll rows", len(employees), len(PAYROLL))
    return {number: employee.empid for number, employee in employees.items()}
