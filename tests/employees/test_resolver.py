from __future__ import annotations

import pytest

from src.biometric_sync.biometric_sync.employees.model import Employee, normalize_code, strip_code
from src.biometric_sync.biometric_sync.employees.resolver import EmployeeResolver, default_strategies
from src.biometric_sync.biometric_sync.employees.strategies.biometric_code_strategy import BiometricCodeStrategy
from src.biometric_sync.biometric_sync.employees.strategies.exact_strategy import ExactCodeStrategy
from src.biometric_sync.biometric_sync.employees.strategies.normalized_strategy import NormalizedCodeStrategy
from src.biometric_sync.biometric_sync.employees.strategies.stripped_strategy import StrippedCodeStrategy


def test_code_variants():
    assert normalize_code("  emp-001 ") == "EMP-001"
    assert strip_code(" emp-0 01.") == "EMP001"


def test_default_strategy_order():
    assert [s.name for s in default_strategies()] == [
        "exact",
        "case-insensitive",
        "normalized",
        "stripped",
        "biometric-code",
    ]


@pytest.mark.parametrize("raw, employee_id, strategy", [
    ("EMP-001", 1, "exact"),
    ("  EMP-001\t", 1, "exact"),
    ("emp-001", 1, "case-insensitive"),
    ("EMP 002", 2, "stripped"),
    ("t-0042", 3, "biometric-code"),
])
def test_resolution_strategies_first_match_wins(employees, raw, employee_id, strategy):
    resolution = EmployeeResolver(employees).resolve_with_strategy(raw)

    assert resolution is not None
    assert resolution.employee.employee_id == employee_id
    assert resolution.strategy == strategy


def test_unknown_code_is_not_found(employees):
    assert EmployeeResolver(employees).resolve("ZZ-999") is None


def test_blank_code_does_not_hit_the_directory(employees):
    assert EmployeeResolver(employees).resolve("   ") is None
    assert employees.lookups == []


def test_resolution_stops_at_first_hit(employees):
    EmployeeResolver(employees).resolve("EMP-001")

    assert employees.lookups == [("code", "EMP-001")]


def test_normalized_strategy_in_isolation(employees):
    found = NormalizedCodeStrategy().find(employees, " emp-001 ")

    assert found is not None and found.employee_id == 1


def test_stripped_strategy_ignores_punctuation_only_codes(employees):
    assert StrippedCodeStrategy().find(employees, "--") is None


def test_biometric_strategy_falls_back_to_stripped_variant(employee_repo):
    repo = employee_repo([Employee(employee_id=4, employee_code="9001", full_name="Dee Kay", biometric_code="AB12")])

    assert BiometricCodeStrategy().find(repo, "ab-12").employee_id == 4
    assert repo.lookups == [("biometric", "AB-12"), ("biometric", "AB12")]
    assert EmployeeResolver(repo).resolve("ab-12").employee_id == 4


def test_custom_strategy_list_is_respected(employees):
    resolver = EmployeeResolver(employees, strategies=[ExactCodeStrategy()])

    assert resolver.resolve("emp-001") is None
    assert [s.name for s in resolver.strategies] == ["exact"]
