"""Test runner for .tests files: serialized IR in, phase result out."""

from dataclasses import dataclass, field
from pathlib import Path

import pytest

from tsgen.backend import TaggingError, TypeMappingError, emit_typescript
from tsgen.backend.lowering import lower_all
from tsgen.frontend import LoadError, load_containers
from tsgen.serialize import serialize

TESTS_DIR = Path(__file__).parent

TESTS = {
    "tsgen_load": {"dir": "loader"},
    "tsgen_lower": {"dir": "lowering"},
}


# ---------------------------------------------------------------------------
# .tests file parsing
# ---------------------------------------------------------------------------


def parse_tests_file(path: Path) -> list[tuple[str, str, str]]:
    """Parse a .tests file into (name, input, expected) tuples."""
    lines = path.read_text().split("\n")
    result: list[tuple[str, str, str]] = []
    i = 0
    while i < len(lines):
        line = lines[i]
        if line.startswith("=== "):
            test_name = line[4:].strip()
            i += 1
            input_lines: list[str] = []
            while i < len(lines) and not lines[i].startswith("---"):
                input_lines.append(lines[i])
                i += 1
            if i < len(lines) and lines[i] == "---":
                i += 1
            expected_lines: list[str] = []
            while i < len(lines) and not lines[i].startswith("---"):
                expected_lines.append(lines[i])
                i += 1
            if i < len(lines) and lines[i] == "---":
                i += 1
            test_input = "\n".join(input_lines)
            expected = "\n".join(expected_lines).strip()
            result.append((test_name, test_input, expected))
        else:
            i += 1
    return result


def discover_cases(test_dir: Path) -> list[tuple[str, str, str]]:
    """Glob *.tests in test_dir, return (test_id, input, expected) tuples."""
    results = []
    for test_file in sorted(test_dir.glob("*.tests")):
        for name, input_code, expected in parse_tests_file(test_file):
            results.append((f"{test_file.stem}/{name}", input_code, expected))
    return results


# ---------------------------------------------------------------------------
# Phase result + assertion checker
# ---------------------------------------------------------------------------


@dataclass
class PhaseResult:
    errors: list[str] = field(default_factory=list)
    data: object = None
    text: str = ""


def resolve_dotpath(obj: object, path: str) -> object:
    """Resolve a dot-separated path against a nested dict/list structure."""
    current = obj
    for part in path.split("."):
        if part == "length":
            return len(current)
        if isinstance(current, list):
            current = current[int(part)]
        elif isinstance(current, dict):
            current = current[part]
        else:
            raise KeyError(
                f"cannot traverse {type(current).__name__} with key {part!r}"
            )
    return current


def to_comparable(value: object) -> str:
    """Convert a value to its string form for comparison."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, str):
        return value
    return str(value)


def check_error(expected: str, result: PhaseResult) -> None:
    expected_msg = expected[6:].strip()
    if not result.errors:
        pytest.fail(f"Expected error containing '{expected_msg}', got ok")
    found = any(expected_msg.lower() in e.lower() for e in result.errors)
    if not found:
        pytest.fail(f"Expected error containing '{expected_msg}', got: {result.errors}")


def check_dotpaths(expected: str, result: PhaseResult) -> None:
    if result.errors:
        pytest.fail(f"load failed: {result.errors[0]}")
    for line in expected.split("\n"):
        line = line.strip()
        if not line:
            continue
        if "=" not in line:
            pytest.fail(f"Bad assertion (no '='): {line}")
        path, expected_val = line.split("=", 1)
        path = path.strip()
        expected_val = expected_val.strip()
        try:
            actual = resolve_dotpath(result.data, path)
        except (KeyError, IndexError, TypeError, ValueError) as e:
            pytest.fail(f"Path '{path}' not found in result: {e}")
        actual_str = to_comparable(actual)
        if actual_str != expected_val:
            pytest.fail(
                f"Assertion failed: {path}\n"
                f"  expected: {expected_val!r}\n"
                f"  actual:   {actual_str!r}"
            )


def check_text(expected: str, result: PhaseResult) -> None:
    if result.errors:
        pytest.fail(f"lower failed: {result.errors[0]}")
    actual = result.text.strip()
    if actual != expected:
        pytest.fail(f"Output mismatch:\n--- expected ---\n{expected}\n--- got ---\n{actual}")


# ---------------------------------------------------------------------------
# Phase runners
# ---------------------------------------------------------------------------


def run_load(source: str) -> PhaseResult:
    try:
        return PhaseResult(data=serialize(load_containers(source)))
    except LoadError as e:
        return PhaseResult(errors=[str(e)])


def run_lower(source: str) -> PhaseResult:
    try:
        definitions = lower_all(load_containers(source))
    except (LoadError, TypeMappingError, TaggingError) as e:
        return PhaseResult(errors=[str(e)])
    return PhaseResult(text=emit_typescript(definitions))


# ---------------------------------------------------------------------------
# Parametrization
# ---------------------------------------------------------------------------


def pytest_generate_tests(metafunc):
    for name, cfg in TESTS.items():
        fixture = f"{name}_input"
        if fixture in metafunc.fixturenames:
            cases = discover_cases(TESTS_DIR / cfg["dir"])
            params = [pytest.param(inp, exp, id=tid) for tid, inp, exp in cases]
            metafunc.parametrize(f"{fixture},{name}_expected", params)


# ---------------------------------------------------------------------------
# Test functions
# ---------------------------------------------------------------------------


def test_tsgen_load(tsgen_load_input, tsgen_load_expected):
    result = run_load(tsgen_load_input)
    if tsgen_load_expected.startswith("error:"):
        check_error(tsgen_load_expected, result)
    else:
        check_dotpaths(tsgen_load_expected, result)


def test_tsgen_lower(tsgen_lower_input, tsgen_lower_expected):
    result = run_lower(tsgen_lower_input)
    if tsgen_lower_expected.startswith("error:"):
        check_error(tsgen_lower_expected, result)
    else:
        check_text(tsgen_lower_expected, result)
