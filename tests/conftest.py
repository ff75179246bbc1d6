import os
from typing import Any

import pytest

# Monkeypatch coverage to bypass teardown crash in act/docker
if os.getenv("COVERAGE_PROCESS_START"):
    import coverage

    coverage.process_startup()

    # Nukes the teardown assertion that fails in act
    import coverage.collector

    def safe_stop(self: Any) -> None:
        if self in getattr(self, "_collectors", []):
            self._collectors.remove(self)

    coverage.collector.Collector.stop = safe_stop


SAMPLE_PROGRAM = """\
/* Greatest common divisor, Euclid's algorithm */
int gcd(int u, int v)
{
    if (v == 0) return u;
    else return gcd(v, u - u / v * v);
}

int data[10];

void main(void)
{
    int x;
    int y;
    x = input();
    y = input();
    output(gcd(x, y));
}
"""


@pytest.fixture  # type: ignore[misc]
def sample_program() -> str:
    return SAMPLE_PROGRAM


@pytest.fixture  # type: ignore[misc]
def sample_file(tmp_path: Any) -> Any:
    path = tmp_path / "gcd.cm"
    path.write_text(SAMPLE_PROGRAM, encoding="utf-8")
    return path
