"""Console messages printed after a build."""
from __future__ import annotations

from .build_tool import BuildOutcome
from .console import Console


BUILD_SUCCEEDED = "Build OK!"
BUILD_FAILED = "Build falhou!"
COMPILING_FORMAT = "Compilando {0}..."
ELAPSED_TIME_FORMAT = "Tempo de execução: {0}s"


def report_build(outcome: BuildOutcome, console: Console) -> None:
    # stderr is echoed even when empty
    console.status(outcome.stderr)
    console.status(COMPILING_FORMAT.format(outcome.descriptor))
    console.status(BUILD_SUCCEEDED if outcome.succeeded else BUILD_FAILED)
    console.status(ELAPSED_TIME_FORMAT.format(int(outcome.elapsed)))
    console.debug(f"Build tool exited with code {outcome.returncode}")
