"""Failure kinds reported by singlebuild.

Each error carries the fixed console message shown to the user and the exit
code the process terminates with.
"""
from __future__ import annotations


class SingleBuildError(RuntimeError):
    """Base class for every failure that ends a run."""

    default_message = "Erro."
    exit_code = 1

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class InvalidArgument(SingleBuildError):
    default_message = "Argumento não informado."


class InvalidDirectory(SingleBuildError):
    default_message = "Diretório inválido."


class DescriptorNotFound(SingleBuildError):
    default_message = "Arquivo .csproj não encontrado."

    @classmethod
    def for_pattern(cls, pattern: str) -> "DescriptorNotFound":
        suffix = pattern.lstrip("*") or pattern
        return cls(f"Arquivo {suffix} não encontrado.")


class BuildToolNotFound(SingleBuildError):
    default_message = "MSbuild.exe não foi encontrado."

    @classmethod
    def missing_variable(cls, name: str) -> "BuildToolNotFound":
        return cls(f"Variável %{name}% não encontrada.")


class SubprocessLaunchFailure(SingleBuildError):
    default_message = "Falha ao iniciar o processo de build."

    @classmethod
    def from_exception(cls, exc: BaseException) -> "SubprocessLaunchFailure":
        return cls(f"Falha ao iniciar o processo de build: {exc}")


class BuildFailed(SingleBuildError):
    default_message = "Build falhou!"


__all__ = [
    "BuildFailed",
    "BuildToolNotFound",
    "DescriptorNotFound",
    "InvalidArgument",
    "InvalidDirectory",
    "SingleBuildError",
    "SubprocessLaunchFailure",
]
