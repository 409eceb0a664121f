from __future__ import annotations

from pathlib import Path


class ProjectRootNotFoundError(RuntimeError):
    pass


def project_root(start_path: Path | None = None, marker: str = "pyproject.toml") -> Path:
    """
    Sobe a partir do cwd (ou start_path) até achar o diretório com ``marker``.

    Usado pelos scripts para achar conf/ e a pasta de logs independente de
    onde foram chamados.
    """
    current = (start_path or Path.cwd()).resolve()

    for parent in [current] + list(current.parents):
        if (parent / marker).exists():
            return parent

    raise ProjectRootNotFoundError(f"Could not find project root ({marker} not found above {current}).")


def resolve_in_project(path: str | Path, start_path: Path | None = None) -> Path:
    """Caminhos relativos são resolvidos a partir do root do projeto."""
    p = Path(path)
    if p.is_absolute():
        return p
    return project_root(start_path) / p
