"""CLI principal (Typer).

Flujo:
1. Validar parámetros -> `LaunchParams`.
2. Obtener el documento (registro HTTP o fichero local).
3. Extraer el mapa de dependencias de la versión e imprimir los pares.
4. Con `--max-depth` o `--ascii`, recorrer además el grafo transitivo.

Los casos "sin datos" terminan con código 0; parámetros inválidos y fallos
de transporte o lectura terminan con código 1.
"""

from __future__ import annotations

import logging
from pathlib import Path

import typer
from rich.console import Console

from adapters.document_source import read_local_document
from adapters.http_client import fetch_document
from adapters.json_exporter import export_report_json
from cli.ui_components import (
    print_error,
    print_params,
    print_plain,
    print_report,
    print_tree,
    print_usage,
)
from core.config import AppSettings
from core.domain.models import DependencyReport, LaunchParams, RunMode
from core.errors import DocumentReadError, FetchError, ParameterError
from core.extraction import SPLITTERS
from core.log import setup_logging
from core.services.dependency_report import dependency_names, extract_dependencies
from core.services.dependency_tree import RegistryChildren, ascii_tree_lines, flat_lines
from core.services.launch_params import build_launch_params

app = typer.Typer(
    add_completion=False,
    help="Prints the declared dependencies of one package version from a registry document.",
)

_console = Console(highlight=False)
_err_console = Console(stderr=True, highlight=False)

logger = logging.getLogger(__name__)


def parse_extra_args(args: list[str]) -> dict[str, str]:
    """Opciones que Click no reconoce, en forma `--clave=valor` o `--clave valor`."""

    extra: dict[str, str] = {}
    i = 0
    while i < len(args):
        item = args[i]
        i += 1
        if "=" in item:
            key, value = item.split("=", 1)
        elif i < len(args) and not args[i].startswith("--"):
            key, value = item, args[i]
            i += 1
        else:
            key, value = item, ""
        extra[key] = value
    return extra


def load_package_document(params: LaunchParams, settings: AppSettings, package_name: str) -> str:
    if params.mode is RunMode.TEST:
        return read_local_document(params.local_document_path(package_name))
    return fetch_document(params.package_url(settings.registry_url, package_name), settings=settings)


def load_document(params: LaunchParams, settings: AppSettings) -> str:
    if params.mode is RunMode.REAL:
        print_plain(_console, f"\nПолучаю данные о пакете: {params.package_url(settings.registry_url)}")
    return load_package_document(params, settings, params.package_name)


def run_extraction(params: LaunchParams, settings: AppSettings) -> DependencyReport:
    doc = load_document(params, settings)
    return extract_dependencies(
        doc,
        params.version,
        dependency_key=params.dependency_key,
        splitter=SPLITTERS[settings.entry_split],
        package_name=params.package_name,
    )


def build_tree(params: LaunchParams, settings: AppSettings, report: DependencyReport) -> list[str]:
    children = RegistryChildren(
        lambda name: load_package_document(params, settings, name),
        dependency_key=settings.transitive_dependency_key,
        splitter=SPLITTERS[settings.entry_split],
    )
    children.seed(params.package_name, dependency_names(report))
    render = ascii_tree_lines if params.ascii else flat_lines
    return render(params.package_name, children, params.tree_depth)


@app.command(context_settings={"allow_extra_args": True, "ignore_unknown_options": True})
def deps(
    ctx: typer.Context,
    package_name: str | None = typer.Option(None, "--package-name", help="Package name in the registry."),
    version: str | None = typer.Option(None, "--version", help="Exact version key to look up."),
    repo_url: str | None = typer.Option(None, "--repo-url", help="Registry base URL."),
    repo_path: str | None = typer.Option(None, "--repo-path", help="Local registry document (test mode)."),
    mode: str | None = typer.Option(None, "--mode", help="real | test."),
    ascii_tree: str | None = typer.Option(None, "--ascii", help="true | false."),
    max_depth: str | None = typer.Option(None, "--max-depth", help="Integer in [1..1000]."),
    dependency_key: str | None = typer.Option(
        None, "--dependency-key", help="Nested object to extract (default from settings)."
    ),
    output: Path | None = typer.Option(None, "--output", help="Also write the report as JSON."),
    verbose: bool = typer.Option(False, "--verbose", help="Debug logging on stderr."),
) -> None:
    """Print `<key> = <value>` for every entry of the version's dependency map."""

    settings = AppSettings()
    setup_logging("DEBUG" if verbose else settings.log_level, console=_err_console)

    raw = {
        "--package-name": package_name,
        "--version": version,
        "--repo-url": repo_url,
        "--repo-path": repo_path,
        "--mode": mode,
        "--ascii": ascii_tree,
        "--max-depth": max_depth,
        "--dependency-key": dependency_key,
    }
    raw.update(parse_extra_args(ctx.args))

    try:
        params = build_launch_params(raw, default_dependency_key=settings.dependency_key)
    except ParameterError as exc:
        print_error(_err_console, str(exc))
        print_usage(_console)
        raise typer.Exit(code=1) from exc

    print_params(_console, params)

    try:
        report = run_extraction(params, settings)
    except (FetchError, DocumentReadError) as exc:
        print_error(_err_console, str(exc))
        raise typer.Exit(code=1) from exc

    logger.info("outcome=%s entries=%d", report.outcome.value, len(report.entries))
    print_report(_console, report)

    if params.show_tree and report.found:
        print_tree(_console, params, build_tree(params, settings, report))

    if output is not None:
        path = export_report_json(report=report, output_path=output)
        print_plain(_console, f"\nJSON: {path}")


def run() -> None:
    app()


if __name__ == "__main__":
    run()
