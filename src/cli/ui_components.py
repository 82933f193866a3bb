"""Componentes de UI para la CLI (Rich).

Las líneas del informe se imprimen sin markup: los tokens crudos pueden
contener corchetes o comillas que Rich interpretaría.
"""

from __future__ import annotations

from rich.console import Console
from rich.text import Text

from core.domain.models import DependencyReport, LaunchParams
from core.services.dependency_report import report_lines

USAGE = """
Использование:
depviz --{parameter}={value} --{parameter}={value}

Параметры:
  --package-name   имя пакета (обязательно)
  --version        версия пакета (обязательно)
  --repo-url       адрес реестра (по умолчанию https://registry.npmjs.org/)
  --repo-path      путь к файлу с документом реестра (режим test)
  --mode           real | test
  --ascii          true | false
  --max-depth      целое число [1..1000]
  --dependency-key имя объекта зависимостей (по умолчанию devDependencies)
"""


def print_plain(console: Console, line: str) -> None:
    console.print(Text(line), soft_wrap=True, highlight=False)


def print_params(console: Console, params: LaunchParams) -> None:
    """Eco de los parámetros tal como se recibieron."""

    print_plain(console, "Параметры запуска:")
    if not params.supplied:
        print_plain(console, "  (пусто)")
        return
    for key, value in params.supplied.items():
        print_plain(console, f"  {key} = {value}")


def print_usage(console: Console) -> None:
    print_plain(console, USAGE)


def print_error(console: Console, message: str) -> None:
    console.print(Text.assemble(("[Ошибка]", "bold red"), " ", message), soft_wrap=True, highlight=False)


def print_tree(console: Console, params: LaunchParams, lines: list[str]) -> None:
    print_plain(console, f"\nГраф зависимостей (max-depth={params.tree_depth}, ascii={str(params.ascii).lower()}):")
    for line in lines:
        print_plain(console, line)


def print_report(console: Console, report: DependencyReport) -> None:
    title = f"{report.package_name}@{report.version}" if report.package_name else report.version
    print_plain(console, f"\nПрямые зависимости для {title}:")
    for line in report_lines(report):
        print_plain(console, line)
