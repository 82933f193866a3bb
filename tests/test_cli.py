"""Tests for the Typer CLI (cli.main)."""

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

import cli.main as cli_main
from core.errors import FetchError

DOC = '{"versions":{"1.0.0":{"devDependencies":{"mocha":"^5.0.0","chai":"^4.0.0"}}}}'

runner = CliRunner()


@pytest.fixture
def fetched(monkeypatch):
    calls = []

    def fake_fetch(url, *, settings=None, transport=None):
        calls.append(url)
        return DOC

    monkeypatch.setattr(cli_main, "fetch_document", fake_fetch)
    return calls


def test_real_mode_prints_pairs(fetched):
    result = runner.invoke(cli_main.app, ["--package-name=demo", "--version=1.0.0"])
    assert result.exit_code == 0, result.output
    assert fetched == ["https://registry.npmjs.org/demo"]
    assert "Параметры запуска:" in result.output
    assert "  --package-name = demo" in result.output
    assert "Получаю данные о пакете: https://registry.npmjs.org/demo" in result.output
    assert "Прямые зависимости для demo@1.0.0:" in result.output
    assert '"mocha" = "^5.0.0"' in result.output
    assert '"chai" = "^4.0.0"' in result.output


def test_repo_url_is_used(fetched):
    result = runner.invoke(
        cli_main.app,
        ["--package-name", "demo", "--version", "1.0.0", "--repo-url", "http://localhost:4873"],
    )
    assert result.exit_code == 0, result.output
    assert fetched == ["http://localhost:4873/demo"]


def test_version_not_found_is_not_an_error(fetched):
    result = runner.invoke(cli_main.app, ["--package-name=demo", "--version=2.0.0"])
    assert result.exit_code == 0
    assert "Версия 2.0.0 не найдена." in result.output


def test_dependency_key_option(fetched):
    result = runner.invoke(
        cli_main.app,
        ["--package-name=demo", "--version=1.0.0", "--dependency-key=dependencies"],
    )
    assert result.exit_code == 0
    assert "Зависимости не найдены." in result.output


def test_invalid_parameters_exit_with_usage(fetched):
    result = runner.invoke(cli_main.app, ["--package-name=demo"])
    assert result.exit_code == 1
    assert "Необходимо указать --package-name и --version" in result.output
    assert "Использование:" in result.output
    assert fetched == []


def test_no_parameters(fetched):
    result = runner.invoke(cli_main.app, [])
    assert result.exit_code == 1
    assert "Отсутствуют параметры" in result.output


def test_fetch_error_aborts(monkeypatch):
    def failing_fetch(url, *, settings=None, transport=None):
        raise FetchError("HTTP ошибка: 404")

    monkeypatch.setattr(cli_main, "fetch_document", failing_fetch)
    result = runner.invoke(cli_main.app, ["--package-name=demo", "--version=1.0.0"])
    assert result.exit_code == 1
    assert "HTTP ошибка: 404" in result.output
    assert "Прямые зависимости" not in result.output


def test_test_mode_reads_local_file(tmp_path: Path, fetched):
    doc = tmp_path / "demo.json"
    doc.write_text(DOC, encoding="utf-8")
    result = runner.invoke(
        cli_main.app,
        ["--mode=test", f"--repo-path={doc}", "--package-name=demo", "--version=1.0.0"],
    )
    assert result.exit_code == 0, result.output
    assert fetched == []
    assert "Получаю данные" not in result.output
    assert '"chai" = "^4.0.0"' in result.output


def test_output_writes_json(tmp_path: Path, fetched):
    out = tmp_path / "report.json"
    result = runner.invoke(
        cli_main.app,
        ["--package-name=demo", "--version=1.0.0", f"--output={out}"],
    )
    assert result.exit_code == 0, result.output
    payload = json.loads(out.read_text(encoding="utf-8"))
    assert payload["outcome"] == "found"
    assert len(payload["entries"]) == 2


def test_entry_split_setting(monkeypatch, fetched):
    doc = '{"versions":{"1.0.0":{"devDependencies":{"a":"x,y"}}}}'
    monkeypatch.setattr(cli_main, "fetch_document", lambda url, *, settings=None, transport=None: doc)
    monkeypatch.setenv("DEPVIZ_ENTRY_SPLIT", "depth")
    result = runner.invoke(cli_main.app, ["--package-name=demo", "--version=1.0.0"])
    assert result.exit_code == 0, result.output
    assert '"a" = "x,y"' in result.output


def test_unknown_parameter_is_reported(fetched):
    result = runner.invoke(cli_main.app, ["--package-name=demo", "--version=1.0.0", "--foo=bar"])
    assert result.exit_code == 1
    assert "Неизвестный параметр: --foo" in result.output
    assert "Использование:" in result.output
    assert fetched == []


def test_unknown_parameter_with_separate_value(fetched):
    result = runner.invoke(cli_main.app, ["--package-name=demo", "--version=1.0.0", "--ignore-substring", "x"])
    assert result.exit_code == 1
    assert "Неизвестный параметр: --ignore-substring" in result.output


def test_parse_extra_args():
    assert cli_main.parse_extra_args(["--a=1=2", "--b", "x", "--c", "--d"]) == {
        "--a": "1=2",
        "--b": "x",
        "--c": "",
        "--d": "",
    }


def test_settings_come_from_isolated_env_file(fetched, isolated_settings):
    (isolated_settings / ".env").write_text("DEPVIZ_REGISTRY_URL=http://mirror.local/\n", encoding="utf-8")
    result = runner.invoke(cli_main.app, ["--package-name=demo", "--version=1.0.0"])
    assert result.exit_code == 0, result.output
    assert fetched == ["http://mirror.local/demo"]


REGISTRY = {
    "demo": DOC,
    "mocha": '{"dist-tags":{"latest":"5.0.0"},"versions":{"5.0.0":{"dependencies":{"debug":"^3.0.0"}}}}',
    "chai": '{"dist-tags":{"latest":"4.0.0"},"versions":{"4.0.0":{"dependencies":{"debug":"^3.0.0"}}}}',
    "debug": '{"dist-tags":{"latest":"3.0.0"},"versions":{"3.0.0":{"dependencies":{"mocha":"^5.0.0"}}}}',
}


@pytest.fixture
def registry(monkeypatch):
    calls = []

    def fake_fetch(url, *, settings=None, transport=None):
        calls.append(url)
        name = url.rsplit("/", 1)[-1]
        if name not in REGISTRY:
            raise FetchError("HTTP ошибка: 404")
        return REGISTRY[name]

    monkeypatch.setattr(cli_main, "fetch_document", fake_fetch)
    return calls


def _output_lines(result) -> list[str]:
    return [line.rstrip() for line in result.output.splitlines()]


def test_ascii_tree_marks_cycles_and_repeats(registry):
    result = runner.invoke(cli_main.app, ["--package-name=demo", "--version=1.0.0", "--ascii=true"])
    assert result.exit_code == 0, result.output
    lines = _output_lines(result)
    start = lines.index("Граф зависимостей (max-depth=100, ascii=true):")
    assert lines[start + 1 : start + 7] == [
        "demo",
        "├── mocha",
        "│   └── debug",
        "│       └── mocha (циклическая зависимость)",
        "└── chai",
        "    └── debug (уже обработан)",
    ]
    assert sorted(set(registry)) == [
        "https://registry.npmjs.org/chai",
        "https://registry.npmjs.org/debug",
        "https://registry.npmjs.org/demo",
        "https://registry.npmjs.org/mocha",
    ]
    assert len(registry) == 4


def test_max_depth_cuts_the_tree(registry):
    result = runner.invoke(cli_main.app, ["--package-name=demo", "--version=1.0.0", "--max-depth=1"])
    assert result.exit_code == 0, result.output
    lines = _output_lines(result)
    start = lines.index("Граф зависимостей (max-depth=1, ascii=true):")
    assert lines[start + 1 : start + 6] == [
        "demo",
        "├── mocha",
        "│   └── ... (max depth reached)",
        "└── chai",
        "    └── ... (max depth reached)",
    ]


def test_flat_listing(registry):
    result = runner.invoke(cli_main.app, ["--package-name=demo", "--version=1.0.0", "--ascii=false"])
    assert result.exit_code == 0, result.output
    lines = _output_lines(result)
    start = lines.index("Список зависимостей (parent -> child):")
    assert lines[start + 1 : start + 6] == [
        "demo -> mocha",
        "  mocha -> debug",
        "    debug -> mocha",
        "demo -> chai",
        "  chai -> debug",
    ]


def test_no_tree_without_depth_or_ascii(registry):
    result = runner.invoke(cli_main.app, ["--package-name=demo", "--version=1.0.0"])
    assert result.exit_code == 0
    assert "Граф зависимостей" not in result.output
    assert registry == ["https://registry.npmjs.org/demo"]


def test_missing_child_is_marked(monkeypatch):
    docs = {"demo": DOC, "mocha": REGISTRY["mocha"], "debug": '{"dist-tags":{"latest":"3.0.0"},"versions":{"3.0.0":{}}}'}

    def fake_fetch(url, *, settings=None, transport=None):
        name = url.rsplit("/", 1)[-1]
        if name not in docs:
            raise FetchError("HTTP ошибка: 404")
        return docs[name]

    monkeypatch.setattr(cli_main, "fetch_document", fake_fetch)
    result = runner.invoke(cli_main.app, ["--package-name=demo", "--version=1.0.0", "--max-depth=5"])
    assert result.exit_code == 0, result.output
    assert "└── chai (не найден/ошибка)" in result.output
    assert "│   └── debug" in result.output


def test_test_mode_tree_reads_sibling_files(tmp_path: Path, fetched):
    for name, doc in REGISTRY.items():
        (tmp_path / f"{name}.json").write_text(doc, encoding="utf-8")
    result = runner.invoke(
        cli_main.app,
        [
            "--mode=test",
            f"--repo-path={tmp_path / 'demo.json'}",
            "--package-name=demo",
            "--version=1.0.0",
            "--ascii=false",
            "--max-depth=1",
        ],
    )
    assert result.exit_code == 0, result.output
    assert fetched == []
    lines = _output_lines(result)
    start = lines.index("Список зависимостей (parent -> child):")
    assert lines[start + 1 : start + 3] == ["demo -> mocha", "demo -> chai"]
