"""Tests for monodeps CLI entrypoints."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

import monodeps.main as main


@pytest.fixture(autouse=True)
def _quiet_logging(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(main, "setup_logging", lambda *a, **k: None)


def _run(*argv: str) -> int:
    return main.main(list(argv))


def test_main_dispatches_deps_command(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    captured: dict[str, object] = {}

    def fake_deps_command(args) -> int:
        captured["args"] = args
        return 0

    monkeypatch.setattr(main, "deps_command", fake_deps_command)

    exit_code = _run("deps", "@acme/app", "--root", str(tmp_path), "--transitive")

    assert exit_code == 0
    parsed = captured["args"]
    assert parsed.package == "@acme/app"
    assert parsed.root == str(tmp_path)
    assert parsed.transitive is True


def test_main_without_command_prints_help(capsys: pytest.CaptureFixture[str]) -> None:
    assert _run() == 1
    assert "usage:" in capsys.readouterr().out


def test_main_maps_unexpected_errors_to_exit_code(monkeypatch: pytest.MonkeyPatch) -> None:
    def boom(args) -> int:
        raise RuntimeError("unexpected")

    monkeypatch.setattr(main, "order_command", boom)

    assert _run("order") == 1


def test_list_json(monorepo_root: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert _run("list", "--root", str(monorepo_root), "--json") == 0

    payload = json.loads(capsys.readouterr().out)
    assert [entry["name"] for entry in payload] == ["@acme/app", "@acme/lib-a", "@acme/lib-b"]
    assert payload[2] == {"name": "@acme/lib-b", "version": "2.0.0", "directory": "packages/lib-b"}


def test_list_table(monorepo_root: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert _run("list", "--root", str(monorepo_root)) == 0
    out = capsys.readouterr().out
    assert "@acme/lib-a" in out
    assert "packages/lib-b" in out


def test_deps_direct_and_transitive(monorepo_root: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert _run("deps", "@acme/app", "--root", str(monorepo_root), "--json") == 0
    assert json.loads(capsys.readouterr().out) == ["@acme/lib-a"]

    assert _run("deps", "@acme/app", "--root", str(monorepo_root), "-t", "--json") == 0
    assert json.loads(capsys.readouterr().out) == ["@acme/lib-a", "@acme/lib-b"]

    assert _run("deps", "@acme/app", "--root", str(monorepo_root), "-t") == 0
    out = capsys.readouterr().out
    assert "@acme/lib-b (packages/lib-b)" in out


def test_deps_unknown_package(monorepo_root: Path) -> None:
    assert _run("deps", "react", "--root", str(monorepo_root)) == 1


def test_version_command(monorepo_root: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert _run("version", "@acme/app", "react", "--root", str(monorepo_root)) == 0
    assert capsys.readouterr().out.strip() == "^18.0.0"

    assert _run("version", "@acme/app", "vue", "--root", str(monorepo_root)) == 1


def test_pack_name_command(monorepo_root: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert _run("pack-name", "@acme/lib-b", "--root", str(monorepo_root)) == 0
    assert capsys.readouterr().out.strip() == "acme-lib-b-2.0.0.tgz"


def test_cycles_command(
    monorepo_root: Path, write_json, capsys: pytest.CaptureFixture[str]
) -> None:
    assert _run("cycles", "--root", str(monorepo_root), "--fail-on-cycle") == 0

    write_json(
        "packages/lib-b/package.json",
        {"name": "@acme/lib-b", "version": "2.0.0", "devDependencies": {"@acme/lib-a": "*"}},
    )

    assert _run("cycles", "--root", str(monorepo_root)) == 0
    assert "Cycle 1: @acme/lib-a -> @acme/lib-b -> @acme/lib-a" in capsys.readouterr().out
    assert _run("cycles", "--root", str(monorepo_root), "--fail-on-cycle") == 1


def test_order_command(monorepo_root: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert _run("order", "--root", str(monorepo_root), "--json") == 0
    assert json.loads(capsys.readouterr().out) == [
        ["@acme/lib-b"],
        ["@acme/lib-a"],
        ["@acme/app"],
    ]


def test_check_command(monorepo_root: Path, write_json, capsys: pytest.CaptureFixture[str]) -> None:
    # No root tsconfig.json
    assert _run("check", "--root", str(monorepo_root)) == 1

    write_json("packages/app/tsconfig.json", {"compilerOptions": {}})
    write_json("packages/lib-a/tsconfig.json", {"compilerOptions": {}})
    write_json(
        "tsconfig.json",
        {"files": [], "references": [{"path": "./packages/app"}, {"path": "packages/gone"}]},
    )

    assert _run("check", "--root", str(monorepo_root)) == 1
    out = capsys.readouterr().out
    assert "missing reference: packages/lib-a" in out
    assert "stale reference: packages/gone" in out

    write_json(
        "tsconfig.json",
        {
            "files": [],
            "references": [
                {"path": "packages/app"},
                {"path": "packages/lib-a/tsconfig.json"},
            ],
        },
    )
    assert _run("check", "--root", str(monorepo_root)) == 0


def test_config_option_is_applied(monorepo_root: Path, capsys: pytest.CaptureFixture[str]) -> None:
    config = '{"workspace": {"packages": ["packages/lib-*"]}}'

    assert _run("list", "--root", str(monorepo_root), "--config", config, "--json") == 0
    names = [entry["name"] for entry in json.loads(capsys.readouterr().out)]
    assert names == ["@acme/lib-a", "@acme/lib-b"]


def test_invalid_config_fails(monorepo_root: Path) -> None:
    assert _run("list", "--root", str(monorepo_root), "--config", '{"bogus": 1}') == 1


def test_config_option_before_command(
    monorepo_root: Path, tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    config_path = tmp_path / "settings.toml"
    config_path.write_text('[workspace]\npackages = ["packages/app"]\n', encoding="utf-8")

    assert _run("--config", str(config_path), "list", "--root", str(monorepo_root), "--json") == 0
    names = [entry["name"] for entry in json.loads(capsys.readouterr().out)]
    assert names == ["@acme/app"]


def test_config_option_after_command_takes_precedence(
    monorepo_root: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    outer = '{"workspace": {"packages": ["packages/app"]}}'
    inner = '{"workspace": {"packages": ["packages/lib-b"]}}'

    argv = ("-c", outer, "list", "--root", str(monorepo_root), "-c", inner, "--json")
    assert _run(*argv) == 0
    names = [entry["name"] for entry in json.loads(capsys.readouterr().out)]
    assert names == ["@acme/lib-b"]


def test_absolute_workspace_glob_fails_cleanly(monorepo_root: Path, write_json) -> None:
    write_json("package.json", {"name": "root", "version": "0.0.0", "workspaces": ["/abs/*"]})

    assert _run("list", "--root", str(monorepo_root)) == 1


def test_check_ignores_root_package(
    monorepo_root: Path, write_json, capsys: pytest.CaptureFixture[str]
) -> None:
    write_json(
        "package.json",
        {"name": "root", "version": "0.0.0", "workspaces": [".", "packages/*"]},
    )
    write_json("packages/app/tsconfig.json", {"compilerOptions": {}})
    write_json("tsconfig.json", {"files": [], "references": [{"path": "packages/app"}]})

    assert _run("check", "--root", str(monorepo_root)) == 0
    assert "missing reference" not in capsys.readouterr().out
