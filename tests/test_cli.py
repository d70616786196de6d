import csv
import json
from pathlib import Path

import pytest

from entity_match.cli import main


def _write_csv(path: Path, rows: list[dict[str, str]]) -> Path:
    with path.open("w", newline="", encoding="utf-8") as handle:
        writer = csv.DictWriter(handle, fieldnames=list(rows[0]))
        writer.writeheader()
        writer.writerows(rows)
    return path


def _stdout_json(capsys: pytest.CaptureFixture[str]) -> object:
    return json.loads(capsys.readouterr().out)


def test_duplicates_command(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    existing = _write_csv(
        tmp_path / "suppliers.csv",
        [
            {"id": "1", "name": "TechDistributor SA", "email": "ventas@tech.com", "phone": "", "website": ""},
            {"id": "2", "name": "Andina Supplies", "email": "info@andina.com", "phone": "", "website": ""},
        ],
    )
    candidate = json.dumps({"name": "Tech Distributor SA", "email": "Ventas@Tech.com"})

    main(["duplicates", "--candidate", candidate, "--existing-csv", str(existing)])

    payload = _stdout_json(capsys)
    assert [m["record_id"] for m in payload] == ["1"]
    assert payload[0]["reasons"] == ["Nombre similar", "Email idéntico"]


def test_search_command_with_usage(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    items = _write_csv(
        tmp_path / "products.csv",
        [
            {"id": "p1", "name": "iPhone 14", "kind": "product"},
            {"id": "p2", "name": "iPhone 15", "kind": "product"},
            {"id": "p3", "name": "Cable USB", "kind": "product"},
        ],
    )
    store = tmp_path / "usage.json"

    main(["record-usage", "p2", "--usage-store", str(store), "--now", "1000"])
    capsys.readouterr()
    main(["search", "iphone", "--items-csv", str(items), "--usage-store", str(store)])

    payload = _stdout_json(capsys)
    assert [r["id"] for r in payload] == ["p2", "p1"]


def test_structured_search_command(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    customers = _write_csv(
        tmp_path / "customers.csv",
        [
            {"id": "c1", "first_name": "Juan", "last_name": "Perez", "email": "", "phone": "11 5555-1234"},
            {"id": "c2", "first_name": "Ana", "last_name": "Diaz", "email": "ana@mail.com", "phone": ""},
        ],
    )

    main(["search", "1234", "--structured", "--items-csv", str(customers)])

    payload = _stdout_json(capsys)
    assert payload == [{"id": "c1", "name": "Juan Perez", "score": 0.8}]


def test_usage_commands(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    store = str(tmp_path / "usage.json")
    for now in ("1000", "2000", "3000"):
        main(["record-usage", "c1", "--usage-store", store, "--now", now])
    main(["record-usage", "c2", "--usage-store", store, "--now", "4000"])
    capsys.readouterr()

    main(["usage", "favorites", "--usage-store", store])
    assert [r["entity_id"] for r in _stdout_json(capsys)] == ["c1"]

    main(["usage", "recent", "--usage-store", store, "--now", "5000"])
    assert [r["entity_id"] for r in _stdout_json(capsys)] == ["c2", "c1"]


def test_run_test_finds_generated_duplicates(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    main(["run-test", "--size", "40", "--duplicate-rate", "0.25", "--output-dir", str(tmp_path)])

    summary = json.loads((tmp_path / "summary.json").read_text(encoding="utf-8"))
    assert summary["record_count"] == 40
    assert summary["duplicate_count"] == 10
    assert summary["recall"] == 1.0
    assert (tmp_path / "dataset.csv").exists()
    assert "recall=1.0" in capsys.readouterr().out


def test_bad_config_exits_with_error(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    config = tmp_path / "config.json"
    config.write_text(json.dumps({"duplicates": {"unknown": 1}}), encoding="utf-8")

    with pytest.raises(SystemExit) as exc_info:
        main(["--config", str(config), "usage", "favorites", "--usage-store", str(tmp_path / "u.json")])

    assert exc_info.value.code == 1
    assert "unknown DuplicateRules keys" in capsys.readouterr().err


def test_missing_candidate_file_exits_with_error(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    existing = _write_csv(
        tmp_path / "suppliers.csv",
        [{"id": "1", "name": "Acme", "email": "", "phone": "", "website": ""}],
    )

    with pytest.raises(SystemExit) as exc_info:
        main(
            [
                "duplicates",
                "--candidate-file",
                str(tmp_path / "missing.json"),
                "--existing-csv",
                str(existing),
            ]
        )

    assert exc_info.value.code == 1
    assert "cannot read candidate file" in capsys.readouterr().err
