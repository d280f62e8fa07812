from __future__ import annotations

import base64
import io
import json
from pathlib import Path

import pytest
from PIL import Image

from kritrim_engine.cli import EXIT_BAD_INPUT, EXIT_OK, main, write_results
from kritrim_engine.jobs import Job, JobStatus


def _photo(tmp_path: Path) -> Path:
    path = tmp_path / "me.png"
    Image.new("RGB", (64, 80), (120, 90, 60)).save(path, format="PNG")
    return path


def _run(argv: list[str]) -> int:
    with pytest.raises(SystemExit) as excinfo:
        main(argv)
    return int(excinfo.value.code)


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("KRITRIM_PROVIDER", raising=False)
    monkeypatch.delenv("KRITRIM_CONCURRENCY", raising=False)


def test_quick_trip_writes_images_and_events(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    out_dir = tmp_path / "out"
    code = _run(
        [
            "quick",
            "--image",
            str(_photo(tmp_path)),
            "--out",
            str(out_dir),
            "--provider",
            "dryrun",
            "--era",
            "Viking Warrior",
            "--era",
            "Roman Gladiator",
            "--album",
        ]
    )
    assert code == EXIT_OK
    assert (out_dir / "kritrim-viking-warrior.png").exists()
    assert (out_dir / "kritrim-roman-gladiator.png").exists()
    assert (out_dir / "kritrim-album.jpg").exists()

    events = [json.loads(line) for line in (out_dir / "events.jsonl").read_text(encoding="utf-8").splitlines()]
    types = [event["type"] for event in events]
    assert "session_started" in types
    assert types.count("job_done") == 2
    assert "✓ Viking Warrior" in capsys.readouterr().out


def test_missing_required_fields_exit_bad_input(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    code = _run(
        [
            "imagination",
            "--image",
            str(_photo(tmp_path)),
            "--out",
            str(tmp_path / "out"),
            "--provider",
            "dryrun",
            "--scenery",
            "a harbor",
        ]
    )
    assert code == EXIT_BAD_INPUT
    assert "required fields" in capsys.readouterr().err


def test_unreadable_image_exit_bad_input(tmp_path: Path) -> None:
    bad = tmp_path / "notes.txt"
    bad.write_text("hello", encoding="utf-8")
    code = _run(
        ["filter", "--image", str(bad), "--out", str(tmp_path / "out"), "--provider", "dryrun", "--filter", "Cyanotype"]
    )
    assert code == EXIT_BAD_INPUT


def test_filter_session_writes_one_image(tmp_path: Path) -> None:
    out_dir = tmp_path / "out"
    code = _run(
        [
            "filter",
            "--image",
            str(_photo(tmp_path)),
            "--out",
            str(out_dir),
            "--provider",
            "dryrun",
            "--filter",
            "Golden Hour",
        ]
    )
    assert code == EXIT_OK
    assert [path.name for path in out_dir.glob("kritrim-*")] == ["kritrim-golden-hour.png"]


def test_suggest_prints_suggestion(capsys: pytest.CaptureFixture[str]) -> None:
    assert _run(["suggest", "scenery", "--provider", "dryrun"]) == EXIT_OK
    assert capsys.readouterr().out.strip()


def test_catalog_lists_regions(capsys: pytest.CaptureFixture[str]) -> None:
    assert _run(["catalog", "countries", "--country", "Ghana"]) == EXIT_OK
    assert capsys.readouterr().out.splitlines() == ["Kente cloth", "Adinkra cloth smock"]
    assert _run(["catalog", "countries", "--country", "Atlantis"]) == EXIT_BAD_INPUT


def test_write_results_skips_unfinished_jobs(tmp_path: Path) -> None:
    buf = io.BytesIO()
    Image.new("RGB", (4, 4)).save(buf, format="JPEG")

    data_url = "data:image/jpeg;base64," + base64.b64encode(buf.getvalue()).decode("ascii")
    jobs = {
        "Golden Hour": Job(key="Golden Hour", status=JobStatus.DONE, result=data_url),
        "Cyanotype": Job(key="Cyanotype", status=JobStatus.ERROR, error="blocked"),
    }
    written = write_results(jobs, tmp_path / "out")
    assert [path.name for path in written] == ["kritrim-golden-hour.jpg"]


def test_unknown_filter_exit_bad_input(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    code = _run(
        ["filter", "--image", str(_photo(tmp_path)), "--out", str(tmp_path / "out"), "--provider", "dryrun", "--filter", "Sepia Dream"]
    )
    assert code == EXIT_BAD_INPUT
    assert "Unknown filter: Sepia Dream" in capsys.readouterr().err
    assert list((tmp_path / "out").glob("kritrim-*")) == []


def test_more_than_six_eras_exit_bad_input(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    argv = ["quick", "--image", str(_photo(tmp_path)), "--out", str(tmp_path / "out"), "--provider", "dryrun"]
    for decade in range(7):
        argv += ["--era", f"19{decade}0s"]
    assert _run(argv) == EXIT_BAD_INPUT
    assert "at most 6 eras" in capsys.readouterr().err


def test_repeated_era_writes_one_image(tmp_path: Path) -> None:
    out_dir = tmp_path / "out"
    argv = ["quick", "--image", str(_photo(tmp_path)), "--out", str(out_dir), "--provider", "dryrun"]
    argv += ["--era", "Viking Warrior", "--era", "Viking Warrior"]
    assert _run(argv) == EXIT_OK
    assert [path.name for path in out_dir.glob("kritrim-*")] == ["kritrim-viking-warrior.png"]
