# SPDX-License-Identifier: MIT

import pendulum
import pytest
from typer.testing import CliRunner

from conftest import make_check_in
from daytrace import configuration
from daytrace.repository.check_in import CheckInRepository
from daytrace.repository.configuration import CONFIGURATION_REPO
from daytrace.terminal import view
from daytrace.terminal.app import app

# Wide enough that tables and the heatmap are not wrapped
runner = CliRunner(env={"COLUMNS": "200"})


def _stored_check_ins():
    return CheckInRepository(configuration.DATA_CHECK_INS_DIR).get_all_check_ins()


def _stored_images():
    return [
        path
        for path in configuration.DATA_IMAGES_DIR.iterdir()
        if path.name != ".gitkeep"
    ]


@pytest.fixture
def added(data_path, image_file):
    """Two check-ins: one yesterday, one now."""
    for args in (["-ts", "yesterday", "-n", "warm-up"], ["-n", "figure study"]):
        result = runner.invoke(app, ["add", str(image_file), *args])
        assert result.exit_code == 0, result.output
    return _stored_check_ins()


def test_add_records_check_in_and_shows_stats(data_path, image_file):
    result = runner.invoke(app, ["add", str(image_file), "--note", "first sketch"])

    assert result.exit_code == 0, result.output
    assert "first sketch" in result.output
    assert "current streak" in result.output

    check_ins = _stored_check_ins()
    assert len(check_ins) == 1
    assert check_ins[0]["note"] == "first sketch"
    assert len(_stored_images()) == 1


def test_add_alias(data_path, image_file):
    result = runner.invoke(app, ["a", str(image_file)])

    assert result.exit_code == 0, result.output
    assert len(_stored_check_ins()) == 1


def test_add_rejects_non_image(data_path, tmp_path):
    text_file = tmp_path / "notes.txt"
    text_file.write_text("hello")

    result = runner.invoke(app, ["add", str(text_file)])

    assert result.exit_code == 1
    assert "Error: Only image files" in result.output
    assert _stored_check_ins() == []


def test_stats(added):
    result = runner.invoke(app, ["stats"])

    assert result.exit_code == 0, result.output
    assert "2 days" in result.output


def test_timeline_lists_newest_first(added):
    result = runner.invoke(app, ["timeline"])

    assert result.exit_code == 0, result.output
    assert result.output.index("figure study") < result.output.index("warm-up")
    assert "showing 2 of 2" in result.output


def test_timeline_load_more_hint(added):
    CONFIGURATION_REPO.update_config(timeline_page_size=1)

    result = runner.invoke(app, ["timeline"])

    assert result.exit_code == 0, result.output
    assert "showing 1 of 2" in result.output
    assert "--page 2" in result.output


def test_note_and_show(added):
    runner.invoke(app, ["timeline"])

    result = runner.invoke(app, ["note", "2", "after lunch"])
    assert result.exit_code == 0, result.output

    notes = {check_in["note"] for check_in in _stored_check_ins()}
    assert notes == {"figure study", "after lunch"}

    result = runner.invoke(app, ["show", "2"])
    assert result.exit_code == 0, result.output
    assert "after lunch" in result.output


def test_note_remove(added):
    runner.invoke(app, ["timeline"])

    result = runner.invoke(app, ["note", "1", "--remove"])

    assert result.exit_code == 0, result.output
    assert _stored_check_ins()[0]["note"] is None


def test_delete_removes_check_in_and_image(added):
    runner.invoke(app, ["timeline"])

    result = runner.invoke(app, ["delete", "1"])

    assert result.exit_code == 0, result.output
    assert "Deleted 1 check-in(s)" in result.output
    check_ins = _stored_check_ins()
    assert [check_in["note"] for check_in in check_ins] == ["warm-up"]
    assert len(_stored_images()) == 1


def test_unknown_id_is_a_usage_error(added):
    runner.invoke(app, ["timeline"])

    result = runner.invoke(app, ["show", "9"])

    assert result.exit_code == 2


def test_heatmap_modes(added):
    for args in ([], ["--weeks", "4"], ["--recent"], ["--year", "2023"], ["-m", "3"]):
        result = runner.invoke(app, ["heatmap", *args])
        assert result.exit_code == 0, result.output
        assert "darker means more" in result.output


def test_heatmap_rejects_two_modes(added):
    result = runner.invoke(app, ["heatmap", "--year", "2023", "--weeks", "4"])

    assert result.exit_code == 2


def test_heatmap_empty_state(data_path):
    result = runner.invoke(app, ["heatmap"])

    assert result.exit_code == 0, result.output
    assert "No check-ins yet" in result.output


def test_overview(added):
    result = runner.invoke(app, ["--no-header", "overview"])

    assert result.exit_code == 0, result.output
    assert "longest streak" in result.output
    assert "last check-in" in result.output
    assert "daytrace" not in result.output


def test_config_set_and_view(data_path):
    result = runner.invoke(app, ["config", "set", "--heatmap-months", "6"])
    assert result.exit_code == 0, result.output
    assert CONFIGURATION_REPO.get_config()["heatmap_months"] == 6

    result = runner.invoke(app, ["c", "v"])
    assert result.exit_code == 0, result.output
    assert "heatmap_months" in result.output


def test_config_rejects_unknown_log_level(data_path):
    result = runner.invoke(app, ["config", "set", "--log-level", "loud"])

    assert result.exit_code == 1
    assert CONFIGURATION_REPO.get_config()["log_level"] == "WARNING"


@pytest.mark.parametrize("year", ["0", "10000"])
def test_heatmap_rejects_out_of_range_year(added, year):
    result = runner.invoke(app, ["heatmap", "--year", year])

    assert result.exit_code == 2


def test_overview_watch_redraws_after_a_change(added, monkeypatch):
    sleeps = []

    def fake_sleep(seconds):
        sleeps.append(seconds)
        if len(sleeps) == 1:
            # Another process records a check-in while the overview is open
            writer = CheckInRepository(configuration.DATA_CHECK_INS_DIR)
            writer.save_new_check_in(
                make_check_in(
                    pendulum.now("local").isoformat(), note="from elsewhere"
                )
            )
            writer.flush()
        elif len(sleeps) == 3:
            raise KeyboardInterrupt

    monkeypatch.setattr(view.time, "sleep", fake_sleep)

    result = runner.invoke(app, ["overview", "--watch", "1"])

    assert result.exit_code == 0, result.output
    assert sleeps == [1.0, 1.0, 1.0]
    # Initial render, one redraw for the new check-in, none for the idle poll
    assert result.output.count("longest streak") == 2
    assert len(_stored_check_ins()) == 3


def test_stats_ignore_check_ins_without_a_date_key(added):
    (configuration.DATA_CHECK_INS_DIR / "compact.yaml").write_text(
        "id: compact\ncreated_at: '20240301T120000'\nimage_data: file:///x.jpg\n"
    )

    result = runner.invoke(app, ["stats"])

    assert result.exit_code == 0, result.output
    assert "2 days" in result.output
