import logging
import os

import pytest

from app.config import int_setting, load_env_layers

KEYS = ("SWEETSHOP_TEST_A", "SWEETSHOP_TEST_B", "SWEETSHOP_TEST_C")


@pytest.fixture
def clean_env():
    for key in KEYS:
        os.environ.pop(key, None)
    yield
    for key in KEYS:
        os.environ.pop(key, None)


def test_first_file_wins_and_later_files_fill_gaps(tmp_path, clean_env):
    backend_env = tmp_path / "backend.env"
    root_env = tmp_path / "root.env"
    backend_env.write_text("SWEETSHOP_TEST_A=backend\n")
    root_env.write_text("SWEETSHOP_TEST_A=root\nSWEETSHOP_TEST_B=root\n")

    loaded = load_env_layers([backend_env, root_env])

    assert os.environ["SWEETSHOP_TEST_A"] == "backend"
    assert os.environ["SWEETSHOP_TEST_B"] == "root"
    assert loaded == [str(backend_env), str(root_env)]


def test_process_environment_is_never_overwritten(tmp_path, clean_env):
    os.environ["SWEETSHOP_TEST_C"] = "process"
    env_file = tmp_path / ".env"
    env_file.write_text("SWEETSHOP_TEST_C=file\n")

    load_env_layers([env_file])

    assert os.environ["SWEETSHOP_TEST_C"] == "process"


def test_missing_files_are_skipped(tmp_path, clean_env):
    present = tmp_path / "present.env"
    present.write_text("SWEETSHOP_TEST_A=present\n")

    loaded = load_env_layers([tmp_path / "missing.env", present])

    assert loaded == [str(present)]
    assert os.environ["SWEETSHOP_TEST_A"] == "present"


def test_unreadable_source_is_skipped(tmp_path, clean_env):
    # A directory where a file is expected
    loaded = load_env_layers([tmp_path])
    assert loaded == []


def test_ambient_source_reads_the_working_directory(tmp_path, monkeypatch, clean_env):
    (tmp_path / ".env").write_text("SWEETSHOP_TEST_A=cwd\n")
    monkeypatch.chdir(tmp_path)

    loaded = load_env_layers([None])

    assert loaded == [str(tmp_path / ".env")]
    assert os.environ["SWEETSHOP_TEST_A"] == "cwd"


def test_ambient_source_does_not_search_parent_directories(tmp_path, monkeypatch, clean_env):
    (tmp_path / ".env").write_text("SWEETSHOP_TEST_A=parent\n")
    child = tmp_path / "child"
    child.mkdir()
    monkeypatch.chdir(child)

    assert load_env_layers([None]) == []
    assert "SWEETSHOP_TEST_A" not in os.environ


def test_int_setting_reads_numbers(monkeypatch):
    monkeypatch.setenv("SWEETSHOP_TEST_PORT", "8080")
    assert int_setting("SWEETSHOP_TEST_PORT", 3001) == 8080


def test_int_setting_falls_back_on_garbage(monkeypatch, caplog):
    monkeypatch.setenv("SWEETSHOP_TEST_PORT", "not-a-port")
    with caplog.at_level(logging.WARNING, logger="app.config"):
        assert int_setting("SWEETSHOP_TEST_PORT", 3001) == 3001
    assert "SWEETSHOP_TEST_PORT" in caplog.text


def test_int_setting_default_when_unset(monkeypatch):
    monkeypatch.delenv("SWEETSHOP_TEST_PORT", raising=False)
    assert int_setting("SWEETSHOP_TEST_PORT", 3001) == 3001
