"""
Tests for the session context: args, config files, env variables, logging (config.py).
Run with:  python -m pytest test_config.py -v
"""

import logging

import pytest

import config
import export_data
import flyway
from plsqldev import ddl
from plsqldev.api import SelectedObject


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for arg in config.Config.os_args:
        monkeypatch.delenv(config.Config.os_prefix + arg, raising=False)
    handlers = list(logging.getLogger().handlers)
    yield
    # drop log files opened by the test
    for handler in list(logging.getLogger().handlers):
        if handler not in handlers:
            logging.getLogger().removeHandler(handler)
            handler.close()


# ===========================================================================
# 1. Config sources
# ===========================================================================
class TestConfig:
    def test_defaults(self):
        session = config.Config(args=[])

        assert session.config.use_millisecond_precision is False
        assert session.config.log_file == ""
        assert session.api is None
        assert session.is_curr_class is False

    def test_milliseconds_arg(self):
        assert config.Config(args=["-milliseconds"]).config.use_millisecond_precision is True
        assert config.Config(args=["-milliseconds", "N"]).config.use_millisecond_precision is False

    def test_config_file(self, tmp_path):
        file = tmp_path / "flyway.yaml"
        file.write_text("use_millisecond_precision: true\nbeep: false\n", encoding="utf-8")

        session = config.Config(args=["-config", str(file)])

        assert session.config.use_millisecond_precision is True
        assert session.config.beep is False
        assert session.track_config[str(file)] == {"use_millisecond_precision": True, "beep": False}

    def test_arg_wins_over_config_file(self, tmp_path):
        file = tmp_path / "flyway.yaml"
        file.write_text("use_millisecond_precision: true\n", encoding="utf-8")

        session = config.Config(args=["-config", str(file), "-milliseconds", "N"])

        assert session.config.use_millisecond_precision is False

    def test_missing_config_file(self, tmp_path):
        with pytest.raises(SystemExit):
            config.Config(args=["-config", str(tmp_path / "missing.yaml")])

    def test_env_variable(self, monkeypatch):
        monkeypatch.setenv("FLYWAY_MILLISECONDS", "Y")

        assert config.Config(args=[]).config.use_millisecond_precision is True

    def test_set_option(self):
        session = config.Config(args=[])
        session.set_option("use_millisecond_precision", True)

        assert session.config.use_millisecond_precision is True


# ===========================================================================
# 2. Log file
# ===========================================================================
class TestLogging:
    def test_log_file(self, tmp_path):
        file = tmp_path / "flyway.log"
        session = config.Config(args=["-log", str(file)])

        ddl.ensure_owner("create or replace view v_x as select 1 from dual", "VIEW", "APP", "V_X")
        session.log_target.handler.flush()

        content = file.read_text(encoding="utf-8")
        assert "Object source: create or replace view v_x" in content
        assert "Final DDL: create or replace force view APP.V_X" in content

    def test_log_file_is_replaced(self, tmp_path):
        session = config.Config(args=["-log", str(tmp_path / "first.log")])
        first = session.log_target.handler

        session.set_option("log_file", str(tmp_path / "second.log"))

        assert session.log_target.handler is not first
        assert session.log_target.handler in logging.getLogger().handlers
        assert first not in logging.getLogger().handlers

    def test_log_file_is_removed(self, tmp_path):
        session = config.Config(args=["-log", str(tmp_path / "flyway.log")])
        handler = session.log_target.handler

        session.set_option("log_file", "")

        assert session.log_target.handler is None
        assert handler not in logging.getLogger().handlers

    def test_other_session_keeps_log_file(self, host, tmp_path):
        file = tmp_path / "flyway.log"
        exporter = flyway.Flyway(args=["-log", str(file)], api=host.get_callbacks())
        export_data.Export_Data(args=[])
        host.objects = [SelectedObject("TABLE", "APP", "T")]
        host.folder = str(tmp_path)

        exporter.create_repeatable_migration()
        exporter.log_target.handler.flush()

        assert exporter.log_target.handler in logging.getLogger().handlers
        assert "Skipping APP.T (TABLE)" in file.read_text(encoding="utf-8")

    def test_shared_session_uses_same_log_file(self, tmp_path):
        session = config.Config(args=["-log", str(tmp_path / "flyway.log")])
        grid = export_data.Export_Data(session=session)

        grid.set_option("log_file", "")

        assert session.log_target.handler is None
