from unidisc.logger import format_message, logger, should_log


def test_silent_in_test_env(capsys):
    logger.error("should not appear")
    captured = capsys.readouterr()
    assert captured.out == ""
    assert captured.err == ""


def test_development_prints_to_stderr(monkeypatch, capsys):
    monkeypatch.setenv("ENV", "development")
    monkeypatch.setenv("LOG_LEVEL", "debug")
    monkeypatch.setenv("LOG_VERBOSITY", "detailed")

    logger.warn("cycle found")

    err = capsys.readouterr().err
    assert "WARN" in err
    assert "cycle found" in err
    assert "test_development_prints_to_stderr@test_logger.py" in err


def test_level_threshold(monkeypatch, capsys):
    monkeypatch.setenv("ENV", "development")
    monkeypatch.setenv("LOG_LEVEL", "error")

    logger.info("hidden")

    assert capsys.readouterr().err == ""
    assert should_log("error")
    assert not should_log("warn")


def test_simple_verbosity(monkeypatch):
    monkeypatch.setenv("LOG_VERBOSITY", "simple")
    line = format_message("info", "loaded")
    assert line.endswith("] INFO: loaded")


def test_production_writes_log_file(monkeypatch, tmp_path, capsys):
    log_file = tmp_path / "logs" / "unidisc.log"
    monkeypatch.setenv("ENV", "production")
    monkeypatch.setenv("LOG_LEVEL", "info")
    monkeypatch.setenv("UNIDISC_LOG_FILE", str(log_file))

    logger.error("disk full")

    assert capsys.readouterr().err == ""
    assert "ERROR" in log_file.read_text()
    assert "disk full" in log_file.read_text()
