import logging
from pathlib import Path

import pytest
from typer.testing import CliRunner

import toastnotifier.main as main
from toastnotifier.models.document import load_document


class DummyDelivery:
    def __init__(self, event=None, arg=None):
        self.event = event
        self.arg = arg
        self.app_ids = []

    def submit(self, application_id, document, handlers):
        self.app_ids.append(application_id)
        if self.event == "activated":
            handlers.on_activated()
        elif self.event == "dismissed":
            handlers.on_dismissed(self.arg)
        elif self.event == "failed":
            handlers.on_failed(self.arg)


@pytest.fixture
def runner(data_dir):
    yield CliRunner()
    root = logging.getLogger()
    for h in list(root.handlers):
        if isinstance(h, logging.FileHandler) and str(data_dir) in str(getattr(h, "baseFilename", "")):
            root.removeHandler(h)
            h.close()


@pytest.fixture
def use_delivery(monkeypatch):
    def _use(delivery):
        monkeypatch.setattr(main, "create_delivery_service", lambda backend: delivery)
        return delivery

    return _use


def test_export_writes_document(runner, tmp_path: Path):
    out = tmp_path / "toast.xml"
    result = runner.invoke(main.app, ["-a", "Backup", "-t", "Done", "-s", "off", "-l", "-o", str(out)])
    assert result.exit_code == 0, result.output
    doc = load_document(out)
    assert doc.texts == ["Done"]
    assert doc.duration == "long"
    assert doc.audio == {"silent": "true"}


def test_show_prints_outcome_and_qualifies_app_id(runner, use_delivery):
    delivery = use_delivery(DummyDelivery("activated"))
    result = runner.invoke(main.app, ["-a", "Backup", "-t", "Done"])
    assert result.exit_code == 0, result.output
    assert "Activated" in result.output
    assert delivery.app_ids == ["ToastNotifier.Backup"]


def test_dismissal_is_not_an_error(runner, use_delivery):
    use_delivery(DummyDelivery("dismissed", 0))
    result = runner.invoke(main.app, ["-a", "Backup", "-t", "Done"])
    assert result.exit_code == 0
    assert "Dismissed (UserCanceled)" in result.output


def test_timeout_reports_cancelled(runner, use_delivery):
    use_delivery(DummyDelivery())
    result = runner.invoke(main.app, ["-a", "Backup", "-t", "Done", "--timeout", "0.1"])
    assert result.exit_code == 0, result.output
    assert "Cancelled" in result.output


def test_failure_exits_with_error(runner, use_delivery):
    use_delivery(DummyDelivery("failed", RuntimeError("denied")))
    result = runner.invoke(main.app, ["-a", "Backup", "-t", "Done"])
    assert result.exit_code == 1
    assert "denied" in result.output


def test_failure_reported_with_ignore_failure(runner, use_delivery):
    use_delivery(DummyDelivery("failed", "denied"))
    result = runner.invoke(main.app, ["-a", "Backup", "-t", "Done", "--ignore-failure"])
    assert result.exit_code == 0, result.output
    assert "Failed (denied)" in result.output


def test_ambiguous_shape_lists_templates(runner, use_delivery):
    use_delivery(DummyDelivery("activated"))
    result = runner.invoke(main.app, ["-a", "Backup", "-t", "Hello", "-t", "World"])
    assert result.exit_code == 1
    assert "ToastText02" in result.output and "ToastText03" in result.output


def test_explicit_template_resolves_ambiguity(runner, tmp_path: Path):
    out = tmp_path / "toast.xml"
    result = runner.invoke(
        main.app, ["-a", "Backup", "-t", "Hello", "-t", "World", "--template", "ToastText02", "-o", str(out)]
    )
    assert result.exit_code == 0, result.output
    assert load_document(out).texts == ["Hello", "World"]


def test_show_from_template_file(runner, use_delivery, tmp_path: Path):
    out = tmp_path / "toast.xml"
    runner.invoke(main.app, ["-a", "Backup", "-t", "Saved", "-o", str(out)])
    use_delivery(DummyDelivery("activated"))
    result = runner.invoke(main.app, ["-a", "Backup", "--template-file-path", str(out)])
    assert result.exit_code == 0, result.output
    assert "Activated" in result.output


def test_template_file_excludes_building_options(runner, tmp_path: Path):
    result = runner.invoke(main.app, ["-a", "Backup", "-t", "x", "--template-file-path", str(tmp_path / "a.xml")])
    assert result.exit_code == 2


def test_empty_app_id(runner, tmp_path: Path):
    result = runner.invoke(main.app, ["-a", "  ", "-t", "x", "-o", str(tmp_path / "a.xml")])
    assert result.exit_code == 1
    assert "Application ID" in result.output


def test_bad_sound(runner, tmp_path: Path):
    result = runner.invoke(main.app, ["-a", "Backup", "-t", "x", "-s", "Mail;2", "-o", str(tmp_path / "a.xml")])
    assert result.exit_code == 1
    assert "variant" in result.output


def test_console_backend(runner):
    result = runner.invoke(main.app, ["-a", "Backup", "-t", "Title", "--backend", "console"])
    assert result.exit_code == 0, result.output
    assert "[Notification] Title:" in result.output
    assert "Dismissed" in result.output


def test_missing_config_file(runner, tmp_path: Path):
    result = runner.invoke(main.app, ["-a", "Backup", "-t", "x", "--config", str(tmp_path / "none.toml")])
    assert result.exit_code == 2


def test_log_file_in_data_dir(runner, data_dir: Path, tmp_path: Path):
    runner.invoke(main.app, ["-a", "Backup", "-t", "x", "-o", str(tmp_path / "a.xml")])
    assert (data_dir / main.LOG_FILENAME).exists()
