"""Command-line entry point: build a toast, then show it or export it."""
from __future__ import annotations

import logging
import threading
from pathlib import Path
from typing import Dict, List, Optional

import typer

from .config import data_dir, load_config
from .errors import ToastNotifierError
from .models.document import ToastDocument, load_document, save_document
from .models.outcome import DisplayOutcome
from .services.cancellation import CancellationSignal
from .services.delivery import BACKENDS, DeliveryService, create_delivery_service
from .services.display import SynchronousDisplayManager
from .services.factory import NotificationOptions, create_builder_from_options, qualify_application_id
from .services.scheduler import shutdown_scheduler

log = logging.getLogger("toastnotifier")

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
LOG_FILENAME = "toastnotifier.log"

app = typer.Typer(
    help="Show a toast notification and wait until it is clicked, dismissed or times out.",
    add_completion=False,
)


def configure_logging(level_name: str, log_dir: Optional[Path] = None) -> None:
    logging.basicConfig(level=logging.WARNING, format=LOG_FORMAT)
    root_logger = logging.getLogger()
    level = getattr(logging, level_name.upper(), logging.WARNING)
    root_logger.setLevel(level)
    if log_dir is None:
        return
    logfile = log_dir / LOG_FILENAME
    # Avoid adding duplicate file handlers
    for h in root_logger.handlers:
        if isinstance(h, logging.FileHandler) and str(getattr(h, "baseFilename", "")) == str(logfile):
            return
    try:
        fh = logging.FileHandler(str(logfile), encoding="utf-8")
    except OSError as e:
        log.warning("Cannot log to %s: %s", logfile, e)
        return
    fh.setLevel(level)
    fh.setFormatter(logging.Formatter(LOG_FORMAT))
    root_logger.addHandler(fh)
    log.debug("Logging to %s (level %s)", logfile, level_name)


def show_document(
    document: ToastDocument,
    delivery: DeliveryService,
    application_id: str,
    timeout: float,
    throw_on_fail: bool = True,
) -> DisplayOutcome:
    manager = SynchronousDisplayManager(document, delivery)
    with CancellationSignal.with_timeout(timeout) as cancellation:
        return manager.show_and_wait(application_id, cancellation, throw_on_fail)


def show_in_tray(
    document: ToastDocument, application_id: str, timeout: float, throw_on_fail: bool = True
) -> DisplayOutcome:
    """Run the Qt event loop on this thread and the blocking session on a worker."""
    from .app import build_app, create_tray_icon
    from .services.tray import TrayDeliveryService

    qt_app = build_app()
    tray = create_tray_icon(qt_app)
    service = TrayDeliveryService(tray)
    service.closed.connect(qt_app.quit)
    result: Dict[str, object] = {}

    def _session() -> None:
        try:
            result["outcome"] = show_document(document, service, application_id, timeout, throw_on_fail)
        except Exception as e:  # handed back to the main thread below
            result["error"] = e
        finally:
            service.close()

    threading.Thread(target=_session, name="toast-session", daemon=True).start()
    qt_app.exec()
    tray.hide()

    error = result.get("error")
    if isinstance(error, Exception):
        raise error
    outcome = result["outcome"]
    assert isinstance(outcome, DisplayOutcome)
    return outcome


@app.command()
def show(
    app_id: str = typer.Option(
        ..., "--app-id", "-a", help="A system unique string to identify the sender of the notification."
    ),
    text_lines: Optional[List[str]] = typer.Option(
        None, "--text-line", "-t", help="Line of text to display; repeat for more lines (up to 3)."
    ),
    image: Optional[str] = typer.Option(
        None, "--image", "-i", help="Image to display: a full local file path or an image URL."
    ),
    template: Optional[str] = typer.Option(
        None, "--template", help="Exact template to use, e.g. ToastText02 or ToastImageAndText01."
    ),
    long_duration: bool = typer.Option(
        False, "--long-display-duration", "-l", help="Display for about 25s instead of 7s."
    ),
    sound: Optional[str] = typer.Option(
        None,
        "--sound",
        "-s",
        help="Default, IM, Mail, Reminder, SMS, Call or Alarm (Call/Alarm take a variant 1-10, e.g. Call;5). Off disables sound.",
    ),
    loop_sound: bool = typer.Option(
        False, "--sound-repeat", "-r", help="Repeat the selected sound (long notifications only)."
    ),
    output: Optional[Path] = typer.Option(
        None, "--output-template-file-path", "-o", help="Save the notification to this file instead of showing it."
    ),
    template_file: Optional[Path] = typer.Option(
        None, "--template-file-path", help="Show a notification saved earlier with --output-template-file-path."
    ),
    timeout: Optional[float] = typer.Option(
        None, "--timeout", min=0.0, help="Seconds to wait for the notification before giving up."
    ),
    backend: Optional[str] = typer.Option(
        None, "--backend", help=f"Delivery backend: {', '.join(BACKENDS)}."
    ),
    ignore_failure: bool = typer.Option(
        False, "--ignore-failure", help="Report a failed notification as an outcome instead of an error."
    ),
    config: Optional[Path] = typer.Option(None, "--config", "-c", help="Config file to use."),
    log_level: Optional[str] = typer.Option(None, "--log-level", help="DEBUG, INFO, WARNING or ERROR."),
) -> None:
    """Show a toast notification, or export it with -o."""
    try:
        cfg = load_config(config).app
    except FileNotFoundError as e:
        raise typer.BadParameter(str(e), param_hint="--config")
    configure_logging(log_level or cfg.log_level, data_dir())

    building = bool(text_lines or image or template or long_duration or sound or loop_sound or output)
    if template_file is not None and building:
        raise typer.BadParameter(
            "can not be combined with options that build a notification", param_hint="--template-file-path"
        )
    backend_name = (backend or cfg.backend).lower()
    if backend_name not in BACKENDS:
        raise typer.BadParameter(f"choose one of {', '.join(BACKENDS)}", param_hint="--backend")

    try:
        application_id = qualify_application_id(app_id, cfg.app_id_prefix)
        if template_file is not None:
            document = load_document(template_file)
        else:
            options = NotificationOptions(
                application_id=app_id,
                text_lines=list(text_lines or []),
                image=image,
                template=template,
                long_duration=long_duration,
                sound=sound,
                loop_sound=loop_sound,
            )
            document = create_builder_from_options(options).build()

        if output is not None:
            save_document(document, output)
            typer.echo(f"Saved notification to {output}")
            return

        wait = timeout if timeout is not None else cfg.timeout_seconds
        throw_on_fail = cfg.throw_on_fail and not ignore_failure
        if backend_name == "tray":
            outcome = show_in_tray(document, application_id, wait, throw_on_fail)
        else:
            delivery = create_delivery_service(backend_name)
            outcome = show_document(document, delivery, application_id, wait, throw_on_fail)
        typer.echo(str(outcome))
    except (ToastNotifierError, OSError) as e:
        log.debug("Notification failed", exc_info=True)
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)
    finally:
        shutdown_scheduler()


if __name__ == "__main__":
    app()
