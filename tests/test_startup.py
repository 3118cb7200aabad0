from sqlalchemy.exc import OperationalError
from structlog.testing import capture_logs

from mahasiswa_api import main


def _refuse_connection() -> None:
    raise OperationalError("SELECT 1", {}, Exception("connection refused"))


def test_startup_survives_unreachable_database(monkeypatch) -> None:
    monkeypatch.setattr(main, "configure_logging", lambda level: None)
    monkeypatch.setattr(main, "check_connection", _refuse_connection)

    with capture_logs() as logs:
        main._startup()

    events = [entry for entry in logs if entry["event"] == "database.unavailable"]
    assert len(events) == 1
    assert events[0]["log_level"] == "warning"
    assert "connection refused" in events[0]["error"]


def test_startup_reports_connected_database(monkeypatch) -> None:
    monkeypatch.setattr(main, "configure_logging", lambda level: None)

    with capture_logs() as logs:
        main._startup()

    assert [entry["event"] for entry in logs] == ["database.connected"]
