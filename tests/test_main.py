from unittest.mock import patch

import serial

from carpilot.main import DEFAULT_BAUD, Secrets, load_secrets, main


def test_load_secrets_reads_environment():
    secrets = load_secrets(
        {"OPENAI_API_KEY": "placeholder", "OPENWEATHER_API_KEY": "token", "OTHER": "x"}
    )
    assert secrets == Secrets(openai="placeholder", openweather="token")


def test_load_secrets_defaults_to_empty():
    secrets = load_secrets({})
    assert secrets.openai == ""
    assert secrets.openweather == ""


def test_main_opens_serial_and_runs_server(tmp_path):
    (tmp_path / "index.html").write_text("hi")
    with patch("serial.Serial") as serial_cls, patch("flask.Flask.run") as run:
        serial_cls.return_value.in_waiting = 0
        result = main(
            ["--serial", "loop", "--web-root", str(tmp_path), "--http-port", "8080"]
        )
    assert result == 0
    serial_cls.assert_called_once_with("loop", DEFAULT_BAUD, timeout=0.01)
    run.assert_called_once_with(host="0.0.0.0", port=8080, threaded=True)
    serial_cls.return_value.close.assert_called_once_with()


def test_main_fails_when_serial_cannot_open(tmp_path):
    with patch("serial.Serial") as serial_cls, patch("flask.Flask.run") as run:
        serial_cls.side_effect = serial.SerialException("busy")
        result = main(["--serial", "loop", "--web-root", str(tmp_path)])
    assert result == 1
    assert run.call_count == 0


def test_main_closes_port_when_server_fails(tmp_path):
    with patch("serial.Serial") as serial_cls, patch("flask.Flask.run") as run:
        serial_cls.return_value.in_waiting = 0
        run.side_effect = OSError("address in use")
        try:
            main(["--serial", "loop", "--web-root", str(tmp_path / "missing")])
        except OSError as exc:
            raised = str(exc)
        else:
            raised = ""
    assert raised == "address in use"
    serial_cls.return_value.close.assert_called_once_with()