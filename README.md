# carpilot

carpilot is a small HTTP server that drives a robot car over a serial line.
It reads obstacle telemetry from the car and serves a static web interface.
It also has JSON endpoints for manual driving, for plans made by a language
model, for general chat and for weather lookups.

## Installation

```
pip install .
```

For the tests:

```
pip install .[test]
pytest
```

## Running

```
carpilot --serial /dev/ttyUSB0 --web-root data
```

The options are:

| Option        | Default        | Meaning                          |
|---------------|----------------|----------------------------------|
| `--serial`    | `/dev/ttyUSB0` | serial device of the car         |
| `--baud`      | `9600`         | serial baud rate                 |
| `--web-root`  | `data`         | directory of static web files    |
| `--host`      | `0.0.0.0`      | address to listen on             |
| `--http-port` | `80`           | HTTP port                        |

API keys are read from the environment variables `OPENAI_API_KEY` and
`OPENWEATHER_API_KEY` (see `load_secrets` in `carpilot.main`). A key that is
missing is left empty. At startup the command lists the top-level entries of
the web root and then reads telemetry in a background thread while the server
runs. If the serial device cannot be opened, the command exits with status 1.

## Serial protocol

Each command is sent to the car as one letter and a newline: `F` forward,
`B` backward, `L` left, `R` right, `S` stop.

The car reports telemetry as lines of the form `S:101,19.7`. The three digits
give the left, center and right sensors. `1` means clear and `0` means an
obstacle. The value after the comma is the distance in centimetres. Any other
line is ignored.

## HTTP endpoints

| Method | Path          | Purpose                                                   |
|--------|---------------|-----------------------------------------------------------|
| GET    | `/ping`       | Replies `pong`                                            |
| GET    | `/favicon.ico`| Replies 204 with no content                               |
| GET    | `/status`     | Latest raw telemetry as `bits,distance`                   |
| POST   | `/stopAll`    | Stops the car at once                                     |
| POST   | `/car`        | `{"command": "forward"}`: a direct command, no auto-stop  |
| POST   | `/carPlan`    | `{"message": "..."}`: asks the model for a motion plan    |
| POST   | `/carExec`    | Runs a plan `{"sequence": [...]}`                         |
| POST   | `/chat`       | `{"message": "..."}`: a plain chat reply                  |
| POST   | `/getWeather` | `{"message": "..."}`: finds the city and reports weather  |

`/` serves `index.html` from the web root. Any other path that has no route is
looked up in the web root, and `?download` serves it as
`application/octet-stream`. Errors come back as `{"error": "..."}`.

## Plans

A plan is a JSON object with a `sequence` of 1 to 25 steps:

```json
{"sequence": [
  {"action": "forward"},
  {"action": "durationWait", "parameters": {"duration": 1000}},
  {"action": "conditionWait",
   "parameters": {"condition": {"sensor": "center", "state": true},
                  "timeoutMs": 5000}},
  {"action": "stop"}
]}
```

- `forward`, `backward`, `left` and `right` each drive for a 2-second burst
  and then stop on their own.
- `durationWait` waits for the given number of milliseconds. The value is
  clamped to the range 0 to 15000.
- `conditionWait` waits until the named sensor (`left`, `center` or `right`)
  reaches the requested state. The default timeout is 15000 ms, and a timeout
  of 0 waits without limit.
- If an obstacle appears in front while the car is moving forward, the car
  stops at once and the plan fails.
- When a step fails, the car is stopped.

## Library use

```python
from carpilot.car_executor import CarExecutor, PlanError
from carpilot.telemetry import Telemetry
from carpilot.routes import create_app
```

`Telemetry.feed` takes raw serial data, and `Telemetry.pump` reads what a
serial port has waiting. `CarExecutor.execute_plan` runs a parsed plan and
raises `PlanError` when it fails. `CarExecutor.execute_plan_json` takes JSON
text and returns a dict, either `{"ok": True}` or
`{"ok": False, "error": "..."}`. `create_app` builds the Flask application from
these parts:

- an executor
- a telemetry source
- an `OpenAIClient`
- a `WeatherClient`
- a `StaticFiles` store

## What it does not do

carpilot does not set up the network or advertise a host name. It listens
only on the host and port it is given. It does not upload files to the web
root either. It only serves files that are already there.