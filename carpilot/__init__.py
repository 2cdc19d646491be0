"""HTTP controller for a serial-driven robot car: telemetry, plan execution, model planning, chat and weather."""

__version__ = "0.1.0"