import json
import logging

from attendance_engine.core.logging_utils import JsonFormatter


def test_json_formatter_includes_extra_fields():
    record = logging.LogRecord("attendance_engine.test", logging.INFO, __file__, 1, "check-in recorded", None, None)
    record.employee_id = "E1"
    record.is_late = False

    payload = json.loads(JsonFormatter().format(record))

    assert payload["message"] == "check-in recorded"
    assert payload["level"] == "INFO"
    assert payload["employee_id"] == "E1"
    assert payload["is_late"] is False
    assert "args" not in payload
