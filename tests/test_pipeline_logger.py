import importlib
import logging


def _reload_pipeline_logger(monkeypatch, debug_log: bool):
    monkeypatch.setenv("DEBUG_LOG", "true" if debug_log else "false")

    import assistant.pipeline_logger as pipeline_logger

    return importlib.reload(pipeline_logger)


def _capture(monkeypatch, pl):
    events = []

    def fake_log(level, message, extra=None, exc_info=None):
        events.append((level, message, extra))

    monkeypatch.setattr(pl.pipeline_logger, "log", fake_log)
    return events


def test_non_debug_mode_keeps_requests_summaries_and_errors(monkeypatch):
    pl = _reload_pipeline_logger(monkeypatch, debug_log=False)
    events = _capture(monkeypatch, pl)

    pl.log_pipeline("RANK", "normal info", level=logging.INFO)
    pl.log_pipeline("CHAT", "USER_REQUEST", level=logging.INFO)
    pl.log_latency_summary("CHAT", "chat_service.chat", 12, meta={"route": "faq"})
    pl.log_pipeline("MAIL", "something failed", level=logging.ERROR)

    assert len(events) == 3
    assert events[0][1].startswith("USER_REQUEST")
    assert events[1][1].startswith("LATENCY_SUMMARY")
    assert events[2][0] == logging.ERROR


def test_debug_mode_logs_normal_events(monkeypatch):
    pl = _reload_pipeline_logger(monkeypatch, debug_log=True)
    events = _capture(monkeypatch, pl)

    pl.log_pipeline("RANK", "normal info", level=logging.INFO)
    assert len(events) == 1
    assert events[0][2]["stage"] == "RANK"


def test_truncate_data_redacts_sensitive_keys_and_long_values(monkeypatch):
    pl = _reload_pipeline_logger(monkeypatch, debug_log=True)

    data = {
        "smtp_pass": "secret",
        "query": "x" * 200,
        "nested": {"email": "jana@kava.sk", "ok": "yes"},
    }
    out = pl._truncate_data(data, max_len=20)

    assert out["smtp_pass"] == "***REDACTED***"
    assert out["query"].endswith("...")
    assert out["nested"]["email"] == "***REDACTED***"
    assert out["nested"]["ok"] == "yes"


def test_trace_stage_appends_stage_result(monkeypatch):
    pl = _reload_pipeline_logger(monkeypatch, debug_log=True)

    with pl.trace_query("chcem kávu", "sess-1") as trace:
        with pl.trace_stage("RANK", "pick products"):
            pass

    assert len(trace.stages) == 1
    assert trace.stages[0]["stage"] == "RANK"
    assert trace.stages[0]["success"] is True


def test_user_request_masks_email_addresses(monkeypatch):
    pl = _reload_pipeline_logger(monkeypatch, debug_log=False)
    events = _capture(monkeypatch, pl)

    with pl.trace_query("Jana Nová, jana.nova@kava.sk", "s1"):
        pass

    request = next(message for _, message, _ in events if message.startswith("USER_REQUEST"))
    assert "jana.nova@kava.sk" not in request
    assert "***@***" in request
    assert "Jana Nová" in request
