import asyncio

import main as console


def test_console_configures_logging_before_loop(monkeypatch):
    calls = []

    async def fake_run_console():
        calls.append("console")

    monkeypatch.setattr(console, "setup_logging", lambda: calls.append("logging"))
    monkeypatch.setattr(console, "run_console", fake_run_console)

    console.main()

    assert calls == ["logging", "console"]


def test_console_exits_on_keyword(monkeypatch, make_engine, capsys):
    answers = iter(["Koľko stojí doprava?", "koniec"])
    monkeypatch.setattr("builtins.input", lambda prompt="": next(answers))
    monkeypatch.setattr(console, "build_engine", lambda settings: make_engine())

    asyncio.run(console.run_console())

    out = capsys.readouterr().out
    assert "https://anilab.sk/doprava" in out
    assert "Dovidenia!" in out
