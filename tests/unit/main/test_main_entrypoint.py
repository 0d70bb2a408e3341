from __future__ import annotations

import runpy


def test_running_package_starts_preprocessing_worker(monkeypatch) -> None:
    calls = []
    monkeypatch.setattr("hydrowatch.main.worker.main", lambda: calls.append("worker"))

    runpy.run_module("hydrowatch.main.__main__", run_name="__main__")

    assert calls == ["worker"]
