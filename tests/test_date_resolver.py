import asyncio
from datetime import datetime, timezone

from config import REVISION_DELAY_SECONDS
from link_catalog.errors import FetchError
from link_catalog.history import date_resolver
from link_catalog.history.date_resolver import patch_adds, resolve_added_date

from fakes import FakeHistory

URL = "https://example.com/talk"


def _parse(ts: str) -> datetime:
    return datetime.fromisoformat(ts.replace("Z", "+00:00"))


def _resolve(history):
    return asyncio.run(resolve_added_date(URL, history, delay=0))


def test_patch_adds_ignores_headers_context_and_removals() -> None:
    patch = "\n".join([
        f"+++ b/{URL}",
        f" unchanged {URL}",
        f"-removed {URL}",
        "+added https://other.example.com",
    ])
    assert not patch_adds(patch, URL)
    assert patch_adds(patch + f"\n+- [Talk]({URL})", URL)


def test_earliest_introducing_revision_wins() -> None:
    history = FakeHistory(
        revisions=[
            ("r1", "2024-03-01T00:00:00Z"),
            ("r2", "2024-02-01T00:00:00Z"),
            ("r3", "2024-01-01T00:00:00Z"),
        ],
        files={
            "r1": [("README.md", f"@@ -1,2 +1,3 @@\n {URL}\n+- https://later.example.com")],
            "r2": [("README.md", f"+- moved {URL}")],
            "r3": [("README.md", f"@@ -0,0 +1 @@\n+- [Talk]({URL})")],
        },
    )

    result = _resolve(history)

    assert result.added_at == "2024-01-01T00:00:00Z"
    assert result.found
    assert result.sha == "r3"
    assert history.diff_calls == ["r3"]


def test_only_the_tracked_file_counts() -> None:
    history = FakeHistory(
        revisions=[("r1", "2024-03-01T00:00:00Z"), ("r2", "2024-02-01T00:00:00Z")],
        files={
            "r2": [("docs/notes.md", f"+{URL}")],
            "r1": [("docs/notes.md", ""), ("README.md", f"+{URL}")],
        },
    )
    assert _resolve(history).added_at == "2024-03-01T00:00:00Z"


def test_failed_diff_is_skipped() -> None:
    history = FakeHistory(
        revisions=[("r1", "2024-03-01T00:00:00Z"), ("r2", "2024-02-01T00:00:00Z")],
        files={
            "r2": FetchError("commits/r2", "HTTP 502", 502),
            "r1": [("README.md", f"+{URL}")],
        },
    )
    result = _resolve(history)
    assert result.added_at == "2024-03-01T00:00:00Z"
    assert history.diff_calls == ["r2", "r1"]


def test_empty_history_falls_back_to_now() -> None:
    before = datetime.now(timezone.utc).replace(microsecond=0)
    result = _resolve(FakeHistory())
    assert not result.found
    assert _parse(result.added_at) >= before


def test_not_found_in_window_falls_back_to_now() -> None:
    before = datetime.now(timezone.utc).replace(microsecond=0)
    history = FakeHistory(revisions=[("r1", "2020-01-01T00:00:00Z")], files={"r1": [("README.md", "+nothing")]})
    result = _resolve(history)
    assert not result.found
    assert _parse(result.added_at) >= before


def test_failed_commit_list_falls_back_without_diffs() -> None:
    history = FakeHistory(
        revisions=[("r1", "2020-01-01T00:00:00Z")],
        list_error=FetchError("commits", "HTTP 403", 403),
    )
    result = _resolve(history)
    assert not result.found
    assert history.diff_calls == []


def _recording_delay(monkeypatch):
    pauses = []

    async def record(seconds):
        pauses.append(seconds)
        return seconds

    monkeypatch.setattr(date_resolver, "polite_delay", record)
    return pauses


def test_fixed_pause_after_every_revision_including_failures(monkeypatch) -> None:
    pauses = _recording_delay(monkeypatch)
    history = FakeHistory(
        revisions=[("r1", "2024-03-01T00:00:00Z"), ("r2", "2024-02-01T00:00:00Z"), ("r3", "2024-01-01T00:00:00Z")],
        files={
            "r3": FetchError("commits/r3", "HTTP 403", 403),
            "r2": FetchError("commits/r2", "HTTP 403", 403),
            "r1": [("README.md", "+unrelated")],
        },
    )

    result = asyncio.run(resolve_added_date(URL, history))

    assert not result.found
    assert pauses == [REVISION_DELAY_SECONDS] * 3


def test_pause_counts_only_inspected_revisions(monkeypatch) -> None:
    pauses = _recording_delay(monkeypatch)
    history = FakeHistory(
        revisions=[("r1", "2024-03-01T00:00:00Z"), ("r2", "2024-02-01T00:00:00Z")],
        files={"r2": [("README.md", f"+{URL}")]},
    )

    assert asyncio.run(resolve_added_date(URL, history)).sha == "r2"
    assert pauses == [REVISION_DELAY_SECONDS]
