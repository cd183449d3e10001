import json

from link_catalog.errors import FetchError
from link_catalog.github_api import ChangedFile, Revision
from link_catalog.http_client import HttpResponse


def json_response(url, payload, status=200, headers=None):
    return HttpResponse(url=url, status=status, text=json.dumps(payload), headers=headers or {})


def html_response(url, html, status=200):
    return HttpResponse(url=url, status=status, text=html)


class FakeFetcher:
    """Answers GETs from a url -> response/exception table and records every call."""

    def __init__(self, routes=None):
        self.routes = dict(routes or {})
        self.calls = []
        self.closed = False

    async def get(self, url, params=None, headers=None):
        self.calls.append((url, params))
        result = self.routes.get(url)
        if result is None:
            raise FetchError(url, "connection refused")
        if isinstance(result, Exception):
            raise result
        return result

    def urls(self):
        return [url for url, _ in self.calls]

    async def close(self):
        self.closed = True


class FakeHistory:
    """Revision-history collaborator backed by in-memory commits."""

    def __init__(self, revisions=(), files=None, path="README.md", list_error=None):
        self.revisions = [Revision(sha=sha, authored_at=date) for sha, date in revisions]
        self.files = files or {}
        self.path = path
        self.list_error = list_error
        self.list_calls = 0
        self.diff_calls = []

    async def list_revisions(self):
        self.list_calls += 1
        if self.list_error is not None:
            raise self.list_error
        return self.revisions

    async def changed_files(self, sha):
        self.diff_calls.append(sha)
        result = self.files.get(sha, [])
        if isinstance(result, Exception):
            raise result
        return [ChangedFile(filename=name, patch=patch) for name, patch in result]
