# link_catalog/github_api.py

# GitHub REST collaborators for the tracked README:
# the document source (contents API, base64 body)
# the commit history of one file (newest-first list + per-commit diffs)
# No authentication: the public rate limit is logged, not managed.

import base64
import binascii
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from config import COMMITS_PER_PAGE, DOCUMENT_PATH, GITHUB_API_URL, REPO_NAME, REPO_OWNER
from link_catalog.errors import DocumentFetchError, FetchError
from utils.logger import setup_logger

logger = setup_logger("link_catalog.github")


@dataclass
class Revision:
    sha: str
    authored_at: str


@dataclass
class ChangedFile:
    filename: str
    patch: str = ""


@dataclass
class RepoFile:
    owner: str = REPO_OWNER
    repo: str = REPO_NAME
    path: str = DOCUMENT_PATH
    api_url: str = GITHUB_API_URL

    @property
    def repo_url(self) -> str:
        return f"{self.api_url}/repos/{self.owner}/{self.repo}"


def log_rate_limit(response) -> None:
    remaining = response.headers.get("x-ratelimit-remaining")
    if remaining is not None:
        logger.info(f"    API calls remaining: {remaining}")


async def fetch_document(fetcher, source: RepoFile) -> str:
    """
    Return the README text at its current revision.
    Any failure here is fatal for the metadata pass.
    """
    url = f"{source.repo_url}/contents/{source.path}"
    try:
        response = await fetcher.get(url)
        log_rate_limit(response)
        data = response.raise_for_status().json()
    except FetchError as e:
        raise DocumentFetchError(f"Could not fetch {source.path}: {e}") from e

    content = data.get("content") if isinstance(data, dict) else None
    if not isinstance(content, str):
        raise DocumentFetchError(f"No content field in response for {source.path}")
    try:
        return base64.b64decode(content).decode("utf-8")
    except (binascii.Error, UnicodeDecodeError) as e:
        raise DocumentFetchError(f"Could not decode {source.path}: {e}") from e


class CommitHistory:
    """
    Revision-history collaborator for one file.
    The commit list and each commit's changed files are cached for the
    lifetime of the instance, so a batch run asks GitHub once per commit.
    """

    def __init__(self, fetcher, source: RepoFile, per_page: int = COMMITS_PER_PAGE):
        self.fetcher = fetcher
        self.source = source
        self.per_page = per_page
        self._revisions: Optional[List[Revision]] = None
        self._files: Dict[str, List[ChangedFile]] = {}

    @property
    def path(self) -> str:
        return self.source.path

    async def list_revisions(self) -> List[Revision]:
        """Newest-first revisions touching the file (one page). Raises FetchError."""
        if self._revisions is not None:
            return self._revisions
        response = await self.fetcher.get(
            f"{self.source.repo_url}/commits",
            params={"path": self.source.path, "per_page": str(self.per_page)},
        )
        log_rate_limit(response)
        data = response.raise_for_status().json()
        if not isinstance(data, list):
            raise FetchError(response.url, "commit list is not an array", response.status)

        revisions = []
        for item in data:
            try:
                revisions.append(Revision(sha=item["sha"], authored_at=item["commit"]["author"]["date"]))
            except (KeyError, TypeError):
                logger.debug(f"Skipping malformed commit entry: {item!r:.80}")
        self._revisions = revisions
        return revisions

    async def changed_files(self, sha: str) -> List[ChangedFile]:
        """Files changed by one commit, with their unified-diff patches. Raises FetchError."""
        if sha in self._files:
            return self._files[sha]
        response = await self.fetcher.get(f"{self.source.repo_url}/commits/{sha}")
        data = response.raise_for_status().json()
        files = data.get("files") if isinstance(data, dict) else None
        changed = [
            ChangedFile(filename=f.get("filename", ""), patch=f.get("patch") or "")
            for f in files or []
            if isinstance(f, dict)
        ]
        self._files[sha] = changed
        return changed
