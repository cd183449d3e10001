import argparse
import asyncio
import sys

from config import CATALOG_PATH, DOCUMENT_PATH, REPO_NAME, REPO_OWNER
from link_catalog.errors import LinkCatalogError
from link_catalog.github_api import CommitHistory, RepoFile, fetch_document
from link_catalog.history.backfill import backfill_added_dates
from link_catalog.http_client import HttpFetcher
from link_catalog.reconciler import reconcile
from link_catalog.storage.catalog_store import load_catalog, save_catalog
from utils.logger import set_verbosity, setup_logger

logger = setup_logger("link_catalog")


async def run_fetch(source: RepoFile, catalog_path: str, fetcher=None):
    """Metadata pass: README -> new links resolved -> stale links pruned -> saved."""
    own_fetcher = fetcher is None
    fetcher = fetcher or HttpFetcher()
    try:
        logger.info(f"📄 Fetching {source.path} from {source.owner}/{source.repo}")
        readme = await fetch_document(fetcher, source)
        catalog = await load_catalog(catalog_path)

        async def persist(updated):
            await save_catalog(catalog_path, updated)

        catalog, summary = await reconcile(readme, catalog, fetcher, on_update=persist)
        await save_catalog(catalog_path, catalog)
        logger.info(
            f"✅ Catalog saved: {len(catalog)} links "
            f"(+{summary.added} new, -{summary.removed} removed, {summary.skipped} skipped)"
        )
        return summary
    finally:
        if own_fetcher:
            await fetcher.close()


async def run_dates(source: RepoFile, catalog_path: str, force: bool = False,
                    retry_approximate: bool = False, fetcher=None):
    """Dates pass: backfill addedAt from the README's commit history."""
    own_fetcher = fetcher is None
    fetcher = fetcher or HttpFetcher()
    try:
        logger.info("🔍 Fetching git history dates for links...")
        history = CommitHistory(fetcher, source)
        return await backfill_added_dates(
            catalog_path, history, force=force, retry_approximate=retry_approximate
        )
    finally:
        if own_fetcher:
            await fetcher.close()


def _repo_file(args) -> RepoFile:
    owner, _, repo = args.repo.partition("/")
    if not owner or not repo:
        raise argparse.ArgumentTypeError(f"--repo must look like OWNER/NAME, got {args.repo!r}")
    return RepoFile(owner=owner, repo=repo, path=args.path)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="README link catalog")
    parser.add_argument("--catalog", default=CATALOG_PATH, help="Path to the JSON catalog")
    parser.add_argument("--repo", default=f"{REPO_OWNER}/{REPO_NAME}", help="GitHub repository OWNER/NAME")
    parser.add_argument("--path", default=DOCUMENT_PATH, help="Tracked file inside the repository")
    parser.add_argument("-v", "--verbose", action="count", default=0)
    sub = parser.add_subparsers(dest="command", required=True)

    # fetch subcommand
    sub.add_parser("fetch", help="Fetch metadata for new README links and prune removed ones")
    # dates subcommand
    dates = sub.add_parser("dates", help="Backfill addedAt dates from commit history")
    dates.add_argument("--force", action="store_true", help="Re-resolve every entry")
    dates.add_argument("--retry-approximate", action="store_true",
                       help="Re-resolve entries whose date is a fallback, not a commit date")
    # all subcommand: fetch then dates
    sub.add_parser("all", help="Run fetch then dates")
    return parser


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    set_verbosity(args.verbose)
    try:
        source = _repo_file(args)
    except argparse.ArgumentTypeError as e:
        parser.error(str(e))

    try:
        if args.command == "fetch":
            asyncio.run(run_fetch(source, args.catalog))

        elif args.command == "dates":
            asyncio.run(run_dates(source, args.catalog, force=args.force,
                                  retry_approximate=args.retry_approximate))

        elif args.command == "all":
            asyncio.run(run_fetch(source, args.catalog))
            asyncio.run(run_dates(source, args.catalog))
    except LinkCatalogError as e:
        logger.error(f"❌ {e}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
