"""
Command line extraction.

Usage:
    jobclip https://jobs.lever.co/acme/123
    jobclip https://jobs.ashbyhq.com/acme/456 --html-file page.html --state-file app_data.json
    jobclip https://www.linkedin.com/jobs/view/789 --html-file saved.html --save --link https://...
"""

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv

from jobclip.config import Settings
from jobclip.core.net import FetchError, fetch_page
from jobclip.core.page import PageSnapshot
from jobclip.extractors import extract_job_data, find_extractor
from jobclip.app.opportunities import OpportunityStore

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="jobclip", description="Extract job posting data from a career-site page")
    parser.add_argument("url", help="Job posting address (selects the site extractor)")
    parser.add_argument("--html-file", type=str, help="Read page HTML from a file instead of fetching it")
    parser.add_argument("--state-file", type=str,
                        help="JSON object of page globals, e.g. {\"__appData\": {...}}")
    parser.add_argument("--save", action="store_true", help="Capture the result into the opportunity store")
    parser.add_argument("--link", type=str, help="Link stored with a saved opportunity (defaults to the url)")
    parser.add_argument("--store", type=str, help="Opportunity store path (defaults to JOBCLIP_STORE_PATH)")
    return parser


def _load_state(path: Optional[str]) -> Optional[dict]:
    if not path:
        return None
    with open(path, "r", encoding="utf-8") as f:
        state = json.load(f)
    if not isinstance(state, dict):
        raise ValueError(f"State file must hold a JSON object: {path}")
    return state


async def load_page(url: str, html_file: Optional[str] = None, state: Optional[dict] = None) -> PageSnapshot:
    if html_file:
        html = Path(html_file).read_text(encoding="utf-8")
        return PageSnapshot(url, html, state=state)
    return await fetch_page(url, state=state)


def main(argv: Optional[List[str]] = None) -> int:
    load_dotenv()
    logging.basicConfig(
        level=Settings.log_level(),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    args = build_parser().parse_args(argv)

    try:
        state = _load_state(args.state_file)
    except (OSError, ValueError) as e:
        logger.error(f"[cli] Could not read state file: {e}")
        return 1

    try:
        page = asyncio.run(load_page(args.url, args.html_file, state))
    except FetchError as e:
        logger.error(f"[cli] {e}")
        return 1
    except OSError as e:
        logger.error(f"[cli] Could not read HTML file: {e}")
        return 1

    extractor = find_extractor(args.url)
    if extractor is None:
        logger.warning(f"[cli] No extractor supports {args.url}")

    posting = extract_job_data(page)
    print(json.dumps(posting.to_dict(), indent=2, ensure_ascii=False))

    if args.save:
        store = OpportunityStore(args.store)
        record = store.capture(posting, link=args.link or args.url)
        logger.info(f"[cli] Saved opportunity {record['id']} to {store.path}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
