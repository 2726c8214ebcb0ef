"""CLI entrypoint for the weekly research radar (generate data, render page)."""

from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from pathlib import Path

from dotenv import load_dotenv

from anthropic_client import fetch_research_response
from document_store import (
    DEFAULT_PAPERS_PATH,
    build_degraded_document,
    build_document,
    ensure_output_dir,
    load_previous_document,
    write_document,
)
from prompts import SYSTEM_PROMPT, USER_PROMPT
from renderer import ViewHandles, fetch_document, render, write_page


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line flags."""
    parser = argparse.ArgumentParser(description="Generate and render the weekly research radar")
    parser.add_argument(
        "--mode",
        choices=["generate", "render"],
        default="generate",
        help=(
            "'generate' (default): ask Claude for recent papers and write the JSON document. "
            "'render': build the static page from an existing JSON document."
        ),
    )
    parser.add_argument(
        "--output",
        default=None,
        help="generate: JSON path (PAPERS_OUTPUT_PATH); render: HTML path (PAGE_OUTPUT_PATH)",
    )
    parser.add_argument(
        "--source",
        default=None,
        help="render only: path or URL of the papers JSON (PAPERS_SOURCE)",
    )
    parser.add_argument(
        "--raw-response",
        type=Path,
        default=None,
        help="generate only: parse a saved raw model response instead of calling the API",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="generate only: parse and log the result without writing the JSON document",
    )
    args = parser.parse_args(argv)

    if args.mode == "render" and (args.dry_run or args.raw_response is not None):
        parser.error("--dry-run and --raw-response only apply to --mode generate")
    if args.mode == "generate" and args.source is not None:
        parser.error("--source only applies to --mode render")
    return args


def run_generate(output_path: str | Path, raw_response: Path | None = None, dry_run: bool = False) -> bool:
    """Run one generation pass. Returns False when the run failed.

    A failed run still writes a document: the previous one annotated with the
    error, or a minimal empty one.
    """
    output_path = Path(output_path)
    previous = None

    try:
        ensure_output_dir(output_path)
        previous = load_previous_document(output_path)

        if raw_response is not None:
            raw_text = raw_response.read_text(encoding="utf-8")
            logging.info("Loaded raw model response from %s", raw_response)
        else:
            raw_text = fetch_research_response(SYSTEM_PROMPT, USER_PROMPT)
        logging.info("API response received, parsing...")

        document = build_document(raw_text)

        if dry_run:
            logging.info("[dry-run] Would write %s papers to %s", len(document["papers"]), output_path)
            logging.info("[dry-run] Document:\n%s", json.dumps(document, indent=2))
            return True

        write_document(document, output_path)
        logging.info("Wrote %s papers to %s", len(document["papers"]), output_path)
        return True
    except Exception as exc:  # broad: a failed run must still leave a document
        logging.exception("Generation failed: %s", exc)
        if dry_run:
            return False

        error = str(exc) or exc.__class__.__name__
        try:
            write_document(build_degraded_document(previous, error), output_path)
        except (OSError, ValueError) as write_exc:
            logging.error("Could not write error document to %s: %s", output_path, write_exc)
            return False
        if previous is not None:
            logging.info("Preserved previous data with error annotation.")
        else:
            logging.info("Wrote minimal error document to %s", output_path)
        return False


def run_render(source: str, output_path: str | Path) -> ViewHandles:
    """Render the static page from the papers document at source."""
    view = render(ViewHandles.create(), lambda: fetch_document(source))
    write_page(view, output_path)
    return view


def main(argv: list[str] | None = None) -> None:
    """Initialize config and execute the selected mode."""
    load_dotenv()
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(message)s")
    args = parse_args(argv)

    if args.mode == "render":
        source = args.source or os.getenv("PAPERS_SOURCE", "data/papers.json")
        output = args.output or os.getenv("PAGE_OUTPUT_PATH", "index.html")
        run_render(source, output)
        return

    ok = run_generate(
        args.output or os.getenv("PAPERS_OUTPUT_PATH", DEFAULT_PAPERS_PATH),
        raw_response=args.raw_response,
        dry_run=args.dry_run,
    )
    if not ok:
        sys.exit(1)


if __name__ == "__main__":
    main()
