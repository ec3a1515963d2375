#!/usr/bin/env python
"""CLI for exploring a topic with AI-Wiki."""

import argparse
import asyncio
import logging
import sys
from pathlib import Path

import httpx
from pydantic import BaseModel, field_validator

from aiwiki.config import create_from_config, get_default_config_path, load_config
from aiwiki.navigation import InMemoryHistory

logger = logging.getLogger(__name__)


class CLIArgs(BaseModel):
    """Validated CLI arguments."""

    query: str
    config: Path
    open: int | None = None
    eli5: bool = False
    log: bool = False
    log_dir: str = "logs"

    @field_validator("query")
    @classmethod
    def query_must_not_be_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Query must not be empty")
        return v.strip()

    @field_validator("config")
    @classmethod
    def config_must_exist(cls, v: Path) -> Path:
        if not v.exists():
            raise ValueError(f"Config file not found: {v}")
        return v

    @field_validator("open")
    @classmethod
    def open_must_be_positive(cls, v: int | None) -> int | None:
        if v is not None and v < 1:
            raise ValueError("--open takes a 1-based question number")
        return v


async def run(args: CLIArgs) -> None:
    """Run a session for the given topic.

    Args:
        args: Validated CLI arguments.
    """
    config = load_config(args.config)
    history = InMemoryHistory()

    async with httpx.AsyncClient(timeout=config.wikipedia.timeout, follow_redirects=True) as client:
        controller, run_logger = create_from_config(
            config,
            history=history,
            client=client,
            log_override=args.log if args.log else None,
            log_dir_override=args.log_dir if args.log_dir != "logs" else None,
        )
        await controller.load()
        await controller.submit(args.query)
        state = controller.state

        logger.info(f"Config: {args.config}")
        logger.info(f"URL: {history.url}\n")
        if run_logger and run_logger.last_log_path:
            logger.info(f"Run log written to: {run_logger.last_log_path}")

        if state.error:
            logger.error(state.error)
            return

        if state.overview:
            title = state.overview.title or args.query
            logger.info(f"== {title} ==")
            logger.info(state.overview.text)
            if state.overview.url:
                logger.info(f"Source: {state.overview.url}")
        else:
            logger.info(f"No overview found for “{args.query}”.")

        if args.eli5 and state.overview and args.open is None:
            logger.info("\n--- Explain like I'm 5 ---")
            logger.info(await controller.simplify_overview())

        if state.not_found:
            logger.info("\nNothing found. Did you mean:")
            for suggestion in state.suggestions:
                logger.info(f"  - {suggestion}")
            return

        logger.info(f"\n{len(state.questions)} questions:")
        for i, question in enumerate(state.questions, 1):
            logger.info(f"{i:>2}. {question.question}")

        if args.open is None:
            return
        if args.open > len(state.questions):
            logger.error(f"There is no question {args.open}")
            return

        question = state.questions[args.open - 1]
        await controller.open_question(question)
        logger.info(f"\n== {question.question} ==")
        logger.info(question.answer or "")
        if question.source_url:
            logger.info(f"Source: {question.source_url}")
        for image in state.media.images:
            logger.info(f"  [image] {image.title}: {image.url}")
        for video in state.media.videos:
            logger.info(f"  [video] {video.title}: {video.url}")

        if args.eli5:
            logger.info("\n--- Explain like I'm 5 ---")
            logger.info(await controller.simplify_answer())

        await controller.close_modal()
        await controller.on_popstate(history.current, history.url)


def main() -> None:
    """Entry point for the CLI."""
    parser = argparse.ArgumentParser(description="Explore a topic: overview, questions, ELI5.")
    parser.add_argument(
        "query",
        help="Topic to search for",
    )
    parser.add_argument(
        "--config",
        "-c",
        type=Path,
        default=None,
        help="Path to YAML config file (default: configs/default.yaml)",
    )
    parser.add_argument(
        "--open",
        "-o",
        type=int,
        default=None,
        help="Open question N (1-based) and show its answer and media",
    )
    parser.add_argument(
        "--eli5",
        action="store_true",
        default=False,
        help="Also show a simplified version of the overview or opened answer",
    )
    parser.add_argument(
        "--log",
        action="store_true",
        default=False,
        help="Enable aggregation run logging to JSON file",
    )
    parser.add_argument(
        "--log-dir",
        type=str,
        default="logs",
        help="Directory for log files (default: logs/)",
    )

    logging.basicConfig(level=logging.INFO, format="%(message)s")
    logging.getLogger("httpx").setLevel(logging.WARNING)

    ns = parser.parse_args()
    config_path: Path = ns.config if ns.config else get_default_config_path()

    try:
        args = CLIArgs(
            query=ns.query,
            config=config_path,
            open=ns.open,
            eli5=ns.eli5,
            log=ns.log,
            log_dir=ns.log_dir,
        )
    except Exception as e:
        logger.error(str(e))
        sys.exit(1)

    try:
        asyncio.run(run(args))
    except KeyboardInterrupt:
        sys.exit(130)


if __name__ == "__main__":
    main()
