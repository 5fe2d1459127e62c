"""
Command line entry point: assemble one paper and print it as JSON.

Usage:
    paperpress-build --data-root data/questions --class 9th --subject Physics \\
        --chapters 9_phy_ch_1 9_phy_ch_2 --template half_book --seed 42

    paperpress-build --class 9th --subject Physics --chapters 9_phy_ch_1 \\
        --mcq 12 --short 24 --long 3 --difficulty easy

Exit codes:
    0 success, 1 question bank could not be loaded, 2 bad arguments
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from paperpress_toolkit import __version__
from paperpress_toolkit.builder import (
    AssemblyError,
    BuilderConfig,
    DifficultyFilter,
    PaperAssembler,
    QuestionRepository,
    TemplateCategory,
)
from paperpress_toolkit.builder.marks import format_marks_display
from paperpress_toolkit.builder.templates import attempt_targets, get_template

logger = logging.getLogger("paperpress_toolkit.cli")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="paperpress-build",
        description="Assemble an exam paper from a question bank and print it as JSON",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "--data-root", type=Path,
        help="Question bank root (default: $PAPERPRESS_DATA_ROOT or data/questions)",
    )
    parser.add_argument("--class", dest="class_id", required=True, help="Class, e.g. 9th")
    parser.add_argument("--subject", required=True, help="Subject, e.g. Physics")
    parser.add_argument(
        "--chapters", nargs="+", required=True, metavar="ID", help="Chapter ids in scope",
    )
    parser.add_argument(
        "--template", choices=[c.value for c in TemplateCategory],
        help="Take question counts from a predefined template",
    )
    parser.add_argument("--mcq", type=int, help="MCQ count")
    parser.add_argument("--short", type=int, help="Short question count")
    parser.add_argument("--long", type=int, help="Long question count")
    parser.add_argument(
        "--difficulty", default=DifficultyFilter.MIXED.value,
        choices=[d.value for d in DifficultyFilter],
        help="Difficulty filter (default: mixed)",
    )
    parser.add_argument("--seed", type=int, help="Random seed for a reproducible paper")
    parser.add_argument(
        "--priority-ratio", type=float,
        help="Fraction of each type taken from exercise questions (default: 0.5)",
    )
    parser.add_argument("--no-validate", action="store_true", help="Skip JSON schema checks")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    counts = (args.mcq, args.short, args.long)
    if args.template and any(c is not None for c in counts):
        parser.error("--template cannot be combined with --mcq/--short/--long")
    if not args.template and all(c is None for c in counts):
        parser.error("give --template or at least one of --mcq/--short/--long")

    try:
        config = BuilderConfig.from_env(
            data_root=args.data_root,
            seed=args.seed,
            priority_ratio=args.priority_ratio,
            validate_schema=False if args.no_validate else None,
        )
    except ValueError as e:
        parser.error(str(e))

    repository = QuestionRepository(config.data_root, validate_schema=config.validate_schema)
    assembler = PaperAssembler(repository, config)

    template = get_template(args.class_id, args.subject, args.template) if args.template else None

    try:
        if template is not None:
            coro = assembler.assemble_from_template(
                args.class_id, args.subject, template, args.chapters, args.difficulty,
            )
        else:
            coro = assembler.assemble(
                args.class_id, args.subject, args.chapters,
                args.mcq or 0, args.short or 0, args.long or 0, args.difficulty,
            )
        paper = asyncio.run(coro)
    except AssemblyError as e:
        logger.error(str(e))
        return 1

    if template is not None:
        attempts = attempt_targets(template)
        breakdown = paper.marks(short_attempt=attempts.short, long_attempt=attempts.long)
    else:
        breakdown = paper.marks()
    output = paper.to_dict()
    output["marks"] = breakdown.to_dict()
    print(json.dumps(output, indent=2))
    logger.info(format_marks_display(breakdown))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
