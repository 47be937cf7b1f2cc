"""CLI for notebake - bake linked notes into a single document."""

import argparse
import json
import logging
import platform
import sys
from pathlib import Path
from typing import Any

from . import __version__
from .adapters.yaml_codec import stamp_source
from .core.baker import bake_sync
from .core.model import Document
from .core.slicer import parse_linktext
from .runtime import build_runtime

logger = logging.getLogger(__name__)


def _find_note(ref: str, rt: Any) -> tuple[Document | None, str | None]:
    """Resolve ``path[#subpath]`` from the vault root."""
    path, subpath = parse_linktext(ref)
    if not path:
        return None, subpath
    return rt.resolver.resolve(path, ""), subpath


def cmd_bake(args: argparse.Namespace, rt: Any) -> int:
    """Bake a note and print or write the result."""
    doc, subpath = _find_note(args.ref, rt)
    if doc is None or not doc.is_markdown:
        print(f"Note {args.ref} not found", file=sys.stderr)
        return 1

    settings = rt.config.bake.override(
        bake_hidden=args.hidden,
        bake_links=args.links,
        bake_embeds=args.embeds,
        bake_in_list=args.in_list,
        convert_file_links=args.file_links,
    )
    logger.debug("Baking %s%s with %s", doc.path, subpath or "", settings)
    text = bake_sync(rt.context(), doc, subpath, settings)

    if args.out:
        out = Path(args.out)
        out.parent.mkdir(parents=True, exist_ok=True)
        out.write_text(text, encoding="utf-8")
        if not args.quiet:
            print(f"Baked {doc.path} to {out}")
    elif args.write:
        target = f"{doc.stem}{rt.config.output.suffix}.md"
        if doc.parent:
            target = f"{doc.parent}/{target}"
        rt.storage.write_raw(target, stamp_source(text, doc.path))
        if not args.quiet:
            print(target)
    else:
        print(text, end="")
    return 0


def _ref_status(ref_link: str, source: Document, rt: Any) -> str:
    path, _ = parse_linktext(ref_link)
    target = rt.resolver.resolve(path, source.path)
    if target is None:
        return "missing"
    return "ok" if target.is_markdown else "file"


def cmd_refs(args: argparse.Namespace, rt: Any) -> int:
    """List the links and embeds of a note with their resolution status."""
    doc, _ = _find_note(args.ref, rt)
    if doc is None:
        print(f"Note {args.ref} not found", file=sys.stderr)
        return 1

    body = rt.index.get(doc)
    if body is None:
        print(f"Note {doc.path} has no Markdown structure", file=sys.stderr)
        return 1

    refs = sorted([*body.links, *body.embeds], key=lambda r: r.range.start)
    rows = [
        {
            "kind": ref.kind,
            "start": ref.range.start,
            "end": ref.range.end,
            "link": ref.link,
            "display": ref.display_text,
            "status": _ref_status(ref.link, doc, rt),
        }
        for ref in refs
    ]

    if args.json:
        print(json.dumps(rows, indent=2))
    else:
        for row in rows:
            print(f"{row['start']}\t{row['end']}\t{row['kind']}\t{row['status']}\t{row['link']}")

    return 1 if any(row["status"] == "missing" for row in rows) else 0


def _version_string() -> str:
    return (
        f"notebake {__version__} "
        f"(python {platform.python_version()}, platform {platform.system().lower()})"
    )


def main() -> None:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="notebake", description="Bake linked notes into one document"
    )
    parser.add_argument("--version", action="version", version=_version_string())
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to config file (default: search cwd/notebake.toml, vault/notebake.toml)",
    )
    parser.add_argument(
        "--vault",
        type=Path,
        default=None,
        help="Path to vault directory (overrides config)",
    )
    parser.add_argument(
        "-q", "--quiet", action="store_true", help="Minimize output"
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Log skipped references to stderr"
    )
    parser.add_argument(
        "--json", action="store_true", help="Machine-readable output"
    )

    subparsers = parser.add_subparsers(dest="cmd", required=True)

    # bake command
    parser_bake = subparsers.add_parser("bake", help="Bake a note")
    parser_bake.add_argument("ref", help="Note path, optionally with #heading or #^label")
    output = parser_bake.add_mutually_exclusive_group()
    output.add_argument("-o", "--out", help="Write the result to this file")
    output.add_argument(
        "--write",
        action="store_true",
        help="Write the result next to the note as <name><suffix>.md",
    )
    for flag, dest, text in (
        ("hidden", "hidden", "Keep %%%%hidden%%%% regions"),
        ("links", "links", "Bake [[links]]"),
        ("embeds", "embeds", "Bake ![[embeds]]"),
        ("in-list", "in_list", "Bake references that start a list item"),
        ("file-links", "file_links", "Turn non-Markdown targets into file:// embeds"),
    ):
        parser_bake.add_argument(
            f"--{flag}",
            dest=dest,
            action=argparse.BooleanOptionalAction,
            default=None,
            help=f"{text} (default: from config)",
        )

    # refs command
    parser_refs = subparsers.add_parser("refs", help="List references of a note")
    parser_refs.add_argument("ref", help="Note path")

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    rt = build_runtime(vault_path=args.vault, config_path=args.config)

    handlers = {
        "bake": cmd_bake,
        "refs": cmd_refs,
    }
    handler = handlers.get(args.cmd)

    if handler:
        try:
            exit_code = handler(args, rt)
            sys.exit(exit_code)
        except Exception as e:
            print(f"Error: {e}", file=sys.stderr)
            sys.exit(1)
    else:
        print(f"Unknown command: {args.cmd}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
