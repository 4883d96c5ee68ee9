#!/usr/bin/env python3
"""
focusdesk command line
──────────────────────
Drives the priority matrix and the blueprint organizer from a terminal.
Each command loads the persisted collections into an AppState, applies one
reducer from focusdesk.state, and writes back what changed.

Usage:
    focusdesk task add Finish the urgent deadline report today
    focusdesk task list [--quadrant 1]
    focusdesk task rm <id>
    focusdesk task clear
    focusdesk task classify Plan long-term career growth --explain

    focusdesk ir normalize rules.txt
    focusdesk ir export rules.txt --out exports/
    focusdesk kcs export notes.txt --format jsonl --chunk-size 500

    focusdesk profile save "support bot" --ir rules.txt --kcs notes.txt
    focusdesk profile list | show <index> | rm <index> | clear

Global options:
    --config PATH   YAML config (default ~/.config/focusdesk/config.yaml)
    --db PATH       SQLite file (overrides FOCUSDESK_DB and config)
    -v, --verbose   Debug logging
"""
import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from . import state as st
from .blueprint.exporter import export_kcs as serialize_kcs
from .blueprint.files import read_text_file, export_ir, export_kcs
from .blueprint.normalizer import normalize_instructions
from .blueprint.profiles import ProfileStore
from .blueprint.schema import Blueprint, ExportFormat
from .config import Config, ConfigError
from .kvstore import KeyValueStore
from .matrix.board import PriorityBoard
from .matrix.classifier import explain, classify
from .matrix.schema import Quadrant

logger = logging.getLogger(__name__)


def _setup_logging(level: str):
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s [focusdesk] %(levelname)s: %(message)s",
        handlers=[logging.StreamHandler(sys.stderr)],
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="focusdesk", description="Priority matrix and AI blueprint organizer")
    parser.add_argument("--config", help="Path to config.yaml")
    parser.add_argument("--db", help="Path to focusdesk.db (overrides FOCUSDESK_DB env var)")
    parser.add_argument("-v", "--verbose", action="store_true")
    sub = parser.add_subparsers(dest="area", required=True)

    # ── task ──
    task = sub.add_parser("task", help="Priority matrix tasks").add_subparsers(dest="action", required=True)
    p = task.add_parser("add", help="Classify and add a task")
    p.add_argument("text", nargs="+")
    p = task.add_parser("list", help="List tasks by quadrant")
    p.add_argument("--quadrant", "-q", type=int, choices=[1, 2, 3, 4])
    p = task.add_parser("rm", help="Delete a task by id")
    p.add_argument("item_id")
    task.add_parser("clear", help="Delete every task")
    p = task.add_parser("classify", help="Classify text without saving")
    p.add_argument("text", nargs="+")
    p.add_argument("--explain", action="store_true", help="Show matched keywords as JSON")

    # ── ir ──
    ir = sub.add_parser("ir", help="Instructional Ruleset").add_subparsers(dest="action", required=True)
    p = ir.add_parser("normalize", help="Print the normalized Markdown")
    p.add_argument("file")
    p = ir.add_parser("export", help="Write ir_<ms>.md")
    p.add_argument("file")
    p.add_argument("--out", help="Output directory")

    # ── kcs ──
    kcs = sub.add_parser("kcs", help="Knowledge Compendium Synthesis").add_subparsers(dest="action", required=True)
    p = kcs.add_parser("export", help="Chunk and write kcs_<ms>.json|jsonl")
    p.add_argument("file")
    p.add_argument("--format", "-f", default="json", choices=[f.value for f in ExportFormat])
    p.add_argument("--chunk-size", type=int)
    p.add_argument("--out", help="Output directory ('-' prints to stdout)")

    # ── profile ──
    prof = sub.add_parser("profile", help="Saved blueprints").add_subparsers(dest="action", required=True)
    p = prof.add_parser("save", help="Save IR/KCS files under a name")
    p.add_argument("name")
    p.add_argument("--ir", help="IR text file")
    p.add_argument("--kcs", help="KCS text file")
    p.add_argument("--format", "-f", default="json", choices=[f.value for f in ExportFormat])
    prof.add_parser("list", help="List saved profiles")
    p = prof.add_parser("show", help="Print a saved profile as JSON")
    p.add_argument("index", type=int)
    p = prof.add_parser("rm", help="Delete a saved profile")
    p.add_argument("index", type=int)
    prof.add_parser("clear", help="Delete every saved profile")

    return parser


class App:
    """Wires config, storage and the two features together for one command."""

    def __init__(self, cfg: Config):
        self.cfg = cfg
        self.store = KeyValueStore(cfg.db_path)
        self.board = PriorityBoard(self.store, cfg.urgent_keywords, cfg.important_keywords)
        self.profiles = ProfileStore(self.store, cfg.default_header)

    def state(self) -> st.AppState:
        return st.initial_state(self.board.load(), self.profiles.load_all())

    # ── task ──

    def task_add(self, text: str) -> int:
        before = self.state()
        after = st.submit_task(
            st.set_input(before, text),
            self.cfg.urgent_keywords,
            self.cfg.important_keywords,
        )
        if after.board.items == before.board.items:
            print("Nothing to add (empty task).")
            return 0
        self.board.save(after.board.items)
        item = after.board.items[-1]
        print(f"{item.id}  [{item.category.value}] {item.category.title}: {item.text}")
        return 0

    def task_list(self, quadrant: Optional[int]) -> int:
        items = self.state().board.items
        quadrants = [Quadrant(quadrant)] if quadrant else list(Quadrant)
        for q in quadrants:
            print(f"── {q.value} {q.title} ({q.subtitle})")
            in_quadrant = [i for i in items if i.category == q]
            if not in_quadrant:
                print("   No tasks in this quadrant")
            for item in in_quadrant:
                print(f"   {item.id}  {item.text}")
        return 0

    def task_rm(self, item_id: str) -> int:
        before = self.state()
        after = st.delete_task(before, item_id)
        if len(after.board.items) == len(before.board.items):
            print(f"error: no task with id {item_id}", file=sys.stderr)
            return 1
        self.board.save(after.board.items)
        print(f"Deleted {item_id}")
        return 0

    def task_clear(self) -> int:
        if self.board.clear():
            print("Cleared all tasks.")
        else:
            print("No tasks to clear.")
        return 0

    def task_classify(self, text: str, show_explain: bool) -> int:
        if not text.strip():
            print("Nothing to classify (empty text).")
            return 0
        if show_explain:
            print(json.dumps(explain(text, self.cfg.urgent_keywords, self.cfg.important_keywords), indent=2))
        else:
            q = classify(text, self.cfg.urgent_keywords, self.cfg.important_keywords)
            print(f"{q.value} {q.title}")
        return 0

    # ── ir / kcs ──

    def ir_normalize(self, path: str) -> int:
        text = read_text_file(path)
        print(normalize_instructions(text, self.cfg.default_header))
        return 0

    def ir_export(self, path: str, out: Optional[str]) -> int:
        state = st.import_ir(self.state(), read_text_file(path))
        dest = export_ir(state.organizer.blueprint, out or self.cfg.export_dir,
                         default_header=self.cfg.default_header)
        print(f"Exported IR to {dest}")
        return 0

    def kcs_export(self, path: str, fmt: str, chunk_size: Optional[int], out: Optional[str]) -> int:
        state = st.set_kcs_format(st.import_kcs(self.state(), read_text_file(path)), fmt)
        blueprint = state.organizer.blueprint
        size = chunk_size if chunk_size is not None else self.cfg.chunk_size
        if not blueprint.kcs.split():
            print("Nothing to export (KCS is empty).", file=sys.stderr if out == "-" else sys.stdout)
        if out == "-":
            print(serialize_kcs(blueprint.kcs, blueprint.kcs_format, size))
            return 0
        dest = export_kcs(blueprint, out or self.cfg.export_dir, chunk_size=size)
        print(f"Exported KCS to {dest}")
        return 0

    # ── profile ──

    def profile_save(self, name: str, ir_path: Optional[str], kcs_path: Optional[str], fmt: str) -> int:
        state = self.state()
        state = st.import_ir(state, read_text_file(ir_path))
        state = st.import_kcs(state, read_text_file(kcs_path))
        state = st.set_kcs_format(state, fmt)
        after = st.save_profile(state, name, default_header=self.cfg.default_header)
        if after is state:
            print("Save cancelled (no name given).")
            return 0
        self.profiles.save_all(after.organizer.saved)
        print(f"Blueprint saved successfully! ({len(after.organizer.saved) - 1}: {name})")
        return 0

    def profile_list(self) -> int:
        saved = self.state().organizer.saved
        if not saved:
            print("No saved blueprints.")
        for index, profile in enumerate(saved):
            print(f"{index:>3}  {profile.saved_at}  {profile.name}")
        return 0

    def profile_show(self, index: int) -> int:
        state = st.load_profile(self.state(), index)
        blueprint: Blueprint = state.organizer.blueprint
        print(json.dumps(blueprint.to_dict(), indent=2, ensure_ascii=False))
        return 0

    def profile_rm(self, index: int) -> int:
        before = self.state()
        after = st.delete_profile(before, index)
        self.profiles.save_all(after.organizer.saved)
        print(f"Deleted profile {index} ({before.organizer.saved[index].name})")
        return 0

    def profile_clear(self) -> int:
        if self.profiles.clear():
            print("Deleted all saved blueprints.")
        else:
            print("No saved blueprints.")
        return 0


def dispatch(app: App, args: argparse.Namespace) -> int:
    area, action = args.area, args.action
    if area == "task":
        if action == "add":
            return app.task_add(" ".join(args.text))
        if action == "list":
            return app.task_list(args.quadrant)
        if action == "rm":
            return app.task_rm(args.item_id)
        if action == "clear":
            return app.task_clear()
        if action == "classify":
            return app.task_classify(" ".join(args.text), args.explain)
    elif area == "ir":
        if action == "normalize":
            return app.ir_normalize(args.file)
        if action == "export":
            return app.ir_export(args.file, args.out)
    elif area == "kcs":
        if action == "export":
            return app.kcs_export(args.file, args.format, args.chunk_size, args.out)
    elif area == "profile":
        if action == "save":
            return app.profile_save(args.name, args.ir, args.kcs, args.format)
        if action == "list":
            return app.profile_list()
        if action == "show":
            return app.profile_show(args.index)
        if action == "rm":
            return app.profile_rm(args.index)
        if action == "clear":
            return app.profile_clear()
    raise ValueError(f"Unknown command: {area} {action}")


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        cfg = Config.load(args.config, strict=bool(args.config))
    except ConfigError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1
    if args.db:
        cfg.db_path = str(Path(args.db).expanduser())
    _setup_logging("DEBUG" if args.verbose else cfg.log_level)

    try:
        return dispatch(App(cfg), args)
    except (ValueError, IndexError, OSError) as e:
        # ExportError is a ValueError
        logger.debug("Command failed", exc_info=True)
        print(f"error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
