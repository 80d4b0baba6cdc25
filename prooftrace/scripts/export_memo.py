from __future__ import annotations

import argparse
import json
from pathlib import Path

from prooftrace.internal_core.errors import TraceValidationError
from prooftrace.memo.render import memo_filename, render_memo_html
from prooftrace.schema.seed import SEED_DRAFT_TEXT, make_seed_trace
from prooftrace.schema.validation import validate_trace


def export_memo(trace_json: Path | None, draft_path: Path | None, out_dir: Path) -> Path:
    if trace_json is None:
        trace = make_seed_trace()
    else:
        try:
            payload = json.loads(trace_json.read_text(encoding="utf-8"))
        except ValueError as exc:
            raise SystemExit(f"trace file is not valid JSON: {trace_json} ({exc})") from exc
        try:
            trace = validate_trace(payload)
        except TraceValidationError as exc:
            raise SystemExit(str(exc)) from exc

    draft = SEED_DRAFT_TEXT if draft_path is None else draft_path.read_text(encoding="utf-8")

    out_dir.mkdir(parents=True, exist_ok=True)
    out_path = out_dir / memo_filename(trace)
    out_path.write_text(render_memo_html(trace, draft), encoding="utf-8")
    return out_path


def main() -> None:
    parser = argparse.ArgumentParser(
        description="Render an advisory trace and its draft into a standalone HTML memo."
    )
    parser.add_argument(
        "--trace-json",
        default=None,
        help="Path to a trace JSON document (default: the built-in seed trace).",
    )
    parser.add_argument(
        "--draft-path",
        default=None,
        help="Path to the draft text file (default: the built-in seed draft).",
    )
    parser.add_argument(
        "--out-dir",
        default=".",
        help="Directory to write the memo into (default: current directory).",
    )
    args = parser.parse_args()

    trace_json = Path(args.trace_json).expanduser() if args.trace_json else None
    if trace_json is not None and not trace_json.exists():
        raise SystemExit(f"trace file not found: {trace_json}")
    draft_path = Path(args.draft_path).expanduser() if args.draft_path else None
    if draft_path is not None and not draft_path.exists():
        raise SystemExit(f"draft file not found: {draft_path}")

    out_path = export_memo(trace_json, draft_path, Path(args.out_dir).expanduser())
    print(f"memo_path: {out_path}")


if __name__ == "__main__":
    main()
