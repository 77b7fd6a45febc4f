"""CLI entrypoint."""

import argparse
import json
import sys
from pathlib import Path

from i18n_editor.config import EditorConfig
from i18n_editor.editor import I18nEditor, WriteError
from i18n_editor.keypath import MISSING
from i18n_editor.logging_setup import configure_logging
from i18n_editor.providers.registry import BACKENDS, build_backends
from i18n_editor.report import generate_summary_report, print_summary_report
from i18n_editor.run_logging import RunLogger


def format_value(value) -> str:
    if value is MISSING:
        return "<missing>"
    return json.dumps(value, ensure_ascii=False)


def parse_value(raw: str, as_json: bool):
    """Decode a command-line value, as JSON when requested."""
    if not as_json:
        return raw
    return json.loads(raw)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="i18n editor - read, write, remove and translate locale keys"
    )
    parser.add_argument(
        "--locale-path",
        type=Path,
        help="Locale root directory (default: first entry of I18N_LOCALE_PATHS)"
    )
    parser.add_argument(
        "--source-locale",
        help="Source locale code (default: I18N_SOURCE_LOCALE or en)"
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        help="Log level (default: WARNING)"
    )
    parser.add_argument(
        "--json-logs",
        action="store_true",
        help="Emit logs as JSON lines"
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    # get command
    get_parser = subparsers.add_parser("get", help="Show a key in every locale")
    get_parser.add_argument("key", help="Dotted key (e.g. common.button.ok)")

    # set command
    set_parser = subparsers.add_parser("set", help="Write a key")
    set_parser.add_argument("key", help="Dotted key")
    set_parser.add_argument("value", help="Value to write")
    set_parser.add_argument(
        "--locale",
        help="Only write this locale (default: every locale)"
    )
    set_parser.add_argument(
        "--json",
        action="store_true",
        help="Parse the value as JSON"
    )
    set_parser.add_argument(
        "--yes",
        action="store_true",
        help="Overwrite conflicting values without asking"
    )

    # remove command
    remove_parser = subparsers.add_parser("remove", help="Remove a key from every locale")
    remove_parser.add_argument("key", help="Dotted key")

    # translate command
    translate_parser = subparsers.add_parser(
        "translate",
        help="Translate a key from the source locale into every other locale"
    )
    translate_parser.add_argument("key", help="Dotted key")
    translate_parser.add_argument(
        "--backend",
        action="append",
        choices=sorted(BACKENDS),
        help="Backend to try, repeatable, in order (default: google, baidu, youdao, api)"
    )
    translate_parser.add_argument(
        "--write",
        action="store_true",
        help="Write the translations back to the locale files"
    )
    translate_parser.add_argument(
        "--runs-dir",
        type=Path,
        help="Directory for run logs (default: I18N_RUNS_DIR or work/runs)"
    )

    # locales command
    subparsers.add_parser("locales", help="List the locales of the locale root")

    return parser


def main(argv=None) -> None:
    """Main CLI entrypoint."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        sys.exit(1)

    try:
        configure_logging(args.log_level, json_output=args.json_logs)
        config = EditorConfig.from_env(source_locale=args.source_locale)

        locale_path = args.locale_path
        if locale_path is None:
            if not config.locale_paths:
                raise ValueError("No locale root given. Use --locale-path or set I18N_LOCALE_PATHS.")
            locale_path = config.locale_paths[0]

        backends = None
        if args.command == "translate":
            backends = build_backends(args.backend)

        editor = I18nEditor(locale_path, config=config, backends=backends, watch=False)
    except Exception as e:
        print(f"✗ Error: {e}", file=sys.stderr)
        sys.exit(1)

    with editor:
        if args.command == "get":
            for record in editor.get_i18n(args.key):
                print(f"{record.locale_code}: {format_value(record.value)}")

        elif args.command == "set":
            try:
                value = parse_value(args.value, args.json)
                if not args.yes and not editor.check_override(args.key):
                    print("⏭ Skipped: existing value kept")
                    return
                written = editor.set_i18n(args.key, value, locale=args.locale)
                print(f"✓ Wrote {args.key} to {len(written)} file(s)")
            except (WriteError, ValueError) as e:
                print(f"✗ Error: {e}", file=sys.stderr)
                sys.exit(1)

        elif args.command == "remove":
            editor.remove_i18n(args.key)
            print(f"✓ Removed {args.key}")

        elif args.command == "translate":
            try:
                run_logger = RunLogger(args.runs_dir or config.runs_dir)
                run_logger.update_summary(key=args.key, source_locale=config.source_locale)

                records = editor.get_i18n(args.key)
                before = {record.locale_code: record.value for record in records}
                records = editor.trans_i18n(records, run_logger=run_logger)
                run_logger.finalize()

                report = generate_summary_report(
                    args.key,
                    before,
                    records,
                    config.source_locale
                )
                print_summary_report(report)

                if args.write:
                    targets = [
                        record for record in records
                        if report["locales"][record.locale_code]["status"] == "translated"
                    ]
                    editor.write_i18n(targets)
                    print(f"✓ Wrote {len(targets)} translation(s)")

                print(f"✓ Translation complete. Run ID: {run_logger.run_id}")
                print(f"  Logs: {run_logger.run_dir}")
            except Exception as e:
                print(f"✗ Error: {e}", file=sys.stderr)
                sys.exit(1)

        elif args.command == "locales":
            store = editor.store
            print(f"Locale root: {store.root_path}")
            print(f"Structure:   {store.structure_type.value}")
            print(f"Format:      {store.file_ext}")
            for entry in store.list_locales():
                marker = "*" if entry.locale_code == config.source_locale else " "
                print(f" {marker} {entry.locale_code:<10} {entry.entry_path}")


if __name__ == "__main__":
    main()
