"""
Ahorro CLI - Command-line interface.

Usage:
    ahorro init ./my-savings                 # Create a config directory
    ahorro show                              # Show the whole year
    ahorro set enero week1 150               # Edit a field (saved immediately)
    ahorro month marzo                       # Recalculate a month against its goal
    ahorro year                              # Recalculate the annual total
"""

import argparse
import logging
import os
import sys

from ._version import VERSION
from .config_loader import load_config
from .display import C, render_month, render_year
from .months import parse_month_arg
from .records import FIELDS, UnknownFieldError
from .storage import JsonFileStore, deserialize, restore, serialize
from .tracker import SavingsTracker

STARTER_SETTINGS = '''# Ahorro - savings calendar settings
year: {year}

# Where the calendar is saved (relative to this folder's parent)
store_file: data/ahorro.json

# Display format for amounts; {{amount}} is replaced by e.g. 1,234.56
currency_format: "${{amount}}"

# Decimal separator used when typing amounts: "." (1,234.56) or "," (1.234,56)
decimal_separator: "."
'''


def find_config_dir():
    """Find the config directory.

    Resolution order:
    1. AHORRO_CONFIG environment variable (if set and exists)
    2. ./config
    3. ./ahorro/config

    Returns None if no config directory is found.
    """
    env_config = os.environ.get('AHORRO_CONFIG')
    if env_config:
        env_path = os.path.abspath(env_config)
        if os.path.isdir(env_path):
            return env_path

    for candidate in ('config', os.path.join('ahorro', 'config')):
        path = os.path.abspath(candidate)
        if os.path.isdir(path):
            return path

    return None


def init_config(target_dir):
    """Initialize a new config directory with starter files."""
    import datetime

    config_dir = os.path.join(target_dir, 'config')
    data_dir = os.path.join(target_dir, 'data')

    os.makedirs(config_dir, exist_ok=True)
    os.makedirs(data_dir, exist_ok=True)

    current_year = datetime.datetime.now().year
    files_created = []
    files_skipped = []

    settings_path = os.path.join(config_dir, 'settings.yaml')
    if not os.path.exists(settings_path):
        with open(settings_path, 'w', encoding='utf-8') as f:
            f.write(STARTER_SETTINGS.format(year=current_year))
        files_created.append('config/settings.yaml')
    else:
        files_skipped.append('config/settings.yaml')

    gitignore_path = os.path.join(target_dir, '.gitignore')
    if not os.path.exists(gitignore_path):
        with open(gitignore_path, 'w', encoding='utf-8') as f:
            f.write('''# Ahorro - keep saved amounts out of version control
data/
''')
        files_created.append('.gitignore')

    return files_created, files_skipped


def _fail(message, hint=None):
    print(f"Error: {message}", file=sys.stderr)
    if hint:
        print(f"\n{hint}", file=sys.stderr)
    sys.exit(1)


def _month(text):
    try:
        return parse_month_arg(text)
    except ValueError as e:
        _fail(str(e), "Use a number 1-12 or a month name such as 'enero' or 'sept'.")


def _load_tracker(args):
    """Load config, open the store and restore the saved calendar."""
    if args.config:
        config_dir = os.path.abspath(args.config)
    else:
        config_dir = find_config_dir()

    if not config_dir or not os.path.isdir(config_dir):
        _fail("Config directory not found.",
              "Looked for: ./config and ./ahorro/config\n"
              "Run 'ahorro init' to create a new savings directory.")

    try:
        config = load_config(config_dir, args.settings)
    except (FileNotFoundError, ValueError) as e:
        _fail(str(e))

    tracker = SavingsTracker(
        store=JsonFileStore(config['store_file']),
        currency_format=config['currency_format'],
        decimal_separator=config['decimal_separator'],
        storage_key=config['storage_key'],
    )
    tracker.init()
    return tracker, config


def _print_month(tracker, month_index):
    print(render_month(
        month_index,
        tracker.state.month(month_index),
        tracker.display.month(month_index),
        tracker.currency_format,
        tracker.decimal_separator,
    ))


def _print_year(tracker, config):
    print(render_year(
        tracker.state,
        tracker.display,
        tracker.currency_format,
        tracker.decimal_separator,
        year=config.get('year'),
    ))


def cmd_init(args):
    """Handle the 'init' subcommand."""
    target_dir = os.path.abspath(args.dir)
    rel_target = os.path.relpath(target_dir)
    if rel_target == '.':
        rel_target = './'

    print(f"Initializing savings directory: {C.BOLD}{rel_target}{C.RESET}")
    print()

    created, skipped = init_config(target_dir)

    all_files = [(f, True) for f in created] + [(f, False) for f in skipped]
    all_files.sort(key=lambda x: x[0])

    for f, was_created in all_files:
        if was_created:
            print(f"  {C.GREEN}✓{C.RESET} {f}")
        else:
            print(f"  {C.YELLOW}→{C.RESET} {C.DIM}{f} (exists){C.RESET}")

    print()
    print(f"Run {C.GREEN}ahorro set enero week1 100 {os.path.join(rel_target, 'config')}{C.RESET} to record your first week.")


def cmd_show(args):
    """Handle the 'show' subcommand."""
    tracker, config = _load_tracker(args)
    if args.month:
        _print_month(tracker, _month(args.month))
    else:
        _print_year(tracker, config)


def cmd_set(args):
    """Handle the 'set' subcommand."""
    month_index = _month(args.month)
    field = args.field.strip().lower().replace('-', '_')
    if field not in FIELDS:
        _fail(str(UnknownFieldError(args.field)))

    tracker, _ = _load_tracker(args)
    tracker.on_field_edit(month_index, field, args.value)

    # Refresh display regions without recalculating the monthly goal
    tracker.show_month_total(month_index)
    tracker.update_all_goals()
    _print_month(tracker, month_index)


def cmd_month(args):
    """Handle the 'month' subcommand."""
    month_index = _month(args.month)
    tracker, _ = _load_tracker(args)
    tracker.recalculate_month(month_index)
    _print_month(tracker, month_index)


def cmd_year(args):
    """Handle the 'year' subcommand."""
    tracker, config = _load_tracker(args)
    tracker.recalculate_year()
    _print_year(tracker, config)


def cmd_export(args):
    """Handle the 'export' subcommand."""
    tracker, _ = _load_tracker(args)
    blob = serialize(tracker.state)
    if args.output:
        try:
            with open(args.output, 'w', encoding='utf-8') as f:
                f.write(blob)
        except OSError as e:
            _fail(f"Could not write {args.output}: {e}")
        print(f"Exported 12 months to {args.output}")
    else:
        print(blob)


def cmd_import(args):
    """Handle the 'import' subcommand."""
    try:
        with open(args.file, 'r', encoding='utf-8') as f:
            blob = f.read()
    except OSError as e:
        _fail(f"Could not read {args.file}: {e}")

    entries = deserialize(blob)
    if entries is None:
        _fail(f"{args.file} is not a valid savings calendar export",
              "Expected a JSON list of 12 months, as written by 'ahorro export'.")

    tracker, config = _load_tracker(args)
    restore(entries, tracker.state)
    for index in range(1, len(tracker.state) + 1):
        tracker.show_month_total(index)
    tracker.recalculate_year()
    if not args.quiet:
        _print_year(tracker, config)


def _add_config_args(subparser):
    subparser.add_argument(
        'config',
        nargs='?',
        help='Path to config directory (default: ./config)'
    )
    subparser.add_argument(
        '--settings', '-s',
        default='settings.yaml',
        help='Settings file name (default: settings.yaml)'
    )


def main():
    """Main entry point for ahorro CLI."""
    parser = argparse.ArgumentParser(
        prog='ahorro',
        description='Track weekly savings against monthly and cumulative goals.',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog='''Months can be given as 1-12 or by name (enero, feb, sept, ...).'''
    )
    parser.add_argument(
        '-v', '--verbose',
        action='count',
        default=0,
        help='Increase log output (use -v for info, -vv for debug)'
    )

    subparsers = parser.add_subparsers(dest='command', title='commands', metavar='<command>')

    init_parser = subparsers.add_parser(
        'init',
        help='Set up a new savings folder with a settings file (run once to get started)'
    )
    init_parser.add_argument(
        'dir',
        nargs='?',
        default='ahorro',
        help='Directory to initialize (default: ./ahorro)'
    )

    show_parser = subparsers.add_parser(
        'show',
        help='Show the saved calendar with totals and goal progress'
    )
    show_parser.add_argument(
        '--month', '-m',
        help='Show a single month in detail'
    )
    _add_config_args(show_parser)

    set_parser = subparsers.add_parser(
        'set',
        help='Edit one field of a month and save',
        description=f"Editable fields: {', '.join(FIELDS)}"
    )
    set_parser.add_argument('month', help='Month (1-12 or name)')
    set_parser.add_argument('field', help='Field to edit, e.g. week1 or goal_target_month')
    set_parser.add_argument('value', help="New raw value (use '' to clear)")
    _add_config_args(set_parser)

    month_parser = subparsers.add_parser(
        'month',
        help='Recalculate a month total and compare it with the monthly goal'
    )
    month_parser.add_argument('month', help='Month (1-12 or name)')
    _add_config_args(month_parser)

    year_parser = subparsers.add_parser(
        'year',
        help='Recalculate the annual total and all cumulative goals'
    )
    _add_config_args(year_parser)

    export_parser = subparsers.add_parser(
        'export',
        help='Print the saved calendar as JSON'
    )
    export_parser.add_argument(
        '--output', '-o',
        help='Write to a file instead of stdout'
    )
    _add_config_args(export_parser)

    import_parser = subparsers.add_parser(
        'import',
        help='Replace the saved calendar with a JSON export'
    )
    import_parser.add_argument('file', help='File written by ahorro export')
    import_parser.add_argument(
        '--quiet', '-q',
        action='store_true',
        help='Do not print the calendar after importing'
    )
    _add_config_args(import_parser)

    subparsers.add_parser(
        'version',
        help='Show version information'
    )

    args = parser.parse_args()

    level = logging.WARNING
    if args.verbose == 1:
        level = logging.INFO
    elif args.verbose >= 2:
        level = logging.DEBUG
    logging.basicConfig(level=level, format='%(levelname)s: %(message)s', stream=sys.stderr)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.command == 'init':
        cmd_init(args)
    elif args.command == 'show':
        cmd_show(args)
    elif args.command == 'set':
        cmd_set(args)
    elif args.command == 'month':
        cmd_month(args)
    elif args.command == 'year':
        cmd_year(args)
    elif args.command == 'export':
        cmd_export(args)
    elif args.command == 'import':
        cmd_import(args)
    elif args.command == 'version':
        print(f"ahorro {VERSION}")


if __name__ == '__main__':
    main()
