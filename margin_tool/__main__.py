"""margin-tool — Parse CSS-style margin shorthand and apply it to rectangles and images.

Usage: margin-tool <technique> MARGIN [MARGIN ...] [options]

MARGIN values follow the CSS shorthand: one value for all sides, two for
top/bottom and right/left, four for top, right, bottom, left. Each value is
pixels (10), a percentage ('10.5%'), a percentage with a pixel offset
('20%+10', '50%-3') or a pre-parsed pair ('[20, 0.4]').

Techniques are auto-discovered from margin_tool/techniques/.
Each technique module's docstring is its documentation.
Run `margin-tool help <technique>` for full module docs.

Environment variables / .env loading:
  OS environment variables are always used first.
  If a variable is not set, margin-tool looks for a .env file starting from
  the current directory and walking up, stopping at the nearest .git boundary.
  Use --env-file to override the .env location explicitly.
"""

import argparse
import importlib
import json
import os
import sys
from typing import Any

from PIL import Image

from margin_tool import registry
from margin_tool.core.env import load_env, load_settings
from margin_tool.core.margin_parser import parse, parse_file
from margin_tool.core.report import format_json, format_text
from margin_tool.core.types import InvalidMarginFormat, MarginSpec, Rect, Report, Zone


def _load_technique_module(name: str) -> object:
    """Load the raw module for a technique (for docstring access)."""
    return importlib.import_module(f'margin_tool.techniques.{name}')


def _short_doc(name: str, fallback: str) -> str:
    doc = (_load_technique_module(name).__doc__ or '').strip()
    return doc.splitlines()[0] if doc else fallback


def _coerce_token(token: str) -> Any:
    """Turn a command-line MARGIN token into the value the parser expects."""
    text = token.strip()
    if text.startswith('['):
        try:
            return json.loads(text)
        except json.JSONDecodeError:
            return token
    try:
        return int(text)
    except ValueError:
        pass
    try:
        return float(text)
    except ValueError:
        return token


def _build_parser() -> argparse.ArgumentParser:
    techniques = registry.all_techniques()

    epilog = (
        'Examples:\n'
        '  margin-tool parse 10% 20%+5\n'
        '  margin-tool apply 5 10 --rect 0 0 100 200\n'
        '  margin-tool apply --margin-file margin.json --rect 0 0 100 200\n'
        '  margin-tool crop 5% --image screenshot.png --out ./tmp\n'
        '  margin-tool bands 20 40 --image page.png --json\n'
        '  margin-tool all 10% --image card.png --out ./tmp\n'
        '  margin-tool help bands\n'
        '\n'
        'Settings (set in .env or environment):\n'
        '  MARGIN_TOOL_STRICT=1               fail on malformed margin values\n'
        '  MARGIN_TOOL_BLANK_THRESHOLD=8      max channel std for a blank band\n'
    )
    parser = argparse.ArgumentParser(
        prog='margin-tool',
        description='Parse CSS-style margin shorthand and apply it to rectangles and images.',
        epilog=epilog,
        formatter_class=argparse.RawTextHelpFormatter,
    )
    parser.add_argument(
        '--env-file',
        metavar='PATH',
        default=None,
        help='Path to .env file (default: walk up from cwd to .git boundary)',
    )
    sub = parser.add_subparsers(dest='technique', help='Technique to run')

    for name, tech in sorted(techniques.items()):
        p = sub.add_parser(name, help=_short_doc(name, tech.help))
        p.add_argument('margin', nargs='*', help='Margin value(s): 1, 2 or 4 CSS-style components')
        p.add_argument('-m', '--margin-file', metavar='PATH', help='Read the margin value from a JSON file instead')
        p.add_argument(
            '-r',
            '--rect',
            nargs=4,
            type=float,
            action='append',
            metavar=('X', 'Y', 'W', 'H'),
            help='Outer rectangle (repeatable). Defaults to the whole --image.',
        )
        p.add_argument('-i', '--image', help='Path to PNG/JPG image')
        p.add_argument('-o', '--out', default=None, help='Directory for artefacts (default: cwd)')
        p.add_argument('-j', '--json', action='store_true', help='Output JSON instead of text')
        p.add_argument(
            '-s',
            '--strict',
            action='store_true',
            default=None,
            help='Fail on malformed margin values instead of treating them as zero',
        )
        p.add_argument(
            '-t',
            '--blank-threshold',
            type=float,
            default=None,
            metavar='N',
            help='Max per-channel std for a margin band to count as blank',
        )

    help_parser = sub.add_parser('help', help='Print full docs for a technique')
    help_parser.add_argument('command', nargs='?', help='Technique name')

    return parser


def _print_help(command: str | None) -> None:
    """Print full module docstring for a technique."""
    techniques = registry.all_techniques()

    if command is None:
        print('Available techniques:\n')
        for name, tech in sorted(techniques.items()):
            print(f'  {name:<8} {_short_doc(name, tech.help)}')
        print('\nRun: margin-tool help <technique> for full docs.')
        return

    if command not in techniques:
        print(f'Unknown technique: {command}', file=sys.stderr)
        print(f'Available: {", ".join(sorted(techniques))}', file=sys.stderr)
        sys.exit(1)

    doc = (_load_technique_module(command).__doc__ or '').strip()
    if not doc:
        print(f'(No module docs for {command!r})')
        return
    print(doc)


def _fail(message: str) -> None:
    print(f'margin-tool: error: {message}', file=sys.stderr)
    sys.exit(1)


def _build_zones(
    args: argparse.Namespace, spec: MarginSpec, image: Image.Image | None, needs_rect: bool
) -> list[Zone]:
    """One zone per --rect, or the whole image as zone 'full', or a bare 'margin' zone."""
    if args.rect:
        return [
            Zone(name=f'rect{i}', rect=Rect(*r), spec=spec, image=image) for i, r in enumerate(args.rect, start=1)
        ]
    if image is not None:
        return [Zone(name='full', rect=Rect(0, 0, image.width, image.height), spec=spec, image=image)]
    if not needs_rect:
        return [Zone(name='margin', rect=None, spec=spec)]
    return []


def main() -> None:
    parser = _build_parser()
    args = parser.parse_args()

    # Load .env before anything else — OS env vars always win
    env_path = load_env(env_file=getattr(args, 'env_file', None))
    if env_path:
        print(f'margin-tool: loaded {env_path}', file=sys.stderr)

    if not args.technique:
        parser.print_help()
        sys.exit(1)

    if args.technique == 'help':
        _print_help(getattr(args, 'command', None))
        return

    try:
        settings = load_settings()
    except ValueError as e:
        _fail(str(e))
    strict = settings.strict if args.strict is None else args.strict
    if args.blank_threshold is None:
        args.blank_threshold = settings.blank_threshold

    tech = registry.get(args.technique)

    image = None
    if args.image:
        if not os.path.isfile(args.image):
            _fail(f'image not found: {args.image}')
        image = Image.open(args.image).convert('RGB')
    elif tech.needs_image:
        _fail(f'{tech.name} needs --image')

    # Always a list: a lone '[20, 0.4]' token is one pair, not a 2-value shorthand
    values = [_coerce_token(t) for t in args.margin]
    if args.margin_file and values:
        _fail('pass MARGIN values or --margin-file, not both')
    if not args.margin_file and not values:
        _fail('no margin given: pass MARGIN values or --margin-file')

    try:
        spec = parse_file(args.margin_file, strict=strict) if args.margin_file else parse(values, strict=strict)
    except InvalidMarginFormat as e:
        _fail(str(e))
    except (OSError, json.JSONDecodeError) as e:
        _fail(f'cannot read margin file: {e}')

    zones = _build_zones(args, spec, image, tech.needs_rect)
    if not zones:
        _fail('nothing to apply the margin to: pass --rect or --image')

    report = Report(
        margin=values or [args.margin_file],
        image_path=args.image,
        image_width=image.width if image else 0,
        image_height=image.height if image else 0,
    )
    for z in zones:
        report.set_rect(z.name, z.rect)

    tech.execute(zones, report, args)

    if args.json:
        print(format_json(report))
    else:
        print(format_text(report))

    # Must happen after output so the report is visible even on failure
    if report.fail_count:
        sys.exit(1)


if __name__ == '__main__':
    main()
