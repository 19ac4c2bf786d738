#!/usr/bin/env python3
"""
Problem Matcher CLI - Command line interface for extracting diagnostics from tool output.

Usage:
    python -m problem_matcher file /path/to/eslint.log --matcher eslint.json
    python -m problem_matcher output "badFile.js: line 50, col 11, Error - ..." --matcher eslint.json
    eslint . | python -m problem_matcher file - --matcher eslint.json --owner eslint-stylish
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from .core.matcher import match
from .errors import InputError, ProblemMatcherError
from .loader import load_matchers, select_matcher
from .schemas.matcher import KNOWN_FIELDS, PatternDescription, Record
from .utils.text_utils import strip_ansi, truncate_message


class ProblemMatcherCLI:
    """Command line interface for the problem matcher"""

    def main(self, argv: Optional[List[str]] = None) -> int:
        """Main CLI entry point"""
        args = self._parse_args(argv)
        logging.basicConfig(
            level=logging.DEBUG if args.debug else logging.WARNING,
            format='%(levelname)s %(name)s: %(message)s',
        )

        try:
            matcher = select_matcher(load_matchers(args.matcher), args.owner)

            if args.command == 'output':
                text = args.output_text
            else:
                text = self._read_file(args.file)

            if args.strip_ansi:
                text = strip_ansi(text)

            records = match(matcher, text)

            if args.format == 'json':
                self._output_json(records, args.output)
            else:
                self._output_summary(matcher, records, args.output)

            return 1 if any(record.get('severity', '').lower() == 'error' for record in records) else 0

        except (ProblemMatcherError, OSError) as e:
            print(f"Error: {e}", file=sys.stderr)
            if args.debug:
                import traceback
                traceback.print_exc()
            return 2

    def _parse_args(self, argv: Optional[List[str]] = None):
        """Parse command line arguments"""
        parser = argparse.ArgumentParser(
            prog='problem-matcher',
            description="Extract diagnostics from compiler and linter output using a problem matcher",
            formatter_class=argparse.RawDescriptionHelpFormatter,
            epilog="""
Examples:
    # Match a saved log file
    problem-matcher file eslint.log --matcher eslint.json

    # Match text given on the command line
    problem-matcher output "src/a.c:3:7: error: expected ';'" --matcher gcc.yaml

    # Read from stdin and pick one matcher out of a file that defines several
    eslint . | problem-matcher file - --matcher matchers.json --owner eslint-stylish

    # Output as JSON
    problem-matcher file build.log --matcher gcc.yaml --format json
            """
        )

        subparsers = parser.add_subparsers(dest='command', help='Available commands')

        # File command
        file_parser = subparsers.add_parser('file', help='Match tool output read from a file')
        file_parser.add_argument('file', help="Path to tool output, or '-' for stdin")

        # Output command
        output_parser = subparsers.add_parser('output', help='Match tool output given as an argument')
        output_parser.add_argument('output_text', metavar='output', help='Tool output text')

        # Common arguments
        for subparser in [file_parser, output_parser]:
            subparser.add_argument('--matcher', '-m', type=Path, required=True,
                                   help='Matcher file (.json, .yaml or .yml)')
            subparser.add_argument('--owner', help='Owner of the matcher to use when the file defines several')
            subparser.add_argument('--format', choices=['summary', 'json'], default='summary',
                                   help='Output format (default: summary)')
            subparser.add_argument('--output', '-o', type=Path, help='Output file (default: stdout)')
            subparser.add_argument('--strip-ansi', action='store_true',
                                   help='Remove terminal color codes before matching')
            subparser.add_argument('--debug', action='store_true', help='Enable debug output')

        args = parser.parse_args(argv)

        if not args.command:
            parser.print_help()
            sys.exit(1)

        return args

    def _read_file(self, file_arg: str) -> str:
        """Read tool output from a file or stdin"""
        if file_arg == '-':
            try:
                return sys.stdin.read()
            except UnicodeDecodeError as e:
                raise InputError(f"Could not decode tool output from stdin: {e}") from e

        file_path = Path(file_arg)
        if not file_path.exists():
            raise FileNotFoundError(f"Output file not found: {file_path}")

        with open(file_path, 'r', encoding='utf-8', errors='replace') as f:
            return f.read()

    def _output_json(self, records: List[Record], output_file: Optional[Path]):
        """Output records as a JSON array"""
        content = json.dumps(records, indent=2, ensure_ascii=False)
        self._write(content, output_file)

    def _output_summary(self, matcher: PatternDescription, records: List[Record], output_file: Optional[Path]):
        """Output records as a human-readable summary"""
        lines = []
        lines.append("=" * 60)
        lines.append(f"Matcher: {matcher.owner}")
        lines.append(f"Diagnostics: {len(records)}")

        by_severity = {}
        for record in records:
            severity = record.get('severity', 'unknown').lower()
            by_severity[severity] = by_severity.get(severity, 0) + 1

        for severity, count in sorted(by_severity.items()):
            lines.append(f"  {severity}: {count}")

        if records:
            lines.append("-" * 40)

        for record in records:
            location = record.get('file', '<unknown>')
            if 'line' in record:
                location += f":{record['line']}"
                if 'column' in record:
                    location += f":{record['column']}"

            severity = record.get('severity', 'unknown')
            message = truncate_message(record.get('message', ''))
            code = f" [{record['code']}]" if 'code' in record else ""
            lines.append(f"{location}: {severity}: {message}{code}")

            # Matchers may capture fields beyond the usual ones
            extra = {key: value for key, value in record.items() if key not in KNOWN_FIELDS}
            for key, value in extra.items():
                lines.append(f"     {key}: {value}")

        lines.append("=" * 60)
        self._write('\n'.join(lines), output_file)

    def _write(self, content: str, output_file: Optional[Path]):
        if output_file:
            with open(output_file, 'w', encoding='utf-8') as f:
                f.write(content)
        else:
            print(content)


def main():
    """Entry point for CLI"""
    cli = ProblemMatcherCLI()
    sys.exit(cli.main())


if __name__ == '__main__':
    main()
