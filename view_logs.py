#!/usr/bin/env python3
"""Log viewer and analyzer for smoke run logs."""

import argparse
import re
import statistics
import sys
import time
from collections import defaultdict, deque
from pathlib import Path
from typing import Dict, List, Union

# ANSI color codes
class Colors:
    RED = '\033[91m'
    YELLOW = '\033[93m'
    GREEN = '\033[92m'
    RESET = '\033[0m'

# Constants
DEFAULT_LINES = 50
FOLLOW_SLEEP = 0.1
STATUSES = ("ok", "failed", "skipped")

FILE_MAP = {
    "main": "ragcheck.log",
    "error": "ragcheck_errors.log",
    "checks": "ragcheck_checks.log"
}


def tail_file(filepath: Path, lines: int = DEFAULT_LINES) -> List[str]:
    """Get last N lines from file efficiently."""
    try:
        with filepath.open('r', encoding='utf-8') as f:
            return list(deque(f, maxlen=lines))
    except FileNotFoundError:
        return [f"Log file not found: {filepath}\n"]
    except (OSError, UnicodeDecodeError) as e:
        return [f"Error reading log file {filepath}: {e}\n"]


def colorize_line(line: str) -> str:
    """Apply color formatting to log line based on level."""
    line = line.rstrip()
    if "ERROR" in line or "status=failed" in line:
        return f"{Colors.RED}{line}{Colors.RESET}"
    elif "WARNING" in line or "status=skipped" in line:
        return f"{Colors.YELLOW}{line}{Colors.RESET}"
    elif "INFO" in line:
        return f"{Colors.GREEN}{line}{Colors.RESET}"
    return line

def follow_log(filepath: Path) -> None:
    """Follow a log file in real-time (like tail -f)."""
    try:
        with filepath.open('r', encoding='utf-8') as f:
            f.seek(0, 2)  # Go to end of file

            while True:
                line = f.readline()
                if not line:
                    time.sleep(FOLLOW_SLEEP)
                    continue
                print(colorize_line(line))

    except KeyboardInterrupt:
        print("\nLog following stopped.")
    except FileNotFoundError:
        print(f"Log file not found: {filepath}")
    except (OSError, UnicodeDecodeError) as e:
        print(f"Error following log file: {e}")


def parse_fields(line: str) -> Dict[str, str]:
    """Split a 'key=value | key=value' record into a dict."""
    fields = {}
    for part in line.rstrip().split(" | "):
        key, sep, value = part.partition("=")
        if sep and key and " " not in key:
            fields[key] = value
    return fields


def collect_stats(log_dir: Path) -> Dict[str, Union[int, Dict, List]]:
    """Gather run, status and timing statistics from the log directory."""
    stats = {
        'runs': defaultdict(int),
        'statuses': {status: 0 for status in STATUSES},
        'checks': defaultdict(lambda: defaultdict(int)),
        'errors': 0,
        'warnings': 0,
        'response_times': []
    }

    level_pattern = re.compile(r'\| (ERROR|WARNING) \|')

    main_log = log_dir / FILE_MAP["main"]
    if main_log.exists():
        with main_log.open('r', encoding='utf-8') as f:
            for line in f:
                level_match = level_pattern.search(line)
                if not level_match:
                    continue
                if level_match.group(1) == "ERROR":
                    stats['errors'] += 1
                else:
                    stats['warnings'] += 1

    checks_log = log_dir / FILE_MAP["checks"]
    if checks_log.exists():
        with checks_log.open('r', encoding='utf-8') as f:
            for line in f:
                fields = parse_fields(line)
                suite = fields.get("suite")
                if not suite:
                    continue

                if fields.get("run") == "start":
                    stats['runs'][suite] += 1
                    continue

                status = fields.get("status")
                check = fields.get("check")
                if status not in stats['statuses'] or not check:
                    continue
                stats['statuses'][status] += 1
                stats['checks'][f"{suite}/{check}"][status] += 1

                if "response_time" in fields:
                    try:
                        stats['response_times'].append(float(fields["response_time"].rstrip("s")))
                    except ValueError:
                        pass

    return stats


def analyze_logs(log_dir: Path) -> None:
    """Analyze logs and print a summary of recorded smoke runs."""
    stats = collect_stats(log_dir)

    print("=" * 60)
    print("SMOKE RUN LOG ANALYSIS")
    print("=" * 60)

    total_runs = sum(stats['runs'].values())
    print(f"Runs:               {total_runs}")
    for suite, count in sorted(stats['runs'].items()):
        print(f"  - {suite + ':':<16} {count}")
    print()

    total_checks = sum(stats['statuses'].values())
    print(f"Check Results:      {total_checks}")
    for status in STATUSES:
        print(f"  - {status.capitalize() + ':':<16} {stats['statuses'][status]}")
    print()

    if stats['checks']:
        print("Per Check:")
        for name, counts in sorted(stats['checks'].items()):
            breakdown = ", ".join(f"{status}={counts[status]}" for status in STATUSES if counts[status])
            print(f"  - {name:<24} {breakdown}")
        print()

    print(f"Errors:             {stats['errors']}")
    print(f"Warnings:           {stats['warnings']}")
    print()

    if stats['response_times']:
        avg_time = statistics.mean(stats['response_times'])
        median_time = statistics.median(stats['response_times'])
        print(f"Average Response:   {avg_time:.3f} seconds")
        print(f"Median Response:    {median_time:.3f} seconds")
        print(f"Fastest Response:   {min(stats['response_times']):.3f} seconds")
        print(f"Slowest Response:   {max(stats['response_times']):.3f} seconds")

    print("=" * 60)


def main() -> None:
    """Main entry point for log viewer."""
    parser = argparse.ArgumentParser(description="Smoke Run Log Viewer and Analyzer")
    parser.add_argument("--log-dir", type=Path, default=Path("logs"),
                       help="Directory containing log files")
    parser.add_argument("--lines", "-n", type=int, default=DEFAULT_LINES,
                       help="Number of lines to show")
    parser.add_argument("--follow", "-f", action="store_true",
                       help="Follow log in real-time")
    parser.add_argument("--analyze", "-a", action="store_true",
                       help="Analyze logs and show statistics")
    parser.add_argument("--file", choices=sorted(FILE_MAP), default="main",
                       help="Which log file to view")

    args = parser.parse_args()

    if not args.log_dir.exists():
        print(f"Log directory not found: {args.log_dir}")
        print("Make sure a smoke run has been started at least once.")
        sys.exit(1)

    if args.analyze:
        analyze_logs(args.log_dir)
        return

    log_file = args.log_dir / FILE_MAP[args.file]

    if args.follow:
        print(f"Following {log_file} (Press Ctrl+C to stop)")
        print("-" * 60)
        follow_log(log_file)
    else:
        print(f"Last {args.lines} lines from {log_file}:")
        print("-" * 60)
        lines = tail_file(log_file, args.lines)
        for line in lines:
            print(colorize_line(line))


if __name__ == "__main__":
    main()
