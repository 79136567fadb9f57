#!/usr/bin/env python3
"""Central tool to run common tasks with one command.

Usage: python tool.py <command> [args]

Commands:
  run <file>    Print the relay path of a header file (uses project venv if present)
  smoke         Run the offline smoke check against sample_headers/
  test          Run pytest
  help          Show help
"""
import subprocess
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parent


def run(cmd, check=True):
    print('>', ' '.join(cmd))
    return subprocess.run(cmd, check=check)


def ensure_venv_python(venv_dir='venv'):
    venv = ROOT / venv_dir
    if venv.exists():
        py = venv / ('Scripts' if sys.platform == 'win32' else 'bin') / 'python'
        return str(py)
    return sys.executable


def cmd_run(args):
    if not args:
        print('Usage: tool.py run <header_file> [--json] [--verbose]')
        return 2
    py = ensure_venv_python()
    return run([py, str(ROOT / 'main.py')] + args, check=False).returncode


def cmd_smoke(args):
    py = ensure_venv_python()
    return run([py, str(ROOT / 'tests' / 'run_smoke.py')], check=False).returncode


def cmd_test(args):
    py = ensure_venv_python()
    return run([py, '-m', 'pytest', '-q'] + args, check=False).returncode


COMMANDS = {
    'run': cmd_run,
    'smoke': cmd_smoke,
    'test': cmd_test,
}


def main():
    if len(sys.argv) < 2 or sys.argv[1] == 'help':
        print(__doc__)
        sys.exit(0 if len(sys.argv) >= 2 else 1)
    cmd = sys.argv[1]
    handler = COMMANDS.get(cmd)
    if handler is None:
        print('Unknown command', cmd)
        print(__doc__)
        sys.exit(2)
    sys.exit(handler(sys.argv[2:]))


if __name__ == '__main__':
    main()
