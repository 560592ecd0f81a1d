"""Main orchestration script for generating TypeScript command bindings."""

import argparse
import subprocess
import sys
from collections.abc import Sequence
from pathlib import Path


def run_command(cmd_list: Sequence[str | Path], cwd: Path | str | None = None) -> None:
    """Run a command and exit if it fails."""
    cmd_str = " ".join(str(x) for x in cmd_list)
    print(f"Running: {cmd_str}")
    try:
        subprocess.run(cmd_list, check=True, cwd=cwd)
    except subprocess.CalledProcessError as e:
        print(f"Error executing command: {cmd_str}")
        sys.exit(e.returncode)


def main() -> None:
    """Run the binding generation pipeline."""
    parser = argparse.ArgumentParser(
        description="Generate TypeScript bindings for exported commands."
    )
    parser.add_argument(
        "--dev",
        action="store_true",
        help="Run development checks (linting, tests) before generating bindings",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Resolve and render without writing files",
    )
    parser.add_argument(
        "--report",
        help="Write a JSON resolution report to this path",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log every resolution step",
    )
    parser.add_argument(
        "--config",
        help="Path to configuration file",
    )
    args = parser.parse_args()

    root_dir = Path(__file__).parent

    if args.dev:
        print("--- Running Development Checks ---")
        run_command([sys.executable, str(root_dir / "dev.py"), "--ci"])
        print("\n✅ Development checks passed. Proceeding with generation.\n")

    print("--- Generating TypeScript bindings ---")
    cmd: list[str] = [sys.executable, "-m", "cmdbind.cli", "generate"]
    if args.config:
        cmd.extend(["--config", args.config])
    if args.dry_run:
        cmd.append("--dry-run")
    if args.report:
        cmd.extend(["--report", args.report])
    if args.verbose:
        cmd.append("--verbose")

    run_command(cmd, cwd=root_dir)

    print("\nSUCCESS: Bindings generated")


if __name__ == "__main__":
    main()
