#!/usr/bin/env python3
"""
Build script for creating a Windows executable using Nuitka.

Requirements:
    pip install nuitka ordered-set zstandard

Also needs a C compiler (MinGW-w64 or Visual Studio Build Tools).

Usage:
    python build_windows.py
"""

import subprocess
import sys
import shutil
from pathlib import Path

from autoclicker import __version__

# Build configuration
APP_NAME = "AutoClicker"
COMPANY_NAME = "AutoClicker"
DESCRIPTION = "Periodic mouse clicker with profiles and a global hotkey"
MAIN_SCRIPT = "autoclicker/__main__.py"


def check_requirements():
    """Check if build requirements are installed."""
    try:
        import nuitka
        result = subprocess.run([sys.executable, "-m", "nuitka", "--version"],
                                capture_output=True, text=True)
        version = result.stdout.strip().split('\n')[0] if result.returncode == 0 else "unknown"
        print(f"✓ Nuitka found ({version})")
    except ImportError:
        print("✗ Nuitka not found. Install with: pip install nuitka ordered-set zstandard")
        return False

    if shutil.which("gcc") or shutil.which("cl"):
        print("✓ C compiler found")
    else:
        print("⚠ No C compiler found. Install MinGW-w64 or Visual Studio Build Tools")
        return False

    return True


def build_command(dist_dir: Path) -> list:
    """Assemble the Nuitka command line."""
    cmd = [
        sys.executable, "-m", "nuitka",

        "--standalone",
        f"--output-dir={dist_dir}",
        f"--output-filename={APP_NAME}.exe",

        "--windows-console-mode=attach",  # Show console when run from terminal
        "--windows-icon-from-ico=assets/icon.ico" if Path("assets/icon.ico").exists() else "",

        f"--windows-company-name={COMPANY_NAME}",
        f"--windows-product-name={APP_NAME}",
        f"--windows-file-version={__version__}",
        f"--windows-product-version={__version__}",
        f"--windows-file-description={DESCRIPTION}",

        "--include-package=autoclicker",
        "--include-package=pynput",
        "--include-package=pystray",
        "--include-package=PIL",
        "--include-package=yaml",

        "--follow-imports",
        "--assume-yes-for-downloads",

        # Plugin for tk/tcl (the main window is tkinter)
        "--enable-plugin=tk-inter",

        MAIN_SCRIPT,
    ]

    # Remove empty strings from command
    return [c for c in cmd if c]


def build():
    """Build the executable with Nuitka."""
    if not check_requirements():
        sys.exit(1)

    print(f"\nBuilding {APP_NAME} v{__version__}...")

    dist_dir = Path("dist")
    dist_dir.mkdir(exist_ok=True)

    cmd = build_command(dist_dir)
    print("\nRunning Nuitka...")
    print(" ".join(cmd))
    print()

    result = subprocess.run(cmd)

    if result.returncode == 0:
        output_dir = dist_dir / f"{MAIN_SCRIPT.replace('/', '.').replace('.py', '')}.dist"
        print(f"\n✓ Build successful!")
        print(f"  Output: {output_dir}/{APP_NAME}.exe")
    else:
        print(f"\n✗ Build failed with code {result.returncode}")
        sys.exit(1)


if __name__ == "__main__":
    build()
