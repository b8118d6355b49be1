from __future__ import annotations

import logging
from pathlib import Path

logger = logging.getLogger(__name__)

PROFILE_MARKER = "OmniStream Configuration"


def profile_block(install_dir: str, marker: str = PROFILE_MARKER) -> str:
    """Shell snippet that puts <install_dir>/bin on PATH and runs omni_init.

    $PATH is left for the shell to expand at login, not frozen at install time.
    """

    bin_dir = str(Path(install_dir) / "bin")
    init = str(Path(bin_dir) / "omni_init")
    return "\n".join(
        [
            "",
            f"# {marker}",
            "# Add OmniStream bin to PATH",
            f'export PATH="{bin_dir}:$PATH"',
            "",
            "# Run OmniStream initialization script",
            f'if [ -x "{init}" ]; then',
            f'    "{init}"',
            "fi",
            "",
        ]
    )


def has_marker(profile_path: str, marker: str = PROFILE_MARKER) -> bool:
    p = Path(profile_path)
    if not p.exists():
        return False
    return marker in p.read_text(encoding="utf-8", errors="replace")


def append_once(profile_path: str, block: str, *, marker: str = PROFILE_MARKER, dry_run: bool = False) -> bool:
    """Append block unless the marker is already present. Returns True if written."""

    if has_marker(profile_path, marker):
        logger.info("Profile %s already contains %r; leaving it untouched", profile_path, marker)
        return False

    if dry_run:
        logger.info("Would append OmniStream block to %s", profile_path)
        return True

    p = Path(profile_path)
    p.parent.mkdir(parents=True, exist_ok=True)
    with p.open("a", encoding="utf-8") as f:
        f.write(block)
    logger.info("Appended OmniStream block to %s", profile_path)
    return True
