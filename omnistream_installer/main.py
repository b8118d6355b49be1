from __future__ import annotations

import argparse
import logging
from dataclasses import replace
from typing import Any, Dict, List, Optional, Tuple

from .context import InstallCtx
from .errors import CommandError, HostMismatchError, VerificationError
from .install_config import InstallConfig, load_install_config
from .lib.env import default_paths
from .lib.hostinfo import HostDescriptor
from .logging_utils import configure_logging
from .pipeline import run_pipeline
from .progress import ProgressReporter
from .reporters import select_reporter
from .state_store import StateFileError, ensure_defaults, load_state, save_state
from .steps import (
    ConfigureEnvironmentStep,
    FetchProjectStep,
    InstallDockerStep,
    PreflightStep,
    ProvisionPackagesStep,
    WelcomeStep,
)

logger = logging.getLogger(__name__)


def build_steps():
    return [
        WelcomeStep(),
        ProvisionPackagesStep(),
        InstallDockerStep(),
        FetchProjectStep(),
        ConfigureEnvironmentStep(),
    ]


def describe_failure(exc: BaseException, log_path: str) -> Tuple[str, str]:
    """Title and text of the dialog shown for a failed run."""

    if isinstance(exc, (HostMismatchError, VerificationError)):
        return exc.title, exc.message
    code = exc.returncode if isinstance(exc, CommandError) else 1
    return (
        "Installation Error",
        f"An error occurred during installation (Exit code: {code}). "
        f"Please check {log_path} for details.",
    )


def _load_state_or_empty(path: str) -> Dict[str, Any]:
    """Steps re-check the host, so a damaged state file only costs a slower run."""

    try:
        return load_state(path)
    except (OSError, StateFileError) as e:
        logger.warning("Ignoring state file: %s", e)
        return {}


def run(
    cfg: InstallConfig,
    *,
    force: bool = False,
    reporter: Optional[ProgressReporter] = None,
) -> int:
    """Run the installer. Returns the process exit code."""

    actual_log_path = configure_logging(cfg.log_path, also_console=(cfg.ui == "console"))

    state = ensure_defaults(_load_state_or_empty(cfg.state_path))
    state["execution"]["log_path"] = actual_log_path

    ctx = InstallCtx(cfg=cfg, reporter=reporter or select_reporter(cfg.ui), log_path=actual_log_path)

    def checkpoint(s: Dict[str, Any]) -> None:
        # A dry run must not mark anything as done for the next real run.
        if not cfg.dry_run:
            save_state(cfg.state_path, s)

    ran: List[str] = []
    skipped: List[str] = []
    try:
        gate = run_pipeline(ctx=ctx, state=state, steps=[PreflightStep()], force=force, on_step_done=checkpoint)
        state = gate.state

        # dialog may have been installed by preflight.
        ctx = replace(
            ctx,
            host=HostDescriptor(**state["host"]),
            reporter=reporter or select_reporter(cfg.ui),
        )

        result = run_pipeline(ctx=ctx, state=state, steps=build_steps(), force=force, on_step_done=checkpoint)
        state = result.state
        ran = gate.ran_steps + result.ran_steps
        skipped = result.skipped_steps

        ctx.reporter.notice(
            "Installation Complete",
            "OmniStream system preparation is complete!\n"
            f"Project cloned to {cfg.install_dir}\n"
            "Environment configured for OmniStream",
        )
        return 0
    except Exception as e:
        logger.exception("Installer failed")
        state.setdefault("execution", {}).setdefault("errors", []).append(
            {
                "step": (state.get("execution") or {}).get("current_step"),
                "error": str(e),
            }
        )
        title, text = describe_failure(e, actual_log_path)
        ctx.reporter.error(title, text)
        return 1
    finally:
        summary = state.setdefault("execution", {}).setdefault("summary", {})
        summary["ran_steps"] = ran
        summary["skipped_steps"] = skipped
        checkpoint(state)


def main(argv: Optional[list[str]] = None) -> int:
    p = argparse.ArgumentParser(
        prog="omnistream-install",
        description="Prepare a Debian 13 (trixie) host for OmniStream.",
    )
    p.add_argument("--config", default=None, help="Optional YAML file overriding defaults")
    p.add_argument("--state", default=None, help="Path to installer state (json|yaml)")
    p.add_argument("--log", default=None, help="Path to installer log")
    p.add_argument("--force", action="store_true", help="Re-run steps even if marked completed")
    p.add_argument("--dry-run", action="store_true", help="Log commands without executing them")
    p.add_argument("--no-dialog", action="store_true", help="Use plain console output instead of dialog")

    args = p.parse_args(argv)

    try:
        loaded = load_install_config(args.config)
    except (OSError, ValueError) as e:
        log_path = configure_logging(args.log or default_paths().log_default, also_console=bool(args.no_dialog))
        logger.error("Cannot load install config %s: %s", args.config, e)
        select_reporter("console" if args.no_dialog else "dialog").error(
            "Configuration Error",
            f"Cannot read {args.config}: {e}\nPlease check {log_path} for details.",
        )
        return 1

    cfg = loaded.with_overrides(
        state_path=args.state,
        log_path=args.log,
        dry_run=True if args.dry_run else None,
        ui="console" if args.no_dialog else None,
    )
    return run(cfg, force=bool(args.force))
