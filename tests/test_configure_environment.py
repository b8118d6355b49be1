from dataclasses import replace
from pathlib import Path

from omnistream_installer.lib.profile import PROFILE_MARKER, append_once, profile_block
from omnistream_installer.steps import ConfigureEnvironmentStep


def test_profile_block_contents():
    block = profile_block("/home/u/omnistream")
    assert f"# {PROFILE_MARKER}" in block
    assert 'export PATH="/home/u/omnistream/bin:$PATH"' in block
    assert 'if [ -x "/home/u/omnistream/bin/omni_init" ]; then' in block


def test_append_once_creates_missing_profile(tmp_path):
    profile = tmp_path / ".bashrc"
    assert append_once(str(profile), profile_block("/x")) is True
    assert profile.read_text(encoding="utf-8").count(PROFILE_MARKER) == 1


class TestConfigureEnvironment:
    def test_creates_directories_and_patches_profile(self, ctx, reporter):
        Path(ctx.cfg.profile_path).write_text("alias ll='ls -l'\n", encoding="utf-8")

        state = ConfigureEnvironmentStep().run(ctx, {})

        for d in ctx.cfg.directories:
            assert Path(d).is_dir()
        text = Path(ctx.cfg.profile_path).read_text(encoding="utf-8")
        assert text.startswith("alias ll='ls -l'\n")
        assert text.count(PROFILE_MARKER) == 1
        assert reporter.notice_titles() == ["Directory Creation"] * 3 + ["User Configuration"]
        assert state["execution"]["decisions"]["environment"]["profile_patched"] is True

    def test_second_run_is_a_no_op(self, ctx, reporter):
        step = ConfigureEnvironmentStep()
        step.run(ctx, {})
        reporter.notices.clear()

        state = step.run(ctx, {})

        assert reporter.notices == []
        assert Path(ctx.cfg.profile_path).read_text(encoding="utf-8").count(PROFILE_MARKER) == 1
        assert state["execution"]["decisions"]["environment"] == {"created_dirs": [], "profile_patched": False}

    def test_profile_with_marker_is_not_written(self, ctx, reporter):
        profile = Path(ctx.cfg.profile_path)
        profile.write_text(f"# {PROFILE_MARKER} (added by hand)\n", encoding="utf-8")
        before = profile.stat().st_mtime_ns

        ConfigureEnvironmentStep().run(ctx, {})

        assert profile.stat().st_mtime_ns == before
        assert profile.read_text(encoding="utf-8") == f"# {PROFILE_MARKER} (added by hand)\n"
        assert "User Configuration" not in reporter.notice_titles()

    def test_dry_run_touches_nothing(self, ctx, reporter):
        dry = replace(ctx, cfg=ctx.cfg.with_overrides(dry_run=True))

        ConfigureEnvironmentStep().run(dry, {})

        assert not Path(ctx.cfg.profile_path).exists()
        assert not any(Path(d).exists() for d in ctx.cfg.directories)
