import logging
from dataclasses import replace

from aicontext.core.generator import ContextGenerator
from aicontext.core.presets import BASE_CONFIG


class TestContextGenerator:
    def test_default_config_scenario(self, sample_project, fixed_clock):
        result = ContextGenerator(BASE_CONFIG, str(sample_project), clock=fixed_clock).generate()
        stats = result.statistics

        assert result.file_paths == ["src/a.js"]
        assert stats.total_files_found == 1
        assert stats.total_files_processed == 1
        assert stats.included_file_contents == 1
        assert stats.skipped_due_to_size == 0
        assert stats.skipped_other == 0
        assert (sample_project / "context.md").read_text(encoding="utf-8") == result.content

    def test_force_include_still_needs_extension(self, larger_project, fixed_clock):
        config = replace(BASE_CONFIG, include_paths=(".github",))
        result = ContextGenerator(config, str(larger_project), clock=fixed_clock).generate(write=False)
        assert ".github/workflows/ci.yml" in result.file_paths

        config = replace(config, include_extensions=tuple(
            ext for ext in config.include_extensions if ext != ".yml"
        ))
        result = ContextGenerator(config, str(larger_project), clock=fixed_clock).generate(write=False)
        assert ".github/workflows/ci.yml" not in result.file_paths
        assert result.statistics.total_files_found > result.statistics.total_files_processed

    def test_extension_filter_drops_unlisted(self, larger_project, fixed_clock):
        result = ContextGenerator(BASE_CONFIG, str(larger_project), clock=fixed_clock).generate(write=False)
        assert "image.png" not in result.file_paths
        assert "setup.py" in result.file_paths
        assert result.file_paths == sorted(result.file_paths)

    def test_nothing_found_writes_nothing(self, temp_workspace):
        assert ContextGenerator(BASE_CONFIG, str(temp_workspace)).generate() is None
        assert not (temp_workspace / "context.md").exists()

    def test_no_allowed_extensions_still_writes(self, temp_workspace, fixed_clock, caplog):
        (temp_workspace / "Makefile").write_text("all:\n")

        with caplog.at_level(logging.WARNING):
            result = ContextGenerator(BASE_CONFIG, str(temp_workspace), clock=fixed_clock).generate()

        assert result.statistics.total_files_found == 1
        assert result.statistics.total_files_processed == 0
        assert "none had the required extensions" in caplog.text
        assert (temp_workspace / "context.md").exists()

    def test_empty_allow_list_keeps_everything(self, larger_project, fixed_clock):
        config = replace(BASE_CONFIG, include_extensions=())
        result = ContextGenerator(config, str(larger_project), clock=fixed_clock).generate(write=False)
        assert "image.png" in result.file_paths

    def test_binary_files_become_placeholders(self, larger_project, fixed_clock):
        config = replace(BASE_CONFIG, include_extensions=())
        result = ContextGenerator(config, str(larger_project), clock=fixed_clock).generate(write=False)

        assert "### `image.png`\n\n*Error reading file: Binary file*\n\n" in result.content
        assert "\x00" not in result.content
        assert "image.png: Binary file" in result.errors
        assert result.statistics.skipped_other == 1

    def test_callbacks(self, sample_project, fixed_clock):
        started, seen = [], []
        ContextGenerator(BASE_CONFIG, str(sample_project), clock=fixed_clock).generate(
            on_start=started.append, on_file=seen.append, write=False
        )
        assert started == [1]
        assert seen == ["src/a.js"]

    def test_idempotent_runs(self, larger_project, fixed_clock):
        generator = ContextGenerator(BASE_CONFIG, str(larger_project), clock=fixed_clock)
        first = generator.generate()
        second = generator.generate()
        assert first.content == second.content
