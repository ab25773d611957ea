import logging
import os
from dataclasses import replace

import pytest
from aicontext.adapters import FileEnumerator, LocalEnumerator
from aicontext.core.discovery import discover_files, load_ignore_entries
from aicontext.core.exceptions import EnumerationFailure
from aicontext.core.models import Config
from aicontext.core.presets import BASE_CONFIG


class StubEnumerator(FileEnumerator):
    """Enumerator returning a fixed listing."""

    def __init__(self, files=(), errors=(), failure=None):
        super().__init__("/nowhere")
        self.files = list(files)
        self.errors.extend(errors)
        self.failure = failure

    def list_files(self, prune=None):
        if self.failure is not None:
            raise self.failure
        return list(self.files)


class TestLocalEnumerator:
    def test_lists_regular_files_sorted(self, sample_project):
        files = LocalEnumerator(str(sample_project)).list_files()
        assert files == [".env", "node_modules/pkg.js", "src/a.js"]

    def test_prune_callback(self, sample_project):
        files = LocalEnumerator(str(sample_project)).list_files(prune=lambda d: d == "node_modules")
        assert "node_modules/pkg.js" not in files

    def test_skips_symlinks(self, sample_project):
        link = sample_project / "link.js"
        try:
            os.symlink(sample_project / "src" / "a.js", link)
        except (OSError, NotImplementedError):
            pytest.skip("symlinks not supported")
        assert "link.js" not in LocalEnumerator(str(sample_project)).list_files()

    def test_missing_root_raises(self, temp_workspace):
        with pytest.raises(EnumerationFailure):
            LocalEnumerator(str(temp_workspace / "missing")).list_files()


class TestDiscovery:
    def test_default_config_scenario(self, sample_project):
        assert discover_files(BASE_CONFIG, str(sample_project)) == ["src/a.js"]

    def test_sorted_output(self, larger_project):
        files = discover_files(BASE_CONFIG, str(larger_project))
        assert files == sorted(files)

    def test_default_exclusions(self, larger_project):
        files = discover_files(BASE_CONFIG, str(larger_project))
        assert "LICENSE" not in files
        assert "src/app.log" not in files
        assert "dist/bundle.js" not in files
        assert ".git/config" not in files
        assert ".github/workflows/ci.yml" not in files
        assert "src/main.py" in files
        assert "logs/today.txt" in files
        # extension filtering happens later
        assert "image.png" in files

    def test_force_include_hidden_directory(self, larger_project):
        config = replace(BASE_CONFIG, include_paths=(".github",))
        files = discover_files(config, str(larger_project))
        assert ".github/workflows/ci.yml" in files
        assert ".git/config" not in files

    def test_output_file_is_never_a_candidate(self, larger_project):
        (larger_project / "notes.md").write_text("previous output")
        config = replace(BASE_CONFIG, output_file="notes.md")
        assert "notes.md" not in discover_files(config, str(larger_project))
        assert "notes.md" in discover_files(BASE_CONFIG, str(larger_project))

    def test_enumeration_failure_yields_no_candidates(self, caplog):
        enumerator = StubEnumerator(failure=EnumerationFailure("root inaccessible"))

        with caplog.at_level(logging.ERROR):
            result = discover_files(BASE_CONFIG, ".", enumerator=enumerator)

        assert result == []
        assert "root inaccessible" in caplog.text

    def test_missing_root_is_a_soft_failure(self, temp_workspace):
        assert discover_files(BASE_CONFIG, str(temp_workspace / "missing")) == []

    def test_uses_injected_enumerator(self):
        enumerator = StubEnumerator(files=["b.py", "a.py", ".hidden.py"])
        assert discover_files(Config(), "/nowhere", enumerator=enumerator) == ["a.py", "b.py"]

    def test_listing_errors_are_reported(self, caplog):
        enumerator = StubEnumerator(
            files=["a.py"],
            errors=["[Errno 13] Permission denied: '/nowhere/private'"],
        )

        with caplog.at_level(logging.DEBUG):
            result = discover_files(Config(), "/nowhere", enumerator=enumerator)

        assert result == ["a.py"]
        assert "Skipped 1 unreadable entries while listing files" in caplog.text
        assert "/nowhere/private" in caplog.text


class TestGitignore:
    def test_entries_parsed(self, temp_workspace):
        (temp_workspace / ".gitignore").write_text(
            "# comment\n\n/secrets/\n*.tmp\n!keep.tmp\ncache\ncache\n"
        )
        assert load_ignore_entries(str(temp_workspace)) == ["secrets/", "*.tmp", "cache"]

    def test_missing_file(self, temp_workspace):
        assert load_ignore_entries(str(temp_workspace)) == []

    def test_applied_only_when_enabled(self, larger_project):
        (larger_project / ".gitignore").write_text("docs/\n")
        assert "docs/guide.md" in discover_files(BASE_CONFIG, str(larger_project))

        config = replace(BASE_CONFIG, use_gitignore=True)
        assert "docs/guide.md" not in discover_files(config, str(larger_project))

    def test_force_include_overrides_gitignore(self, larger_project):
        (larger_project / ".gitignore").write_text("docs/\n")
        config = replace(BASE_CONFIG, use_gitignore=True, include_paths=("docs",))
        assert "docs/guide.md" in discover_files(config, str(larger_project))

    def test_entries_are_not_persisted_in_config(self, larger_project):
        (larger_project / ".gitignore").write_text("docs/\n")
        config = replace(BASE_CONFIG, use_gitignore=True)
        discover_files(config, str(larger_project))
        assert "docs/" not in config.exclude_paths
