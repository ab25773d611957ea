"""Test that all modules can be imported successfully."""


def test_core_imports():
    """Test core module imports."""
    from aicontext.core import Config, ConfigDelta, FileNode, TokenCounter, BASE_CONFIG, PRESETS

    config = Config()
    assert config.max_file_size_kb == 500
    assert config.output_file == 'context.md'

    node = FileNode(path="test", name="test", type="file")
    assert node.is_file()

    assert ConfigDelta().is_empty()
    assert BASE_CONFIG.include_extensions
    assert set(PRESETS) == {'nodejs', 'android', 'java', 'python'}
    assert hasattr(TokenCounter, 'count')


def test_pipeline_imports():
    """Test the modules that depend on the utils package."""
    from aicontext.core.discovery import discover_files
    from aicontext.core.generator import ContextGenerator
    from aicontext.core.assembler import DocumentAssembler

    assert callable(discover_files)
    assert hasattr(ContextGenerator, 'generate')
    assert hasattr(DocumentAssembler, 'assemble')


def test_utils_imports():
    """Test utils module imports."""
    from aicontext.utils import FileFilter, EncodingDetector
    from aicontext.core import Config

    file_filter = FileFilter(Config())
    assert hasattr(file_filter, 'should_prune_directory')

    encoder = EncodingDetector()
    assert hasattr(encoder, 'decode_bytes')


def test_adapter_imports():
    """Test adapter module imports."""
    from aicontext.adapters import FileEnumerator, LocalEnumerator, create_enumerator

    enumerator = create_enumerator(".")
    assert isinstance(enumerator, LocalEnumerator)
    assert isinstance(enumerator, FileEnumerator)


def test_cli_import():
    from aicontext import __version__
    from aicontext.cli import main

    assert __version__ == "2.0.0"
    assert main.name == "main"
