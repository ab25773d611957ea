"""Command-line interface for aicontext."""
import logging
import os
import sys
from contextlib import nullcontext
from typing import Iterable, List, Optional

import click
from rich.markup import escape

from . import __version__
from .core.assembler import format_file_size, format_number
from .core.config_manager import apply_delta, load_or_default, persist
from .core.exceptions import PersistError
from .core.generator import ContextGenerator
from .core.models import Config, ConfigDelta, GenerationResult
from .core.presets import CONFIG_FILE_NAME, PRESETS
from .core.tokenizer import TokenCounter
from .utils.console import THEMES, ConsoleManager


def setup_logging(debug: bool) -> None:
    """Configure logging based on debug flag."""
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format='[%(levelname)s] %(message)s',
        handlers=[logging.StreamHandler(sys.stderr)]
    )


def _split_values(values: Iterable[str]) -> List[str]:
    """Flatten repeated and comma-separated option values."""
    result = []
    for value in values:
        result.extend(part.strip() for part in value.split(',') if part.strip())
    return result


def print_presets(console: ConsoleManager) -> None:
    rows = [
        [preset.name, preset.description,
         ", ".join(preset.exclude_paths), ", ".join(preset.include_extensions)]
        for preset in PRESETS.values()
    ]
    console.print_table(["Preset", "Description", "Excludes", "Extensions"], rows,
                        title="Available presets")


def print_statistics(console: ConsoleManager, config: Config, result: GenerationResult,
                     exact_tokens: Optional[int] = None) -> None:
    """Print the final statistics block."""
    stats = result.statistics
    output = escape(os.path.relpath(result.output_path))

    console.print("")
    console.print_separator()
    console.print("[heading]CONTEXT FILE STATISTICS[/heading]")
    console.print_separator()
    console.print(f"  [info]Context file created:[/info] [path]{output}[/path] "
                  f"({format_file_size(stats.output_size_kb)})")
    console.print(f"  [info]Estimated total tokens:[/info] "
                  f"[number]~{format_number(stats.total_tokens)}[/number]")
    if exact_tokens is not None:
        console.print(f"  [info]Counted tokens (tiktoken):[/info] "
                      f"[number]{format_number(exact_tokens)}[/number]")
    console.print("")
    console.print(f"  [info]Files found by search:[/info] [number]{format_number(stats.total_files_found)}[/number]")
    console.print(f"  [info]Files processed (after ext filter):[/info] "
                  f"[number]{format_number(stats.total_files_processed)}[/number]")
    console.print(f"  [info]Content included:[/info] [number]{format_number(stats.included_file_contents)}[/number] files")
    console.print(f"  [info]Skipped (size > {config.max_file_size_kb}KB):[/info] "
                  f"[number]{format_number(stats.skipped_due_to_size)}[/number] files")
    console.print(f"  [info]Skipped (read errors):[/info] [number]{format_number(stats.skipped_other)}[/number] files")
    console.print_separator()


@click.command()
@click.argument('root', default='.', type=click.Path(file_okay=False))
@click.option('--reset', is_flag=True, help='Reset configuration to base defaults before applying other flags.')
@click.option('--include', '-i', multiple=True, help='Force inclusion of specific paths, even if they are hidden.')
@click.option('--preset', '-p', multiple=True, help='Apply one or more presets (e.g. -p nodejs -p android). Updates config file.')
@click.option('--add-exclude', '-a', multiple=True, help='Add paths/patterns to the exclusion list.')
@click.option('--remove-exclude', '-r', multiple=True, help='Remove paths/patterns from the exclusion list.')
@click.option('--add-ext', multiple=True, help='Add file extensions to the inclusion list.')
@click.option('--remove-ext', multiple=True, help='Remove file extensions from the inclusion list.')
@click.option('--output', '-o', help='Set the output file name.')
@click.option('--max-size', type=click.FloatRange(min=0, min_open=True), help='Set max file size in KB to include.')
@click.option('--use-gitignore/--no-use-gitignore', default=None, help='Enable or disable using .gitignore for exclusions.')
@click.option('--init', is_flag=True, help='Initialize or update config file without generating context.')
@click.option('--list-presets', is_flag=True, help='Show the available presets and exit.')
@click.option('--count-tokens', is_flag=True, help='Also count tokens of the generated file with tiktoken.')
@click.option('--theme', '-t', type=click.Choice(sorted(THEMES)), default='manhattan', help='Terminal color theme')
@click.option('--debug', is_flag=True, help='Enable debug logging for discovery and configuration.')
@click.version_option(__version__)
def main(root: str, reset: bool, include, preset, add_exclude, remove_exclude, add_ext,
         remove_ext, output: Optional[str], max_size: Optional[float],
         use_gitignore: Optional[bool], init: bool, list_presets: bool,
         count_tokens: bool, theme: str, debug: bool) -> None:
    """
    Create a comprehensive context file for AI assistants.

    Scans ROOT (default: current directory) using the settings stored in
    aicontext.json, and writes a single Markdown document with the
    directory tree and file contents.

    Examples:

        aicontext --init -p python

        aicontext -a fixtures/ --remove-exclude LICENSE

        aicontext -i .github --add-ext yml
    """
    console = ConsoleManager(theme=theme)
    setup_logging(debug)

    if list_presets:
        print_presets(console)
        return

    try:
        config_path = os.path.join(root, CONFIG_FILE_NAME)
        config_exists = os.path.exists(config_path)
        config, loaded = load_or_default(config_path)
        if not loaded:
            console.print_info(f"No usable {CONFIG_FILE_NAME} found. Using default configuration.")

        delta = ConfigDelta(
            reset=reset,
            presets=_split_values(preset),
            add_exclude=_split_values(add_exclude),
            remove_exclude=_split_values(remove_exclude),
            add_ext=_split_values(add_ext),
            remove_ext=_split_values(remove_ext),
            output_file=output,
            max_file_size_kb=max_size,
            use_gitignore=use_gitignore,
            include=_split_values(include),
        )
        if reset:
            console.print_running("Resetting configuration to defaults...")

        should_persist = False
        if not delta.is_empty():
            config, should_persist = apply_delta(config, delta)
        if should_persist or (init and not config_exists):
            try:
                persist(config, config_path)
                console.print_success(f"Configuration saved to {CONFIG_FILE_NAME}")
            except PersistError as e:
                console.print_warning(f"{e}. Continuing with the in-memory configuration.")

        if init:
            console.print_success("Configuration initialized/updated. Exiting without generating context file.")
            return

        console.print_running("Finding relevant files based on your configuration...")
        progress = console.create_progress()
        task = {}

        def on_start(total: int) -> None:
            console.print_info(f"Processing {total} files...")
            if progress is not None:
                task['id'] = progress.add_task("Assembling context", total=total)

        def on_file(_path: str) -> None:
            if progress is not None:
                progress.advance(task['id'])

        with progress if progress is not None else nullcontext():
            result = ContextGenerator(config, root, debug=debug).generate(
                on_start=on_start, on_file=on_file
            )

        if result is None:
            console.print_warning("No files found that match your criteria.")
            console.print("   Run `aicontext --init` to create a config file and customize it.")
            return
        if result.statistics.total_files_processed == 0:
            console.print_warning("No files remaining after filtering by 'includeExtensions'.")

        exact_tokens = None
        if count_tokens:
            counter = TokenCounter()
            if counter.is_available:
                exact_tokens = counter.count(result.content)
            else:
                console.print_warning("Token encoder unavailable, skipping exact count.")

        print_statistics(console, config, result, exact_tokens)
        if result.has_errors():
            console.print_warning(f"{len(result.errors)} files could not be read:")
            for error in result.errors:
                console.print(f"   {escape(error)}")
        console.print_success("Done!")

    except KeyboardInterrupt:
        console.print_error("Process terminated by user")
        sys.exit(1)

    except Exception as e:
        console.print_error(f"An unexpected error occurred: {escape(str(e))}")
        if debug:
            console.print_exception()
        sys.exit(1)


if __name__ == '__main__':
    main()
