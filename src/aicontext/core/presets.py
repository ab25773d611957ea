"""
Built-in configuration data.

The base configuration applies to most projects. Presets are additive: each
one is unioned into the current configuration and never replaces it. Both are
read-only module constants that the merge functions receive as parameters.
"""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping, Tuple

from .models import Config


CONFIG_FILE_NAME = 'aicontext.json'

BASE_CONFIG = Config(
    exclude_paths=(
        'context.md', '.DS_Store', 'node_modules', 'vendor',
        '.git/', '.github/', 'dist/', 'build/', '.gradle/', '.idea/',
        '*.log', '*.lock', 'LICENSE', 'yarn.lock', 'package-lock.json',
    ),
    include_extensions=(
        '.js', '.jsx', '.ts', '.tsx', '.html', '.css', '.scss',
        '.json', '.md', '.txt', '.yml', '.yaml', '.py',
    ),
    max_file_size_kb=500,
    output_file='context.md',
    use_gitignore=False,
)


@dataclass(frozen=True)
class Preset:
    """A named, additive bundle of exclusions and extensions."""

    name: str
    description: str
    exclude_paths: Tuple[str, ...] = ()
    include_extensions: Tuple[str, ...] = ()


def _catalog(*presets: Preset) -> Mapping[str, Preset]:
    return MappingProxyType({preset.name: preset for preset in presets})


PRESETS: Mapping[str, Preset] = _catalog(
    Preset(
        name='nodejs',
        description='Node.js projects (coverage output, dotenv, ES/CommonJS modules)',
        exclude_paths=('coverage/', '.env'),
        include_extensions=('.mjs', '.cjs'),
    ),
    Preset(
        name='android',
        description='Android / Gradle projects',
        exclude_paths=(
            'captures/', '*.apk', '*.aab', '*.iml', 'gradle/',
            'gradlew', 'gradlew.bat', 'local.properties',
        ),
        include_extensions=('.java', '.kt', '.kts', '.xml', '.gradle', '.pro'),
    ),
    Preset(
        name='java',
        description='Maven / plain Java projects',
        exclude_paths=('target/', '.mvn/', '*.jar', '*.war', 'logs/'),
        include_extensions=('.java', '.xml', '.properties', '.pom'),
    ),
    Preset(
        name='python',
        description='Python projects (bytecode, virtualenvs, dotenv)',
        exclude_paths=('__pycache__/', '.venv/', 'venv/', '*.pyc', '.env'),
        include_extensions=('.py',),
    ),
)
