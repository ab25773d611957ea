"""Language tags for fenced code blocks."""

import os

LANGUAGE_MAP = {
    '.js': 'javascript', '.mjs': 'javascript', '.cjs': 'javascript',
    '.jsx': 'jsx', '.ts': 'typescript', '.tsx': 'tsx',
    '.php': 'php', '.html': 'html', '.css': 'css', '.scss': 'scss',
    '.json': 'json', '.md': 'markdown', '.txt': 'text',
    '.yml': 'yaml', '.yaml': 'yaml', '.sh': 'bash', '.py': 'python',
    '.java': 'java', '.c': 'c', '.cpp': 'cpp', '.h': 'c', '.hpp': 'cpp',
    '.cs': 'csharp', '.rb': 'ruby', '.go': 'go', '.rs': 'rust',
    '.swift': 'swift', '.kt': 'kotlin', '.kts': 'kotlin', '.dart': 'dart',
    '.sql': 'sql', '.env': 'dotenv', '.config': 'plaintext', '.xml': 'xml',
    '.gradle': 'groovy', '.properties': 'properties', '.pom': 'xml',
}

DEFAULT_LANGUAGE = 'plaintext'


def get_language(file_path: str) -> str:
    """
    Get the fence language tag for a file.

    Basename rules win over the extension table: Gradle wrapper scripts are
    shell, ProGuard rules are properties, README* is markdown and LICENSE is
    plain text.
    """
    filename = os.path.basename(file_path).lower()
    ext = os.path.splitext(filename)[1]

    if filename == 'gradlew':
        return 'bash'
    if filename == 'proguard-rules.pro' or ext == '.pro':
        return 'properties'
    if filename.startswith('readme'):
        return 'markdown'
    if filename == 'license':
        return 'text'
    return LANGUAGE_MAP.get(ext, DEFAULT_LANGUAGE)
