"""Tree-sitter parser for JavaScript / TypeScript component files."""
from pathlib import Path
from typing import Optional
from tree_sitter import Language, Parser, Tree
import tree_sitter_javascript as tsjavascript
import tree_sitter_typescript as tstypescript


class LanguageParser:
    """JS/JSX/TS/TSX parser using the tree-sitter v0.22+ API."""

    SUPPORTED_LANGUAGES = {
        '.js': 'javascript',
        '.jsx': 'javascript',
        '.mjs': 'javascript',
        '.cjs': 'javascript',
        '.ts': 'typescript',
        '.tsx': 'tsx',
    }

    def __init__(self, language: str):
        """Initialize parser for given language.

        Args:
            language: One of 'javascript', 'typescript', 'tsx'

        Raises:
            ValueError: If language is not supported
        """
        self.language = language
        self.parser = self._create_parser()

    def _create_parser(self) -> Parser:
        """Build a Parser with the grammar for ``self.language``.

        The JavaScript grammar understands JSX. TypeScript needs the separate
        TSX grammar for JSX, since ``<T>x`` casts clash with JSX tags.

        Raises:
            ValueError: If language is not supported
        """
        if self.language == 'javascript':
            lang = Language(tsjavascript.language())
        elif self.language == 'typescript':
            lang = Language(tstypescript.language_typescript())
        elif self.language == 'tsx':
            lang = Language(tstypescript.language_tsx())
        else:
            raise ValueError(f"Unsupported language: {self.language}")

        return Parser(lang)

    def parse_source(self, source_code: bytes | str) -> Tree:
        """Parse in-memory source code."""
        if isinstance(source_code, str):
            source_code = source_code.encode('utf-8')
        return self.parser.parse(source_code)

    def parse_file(self, file_path: str | Path) -> Optional[Tree]:
        """Parse file and return tree-sitter Tree.

        Args:
            file_path: Path to source file to parse

        Returns:
            Parsed Tree object, or None if the file is missing or unreadable
        """
        file_path = Path(file_path)

        if not file_path.exists():
            return None

        try:
            with open(file_path, 'rb') as f:
                source_code = f.read()
            return self.parser.parse(source_code)
        except OSError:
            return None

    @classmethod
    def from_file_extension(cls, file_path: str | Path) -> Optional['LanguageParser']:
        """Create parser based on file extension.

        Args:
            file_path: Path to determine language from

        Returns:
            LanguageParser instance, or None if extension not supported
        """
        extension = Path(file_path).suffix.lower()

        language = cls.SUPPORTED_LANGUAGES.get(extension)
        if language:
            return cls(language)
        return None
