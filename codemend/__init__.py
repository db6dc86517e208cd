"""CodeMend: structural codemods for JavaScript and TypeScript API migrations."""

__version__ = "0.1.0"
