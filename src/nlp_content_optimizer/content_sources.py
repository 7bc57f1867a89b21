"""
Content loading for the command line front end.

Supports:
- Plain text files (.txt, .md)
- Word documents (.docx files using python-docx)
"""

from pathlib import Path
from typing import Union

from docx import Document

TEXT_SUFFIXES = (".txt", ".md")


class ContentLoadError(Exception):
    """Raised when input content cannot be loaded."""
    pass


def load_text_content(file_path: Union[str, Path]) -> str:
    """
    Load a UTF-8 text file.

    Raises:
        ContentLoadError: If the file is missing or cannot be decoded.
    """
    path = Path(file_path)

    if not path.exists():
        raise ContentLoadError(f"File not found: {file_path}")

    try:
        return path.read_text(encoding="utf-8")
    except (UnicodeDecodeError, OSError) as e:
        raise ContentLoadError(f"Failed to read text file: {e}")


def load_docx_content(file_path: Union[str, Path]) -> str:
    """
    Load the body text of a Word document.

    Non-empty paragraphs are joined with single spaces, so headings and
    paragraphs become one run of prose.

    Args:
        file_path: Path to the .docx file.

    Returns:
        The document text.

    Raises:
        ContentLoadError: If the file cannot be read or parsed.
    """
    path = Path(file_path)

    if not path.exists():
        raise ContentLoadError(f"File not found: {file_path}")

    if not path.suffix.lower() == ".docx":
        raise ContentLoadError(f"File must be a .docx file: {file_path}")

    try:
        doc = Document(str(path))
    except Exception as e:
        raise ContentLoadError(f"Failed to open Word document: {e}")

    paragraphs = [para.text.strip() for para in doc.paragraphs if para.text.strip()]
    return " ".join(paragraphs)


def load_content(source: Union[str, Path]) -> str:
    """
    Load content from a text or Word file.

    Raises:
        ContentLoadError: If the source type is unsupported or cannot be loaded.
    """
    path = Path(source)
    suffix = path.suffix.lower()

    if suffix == ".docx":
        return load_docx_content(path)
    if suffix in TEXT_SUFFIXES:
        return load_text_content(path)

    raise ContentLoadError(
        f"Invalid source: {source}. Must be a .txt, .md or .docx file path."
    )
