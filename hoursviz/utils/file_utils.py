"""File I/O utility functions for hoursViz."""
import os
import csv
import webbrowser
from pathlib import Path
from typing import List, Union

import markdown

from ..errors import RenderError

PathLike = Union[str, Path]


def write_text(path: PathLike, content: str) -> Path:
    """Write a UTF-8 text file.

    Args:
        path: Output file path
        content: File content

    Returns:
        Absolute path of the written file

    Raises:
        RenderError: If the file cannot be written
    """
    path = Path(path)
    try:
        path.write_text(content, encoding="utf-8")
    except OSError as e:
        raise RenderError(f"Failed to write '{path}': {e}") from e
    return path.resolve()


def write_csv(filename: PathLike, headers: list, rows: list) -> None:
    """Write data to a CSV file.

    Args:
        filename: Output file name
        headers: Column headers
        rows: Data rows

    Raises:
        RenderError: If the file cannot be written
    """
    try:
        with open(filename, 'w', newline='', encoding='utf-8') as f:
            writer = csv.writer(f)
            writer.writerow(headers)
            writer.writerows(rows)
    except OSError as e:
        raise RenderError(f"Failed to write '{filename}': {e}") from e


def write_markdown(md_path: PathLike, content: str, title: str, overwrite: bool = False) -> None:
    """Write content to a Markdown file.

    Args:
        md_path: Output file path
        content: Markdown content
        title: Heading written at the top of a new file
        overwrite: Whether to overwrite the file if it exists (otherwise append)

    Raises:
        RenderError: If the file cannot be written or is not valid Markdown
    """
    # File existence feedback
    file_exists = os.path.exists(md_path)
    if file_exists and not overwrite:
        mode = 'a'
        print(f"[INFO] File '{md_path}' exists. Appending output.")
    elif file_exists and overwrite:
        mode = 'w'
        print(f"[INFO] File '{md_path}' exists. Overwriting as requested.")
    else:
        mode = 'w'
        print(f"[INFO] File '{md_path}' does not exist. Creating new file.")

    try:
        with open(md_path, mode, encoding='utf-8') as f:
            if mode == 'w' or (mode == 'a' and os.stat(md_path).st_size == 0):
                f.write(f"# {title}\n\n")
            f.write(content)
    except OSError as e:
        raise RenderError(f"Failed to write to '{md_path}': {e}") from e

    # Markdown validation
    try:
        with open(md_path, 'r', encoding='utf-8') as f:
            md_text = f.read()
        markdown.markdown(md_text)
    except Exception as e:
        raise RenderError(f"Markdown validation failed for '{md_path}': {e}") from e


def open_with_default_app(path: PathLike) -> bool:
    """Open a file with the OS default handler (browser, image viewer).

    Args:
        path: File to open

    Returns:
        True if a handler was launched
    """
    return webbrowser.open(Path(path).resolve().as_uri())
