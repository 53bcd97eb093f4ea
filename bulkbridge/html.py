"""HTML inclusion helper used to compose the sidebar shell."""

from pathlib import Path

from bulkbridge.errors import PermanentError

# Bundled sidebar files
DEFAULT_UI_ROOT = Path(__file__).parent / "ui"


def include(filename: str, ui_root: Path | str | None = None) -> str:
    """
    Return the content of a UI file so it can be inlined into the sidebar.

    Args:
        filename: File name relative to the UI root; ".html" is appended
            when the name has no suffix
        ui_root: Directory holding the UI files (defaults to the bundled ones)

    Raises:
        PermanentError: If the file is outside the UI root or does not exist
    """
    root = Path(ui_root).expanduser() if ui_root else DEFAULT_UI_ROOT
    path = Path(filename)
    if not path.suffix:
        path = path.with_suffix(".html")

    resolved = (root / path).resolve()
    if not resolved.is_relative_to(root.resolve()):
        raise PermanentError(f"UI file outside of {root}: {filename}")
    if not resolved.is_file():
        raise PermanentError(f"UI file not found: {filename}")

    return resolved.read_text(encoding="utf-8")
