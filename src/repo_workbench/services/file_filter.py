"""Path classification — decide how a repository file should be handled.

Used to pick between the inline editor and an external link, to decide
whether a commit message is worth generating, and to skip OS junk when
unpacking archives.
"""

from __future__ import annotations

from repo_workbench.domain.entities import TreeEntry

IMAGE_EXTENSIONS: frozenset[str] = frozenset(
    {".jpg", ".jpeg", ".png", ".gif", ".webp", ".ico", ".svg"}
)

TEXT_EXTENSIONS: frozenset[str] = frozenset(
    {
        ".txt", ".md", ".js", ".ts", ".tsx", ".jsx", ".html", ".css", ".json",
        ".py", ".rb", ".java", ".c", ".cpp", ".h", ".go", ".rs",
        ".yaml", ".yml", ".toml", ".env", ".gitignore",
    }
)

ANALYZABLE_EXTENSIONS: frozenset[str] = frozenset({".ts", ".js", ".py"})

ARCHIVE_EXTENSIONS: frozenset[str] = frozenset({".zip", ".rar"})

EXTRACTABLE_EXTENSIONS: frozenset[str] = frozenset({".zip"})

SKIP_ARCHIVE_DIRS: frozenset[str] = frozenset({"__MACOSX", ".git"})

SKIP_FILENAMES: frozenset[str] = frozenset({".DS_Store", "Thumbs.db", "desktop.ini"})

EDITABLE_SIZE_LIMIT = 50_000
ANALYZABLE_SIZE_LIMIT = 10_000


def _filename(path: str) -> str:
    return path.rsplit("/", maxsplit=1)[-1]


def _extension(path: str) -> str:
    name = _filename(path).lower()
    if name.startswith(".") and name.count(".") == 1:
        return name  # dotfiles such as ".gitignore" or ".env"
    dot = name.rfind(".")
    return name[dot:] if dot != -1 else ""


def is_image_path(path: str) -> bool:
    return _extension(path) in IMAGE_EXTENSIONS


def is_text_path(path: str) -> bool:
    return _extension(path) in TEXT_EXTENSIONS


def is_archive_path(path: str) -> bool:
    return _extension(path) in ARCHIVE_EXTENSIONS


def is_extractable_path(path: str) -> bool:
    """Archives the uploader can unpack itself; .rar is stored only."""
    return _extension(path) in EXTRACTABLE_EXTENSIONS


def is_editable(entry: TreeEntry) -> bool:
    """Return *True* if the entry should open in the inline text editor."""
    if entry.is_directory or is_image_path(entry.path):
        return False
    return is_text_path(entry.path) or entry.size < EDITABLE_SIZE_LIMIT


def is_commit_analyzable(name: str, size: int) -> bool:
    """Small source files get an AI-generated commit message."""
    return size < ANALYZABLE_SIZE_LIMIT and _extension(name) in ANALYZABLE_EXTENSIONS


def should_skip_archive_member(member: str) -> bool:
    """Return *True* for directory entries and OS metadata inside an archive."""
    if member.endswith("/"):
        return True
    parts = member.split("/")
    if any(part in SKIP_ARCHIVE_DIRS for part in parts[:-1]):
        return True
    return parts[-1] in SKIP_FILENAMES or parts[-1].startswith("._")
