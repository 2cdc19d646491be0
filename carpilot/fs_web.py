"""Static files served from a web root directory."""

from __future__ import annotations

from pathlib import Path

_CONTENT_TYPES = (
    ((".htm", ".html"), "text/html"),
    ((".css",), "text/css"),
    ((".js",), "application/javascript"),
    ((".png",), "image/png"),
    ((".gif",), "image/gif"),
    ((".jpg",), "image/jpeg"),
    ((".ico",), "image/x-icon"),
    ((".xml",), "text/xml"),
    ((".pdf",), "application/pdf"),
    ((".zip",), "application/zip"),
    ((".gz",), "application/gzip"),
)


def content_type(filename: str, download: bool = False) -> str:
    """MIME type for a file name; downloads are always octet streams."""
    if download:
        return "application/octet-stream"
    for suffixes, mime in _CONTENT_TYPES:
        if filename.endswith(suffixes):
            return mime
    return "text/plain"


class StaticFiles:
    """Reads files below a root directory by URL path."""

    def __init__(self, root: str | Path) -> None:
        self.root = Path(root).resolve()

    def read(self, path: str, download: bool = False) -> tuple[bytes, str] | None:
        """Return ``(body, content_type)`` for a URL path, or None if absent."""
        if path.endswith("/"):
            path += "index.html"
        target = (self.root / path.lstrip("/")).resolve()
        if target != self.root and self.root not in target.parents:
            return None
        if not target.is_file():
            return None
        try:
            body = target.read_bytes()
        except OSError:
            return None
        return body, content_type(path, download)

    def list_files(self) -> list[str]:
        """Names of the entries at the top of the root directory."""
        if not self.root.is_dir():
            return []
        return sorted(entry.name for entry in self.root.iterdir())