"""HTTP publisher serving the artifact store read-only."""

from __future__ import annotations

import html
import http.server
import logging
import mimetypes
import posixpath
from typing import Optional, Tuple, Type
from urllib.parse import quote, unquote

from .images import guess_mime_type
from .store import StoreView
from .utils import normalize_site_path

logger = logging.getLogger("mdserve")

INDEX_DOCUMENT = "index.html"
DEFAULT_CONTENT_TYPE = "application/octet-stream"


def content_type_for(path: str, data: bytes) -> str:
    """Pick a Content-Type from the file name, then from the file signature."""
    mime, _ = mimetypes.guess_type(path)
    if not mime:
        mime = guess_mime_type(data) or DEFAULT_CONTENT_TYPE
    if mime.startswith("text/") or mime == "application/javascript":
        mime += "; charset=utf-8"
    return mime


def render_listing(view: StoreView, directory: str) -> bytes:
    """Render an HTML listing of a store directory."""
    title = "/" + directory + ("/" if directory else "")
    lines = [
        "<!DOCTYPE html>",
        "<html>",
        '<head><meta charset="utf-8"><title>%s</title></head>' % html.escape(title),
        "<body>",
        "<pre>",
    ]
    for name in view.listdir(directory):
        child = posixpath.join(directory, name) if directory else name
        label = name + "/" if view.is_dir(child) else name
        lines.append('<a href="%s">%s</a>' % (quote(label), html.escape(label)))
    lines.extend(["</pre>", "</body>", "</html>", ""])
    return "\n".join(lines).encode("utf-8")


class StoreRequestHandler(http.server.BaseHTTPRequestHandler):
    """Map request paths directly onto artifact store paths."""

    view: StoreView
    server_version = "mdserve"

    def do_GET(self) -> None:
        self._respond(send_body=True)

    def do_HEAD(self) -> None:
        self._respond(send_body=False)

    def log_message(self, format: str, *args) -> None:  # noqa: A002
        logger.info("%s - %s", self.address_string(), format % args)

    def _resolve(self) -> Tuple[Optional[str], str]:
        raw_path = self.path.split("?", 1)[0].split("#", 1)[0]
        decoded = unquote(raw_path)
        return normalize_site_path(decoded), raw_path

    def _respond(self, send_body: bool) -> None:
        store_path, raw_path = self._resolve()
        if store_path is None:
            self.send_error(404, "File not found")
            return

        if self.view.is_dir(store_path):
            if not raw_path.endswith("/"):
                self.send_response(301)
                self.send_header("Location", raw_path + "/")
                self.send_header("Content-Length", "0")
                self.end_headers()
                return
            index_path = posixpath.join(store_path, INDEX_DOCUMENT) if store_path else INDEX_DOCUMENT
            if self.view.is_file(index_path):
                self._send_file(index_path, send_body)
            else:
                body = render_listing(self.view, store_path)
                self._send_bytes(body, "text/html; charset=utf-8", send_body)
            return

        if self.view.is_file(store_path):
            self._send_file(store_path, send_body)
            return

        self.send_error(404, "File not found")

    def _send_file(self, store_path: str, send_body: bool) -> None:
        data = self.view.read(store_path)
        self._send_bytes(data, content_type_for(store_path, data), send_body)

    def _send_bytes(self, data: bytes, content_type: str, send_body: bool) -> None:
        self.send_response(200)
        self.send_header("Content-Type", content_type)
        self.send_header("Content-Length", str(len(data)))
        self.end_headers()
        if send_body:
            self.wfile.write(data)


def make_handler(view: StoreView) -> Type[StoreRequestHandler]:
    """Bind a handler class to a store view."""
    return type("BoundStoreRequestHandler", (StoreRequestHandler,), {"view": view})


def create_server(
    view: StoreView,
    host: str = "",
    port: int = 8000,
) -> http.server.ThreadingHTTPServer:
    """Create (and bind) the threaded HTTP server; startup errors propagate."""
    server = http.server.ThreadingHTTPServer((host, port), make_handler(view))
    server.daemon_threads = True
    return server


def serve(view: StoreView, host: str = "", port: int = 8000) -> None:
    """Serve the store until interrupted."""
    with create_server(view, host, port) as httpd:
        bound_host, bound_port = httpd.server_address[:2]
        logger.info("Serving site at http://%s:%d", bound_host or "localhost", bound_port)
        logger.info("Press Ctrl+C to stop")
        try:
            httpd.serve_forever()
        except KeyboardInterrupt:
            logger.info("Server stopped.")
