"""Local HTTP server for the live weather page.

``GET /`` renders the current page state; ``POST /refresh`` triggers the
session's refresh hook in the background and redirects back to the page.
Animation frames under ``/Animations/`` are served from the assets
directory when one is given. Every other path is a 404, so nothing else in
the working directory (config.yaml, .env) is ever exposed.
"""

from __future__ import annotations

import logging
import posixpath
import threading
import urllib.parse
from functools import partial
from http import HTTPStatus
from http.server import SimpleHTTPRequestHandler, ThreadingHTTPServer
from pathlib import Path
from typing import Any, Final

from weatherpal.controller import WeatherSession
from weatherpal.display.render import PageRenderer

logger: Final = logging.getLogger(__name__)

PAGE_PATHS: Final = ("/", "/index.html")
REFRESH_PATH: Final = "/refresh"
ASSET_PREFIX: Final = "/Animations/"


class PageRequestHandler(SimpleHTTPRequestHandler):
    """Serves the rendered page, the refresh hook and animation frames."""

    def __init__(
        self,
        *args: Any,
        session: WeatherSession,
        renderer: PageRenderer,
        assets_dir: Path | None = None,
        **kwargs: Any,
    ) -> None:
        self.session = session
        self.renderer = renderer
        self.assets_dir = assets_dir
        directory = str(assets_dir) if assets_dir is not None else None
        super().__init__(*args, directory=directory, **kwargs)

    def _route(self) -> str:
        return self.path.split("?", 1)[0].split("#", 1)[0]

    def _is_asset(self, route: str) -> bool:
        if self.assets_dir is None:
            return False
        # Same normalisation translate_path applies, so "../" cannot escape
        normalized = posixpath.normpath(urllib.parse.unquote(route))
        return normalized.startswith(ASSET_PREFIX)

    def do_GET(self) -> None:  # noqa: N802
        route = self._route()
        if route in PAGE_PATHS:
            self._send_page()
        elif self._is_asset(route):
            super().do_GET()
        else:
            self.send_error(HTTPStatus.NOT_FOUND)

    def do_HEAD(self) -> None:  # noqa: N802
        if self._is_asset(self._route()):
            super().do_HEAD()
        else:
            self.send_error(HTTPStatus.NOT_FOUND)

    def do_POST(self) -> None:  # noqa: N802
        if self._route() != REFRESH_PATH:
            self.send_error(HTTPStatus.NOT_FOUND)
            return

        threading.Thread(
            target=self.session.refresh, name="weatherpal-refresh", daemon=True
        ).start()
        self.send_response(HTTPStatus.SEE_OTHER)
        self.send_header("Location", "/")
        self.send_header("Content-Length", "0")
        self.end_headers()

    def _send_page(self) -> None:
        body = self.renderer.render(self.session.page, interactive=True).encode("utf-8")
        self.send_response(HTTPStatus.OK)
        self.send_header("Content-Type", "text/html; charset=utf-8")
        self.send_header("Content-Length", str(len(body)))
        self.send_header("Cache-Control", "no-store")
        self.end_headers()
        self.wfile.write(body)

    def log_message(self, format: str, *args: Any) -> None:
        logger.debug("%s - %s", self.address_string(), format % args)


def create_server(
    session: WeatherSession,
    renderer: PageRenderer,
    host: str = "127.0.0.1",
    port: int = 8000,
    assets_dir: Path | None = None,
) -> ThreadingHTTPServer:
    """Build (but do not start) the page server.

    Args:
        session: Session whose page is served and refreshed
        renderer: Renderer for the page
        host: Interface to bind
        port: Port to bind (0 picks a free one)
        assets_dir: Directory holding ``Animations/``; None serves no files

    Returns:
        A ThreadingHTTPServer ready for ``serve_forever()``
    """
    if assets_dir is None:
        logger.info("No assets directory given; animation frames will not be served")
    handler = partial(
        PageRequestHandler,
        session=session,
        renderer=renderer,
        assets_dir=assets_dir,
    )
    server = ThreadingHTTPServer((host, port), handler)
    server.daemon_threads = True
    return server
