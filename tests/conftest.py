"""Local HTTP stations whose pacing each test controls."""

import threading
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer

import pytest


def _handler_for(respond):
    class PacedStationHandler(BaseHTTPRequestHandler):
        protocol_version = "HTTP/1.1"

        def do_HEAD(self):
            self._respond("HEAD")

        def do_GET(self):
            self._respond("GET")

        def _respond(self, method):
            # respond() writes the raw status line, headers and body itself
            try:
                respond(method, self.wfile)
            except OSError:
                pass
            self.close_connection = True

        def log_message(self, format, *args):
            pass

    return PacedStationHandler


@pytest.fixture
def paced_station():
    """Start a station on 127.0.0.1; ``respond(method, wfile)`` writes the reply."""
    servers = []

    def start(respond) -> str:
        server = ThreadingHTTPServer(("127.0.0.1", 0), _handler_for(respond))
        threading.Thread(target=server.serve_forever, daemon=True).start()
        servers.append(server)
        host, port = server.server_address[:2]
        return f"http://{host}:{port}"

    yield start
    for server in servers:
        server.shutdown()
        server.server_close()
