import concurrent.futures
import logging
import secrets
import threading
from http.server import BaseHTTPRequestHandler, HTTPServer
from typing import List, Optional
from urllib.parse import parse_qs, urlparse

from spotipy.cache_handler import MemoryCacheHandler
from spotipy.oauth2 import SpotifyPKCE

from .errors import AuthError

logger = logging.getLogger(__name__)

__all__ = [
    'CallbackListener',
    'PKCEAuthorizer',
]

_DONE_PAGE = b"""<html><body><h1>Authorization received</h1>
<p>You can close this window and return to the terminal.</p></body></html>"""
_FAILED_PAGE = b"""<html><body><h1>Authorization failed</h1>
<p>Check the terminal for details.</p></body></html>"""


class CallbackListener:
    """
    Loopback HTTP listener for the OAuth redirect.

    The first request to `path` carrying either `code` or `error` resolves a
    single future; later requests are answered but ignored. Use as a context
    manager so the server is always shut down.
    """

    def __init__(self, host: str, port: int, path: str = '/callback', expected_state: Optional[str] = None):
        self.path = path
        self.expected_state = expected_state
        self.future: concurrent.futures.Future = concurrent.futures.Future()
        # binding happens here, an OSError means the port is unavailable
        self.server = HTTPServer((host, port), self._make_handler())
        self._thread = threading.Thread(target=self.server.serve_forever, name='oauth-callback', daemon=True)
        self._serving = False

    @property
    def port(self) -> int:
        return self.server.server_address[1]

    def __enter__(self):
        self._thread.start()
        self._serving = True
        return self

    def __exit__(self, exc_type, exc, tb):
        self.stop()

    def stop(self):
        if self._serving:
            self.server.shutdown()
            self._serving = False
        self.server.server_close()

    def wait(self, timeout: float) -> str:
        """ block until a code, an error or the timeout, whichever comes first """
        try:
            return self.future.result(timeout=timeout)
        except concurrent.futures.TimeoutError:
            raise AuthError(f"Authentication flow timed out after {timeout:g} seconds. Please try again.")

    def _resolve(self, query: dict) -> bool:
        if self.future.done():
            return True
        state = query.get('state', [None])[0]
        if 'error' in query:
            self.future.set_exception(AuthError(f"Authorization failed: {query['error'][0]} (State: {state})"))
            return False
        if 'code' not in query:
            return False
        if self.expected_state is not None and state != self.expected_state:
            self.future.set_exception(AuthError("Authorization failed: state mismatch in callback"))
            return False
        self.future.set_result(query['code'][0])
        return True

    def _make_handler(self):
        listener = self

        class _CallbackHandler(BaseHTTPRequestHandler):
            def do_GET(self):
                url = urlparse(self.path)
                if url.path != listener.path:
                    self.send_error(404)
                    return
                query = parse_qs(url.query)
                if 'code' not in query and 'error' not in query:
                    self.send_error(400, "Missing code")
                    return
                ok = listener._resolve(query)
                self.send_response(200)
                self.send_header('Content-Type', 'text/html; charset=utf-8')
                self.end_headers()
                self.wfile.write(_DONE_PAGE if ok else _FAILED_PAGE)

            def log_message(self, format, *args):
                logger.debug("callback: " + format % args)

        return _CallbackHandler


class PKCEAuthorizer:
    """ authorization server side of the PKCE flow, backed by spotipy """

    def __init__(self, client_id: str, redirect_uri: str, scopes: List[str], requests_timeout: int = 10):
        self.state = secrets.token_urlsafe(16)
        self.oauth = SpotifyPKCE(
            client_id=client_id,
            redirect_uri=redirect_uri,
            scope=scopes,
            state=self.state,
            cache_handler=MemoryCacheHandler(),
            requests_timeout=requests_timeout,
            open_browser=False,
        )

    def authorize_url(self) -> str:
        # fresh verifier/challenge pair for every flow
        self.oauth.get_pkce_handshake_parameters()
        return self.oauth.get_authorize_url()

    def exchange_code(self, code: str) -> dict:
        self.oauth.get_access_token(code=code, check_cache=False)
        return self.oauth.cache_handler.get_cached_token() or {}

    def refresh(self, refresh_token: str) -> dict:
        return self.oauth.refresh_access_token(refresh_token) or {}
