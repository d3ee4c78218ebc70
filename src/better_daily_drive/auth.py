#!/usr/bin/env python3

import datetime
import logging
import webbrowser
from typing import Callable, Optional

import requests
import spotipy

from .config import Settings
from .credentials import Credential, CredentialStore
from .errors import AuthError
from .oauth import CallbackListener, PKCEAuthorizer
from .ui import prompt_client_id

__all__ = [
    'TokenLifecycle',
    'open_spotify_session',
]

logger = logging.getLogger(__name__)


class TokenLifecycle:
    """
    Turns whatever is in the credential file into a usable Spotify session.

    cached token -> one refresh attempt -> full PKCE authorization. The
    credential file is rewritten after every successful change.
    """

    def __init__(self,
                 settings: Settings,
                 store: CredentialStore,
                 authorizer_factory: Callable[..., PKCEAuthorizer] = PKCEAuthorizer,
                 listener_factory: Callable[..., CallbackListener] = CallbackListener,
                 open_browser: Callable[[str], bool] = webbrowser.open,
                 ask_client_id: Callable[[], str] = prompt_client_id):
        self.settings = settings
        self.store = store
        self.authorizer_factory = authorizer_factory
        self.listener_factory = listener_factory
        self.open_browser = open_browser
        self.ask_client_id = ask_client_id
        self.credential = Credential()
        self._authorizer: Optional[PKCEAuthorizer] = None

    @property
    def authorizer(self) -> PKCEAuthorizer:
        if self._authorizer is None:
            self._authorizer = self.authorizer_factory(
                client_id=self.credential.client_id,
                redirect_uri=self.settings.redirect_uri,
                scopes=self.settings.scopes,
                requests_timeout=self.settings.requests_timeout,
            )
        return self._authorizer

    def obtain_session(self) -> spotipy.Spotify:
        self.credential = self.store.load() or Credential()
        self.ensure_client_id()

        margin = datetime.timedelta(seconds=self.settings.refresh_margin_seconds)
        if self.credential.is_fresh(margin):
            logger.info("Valid token loaded from storage.")
            return self._session()

        if self.credential.refresh_token:
            logger.info("Token expired or close to expiry. Attempting to refresh...")
            if self.refresh():
                return self._session()
            logger.info("Refresh failed. Starting new Authorization Flow...")
        else:
            logger.info("No valid token found. Starting new Authorization Flow...")

        self.authorize()
        return self._session()

    def ensure_client_id(self):
        if self.credential.client_id:
            logger.info(f"Client ID loaded: {self.credential.client_id}")
            return
        client_id = ''
        while not client_id:
            client_id = (self.ask_client_id() or '').strip()
        self.credential.client_id = client_id
        logger.info("Client ID captured.")
        # persist now so the id survives a failed authorization
        self.store.save(self.credential)

    def refresh(self) -> bool:
        """ one refresh attempt; any failure is reported and returns False """
        try:
            token_info = self.authorizer.refresh(self.credential.refresh_token)
        except (spotipy.SpotifyOauthError, spotipy.SpotifyException, requests.exceptions.RequestException) as e:
            logger.warning(f"Error during token refresh: {e}")
            return False
        if not token_info.get('access_token'):
            logger.warning("Token refresh returned no access token.")
            return False
        self.credential.update_from_token_info(token_info)
        self.store.save(self.credential)
        logger.info("Token refreshed successfully.")
        return True

    def authorize(self):
        """ full PKCE authorization-code flow, raises AuthError on any failure """
        settings = self.settings
        authorizer = self.authorizer
        logger.info(f"Attempting to start local server on port {settings.callback_port}...")
        try:
            listener = self.listener_factory(settings.callback_host,
                                             settings.callback_port,
                                             settings.callback_path,
                                             expected_state=authorizer.state)
        except OSError as e:
            raise AuthError(f"Failed to start local server on port {settings.callback_port}: {e}") from e

        with listener:
            logger.info(f"Server successfully started on {settings.redirect_uri}.")
            url = authorizer.authorize_url()
            logger.info(f"\nOpening browser for authorization. Please login:\n{url}")
            if settings.open_browser:
                self.open_browser(url)
            code = listener.wait(settings.auth_timeout_seconds)

        try:
            token_info = authorizer.exchange_code(code)
        except (spotipy.SpotifyOauthError, spotipy.SpotifyException, requests.exceptions.RequestException) as e:
            raise AuthError(f"Token exchange failed: {e}") from e
        if not token_info.get('access_token'):
            raise AuthError("Token exchange failed: Spotify did not return an access token.")

        self.credential.update_from_token_info(token_info)
        self.store.save(self.credential)
        logger.info("Successfully received access and refresh tokens.")

    def _session(self) -> spotipy.Spotify:
        return spotipy.Spotify(auth=self.credential.access_token,
                               requests_timeout=self.settings.requests_timeout)


def open_spotify_session(settings: Settings, store: Optional[CredentialStore] = None) -> spotipy.Spotify:
    store = store or CredentialStore(settings.credentials_file)
    return TokenLifecycle(settings, store).obtain_session()
