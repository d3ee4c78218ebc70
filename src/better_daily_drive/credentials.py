import datetime
from dataclasses import dataclass, field
from typing import List, Optional

from .store import CorruptRecord, JsonFileStore
from .type import CredentialFile


@dataclass
class Credential:
    client_id: str = ''
    access_token: str = ''
    refresh_token: str = ''
    token_type: str = ''
    scopes: List[str] = field(default_factory=list)
    expires_at: Optional[datetime.datetime] = None

    @property
    def has_token(self) -> bool:
        return bool(self.access_token)

    def is_fresh(self, margin: datetime.timedelta, now: Optional[datetime.datetime] = None) -> bool:
        """ true when the access token will still be valid for at least `margin` """
        if not self.has_token or self.expires_at is None:
            return False
        now = now or datetime.datetime.now(datetime.timezone.utc)
        return self.expires_at >= now + margin

    def update_from_token_info(self, token_info: dict, now: Optional[datetime.datetime] = None):
        """ apply a token endpoint response, keeping the old refresh token if none was issued """
        now = now or datetime.datetime.now(datetime.timezone.utc)
        self.access_token = token_info['access_token']
        self.refresh_token = token_info.get('refresh_token') or self.refresh_token
        self.token_type = token_info.get('token_type', self.token_type) or ''
        self.scopes = (token_info.get('scope') or '').split()
        self.expires_at = now + datetime.timedelta(seconds=int(token_info.get('expires_in', 0)))


def _str_field(payload: dict, key: str) -> str:
    value = payload.get(key) or ''
    if not isinstance(value, str):
        raise CorruptRecord(f"'{key}' must be a string")
    return value


def _parse_timestamp(value) -> Optional[datetime.datetime]:
    if value in (None, ''):
        return None
    if not isinstance(value, str):
        raise CorruptRecord("'expiresAt' must be an ISO-8601 string")
    timestamp = datetime.datetime.fromisoformat(value)
    if timestamp.tzinfo is None:
        # files written without an offset are taken as local time
        timestamp = timestamp.astimezone()
    return timestamp


class CredentialStore(JsonFileStore[Credential]):
    description = 'auth data'

    def parse(self, payload) -> Credential:
        if not isinstance(payload, dict):
            raise CorruptRecord("auth data must be a JSON object")
        scopes = payload.get('scope') or []
        if not isinstance(scopes, list) or not all(isinstance(s, str) for s in scopes):
            raise CorruptRecord("'scope' must be a list of strings")
        return Credential(
            client_id=_str_field(payload, 'clientId'),
            access_token=_str_field(payload, 'accessToken'),
            refresh_token=_str_field(payload, 'refreshToken'),
            token_type=_str_field(payload, 'tokenType'),
            scopes=list(scopes),
            expires_at=_parse_timestamp(payload.get('expiresAt')),
        )

    def dump(self, credential: Credential) -> CredentialFile:
        return {
            'clientId': credential.client_id,
            'accessToken': credential.access_token,
            'refreshToken': credential.refresh_token,
            'tokenType': credential.token_type,
            'scope': list(credential.scopes),
            'expiresAt': credential.expires_at.isoformat() if credential.expires_at else None,
        }
