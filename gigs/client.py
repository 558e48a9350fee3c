from __future__ import annotations

import os
import asyncio
import logging
from enum import Enum
from dataclasses import dataclass
from typing import Awaitable, Optional

import httpx

from gigs.clients.gig_api import get_authorized, post_authorized, post_json
from gigs.core.callbacks import Callback, dispatch
from gigs.core.errors import (
    BadData,
    BadURL,
    FailedFetch,
    NoData,
    NotSignedIn,
    SignInFailed,
    SignUpFailed,
)
from gigs.core.models import Bearer, Gig, User, decode_bearer, decode_gigs
from gigs.core.session import Session


logger = logging.getLogger(__name__)


class CreateMode(str, Enum):
    LEGACY_GET = "legacy-get"
    POST = "post"


@dataclass(frozen=True)
class Settings:
    base_url: str
    request_timeout_sec: float
    create_mode: CreateMode


def _settings_from_env() -> Settings:
    return Settings(
        base_url=os.getenv("GIGS_BASE_URL", "https://lambdagigapi.herokuapp.com/api").rstrip("/"),
        request_timeout_sec=float(os.getenv("GIGS_REQUEST_TIMEOUT_SEC", "30.0")),
        create_mode=CreateMode(os.getenv("GIGS_CREATE_MODE", CreateMode.POST.value)),
    )


SETTINGS = _settings_from_env()
BASE_URL = SETTINGS.base_url
REQUEST_TIMEOUT_SEC = SETTINGS.request_timeout_sec
CREATE_MODE = SETTINGS.create_mode

# raised while building or sending a request; a non-ASCII token fails header encoding
TRANSPORT_ERRORS = (httpx.HTTPError, httpx.InvalidURL, UnicodeEncodeError)


@dataclass(frozen=True)
class Endpoints:
    sign_up: str
    log_in: str
    list_gigs: str
    create_gig: str

    @classmethod
    def from_base(cls, base_url: str) -> "Endpoints":
        base = base_url.rstrip("/")
        return cls(
            sign_up=f"{base}/users/signup",
            log_in=f"{base}/users/login",
            list_gigs=f"{base}/gigs/",
            create_gig=f"{base}/gigs",
        )


class GigClient:
    def __init__(
        self,
        base_url: str = BASE_URL,
        *,
        http: Optional[httpx.AsyncClient] = None,
        session: Optional[Session] = None,
        timeout_sec: float = REQUEST_TIMEOUT_SEC,
        create_mode: CreateMode = CREATE_MODE,
    ):
        self.endpoints = Endpoints.from_base(base_url)
        self.session = session if session is not None else Session()
        self.timeout_sec = timeout_sec
        self.create_mode = CreateMode(create_mode)

        self._owns_http = http is None
        self._http = http if http is not None else httpx.AsyncClient(timeout=timeout_sec)
        self._pending: set[asyncio.Task] = set()

    async def __aenter__(self) -> "GigClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_http:
            await self._http.aclose()

    @property
    def bearer(self) -> Optional[Bearer]:
        return self.session.bearer

    @property
    def gigs(self) -> list[Gig]:
        return list(self.session.gigs)

    @property
    def is_signed_in(self) -> bool:
        return self.session.signed_in()

    async def sign_out(self) -> None:
        await self.session.clear()

    def dispatch(self, op: Awaitable, callback: Callback) -> asyncio.Task:
        return dispatch(op, callback, self._pending)

    async def sign_up(self, user: User) -> bool:
        op = "sign_up"
        try:
            body = user.to_json()
        except (ValueError, TypeError) as e:
            logger.warning(f"Error encoding user: {e}")
            raise SignUpFailed(op, f"encode: {e}")

        logger.debug(f"Signing up user '{user.username}'")
        try:
            status, _ = await post_json(self._http, self.endpoints.sign_up, body, self.timeout_sec)
        except TRANSPORT_ERRORS as e:
            logger.warning(f"Sign up failed with error: {e}")
            raise SignUpFailed(op, f"transport: {e}")

        if status != 200:
            logger.warning(f"Sign up was unsuccessful: http {status}")
            raise SignUpFailed(op, f"http {status}", status_code=status)
        return True

    async def log_in(self, user: User) -> bool:
        op = "log_in"
        try:
            body = user.to_json()
        except (ValueError, TypeError) as e:
            logger.warning(f"Error encoding user: {e}")
            raise SignInFailed(op, f"encode: {e}")

        try:
            status, content = await post_json(self._http, self.endpoints.log_in, body, self.timeout_sec)
        except TRANSPORT_ERRORS as e:
            logger.warning(f"Sign in failed with error: {e}")
            raise SignInFailed(op, f"transport: {e}")

        if status != 200:
            logger.warning(f"Sign in was unsuccessful: http {status}")
            raise SignInFailed(op, f"http {status}", status_code=status)

        if not content:
            logger.warning("Sign in returned no data")
            raise NoData(op, "empty body", status_code=status)

        try:
            bearer = decode_bearer(content)
        except ValueError as e:
            logger.warning(f"Error decoding bearer: {e}")
            raise SignInFailed(op, f"decode: {e}", status_code=status)

        await self.session.store_bearer(bearer)
        logger.debug(f"Signed in as '{user.username}'")
        return True

    async def _require_bearer(self, op: str) -> Bearer:
        bearer = await self.session.current_bearer()
        if bearer is None:
            logger.warning(f"{op} called before signing in")
            raise NotSignedIn(op, "no bearer token")
        return bearer

    async def list_gigs(self) -> list[Gig]:
        op = "list_gigs"
        bearer = await self._require_bearer(op)

        try:
            status, content = await get_authorized(
                self._http, self.endpoints.list_gigs, bearer.token, self.timeout_sec
            )
        except TRANSPORT_ERRORS as e:
            logger.warning(f"Failed to get gigs with error: {e}")
            raise FailedFetch(op, f"transport: {e}")

        if status != 200:
            logger.warning(f"Gig list received bad response: http {status}")
            raise FailedFetch(op, f"http {status}", status_code=status)

        if not content:
            logger.warning("Gig list returned no data")
            raise BadData(op, "empty body", status_code=status)

        try:
            gigs = decode_gigs(content)
        except ValueError as e:
            logger.warning(f"Error decoding gigs: {e}")
            raise BadData(op, f"decode: {e}", status_code=status)

        logger.debug(f"Fetched {len(gigs)} gigs")
        return await self.session.replace_gigs(gigs)

    async def create_gig(self, gig: Gig) -> list[Gig]:
        """Create `gig` on the server and return the gigs it answers with.

        The default mode is POST (GIGS_CREATE_MODE=post): `gig` is sent as the
        JSON body and an unencodable gig raises BadData before any request.
        In LEGACY_GET mode the request is a bare authorized GET and `gig` is
        not sent, matching older deployments. The cached gig list is never
        touched; call list_gigs() to refresh it.
        """
        op = "create_gig"
        bearer = await self._require_bearer(op)
        legacy = self.create_mode is CreateMode.LEGACY_GET

        body = None
        if not legacy:
            try:
                body = gig.to_json()
            except (ValueError, TypeError) as e:
                logger.warning(f"Error encoding gig: {e}")
                raise BadData(op, f"encode: {e}")

        try:
            if legacy:
                status, content = await get_authorized(
                    self._http, self.endpoints.create_gig, bearer.token, self.timeout_sec
                )
            else:
                status, content = await post_authorized(
                    self._http, self.endpoints.create_gig, bearer.token, body, self.timeout_sec
                )
        except TRANSPORT_ERRORS as e:
            logger.warning(f"Failed to post a gig with error: {e}")
            raise FailedFetch(op, f"transport: {e}")

        if status != 200:
            logger.warning(f"Gig creation received bad response: http {status}")
            raise FailedFetch(op, f"http {status}", status_code=status)

        if not content:
            logger.warning("Gig creation returned no data")
            raise BadData(op, "empty body", status_code=status)

        try:
            created = decode_gigs(content, allow_single=not legacy)
        except ValueError as e:
            logger.warning(f"Error decoding created gig: {e}")
            error = BadURL if legacy else BadData
            raise error(op, f"decode: {e}", status_code=status)

        return created
