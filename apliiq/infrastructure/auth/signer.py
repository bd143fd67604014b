import base64
import hashlib
import hmac
import secrets
import time
from dataclasses import dataclass
from typing import Callable, Generator, Optional

import httpx

from apliiq.core.exceptions import ConfigurationError
from apliiq.core.logging import get_logger

logger = get_logger(__name__)

AUTH_HEADER = "x-apliiq-auth"
NONCE_BYTES = 16


@dataclass(frozen=True)
class SignedRequestContext:
    """Per-call signing inputs. Built once per request and never stored."""

    timestamp_sec: int
    nonce: str
    body_base64: str


@dataclass(frozen=True)
class Signature:
    context: SignedRequestContext
    signature: str
    header_value: str


class RequestSigner:
    """Computes the time-boxed HMAC-SHA256 authentication header."""

    def __init__(
        self,
        app_id: str,
        shared_secret: str,
        clock: Callable[[], float] = time.time,
        nonce_factory: Optional[Callable[[], str]] = None,
    ):
        """
        Initialize the signer.

        Args:
            app_id: Apliiq application ID
            shared_secret: Secret shared with Apliiq, used as the HMAC key
            clock: Wall clock returning Unix time in seconds
            nonce_factory: Source of nonces; defaults to 16 random bytes as hex

        Raises:
            ConfigurationError: If the app ID or shared secret is missing
        """
        if not app_id:
            raise ConfigurationError("app_id is required to sign Apliiq requests")
        if not shared_secret:
            raise ConfigurationError("shared_secret is required to sign Apliiq requests")

        self.app_id = app_id
        self._key = shared_secret.encode("utf-8")
        self._clock = clock
        self._nonce_factory = nonce_factory or self.generate_nonce

    @staticmethod
    def generate_nonce() -> str:
        return secrets.token_hex(NONCE_BYTES)

    def signature_input(self, context: SignedRequestContext) -> str:
        return f"{self.app_id}{context.timestamp_sec}{context.nonce}{context.body_base64}"

    def compute_signature(self, context: SignedRequestContext) -> str:
        """
        HMAC-SHA256 over the signature input, keyed by the shared secret.

        Args:
            context: Signing inputs for this request

        Returns:
            Base64-encoded signature
        """
        digest = hmac.new(
            self._key,
            self.signature_input(context).encode("utf-8"),
            hashlib.sha256,
        ).digest()
        return base64.b64encode(digest).decode("ascii")

    def sign(self, body: Optional[bytes] = None) -> Signature:
        """
        Sign the exact body bytes that will be sent.

        Args:
            body: Serialized request body, or None for a bodiless request

        Returns:
            Signature: The context, signature and header value
        """
        context = SignedRequestContext(
            timestamp_sec=int(self._clock()),
            nonce=self._nonce_factory(),
            body_base64=base64.b64encode(body or b"").decode("ascii"),
        )
        signature = self.compute_signature(context)
        header_value = f"{context.timestamp_sec}:{signature}:{self.app_id}:{context.nonce}"
        return Signature(context=context, signature=signature, header_value=header_value)

    def verify(self, header_value: str, body: Optional[bytes] = None) -> bool:
        """
        Check a header value against a body, the way the server does.

        Clock skew is not checked.

        Args:
            header_value: Value of the authentication header
            body: Body bytes the header was computed for

        Returns:
            True if the signature matches
        """
        parts = header_value.split(":")
        if len(parts) != 4:
            return False
        timestamp, signature, app_id, nonce = parts
        if app_id != self.app_id or not timestamp.isdigit():
            return False
        context = SignedRequestContext(
            timestamp_sec=int(timestamp),
            nonce=nonce,
            body_base64=base64.b64encode(body or b"").decode("ascii"),
        )
        return hmac.compare_digest(self.compute_signature(context), signature)


class SignatureAuth(httpx.Auth):
    """httpx auth flow attaching the signature header to each outgoing request."""

    requires_request_body = True

    def __init__(self, signer: RequestSigner, header_name: str = AUTH_HEADER):
        self.signer = signer
        self.header_name = header_name

    def auth_flow(self, request: httpx.Request) -> Generator[httpx.Request, httpx.Response, None]:
        signed = self.signer.sign(request.content)
        request.headers[self.header_name] = signed.header_value
        logger.debug(
            f"Signed {request.method} {request.url.path}",
            extra={"data": {"timestamp": signed.context.timestamp_sec, "nonce": signed.context.nonce}},
        )
        yield request
