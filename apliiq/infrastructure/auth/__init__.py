"""Authentication handlers for the Apliiq API."""

from apliiq.infrastructure.auth.signer import AUTH_HEADER, RequestSigner, SignatureAuth

__all__ = ["AUTH_HEADER", "RequestSigner", "SignatureAuth"]
