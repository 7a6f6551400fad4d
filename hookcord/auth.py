"""Ed25519 verification of Discord interaction requests."""
from nacl.exceptions import BadSignatureError
from nacl.signing import VerifyKey

from hookcord.errors import InvalidSignature


def verify_signature(public_key: str, signature: str, timestamp: str, body: bytes) -> None:
    """
    Verify a Discord request signature.

    Discord signs: timestamp + raw_body (plain concatenation).
    Verify using the app public key (Ed25519). Must run before the body
    is parsed.

    Raises InvalidSignature for every failure, including malformed hex and
    wrong key or signature lengths.
    """
    try:
        verify_key = VerifyKey(bytes.fromhex(public_key))
        message = timestamp.encode("utf-8") + body
        verify_key.verify(message, bytes.fromhex(signature))
    except (BadSignatureError, ValueError, TypeError) as e:
        raise InvalidSignature() from e
