"""
Wire primitives for ``header.body.signature`` tokens.

Segments are compact UTF-8 JSON in unpadded base64url. The signature is an
HMAC over the ASCII ``"<header>.<body>"`` string.
"""

import hmac
import json
from typing import Any

from jwt.algorithms import HMACAlgorithm
from jwt.utils import base64url_decode, base64url_encode

from src.token_auth.exceptions import MalformedTokenException
from src.token_auth.settings import SigningAlgorithm

HASH_FUNCTIONS = {
    SigningAlgorithm.HS256: HMACAlgorithm.SHA256,
    SigningAlgorithm.HS384: HMACAlgorithm.SHA384,
    SigningAlgorithm.HS512: HMACAlgorithm.SHA512,
}


def dump_json(data: Any) -> bytes:
    return json.dumps(data, separators=(",", ":"), ensure_ascii=False).encode(
        "utf-8"
    )


def encode_segment(data: Any) -> str:
    return base64url_encode(dump_json(data)).decode("ascii")


def decode_segment(segment: str) -> dict[str, Any]:
    """
    Decode one base64url JSON segment into a dict.

    Raises:
        MalformedTokenException: If the segment is not base64url, not UTF-8
            JSON, or not a JSON object.
    """
    try:
        decoded = json.loads(base64url_decode(segment))
    except ValueError:
        raise MalformedTokenException("Token segment could not be decoded")
    if not isinstance(decoded, dict):
        raise MalformedTokenException("Token segment is not a JSON object")
    return decoded


def sign(signing_input: str, secret: bytes, algorithm: SigningAlgorithm) -> str:
    hmac_algorithm = HMACAlgorithm(HASH_FUNCTIONS[SigningAlgorithm(algorithm)])
    digest = hmac_algorithm.sign(
        signing_input.encode("utf-8"), hmac_algorithm.prepare_key(secret)
    )
    return base64url_encode(digest).decode("ascii")


def signature_matches(
    signing_input: str, signature: str, secret: bytes, algorithm: SigningAlgorithm
) -> bool:
    # Compare encoded forms: decoding would ignore the trailing pad bits.
    expected = sign(signing_input, secret, algorithm)
    return hmac.compare_digest(expected.encode("ascii"), signature.encode("utf-8"))
