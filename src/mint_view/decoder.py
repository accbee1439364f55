"""
Decoder for fully on-chain token URIs

A token URI is a JSON data URI whose ``image`` field is itself an SVG data
URI:

    data:application/json;base64,<base64(JSON{..., "image": "data:image/svg+xml;base64,<base64(svg)>"})>
"""

import base64
import binascii
import json

from .exceptions import MalformedImage, MalformedMetadata
from .models import DecodedTokenURI

JSON_URI_PREFIX = "data:application/json;base64,"  # 29 chars
IMAGE_URI_PREFIX = "data:image/svg+xml;base64,"  # 26 chars


def _b64decode(payload: str) -> bytes:
    return base64.b64decode(payload, validate=True)


def decode_image_uri(image_uri: str) -> bytes:
    """Decode an SVG data URI into raw image bytes"""
    if not isinstance(image_uri, str):
        raise MalformedImage("image field is missing or not a string")
    if not image_uri.startswith(IMAGE_URI_PREFIX):
        raise MalformedImage(f"image does not start with {IMAGE_URI_PREFIX!r}")
    try:
        return _b64decode(image_uri[len(IMAGE_URI_PREFIX):])
    except (binascii.Error, ValueError) as e:
        raise MalformedImage(f"image payload is not valid base64: {e}") from e


def decode_token_uri(token_uri: str) -> DecodedTokenURI:
    """
    Decode a token URI into its metadata document and raw image

    Raises:
        MalformedMetadata: prefix mismatch, bad base64 or bad JSON
        MalformedImage: ``image`` absent, wrong prefix or bad base64
    """
    if not isinstance(token_uri, str) or not token_uri.startswith(JSON_URI_PREFIX):
        raise MalformedMetadata(f"token URI does not start with {JSON_URI_PREFIX!r}")

    try:
        raw = _b64decode(token_uri[len(JSON_URI_PREFIX):])
        metadata = json.loads(raw.decode("utf-8"))
    except (binascii.Error, ValueError) as e:
        # json.JSONDecodeError and UnicodeDecodeError are both ValueErrors
        raise MalformedMetadata(f"token metadata is not base64 encoded JSON: {e}") from e

    if not isinstance(metadata, dict):
        raise MalformedMetadata("token metadata is not a JSON object")

    image = decode_image_uri(metadata.get("image"))
    return DecodedTokenURI(metadata=metadata, image=image)


def encode_token_uri(metadata: dict, image: bytes) -> str:
    """Build a token URI in the same scheme (used for previews and fixtures)"""
    document = dict(metadata)
    document["image"] = IMAGE_URI_PREFIX + base64.b64encode(image).decode("ascii")
    payload = json.dumps(document).encode("utf-8")
    return JSON_URI_PREFIX + base64.b64encode(payload).decode("ascii")
