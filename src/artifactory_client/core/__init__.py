"""
Request/response plumbing shared by all API groups.
"""
from .client import Client
from .decoder import Decoder, JsonDecoder, OneOrManyDecoder, TextDecoder, classify_shape, decoder_for
from .service import Service

__all__ = [
    "Client",
    "Decoder", "JsonDecoder", "OneOrManyDecoder", "TextDecoder",
    "classify_shape", "decoder_for",
    "Service",
]
