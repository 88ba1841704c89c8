from .types import (
    Compression,
    ResourceKind,
    ALLOWED_COMPRESSIONS,
    DEFAULT_COMPRESSION,
    is_allowed,
    parse_compression,
)
from .plain import DECODE_FAILED, read_plain, check_create_blank_file
from .codecs import (
    Codec,
    CodecRegistry,
    PlainCodec,
    get_global_registry,
    resolve_codec,
    decode_to_file,
    encode_file,
)

__all__ = [
    "Compression",
    "ResourceKind",
    "ALLOWED_COMPRESSIONS",
    "DEFAULT_COMPRESSION",
    "is_allowed",
    "parse_compression",
    "DECODE_FAILED",
    "read_plain",
    "check_create_blank_file",
    "Codec",
    "CodecRegistry",
    "PlainCodec",
    "get_global_registry",
    "resolve_codec",
    "decode_to_file",
    "encode_file",
]
