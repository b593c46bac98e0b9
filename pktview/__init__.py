"""Decoding and encoding of raw packet bytes into per-layer views and back."""

__license__ = 'GPLv2'
__version__ = '1.0'

from pktview.view import LayerKind, Context, View, Error, MissingContextError, PackError
from pktview.layer import decode, encode, strip, decode_all, encode_all, next_kind
