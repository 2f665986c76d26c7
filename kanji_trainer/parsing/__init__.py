"""Decoding of the character document and its stroke paths.

    decode_document: XML text to a list of Character records.
    PathParser / parse_path: one path string to a tessellated polyline.
    tokenize: path string to command and number tokens.
"""

from .document import decode_document
from .path import PathParser, Token, parse_path, tokenize

__all__ = ['decode_document', 'PathParser', 'parse_path', 'tokenize', 'Token']
