from .segmenter import Token, TokenKind, segment, is_word_char
from .reassembler import reassemble, CLOSING_PUNCTUATION, CLOSING_BRACKETS, OPENING_BRACKETS
