from dataclasses import dataclass
from enum import Enum


class TokenKind(Enum):
    WORD = "word"
    PUNCTUATION = "punctuation"


@dataclass(frozen=True)
class Token:
    kind: TokenKind
    text: str

    @property
    def is_word(self) -> bool:
        return self.kind is TokenKind.WORD


def is_word_char(char: str) -> bool:
    return char.isalnum() or char == "_"


def segment(text: str) -> list[Token]:
    """Splits text into maximal runs of word characters and single punctuation marks.

    Whitespace only separates tokens and never produces one, so joining the tokens
    gives back the input minus its whitespace.
    """
    tokens: list[Token] = []
    word_start = None
    for i, char in enumerate(text):
        if is_word_char(char):
            if word_start is None:
                word_start = i
            continue

        if word_start is not None:
            tokens.append(Token(TokenKind.WORD, text[word_start:i]))
            word_start = None
        if not char.isspace():
            tokens.append(Token(TokenKind.PUNCTUATION, char))

    if word_start is not None:
        tokens.append(Token(TokenKind.WORD, text[word_start:]))
    return tokens
