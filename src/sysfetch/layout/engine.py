"""Delimited directive scanning shared by the color and placeholder resolvers."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, List, Optional, Union

ESCAPE_CHAR = "\\"

DirectiveLookup = Callable[[str], Optional[str]]


@dataclass(frozen=True)
class _Delimiter:
    """An unescaped opener or closer along with the raw text it was read from."""

    char: str
    raw: str


_Token = Union[str, _Delimiter]


class DirectiveResolver:
    """Replace ``<opener>name<closer>`` directives using a name lookup."""

    def __init__(self, opener: str, closer: str, lookup: DirectiveLookup) -> None:
        """
        Create a resolver for a single delimiter pair.

        Parameters:
            opener (str): Single character that starts a directive (e.g. ``[``).
            closer (str): Single character that ends a directive (e.g. ``]``).
            lookup (Callable[[str], Optional[str]]): Maps a directive name to its replacement; `None` drops the directive.
        """
        if len(opener) != 1 or len(closer) != 1 or opener == closer:
            raise ValueError("opener and closer must be two distinct single characters")
        self.opener = opener
        self.closer = closer
        self._lookup = lookup

    def resolve(self, text: str) -> str:
        """Return ``text`` with every directive replaced by its lookup value."""

        if self.opener not in text and self.closer not in text:
            return text
        return "".join(self.segments(text))

    def segments(self, text: str) -> List[str]:
        """
        Split ``text`` into resolved output segments.

        Literal runs each start a new segment. A directive's replacement is appended to the
        last segment produced so far, or becomes the first segment when nothing precedes it,
        so adjacent directives never create empty intermediate segments. Directives whose
        lookup returns `None` contribute nothing. Openers without a matching closer and stray
        closers are kept as literal text, exactly as written.

        Returns:
            List[str]: Segments whose concatenation is the resolved string.
        """
        tokens = self._tokenize(text)
        segments: List[str] = []
        index = 0
        while index < len(tokens):
            token = tokens[index]
            if isinstance(token, str):
                segments.append(token)
                index += 1
                continue
            if token.char == self.closer:
                segments.append(token.raw)
                index += 1
                continue
            name, consumed = self._match_directive(tokens, index)
            if name is None:
                segments.append(token.raw)
                index += 1
                continue
            replacement = self._lookup(name)
            if replacement is None:
                # unknown directive: dropped
                pass
            elif segments:
                segments[-1] += replacement
            else:
                segments.append(replacement)
            index += consumed
        return segments

    def _match_directive(self, tokens: List[_Token], start: int) -> tuple[Optional[str], int]:
        """
        Match ``opener [literal] closer`` beginning at ``start``.

        Returns:
            tuple[Optional[str], int]: The directive name and the number of tokens it spans, or `(None, 0)` when the opener is unterminated.
        """
        following = tokens[start + 1 : start + 3]
        if following and isinstance(following[0], _Delimiter):
            if following[0].char == self.closer:
                return "", 2
            return None, 0
        if len(following) == 2 and isinstance(following[1], _Delimiter):
            if following[1].char == self.closer:
                return following[0], 3
        return None, 0

    def _tokenize(self, text: str) -> List[_Token]:
        """
        Break ``text`` into literal runs and unescaped delimiters.

        A run of backslashes directly before a delimiter is an escape marker: an even run leaves
        the delimiter active, an odd run makes it literal. Either way the run itself is consumed;
        the raw text is remembered on active delimiters so an unmatched one can be restored.
        Backslashes anywhere else are ordinary text.
        """
        delimiters = (self.opener, self.closer)
        tokens: List[_Token] = []
        literal: List[str] = []
        index = 0
        length = len(text)

        def flush() -> None:
            if literal:
                tokens.append("".join(literal))
                literal.clear()

        while index < length:
            char = text[index]
            if char == ESCAPE_CHAR:
                run_end = index
                while run_end < length and text[run_end] == ESCAPE_CHAR:
                    run_end += 1
                if run_end < length and text[run_end] in delimiters:
                    run = run_end - index
                    if run % 2:
                        literal.append(text[run_end])
                    else:
                        flush()
                        tokens.append(_Delimiter(text[run_end], text[index : run_end + 1]))
                    index = run_end + 1
                    continue
                literal.append(text[index:run_end])
                index = run_end
                continue
            if char in delimiters:
                flush()
                tokens.append(_Delimiter(char, char))
                index += 1
                continue
            literal.append(char)
            index += 1
        flush()
        return tokens
