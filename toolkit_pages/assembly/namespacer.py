r"""Rewrite a fragment's own field references into namespaced references.

Materials are written as if their front-matter fields were plain template
variables (``{{ title }}``). Once registered, every fragment shares one render
context, so each reference to one of the fragment's own fields is rewritten
to a subscript of its namespace (``{{ buttons_primary["title"] }}``). A
subscript is used rather than attribute access because Jinja resolves
``a.b`` through ``getattr`` first, which would turn fields such as ``items``
or ``values`` into the bound ``dict`` methods.

The rewrite walks the template with a small tokenizer instead of a regular
expression substitution. Only whole name tokens inside ``{{ }}`` and
``{% %}`` tags are candidates; attribute names, filter and test names,
keyword arguments, strings, comments, ``raw`` blocks, and names bound by
``for``/``set``/``with``/``macro`` inside their scope are left alone.

Example
-------
>>> from toolkit_pages.assembly.namespacer import namespace_fields
>>> namespace_fields("Title: {{ title }}", ["title"], "buttons.primary")
'Title: {{ buttons_primary["title"] }}'
>>> namespace_fields("{{ item.title }}{{ titles }}", ["title"], "buttons.primary")
'{{ item.title }}{{ titles }}'
"""

from __future__ import annotations

import dataclasses as dc
import re
import typing as typ

from toolkit_pages.naming import namespace_key

if typ.TYPE_CHECKING:
    import collections.abc as cabc

TAG_OPEN_PATTERN = re.compile(r"\{\{[-+]?|\{%[-+]?|\{#")
VARIABLE_CLOSE_PATTERN = re.compile(r"[-+]?\}\}")
BLOCK_CLOSE_PATTERN = re.compile(r"[-+]?%\}")
COMMENT_CLOSE = "#}"
RAW_END_PATTERN = re.compile(r"\{%[-+]?\s*endraw\s*[-+]?%\}")
TOKEN_PATTERN = re.compile(
    r"""
    (?P<space>\s+)
  | (?P<string>'(?:[^'\\]|\\.)*'|"(?:[^"\\]|\\.)*")
  | (?P<name>[A-Za-z_][A-Za-z0-9_]*)
  | (?P<number>\d[\d_]*(?:\.\d+)?(?:[eE][+-]?\d+)?)
  | (?P<operator>\*\*|//|==|!=|<=|>=|[-+*/%~|.,:;=()\[\]{}<>!])
    """,
    re.VERBOSE | re.DOTALL,
)

KEYWORDS = frozenset(
    {
        "and", "or", "not", "in", "is", "if", "else", "recursive",
        "true", "false", "none", "True", "False", "None", "loop",
    }
)
REWRITTEN_TAGS = frozenset({"if", "elif", "for", "set", "with", "include"})
SCOPE_CLOSERS = {"endfor": "for", "endwith": "with", "endmacro": "macro"}


@dc.dataclass(slots=True)
class Token:
    """A lexical token inside a template tag."""

    kind: str
    value: str
    depth: int = 0


def _tokenize(
    text: str, pos: int, closer: re.Pattern[str]
) -> tuple[list[Token], int, int] | None:
    """Tokenize a tag body until ``closer`` at bracket depth zero.

    Returns the tokens, the start of the closing delimiter, and the index just
    past it, or ``None`` when the tag is never closed.
    """
    tokens: list[Token] = []
    depth = 0
    while pos < len(text):
        if depth == 0:
            closing = closer.match(text, pos)
            if closing:
                return tokens, closing.start(), closing.end()
        match = TOKEN_PATTERN.match(text, pos)
        if match is None:
            tokens.append(Token("operator", text[pos], depth))
            pos += 1
            continue
        kind = match.lastgroup or "operator"
        value = match[0]
        if kind == "operator" and value in ")]}":
            depth = max(0, depth - 1)
        tokens.append(Token(kind, value, depth))
        if kind == "operator" and value in "([{":
            depth += 1
        pos = match.end()
    return None


def _significant(tokens: list[Token]) -> list[int]:
    return [index for index, token in enumerate(tokens) if token.kind != "space"]


class _FieldRewriter:
    """Stateful walk over one fragment, tracking names bound by block tags."""

    def __init__(self, fields: cabc.Iterable[str], namespace: str) -> None:
        self.fields = frozenset(fields)
        self.namespace = namespace
        self.scopes: list[tuple[str, set[str]]] = [("", set())]

    @property
    def shadowed(self) -> set[str]:
        names: set[str] = set()
        for _, scope in self.scopes:
            names |= scope
        return names

    def rewrite(self, text: str) -> str:
        parts: list[str] = []
        pos = 0
        while True:
            opening = TAG_OPEN_PATTERN.search(text, pos)
            if opening is None:
                parts.append(text[pos:])
                break
            parts.append(text[pos : opening.start()])
            opener = opening[0]
            if opener == "{#":
                end = text.find(COMMENT_CLOSE, opening.end())
                stop = len(text) if end == -1 else end + len(COMMENT_CLOSE)
                parts.append(text[opening.start() : stop])
                pos = stop
                continue
            closer = VARIABLE_CLOSE_PATTERN if opener.startswith("{{") else BLOCK_CLOSE_PATTERN
            scanned = _tokenize(text, opening.end(), closer)
            if scanned is None:
                parts.append(text[opening.start() :])
                break
            tokens, close_start, close_end = scanned
            if opener.startswith("{{"):
                self._rewrite_expression(tokens, _significant(tokens))
            elif self._is_raw(tokens):
                raw_end = RAW_END_PATTERN.search(text, close_end)
                stop = len(text) if raw_end is None else raw_end.end()
                parts.append(text[opening.start() : stop])
                pos = stop
                continue
            else:
                self._rewrite_statement(tokens)
            parts.append(opener)
            parts.extend(token.value for token in tokens)
            parts.append(text[close_start:close_end])
            pos = close_end
        return "".join(parts)

    @staticmethod
    def _is_raw(tokens: list[Token]) -> bool:
        significant = [token for token in tokens if token.kind != "space"]
        return len(significant) == 1 and significant[0].value == "raw"

    def _rewrite_statement(self, tokens: list[Token]) -> None:
        indices = _significant(tokens)
        if not indices or tokens[indices[0]].kind != "name":
            return
        keyword = tokens[indices[0]].value
        rest = indices[1:]
        if keyword in SCOPE_CLOSERS:
            self._close_scope(SCOPE_CLOSERS[keyword])
            return
        if keyword == "macro":
            names = {tokens[index].value for index in rest if tokens[index].kind == "name"}
            self.scopes.append(("macro", names))
            return
        if keyword not in REWRITTEN_TAGS:
            return
        if keyword == "for":
            self._rewrite_for(tokens, rest)
        elif keyword == "set":
            self._rewrite_set(tokens, rest)
        elif keyword == "with":
            self._rewrite_with(tokens, rest)
        else:
            self._rewrite_expression(tokens, rest)

    def _rewrite_for(self, tokens: list[Token], indices: list[int]) -> None:
        targets: set[str] = set()
        for position, index in enumerate(indices):
            token = tokens[index]
            if token.kind == "name" and token.value == "in" and token.depth == 0:
                self._rewrite_expression(tokens, indices[position + 1 :])
                break
            if token.kind == "name":
                targets.add(token.value)
        self.scopes.append(("for", targets))

    def _rewrite_set(self, tokens: list[Token], indices: list[int]) -> None:
        for position, index in enumerate(indices):
            token = tokens[index]
            if token.value == "=" and token.depth == 0:
                self._bind(tokens, indices[:position])
                self._rewrite_expression(tokens, indices[position + 1 :])
                return
        self._bind(tokens, indices)

    def _rewrite_with(self, tokens: list[Token], indices: list[int]) -> None:
        bound: set[str] = set()
        for position, index in enumerate(indices):
            token = tokens[index]
            following = indices[position + 1] if position + 1 < len(indices) else None
            if (
                token.kind == "name"
                and token.depth == 0
                and following is not None
                and tokens[following].value == "="
            ):
                bound.add(token.value)
        self._rewrite_expression(tokens, indices)
        self.scopes.append(("with", bound))

    def _bind(self, tokens: list[Token], indices: list[int]) -> None:
        names = {tokens[index].value for index in indices if tokens[index].kind == "name"}
        self.scopes[-1][1].update(names)

    def _close_scope(self, kind: str) -> None:
        for position in range(len(self.scopes) - 1, 0, -1):
            if self.scopes[position][0] == kind:
                del self.scopes[position:]
                return

    def _rewrite_expression(self, tokens: list[Token], indices: list[int]) -> None:
        shadowed = self.shadowed
        for position, index in enumerate(indices):
            token = tokens[index]
            if token.kind != "name" or token.value not in self.fields:
                continue
            if token.value in KEYWORDS or token.value in shadowed:
                continue
            previous = tokens[indices[position - 1]] if position > 0 else None
            before = tokens[indices[position - 2]] if position > 1 else None
            following = (
                tokens[indices[position + 1]] if position + 1 < len(indices) else None
            )
            if previous is not None and previous.value in {".", "|", "is"}:
                continue
            if (
                previous is not None
                and previous.value == "not"
                and before is not None
                and before.value == "is"
            ):
                continue
            if following is not None and following.value == "=":
                continue
            token.value = f'{self.namespace}["{token.value}"]'


def namespace_fields(
    text: str, fields: cabc.Iterable[str], qualified_id: str
) -> str:
    """Rewrite references to ``fields`` inside ``text`` for ``qualified_id``.

    Parameters
    ----------
    text : str
        Raw fragment template.
    fields : Iterable[str]
        The fragment's own front-matter field names.
    qualified_id : str
        Fully qualified fragment id such as ``buttons.primary``.

    Returns
    -------
    str
        The rewritten template. Returned unchanged when there are no fields or
        the id does not produce a usable template name.
    """
    field_names = [field for field in fields if isinstance(field, str)]
    namespace = namespace_key(qualified_id)
    if not field_names or not namespace.isidentifier():
        return text
    return _FieldRewriter(field_names, namespace).rewrite(text)


__all__ = ["Token", "namespace_fields"]
