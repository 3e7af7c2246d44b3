"""Build a logical document from an RTF token stream."""

from __future__ import annotations

import re

from attrs import define, evolve, field

from .charmap import codepage_name, decode_hex, locale_tag
from .document import Document
from .list_block import BULLETED, NUMBERED, ListBlock, ListItem
from .paragraph import Paragraph
from .rtf_tables import ColorEntry, FontEntry
from .rtf_token import (
    CONTROL_SYMBOL,
    CONTROL_WORD,
    GROUP_CLOSE,
    GROUP_OPEN,
    HEX,
    TEXT,
    Token,
)
from .run import Run
from .tokenizer import tokenize
from .types import RunList, TokenList

# Destinations whose content is never part of the visible text.
SKIPPED_DESTINATIONS = {
    "stylesheet",
    "info",
    "listtable",
    "listoverridetable",
    "revtbl",
    "rsidtbl",
    "filetbl",
    "xmlnstbl",
    "pgdsctbl",
    "latentstyles",
    "themedata",
    "colorschememapping",
    "datastore",
    "generator",
    "pict",
    "object",
    "nonshppict",
    "shp",
    "header",
    "headerl",
    "headerr",
    "headerf",
    "footer",
    "footerl",
    "footerr",
    "footerf",
    "footnote",
    "annotation",
    "pntxta",
    "pntxtb",
}

# Paragraph font size in half-points mapped to a heading level.
HEADING_LEVELS = {40: 1, 36: 2, 28: 3, 26: 4}

ALIGNMENTS = {"ql": None, "qc": "center", "qr": "right", "qj": "justify"}

SPECIAL_CHARACTERS = {
    "bullet": "•",
    "endash": "–",
    "emdash": "—",
    "lquote": "‘",
    "rquote": "’",
    "ldblquote": "“",
    "rdblquote": "”",
    "tab": " ",
    "line": "\n",
}

SYMBOL_CHARACTERS = {"~": " ", "_": "-", "-": ""}
NO_BREAK_SPACE = "\xa0"
MAX_CODE_POINT = 0x10FFFF

BULLET_CHARACTERS = "·•▪◦§o-*"
NUMBERING_WORDS = {"pndec", "pnlcltr", "pnucltr", "pnlcrm", "pnucrm"}

_NUMBER_MARKER_RE = re.compile(r"^\(?(\d+|[a-zA-Z])[.)]")
_HYPERLINK_RE = re.compile(r'HYPERLINK\s+"([^"]*)"')
_SPACES_RE = re.compile(r"[^\S\n]+")


def classify_marker(text: str, words: set[str]) -> str | None:
    """Return the list kind announced by a marker group.

    Args:
        text: Visible text of the marker, e.g. ``"·"`` or ``"3."``.
        words: Control words found inside the marker group.

    Returns:
        ``"bulleted"``, ``"numbered"`` or ``None`` when unrecognised.
    """

    text = text.strip()
    if "bullet" in words or (text and text[0] in BULLET_CHARACTERS):
        return BULLETED
    if _NUMBER_MARKER_RE.match(text):
        return NUMBERED
    if "pnlvlblt" in words:
        return BULLETED
    if words & NUMBERING_WORDS:
        return NUMBERED
    return None


def _trim_runs(runs: RunList) -> RunList:
    """Collapse whitespace inside and across runs and trim the edges."""

    trimmed: RunList = []
    for run in runs:
        text = _SPACES_RE.sub(" ", run.text)
        text = text.replace(" \n", "\n").replace("\n ", "\n")

        # A space already ends the previous run.
        if trimmed and trimmed[-1].text.endswith((" ", "\n")):
            text = text.lstrip(" ")
        if not trimmed:
            text = text.lstrip()
        if text:
            trimmed.append(evolve(run, text=text))

    # Remove trailing whitespace, dropping runs that become empty.
    while trimmed:
        text = trimmed[-1].text.rstrip()
        if text:
            trimmed[-1].text = text
            break
        trimmed.pop()
    return trimmed


@define(slots=True)
class _Field:
    """Hyperlink target shared by the groups of one ``\\field``."""

    url: str | None = None


@define(slots=True)
class _State:
    """Character formatting in effect inside one group."""

    bold: bool = False
    italic: bool = False
    underline: bool = False
    lang: int | None = None
    font_size: int | None = None
    uc: int = 1
    href: str | None = None
    link: _Field | None = None


@define(slots=True)
class _DocumentBuilder:
    """Single-use consumer turning tokens into a ``Document``."""

    tokens: TokenList
    pos: int = 0
    document: Document = field(factory=Document)
    codepage: str = codepage_name(None)
    default_lang: int | None = None
    has_content: bool = False

    # Current paragraph.
    runs: RunList = field(factory=list)
    marker: str | None = None
    align: str | None = None
    first_size: int | None = None

    # Unicode escape bookkeeping.
    skip: int = 0
    high_surrogate: int | None = None

    def build(self) -> Document:
        state = _State()
        while self.pos < len(self.tokens):
            token = self.tokens[self.pos]
            self.pos += 1
            self.handle(token, state)
        self.end_paragraph()
        return self.document

    def peek(self) -> Token | None:
        if self.pos < len(self.tokens):
            return self.tokens[self.pos]
        return None

    def handle(self, token: Token, state: _State) -> None:
        """Apply one token to the document."""

        kind = token.kind
        if kind == GROUP_OPEN:
            self.skip = 0
            self.group(evolve(state))
        elif kind == GROUP_CLOSE:
            # Unbalanced closing brace at the outermost level.
            self.skip = 0
        elif kind == CONTROL_WORD:
            self.control_word(token, state)
        elif kind == CONTROL_SYMBOL:
            self.skip = 0
            char = SYMBOL_CHARACTERS.get(token.word or "")
            if char:
                self.append(char, state)
        elif kind == HEX:
            if self.skip:
                self.skip -= 1
                return
            self.append(decode_hex(token.param or 0, self.codepage), state)
        elif kind == TEXT:
            text = token.text
            if self.skip:
                consumed = min(self.skip, len(text))
                text = text[consumed:]
                self.skip -= consumed
            if text:
                self.append(text, state)

    def group(self, state: _State) -> None:
        """Consume a group whose opening brace was already read."""

        first = self.peek()
        if (
            first is not None
            and first.kind == CONTROL_SYMBOL
            and first.word == "*"
        ):
            self.pos += 1
            name_token = self.peek()
            name = (
                name_token.word
                if name_token is not None and name_token.kind == CONTROL_WORD
                else None
            )
            if name == "pn":
                self.pos += 1
                _, words = self.collect_group()
                if self.marker is None:
                    self.marker = classify_marker("", words)
            elif name == "fldinst":
                self.pos += 1
                text, _ = self.collect_group()
                match = _HYPERLINK_RE.search(text)
                if match and state.link is not None:
                    state.link.url = match.group(1)
            else:
                self.skip_group()
            return

        if first is not None and first.kind == CONTROL_WORD:
            name = first.word or ""
            if name == "fonttbl":
                self.pos += 1
                self.font_table()
                return
            if name == "colortbl":
                self.pos += 1
                self.color_table()
                return
            if name in ("pntext", "listtext"):
                self.pos += 1
                text, words = self.collect_group()
                kind = classify_marker(text, words)
                if kind is not None:
                    self.marker = kind
                return
            if name in SKIPPED_DESTINATIONS:
                self.skip_group()
                return
            if name == "field":
                state.link = _Field()
            elif name == "fldrslt":
                state.href = state.link.url if state.link else None

        while self.pos < len(self.tokens):
            token = self.tokens[self.pos]
            self.pos += 1
            if token.kind == GROUP_CLOSE:
                self.skip = 0
                return
            self.handle(token, state)

    def skip_group(self) -> None:
        """Discard tokens up to the end of the current group."""

        depth = 1
        while self.pos < len(self.tokens) and depth:
            kind = self.tokens[self.pos].kind
            if kind == GROUP_OPEN:
                depth += 1
            elif kind == GROUP_CLOSE:
                depth -= 1
            self.pos += 1

    def collect_group(self) -> tuple[str, set[str]]:
        """Return the text and control words of the rest of a group."""

        parts: list[str] = []
        words: set[str] = set()
        depth = 1
        fallback = 0
        while self.pos < len(self.tokens) and depth:
            token = self.tokens[self.pos]
            self.pos += 1
            if token.kind == GROUP_OPEN:
                depth += 1
            elif token.kind == GROUP_CLOSE:
                depth -= 1
            elif token.kind == TEXT:
                parts.append(token.text[fallback:])
                fallback = 0
            elif token.kind == HEX:
                if fallback:
                    fallback = 0
                    continue
                parts.append(decode_hex(token.param or 0, self.codepage))
            elif token.kind == CONTROL_WORD and token.word:
                words.add(token.word)
                if token.word == "u" and token.param is not None:
                    parts.append(chr(token.param % 65536))
                    fallback = 1
        return "".join(parts), words

    def font_table(self) -> None:
        """Read ``\\fonttbl`` entries into the document font table."""

        index: int | None = None
        charset: int | None = None
        name: list[str] = []

        def flush() -> None:
            if index is not None:
                self.document.fonts[index] = FontEntry(
                    index=index, name="".join(name).strip(), charset=charset
                )

        depth = 1
        while self.pos < len(self.tokens) and depth:
            token = self.tokens[self.pos]
            self.pos += 1
            if token.kind == GROUP_OPEN:
                depth += 1
            elif token.kind == GROUP_CLOSE:
                depth -= 1
            elif token.kind == CONTROL_SYMBOL and token.word == "*":
                # Alternate names and panose data.
                self.skip_group()
                depth -= 1
            elif token.kind == CONTROL_WORD and token.word == "f":
                index, charset, name = token.param, None, []
            elif token.kind == CONTROL_WORD and token.word == "fcharset":
                charset = token.param
            elif token.kind == HEX:
                name.append(decode_hex(token.param or 0, self.codepage))
            elif token.kind == TEXT:
                head, sep, _ = token.text.partition(";")
                name.append(head)
                if sep:
                    flush()
                    index = None

        flush()

    def color_table(self) -> None:
        """Read ``\\colortbl`` entries into the document colour table."""

        values: dict[str, int] = {}
        depth = 1
        while self.pos < len(self.tokens) and depth:
            token = self.tokens[self.pos]
            self.pos += 1
            if token.kind == GROUP_OPEN:
                depth += 1
            elif token.kind == GROUP_CLOSE:
                depth -= 1
            elif token.kind == CONTROL_WORD and token.word in (
                "red",
                "green",
                "blue",
            ):
                values[token.word] = token.param or 0
            elif token.kind == TEXT:
                # Each semicolon terminates one entry; an empty entry is the
                # automatic colour.
                for _ in range(token.text.count(";")):
                    self.document.colors.append(
                        ColorEntry(**values) if values else None
                    )
                    values = {}

    def control_word(self, token: Token, state: _State) -> None:
        """Apply a control word to the formatting state or the text."""

        word = token.word or ""
        param = token.param

        if word == "u":
            self.unicode(param or 0, state)
            return

        self.skip = 0
        if word == "b":
            state.bold = param != 0
        elif word == "i":
            state.italic = param != 0
        elif word in ("ul", "uld", "uldb", "ulw", "ulth"):
            state.underline = param != 0
        elif word == "ulnone":
            state.underline = False
        elif word == "plain":
            state.bold = state.italic = state.underline = False
            state.lang = self.default_lang
            state.font_size = None
        elif word == "lang":
            state.lang = param
            if self.default_lang is None and not self.has_content:
                self.default_lang = param
        elif word == "deflang":
            self.default_lang = param
        elif word == "fs":
            state.font_size = param
        elif word == "uc":
            state.uc = param if param is not None else 1
        elif word == "ansicpg":
            self.codepage = codepage_name(param)
        elif word == "par":
            self.end_paragraph()
        elif word == "pard":
            self.align = None
        elif word in ALIGNMENTS:
            self.align = ALIGNMENTS[word]
        elif word in SPECIAL_CHARACTERS:
            self.append(SPECIAL_CHARACTERS[word], state)

    def unicode(self, value: int, state: _State) -> None:
        """Append the character of a ``\\uN`` escape."""

        code = value + 65536 if value < 0 else value
        self.skip = state.uc

        if 0xD800 <= code < 0xDC00:
            self.high_surrogate = code
            return
        if 0xDC00 <= code < 0xE000:
            high, self.high_surrogate = self.high_surrogate, None
            if high is None:
                return
            code = 0x10000 + ((high - 0xD800) << 10) + (code - 0xDC00)
        else:
            self.high_surrogate = None

        # Values outside the Unicode range carry no character.
        if not 0 <= code <= MAX_CODE_POINT:
            return
        self.append(chr(code), state)

    def append(self, text: str, state: _State) -> None:
        """Add text with the current formatting to the open paragraph."""

        text = text.replace(NO_BREAK_SPACE, " ")
        if self.first_size is None and text.strip():
            self.first_size = state.font_size

        lang = None
        if state.lang is not None and state.lang != self.default_lang:
            lang = locale_tag(state.lang)

        run = Run(
            text=text,
            bold=state.bold,
            italic=state.italic,
            underline=state.underline,
            lang=lang,
            href=state.href,
        )
        if self.runs and self.runs[-1].same_style(run):
            self.runs[-1].text += text
        else:
            self.runs.append(run)
        self.has_content = True

    def end_paragraph(self) -> None:
        """Close the open paragraph, adding it as a block or list item."""

        runs = _trim_runs(self.runs)
        if runs:
            blocks = self.document.blocks
            if self.marker is not None:
                last = blocks[-1] if blocks else None
                if isinstance(last, ListBlock) and last.kind == self.marker:
                    last.items.append(ListItem(runs=runs))
                else:
                    item = ListItem(runs=runs)
                    blocks.append(ListBlock(kind=self.marker, items=[item]))
            else:
                blocks.append(
                    Paragraph(
                        runs=runs,
                        heading=HEADING_LEVELS.get(self.first_size or 0),
                        align=self.align,
                    )
                )

        self.runs = []
        self.marker = None
        self.first_size = None


def rtf_to_document(rtf: str) -> Document:
    """Build a logical document from RTF text.

    Args:
        rtf: Complete RTF document.

    Returns:
        Decoded paragraphs and lists together with the font and colour
        tables.
    """

    return _DocumentBuilder(tokens=tokenize(rtf)).build()


def plain_text_to_document(text: str) -> Document:
    """Build a document from plain text stored in place of RTF.

    Non-empty lines become paragraphs; lines starting with a dash or bullet
    become items of a bulleted list.

    Args:
        text: Plain text content.

    Returns:
        The resulting document.
    """

    document = Document()
    for line in text.splitlines():
        stripped = line.strip()
        if not stripped:
            continue

        if stripped[0] in "-•*" and len(stripped) > 1:
            item = ListItem(runs=[Run(text=stripped[1:].strip())])
            last = document.blocks[-1] if document.blocks else None
            if isinstance(last, ListBlock) and last.kind == BULLETED:
                last.items.append(item)
            else:
                document.blocks.append(ListBlock(kind=BULLETED, items=[item]))
        else:
            document.blocks.append(
                Paragraph(runs=[Run(text=_SPACES_RE.sub(" ", stripped))])
            )
    return document
